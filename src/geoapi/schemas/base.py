"""Base model for request and response bodies.

JSON field names are camelCase (``isoCode``, ``pageSize``); Python attributes
stay snake_case. Responses must be dumped with ``by_alias=True``.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
