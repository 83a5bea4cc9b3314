"""Helpers shared by every repository.

``paginate`` applies ordering and paging to an already filtered statement;
``save_changes`` is the unit-of-work commit used by the services.
"""

from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from geoapi import errors
from geoapi.logging import get_logger
from geoapi.pagination import PagedList, PageSpec, SortTable
from geoapi.results import Result, fail, ok

logger = get_logger(__name__)


async def paginate[M](
    db: AsyncSession,
    stmt: Select[tuple[M]],
    model: type[M],
    spec: PageSpec,
    table: SortTable,
) -> PagedList[M]:
    """Return one page of ``stmt`` sorted by ``spec``.

    Two queries per call: the count over the filtered (unpaged) statement,
    then the requested page. Rows with equal sort keys are ordered by id so
    consecutive pages never overlap. A page that starts past the last row is
    answered from the count alone; its offset may not fit in a database integer.
    """
    attribute = table.attribute(spec.sort_column)
    column: Any = getattr(model, attribute)
    ordering = [column.desc() if spec.descending else column.asc()]
    if attribute != "id":
        ordering.append(getattr(model, "id").asc())

    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    items: list[M] = []
    if spec.offset < total:
        page_stmt = stmt.order_by(*ordering).offset(spec.offset).limit(spec.page_size)
        items = list((await db.execute(page_stmt)).scalars().all())

    return PagedList(
        items=items,
        page=spec.page_number,
        page_size=spec.page_size,
        total_count=total,
    )


async def save_changes(db: AsyncSession, resource: str) -> Result[None]:
    """Commit staged changes atomically.

    The database has the final say on uniqueness: two requests can both pass
    the pre-write duplicate check, and the loser's commit fails here. That
    failure is rolled back and reported as a Conflict for ``resource``.
    """
    try:
        await db.commit()
    except IntegrityError as exc:
        await db.rollback()
        logger.warning("integrity_violation", resource=resource, error=str(exc.orig))
        return fail(errors.unique_violation(resource))
    return ok()
