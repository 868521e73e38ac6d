"""
Listing query layer shared by the article and comment listing endpoints.

A listing request goes through two validation phases:

1. Structural: ``sort_by`` and ``order`` are checked against fixed
   whitelists in :func:`resolve_listing_params`, before the database is
   touched.  Limit and page never fail; they are clamped/defaulted by
   ``news_api.pagination``.
2. Semantic: a ``topic`` filter is only known to be valid once the store
   has reported how many rows match it, so :func:`run_listing` checks it
   after the count query has run.

Both phases raise subclasses of :class:`~news_api.exceptions.InvalidQuery`.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.exceptions import InvalidOrder, InvalidSortColumn, InvalidTopicFilter
from news_api.pagination import build_pagination, resolve_limit, resolve_offset
from news_api.schemas import Pagination

logger = logging.getLogger(__name__)

DEFAULT_SORT_BY = "created_at"
DEFAULT_ORDER = "DESC"
ORDER_DIRECTIONS: frozenset[str] = frozenset({"ASC", "DESC"})


# ---------------------------------------------------------------------------
# Request / result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ListingQuery:
    """Raw, untrusted listing parameters exactly as they arrived."""

    sort_by: Any = None
    order: Any = None
    topic: Any = None
    limit: Any = None
    page: Any = None


@dataclass(frozen=True)
class ResolvedListingParams:
    sort_column: str
    order_direction: str
    topic_filter: str | None
    limit: int
    offset: int
    sortable: frozenset[str] = field(repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.sort_column not in self.sortable:
            raise InvalidSortColumn()
        if self.order_direction not in ORDER_DIRECTIONS:
            raise InvalidOrder()


@dataclass
class Listing:
    items: list[dict]
    pagination: Pagination


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------

def validate_sort_by(value, whitelist) -> str:
    if value is None:
        return DEFAULT_SORT_BY
    if not isinstance(value, str) or value not in whitelist:
        raise InvalidSortColumn()
    return value


def validate_order(value) -> str:
    if value is None:
        return DEFAULT_ORDER
    direction = value.upper() if isinstance(value, str) else None
    if direction not in ORDER_DIRECTIONS:
        raise InvalidOrder()
    return direction


def validate_topic(topic: str | None, total_count: int) -> None:
    """
    Reject a topic filter that matched nothing.

    A topic that exists but has no articles is rejected as well: validity
    is defined by the filtered count, not by the topics table.
    """
    if topic is not None and total_count == 0:
        raise InvalidTopicFilter()


# ---------------------------------------------------------------------------
# Query builder
# ---------------------------------------------------------------------------

class ListingQueryBuilder:
    """
    Builds the page and count statements for one listable entity.

    Parameters
    ----------
    entity:
        Mapped class the listing selects from.
    columns:
        Column attributes returned for each item.
    sortable:
        ``sort_by`` whitelist mapping public names to column attributes.
    aggregates:
        Extra labelled expressions computed over *join* (e.g. a comment
        count per article).  The page query is grouped by *group_by*
        whenever aggregates are present.
    join:
        ``(target, onclause)`` outer-joined for the aggregates.
    filter_column:
        Column compared for equality with the ``topic`` filter, or None
        when the listing cannot be filtered.
    """

    def __init__(
        self,
        entity,
        columns: Sequence,
        sortable: Mapping[str, Any],
        *,
        aggregates: Sequence = (),
        join: tuple | None = None,
        group_by: Sequence = (),
        filter_column=None,
    ) -> None:
        self.entity = entity
        self.columns = tuple(columns)
        self.sortable = dict(sortable)
        self.aggregates = tuple(aggregates)
        self.join = join
        self.group_by = tuple(group_by)
        self.filter_column = filter_column

    def resolve(self, query: ListingQuery) -> ResolvedListingParams:
        return resolve_listing_params(query, self)

    def predicates(self, params: ResolvedListingParams, scope: Sequence = ()) -> list:
        clauses = list(scope)
        if self.filter_column is not None and params.topic_filter is not None:
            clauses.append(self.filter_column == params.topic_filter)
        return clauses

    def count_statement(self, params: ResolvedListingParams, scope: Sequence = ()) -> Select:
        return (
            select(func.count())
            .select_from(self.entity)
            .where(*self.predicates(params, scope))
        )

    def page_statement(self, params: ResolvedListingParams, scope: Sequence = ()) -> Select:
        stmt = select(*self.columns, *self.aggregates).select_from(self.entity)
        if self.join is not None:
            stmt = stmt.outerjoin(*self.join)
        if self.aggregates:
            stmt = stmt.group_by(*self.group_by)

        sort_col = self.sortable[params.sort_column]
        order_expr = sort_col.desc() if params.order_direction == "DESC" else sort_col.asc()

        return (
            stmt.where(*self.predicates(params, scope))
            .order_by(order_expr)
            .limit(params.limit)
            .offset(params.offset)
        )


def resolve_listing_params(query: ListingQuery, builder: ListingQueryBuilder) -> ResolvedListingParams:
    """
    Structural validation: turn *query* into bounded, whitelisted params.

    Raises InvalidSortColumn / InvalidOrder without touching the store.
    An empty ``topic`` value means "no filter"; listings without a filter
    column ignore ``topic`` entirely.
    """
    sort_column = validate_sort_by(query.sort_by, builder.sortable)
    order_direction = validate_order(query.order)

    topic_filter = None
    if builder.filter_column is not None and query.topic:
        topic_filter = str(query.topic)

    limit = resolve_limit(query.limit)
    offset = resolve_offset(limit, query.page)

    return ResolvedListingParams(
        sort_column=sort_column,
        order_direction=order_direction,
        topic_filter=topic_filter,
        limit=limit,
        offset=offset,
        sortable=frozenset(builder.sortable),
    )


# ---------------------------------------------------------------------------
# Store capability
# ---------------------------------------------------------------------------

class ListingStore(Protocol):
    async def count(self, statement: Select) -> int: ...

    async def query(self, statement: Select) -> list[dict]: ...


class SessionListingStore:
    """:class:`ListingStore` backed by the request's AsyncSession."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def count(self, statement: Select) -> int:
        return (await self._db.execute(statement)).scalar_one()

    async def query(self, statement: Select) -> list[dict]:
        result = await self._db.execute(statement)
        return [dict(row) for row in result.mappings().all()]


async def run_listing(
    store: ListingStore,
    builder: ListingQueryBuilder,
    params: ResolvedListingParams,
    scope: Sequence = (),
) -> Listing:
    """
    Fetch one page plus the total matching count, then build pagination.

    The two reads are independent and are not wrapped in a transaction:
    a write landing between them can leave ``total_count`` out of step
    with the returned page.  An AsyncSession cannot run statements
    concurrently, so they are awaited one after the other.
    """
    logger.debug(
        "Listing %s: sort=%s %s topic=%r limit=%d offset=%d",
        getattr(builder.entity, "__tablename__", builder.entity),
        params.sort_column,
        params.order_direction,
        params.topic_filter,
        params.limit,
        params.offset,
    )
    rows = await store.query(builder.page_statement(params, scope))
    total_count = await store.count(builder.count_statement(params, scope))

    validate_topic(params.topic_filter, total_count)

    return Listing(items=rows, pagination=build_pagination(total_count, params.limit, params.offset))
