from fastapi import Query

from news_api.listing import ListingQuery


def listing_query(
    sort_by: str | None = Query(
        None,
        description="Column to sort by (default ``created_at``).",
    ),
    order: str | None = Query(
        None,
        description="Sort direction, ``asc`` or ``desc`` (default ``desc``).",
    ),
    topic: str | None = Query(
        None,
        description="Topic slug to filter articles by.",
    ),
    limit: str | None = Query(
        None,
        description="Items per page; defaults to 5, capped at 10.",
    ),
    page: str | None = Query(
        None,
        description="Page number (1-based); invalid values mean page 1.",
    ),
) -> ListingQuery:
    """
    Reusable FastAPI dependency collecting the raw listing parameters.

    Every parameter is taken as an optional string so that malformed
    ``limit`` / ``page`` values reach the pagination calculator (which
    defaults them) instead of failing request validation, and so that
    ``sort_by`` / ``order`` errors carry the API's own messages.

    Usage in a router::

        @router.get("/api/articles")
        async def list_articles(query: ListingQuery = Depends(listing_query)):
            ...
    """
    return ListingQuery(sort_by=sort_by, order=order, topic=topic, limit=limit, page=page)
