"""
Regression tests for issues found during code review.

1. Duplicate topic slugs must return 409 (not 500)
2. A rejected sort_by / order must not reach the database
3. X-Query-Count header must report the actual query count
4. CORS must not set allow_credentials=true with allow_origins=*
5. Unexpected errors must become a generic 500 body
6. SQLite foreign keys are on and relationships never lazy-load
"""
import json

import pytest
from httpx import AsyncClient
from starlette.requests import Request

from news_api.database import create_engine_for
from news_api.errors import unhandled_error_handler


# ---------------------------------------------------------------------------
# 1. Duplicate topic -> 409
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_duplicate_topic_returns_409(async_client: AsyncClient, seeded):
    resp = await async_client.post("/api/topics", json={"slug": "cats", "description": "Again"})
    assert resp.status_code == 409
    assert resp.json() == {"msg": "Topic already exists"}


# ---------------------------------------------------------------------------
# 2. Structural validation runs before SQL
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize(
    "url",
    [
        "/api/articles?sort_by=password",
        "/api/articles?order=sideways",
        "/api/articles/1/comments?sort_by=title",
    ],
)
async def test_rejected_listing_issues_no_queries(async_client: AsyncClient, seeded, url):
    resp = await async_client.get(url)
    assert resp.status_code == 400
    assert resp.headers["x-query-count"] == "0"


# ---------------------------------------------------------------------------
# 3. X-Query-Count reports actual query count
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_query_count_header_exact_for_article_list(async_client: AsyncClient, seeded):
    """The article list issues exactly the page query and the count query."""
    resp = await async_client.get("/api/articles")
    assert resp.status_code == 200
    assert int(resp.headers["x-query-count"]) == 2


@pytest.mark.asyncio
async def test_query_count_header_for_unknown_topic(async_client: AsyncClient, seeded):
    """An unknown topic is only detected once the count query has run."""
    resp = await async_client.get("/api/articles?topic=glitch")
    assert resp.status_code == 400
    assert int(resp.headers["x-query-count"]) == 2


@pytest.mark.asyncio
async def test_query_count_header_exact_for_comment_list(async_client: AsyncClient, seeded):
    """Existence check + page query + count query."""
    resp = await async_client.get("/api/articles/1/comments")
    assert resp.status_code == 200
    assert int(resp.headers["x-query-count"]) == 3


@pytest.mark.asyncio
async def test_query_count_header_exact_for_article_detail(async_client: AsyncClient, seeded):
    """The detail view fetches the article and its comment count in one query."""
    resp = await async_client.get("/api/articles/1")
    assert resp.status_code == 200
    assert int(resp.headers["x-query-count"]) == 1


# ---------------------------------------------------------------------------
# 4. CORS headers
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_cors_no_credentials_with_wildcard_origin(async_client: AsyncClient):
    """
    When allow_origins=["*"], the response must NOT include
    Access-Control-Allow-Credentials: true.
    """
    resp = await async_client.options(
        "/api/articles",
        headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "GET",
        },
    )
    cred_header = resp.headers.get("access-control-allow-credentials", "").lower()
    assert cred_header != "true", (
        "CORS must not combine allow_origins=* with allow_credentials=true"
    )


# ---------------------------------------------------------------------------
# 5. Generic 500
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_unhandled_error_body_hides_details():
    request = Request({"type": "http", "method": "GET", "path": "/api/boom", "headers": [], "query_string": b""})
    resp = await unhandled_error_handler(request, RuntimeError("secret connection string"))
    assert resp.status_code == 500
    assert json.loads(resp.body) == {"msg": "Something went wrong!"}


# ---------------------------------------------------------------------------
# 6. Engine instrumentation and explicit loading
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_sqlite_engine_enforces_foreign_keys():
    engine = create_engine_for("sqlite+aiosqlite:///:memory:")
    try:
        async with engine.connect() as conn:
            result = await conn.exec_driver_sql("PRAGMA foreign_keys")
            assert result.scalar() == 1
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_relationships_are_never_loaded_implicitly(db_session, seeded):
    from sqlalchemy.exc import InvalidRequestError

    from news_api.models import Article

    article = await db_session.get(Article, 1)
    with pytest.raises(InvalidRequestError):
        article.comments
