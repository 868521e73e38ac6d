"""
Article service — business logic for the Article aggregate.

Design notes
------------
- The list view goes through the shared listing layer
  (``news_api.listing``): structural validation of ``sort_by`` / ``order``
  happens before any SQL is issued, the ``topic`` filter is validated
  after the count query reports how many articles match it.
- ``comment_count`` is computed in SQL with an outer join on comments
  grouped by article, for both the list and the detail view.
- Service functions flush but do not commit; the transaction boundary
  is owned by the ``get_db`` dependency in the router layer.
"""
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.listing import Listing, ListingQuery, ListingQueryBuilder, SessionListingStore, run_listing
from news_api.models import Article, Comment
from news_api.schemas import ArticleCreate

# ---------------------------------------------------------------------------
# Listing definition
# ---------------------------------------------------------------------------

_COMMENT_COUNT = func.count(Comment.comment_id).label("comment_count")

ARTICLE_LISTING = ListingQueryBuilder(
    Article,
    columns=[
        Article.author,
        Article.title,
        Article.article_id,
        Article.topic,
        Article.created_at,
        Article.votes,
        Article.article_img_url,
    ],
    # Columns that are safe to sort by; guards against arbitrary attribute access.
    sortable={
        "author": Article.author,
        "title": Article.title,
        "article_id": Article.article_id,
        "topic": Article.topic,
        "created_at": Article.created_at,
        "votes": Article.votes,
    },
    aggregates=[_COMMENT_COUNT],
    join=(Comment, Comment.article_id == Article.article_id),
    group_by=[Article.article_id],
    filter_column=Article.topic,
)


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _row_to_dict(row: dict) -> dict:
    """Serialise a listing row (list view, no body)."""
    data = dict(row)
    created_at = data.get("created_at")
    data["created_at"] = created_at.isoformat() if created_at else None
    return data


def _article_to_dict(article: Article, comment_count: int | None = None) -> dict:
    """Serialise an Article ORM instance to a plain dict (detail view)."""
    data = {
        "article_id": article.article_id,
        "title": article.title,
        "topic": article.topic,
        "author": article.author,
        "body": article.body,
        "created_at": article.created_at.isoformat() if article.created_at else None,
        "votes": article.votes,
        "article_img_url": article.article_img_url,
    }
    if comment_count is not None:
        data["comment_count"] = comment_count
    return data


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def get_articles(db: AsyncSession, query: ListingQuery) -> Listing:
    """
    Return one page of articles with their comment counts.

    Raises InvalidSortColumn / InvalidOrder before querying, and
    InvalidTopicFilter when the topic filter matches no article.
    """
    params = ARTICLE_LISTING.resolve(query)
    listing = await run_listing(SessionListingStore(db), ARTICLE_LISTING, params)
    listing.items = [_row_to_dict(row) for row in listing.items]
    return listing


async def article_exists(db: AsyncSession, article_id: int) -> bool:
    result = await db.execute(
        select(Article.article_id).where(Article.article_id == article_id)
    )
    return result.scalar_one_or_none() is not None


async def get_article(db: AsyncSession, article_id: int) -> dict | None:
    """
    Return the full detail dict for *article_id*, including ``body`` and
    ``comment_count``.

    Returns None when the article does not exist.
    """
    q = (
        select(Article, _COMMENT_COUNT)
        .outerjoin(Comment, Comment.article_id == Article.article_id)
        .where(Article.article_id == article_id)
        .group_by(Article.article_id)
    )
    row = (await db.execute(q)).one_or_none()
    if row is None:
        return None

    article, comment_count = row
    return _article_to_dict(article, comment_count)


async def create_article(db: AsyncSession, data: ArticleCreate) -> dict:
    """
    Create a new article and return it with a zero ``comment_count``.

    Unknown authors or topics violate a foreign key; the resulting
    IntegrityError is left for the app-level handler.
    """
    article = Article(
        author=data.author,
        title=data.title,
        body=data.body,
        topic=data.topic,
        article_img_url=data.article_img_url,
    )
    db.add(article)
    await db.flush()
    await db.refresh(article)
    return _article_to_dict(article, comment_count=0)


async def update_article_votes(db: AsyncSession, article_id: int, inc_votes: int) -> dict | None:
    """
    Add *inc_votes* (may be negative) to the article's vote tally.

    Returns None when the article does not exist.
    """
    article = await db.get(Article, article_id)
    if article is None:
        return None

    article.votes += inc_votes
    await db.flush()
    return _article_to_dict(article)


async def delete_article(db: AsyncSession, article_id: int) -> bool:
    """
    Delete the article identified by *article_id* together with its comments.

    Returns True on success, False when the article does not exist.
    """
    result = await db.execute(delete(Article).where(Article.article_id == article_id))
    return result.rowcount > 0
