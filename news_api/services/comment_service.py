"""
Comment service — listing, creation, voting and deletion of comments.

Comments always belong to an article.  The listing reuses the shared
listing layer scoped to a single ``article_id``; it offers no topic filter,
so a ``topic`` query parameter is ignored.
"""
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.listing import Listing, ListingQuery, ListingQueryBuilder, SessionListingStore, run_listing
from news_api.models import Comment
from news_api.schemas import CommentCreate
from news_api.services.article_service import article_exists

COMMENT_LISTING = ListingQueryBuilder(
    Comment,
    columns=[
        Comment.comment_id,
        Comment.body,
        Comment.article_id,
        Comment.author,
        Comment.votes,
        Comment.created_at,
    ],
    sortable={
        "comment_id": Comment.comment_id,
        "author": Comment.author,
        "votes": Comment.votes,
        "created_at": Comment.created_at,
    },
)


def _comment_to_dict(comment) -> dict:
    """Serialise a Comment ORM instance or listing row to a plain dict."""
    if isinstance(comment, dict):
        data = dict(comment)
    else:
        data = {
            "comment_id": comment.comment_id,
            "body": comment.body,
            "article_id": comment.article_id,
            "author": comment.author,
            "votes": comment.votes,
            "created_at": comment.created_at,
        }
    data["created_at"] = data["created_at"].isoformat() if data.get("created_at") else None
    return data


async def get_article_comments(
    db: AsyncSession,
    article_id: int,
    query: ListingQuery,
) -> Listing | None:
    """
    Return one page of comments for *article_id*, newest first by default.

    Query parameters are validated before the article lookup, so a bad
    ``sort_by`` fails without any SQL.  Returns None when the article does
    not exist.
    """
    params = COMMENT_LISTING.resolve(query)
    if not await article_exists(db, article_id):
        return None

    listing = await run_listing(
        SessionListingStore(db),
        COMMENT_LISTING,
        params,
        scope=[Comment.article_id == article_id],
    )
    listing.items = [_comment_to_dict(row) for row in listing.items]
    return listing


async def add_comment(
    db: AsyncSession,
    article_id: int,
    data: CommentCreate,
) -> dict | None:
    """
    Append a new comment by ``data.username`` to the article *article_id*.

    Returns None when the target article does not exist.  An unknown
    username violates a foreign key and surfaces as an IntegrityError.
    """
    if not await article_exists(db, article_id):
        return None

    comment = Comment(
        body=data.body,
        author=data.username,
        article_id=article_id,
    )
    db.add(comment)
    await db.flush()
    await db.refresh(comment)
    return _comment_to_dict(comment)


async def update_comment_votes(db: AsyncSession, comment_id: int, inc_votes: int) -> dict | None:
    """Add *inc_votes* to the comment's votes; None when it does not exist."""
    comment = await db.get(Comment, comment_id)
    if comment is None:
        return None

    comment.votes += inc_votes
    await db.flush()
    return _comment_to_dict(comment)


async def delete_comment(db: AsyncSession, comment_id: int) -> bool:
    result = await db.execute(delete(Comment).where(Comment.comment_id == comment_id))
    return result.rowcount > 0
