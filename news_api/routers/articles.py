from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.database import get_db
from news_api.dependencies import listing_query
from news_api.exceptions import NotFound
from news_api.listing import ListingQuery
from news_api.schemas import ArticleCreate, ArticleVotesUpdate, CommentCreate
from news_api.services import article_service, comment_service

router = APIRouter(prefix="/api/articles", tags=["articles"])

@router.get("")
async def list_articles(
    query: ListingQuery = Depends(listing_query),
    db: AsyncSession = Depends(get_db),
):
    listing = await article_service.get_articles(db, query)
    return {"articles": listing.items, "pagination": listing.pagination}

@router.post("", status_code=201)
async def create_article(data: ArticleCreate, db: AsyncSession = Depends(get_db)):
    return {"article": await article_service.create_article(db, data)}

@router.get("/{article_id}")
async def get_article(article_id: int, db: AsyncSession = Depends(get_db)):
    article = await article_service.get_article(db, article_id)
    if not article:
        raise NotFound("Article does not exist")
    return {"article": article}

@router.patch("/{article_id}")
async def update_article_votes(article_id: int, data: ArticleVotesUpdate, db: AsyncSession = Depends(get_db)):
    article = await article_service.update_article_votes(db, article_id, data.inc_votes)
    if not article:
        raise NotFound("Article does not exist")
    return {"article": article}

@router.delete("/{article_id}", status_code=204)
async def delete_article(article_id: int, db: AsyncSession = Depends(get_db)):
    deleted = await article_service.delete_article(db, article_id)
    if not deleted:
        raise NotFound("Article not found")

@router.get("/{article_id}/comments")
async def list_article_comments(
    article_id: int,
    query: ListingQuery = Depends(listing_query),
    db: AsyncSession = Depends(get_db),
):
    listing = await comment_service.get_article_comments(db, article_id, query)
    if listing is None:
        raise NotFound("Article does not exist")
    return {"comments": listing.items, "pagination": listing.pagination}

@router.post("/{article_id}/comments", status_code=201)
async def add_comment(article_id: int, data: CommentCreate, db: AsyncSession = Depends(get_db)):
    comment = await comment_service.add_comment(db, article_id, data)
    if not comment:
        raise NotFound("Article does not exist")
    return {"comment": comment}
