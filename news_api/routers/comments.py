from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.database import get_db
from news_api.exceptions import NotFound
from news_api.schemas import CommentVotesUpdate
from news_api.services import comment_service

router = APIRouter(prefix="/api/comments", tags=["comments"])

@router.patch("/{comment_id}")
async def update_comment_votes(comment_id: int, data: CommentVotesUpdate, db: AsyncSession = Depends(get_db)):
    comment = await comment_service.update_comment_votes(db, comment_id, data.inc_votes)
    if not comment:
        raise NotFound("Comment not found")
    return {"comment": comment}

@router.delete("/{comment_id}", status_code=204)
async def delete_comment(comment_id: int, db: AsyncSession = Depends(get_db)):
    deleted = await comment_service.delete_comment(db, comment_id)
    if not deleted:
        raise NotFound("Comment not found")
