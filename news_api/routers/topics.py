from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.database import get_db
from news_api.exceptions import Conflict
from news_api.schemas import TopicCreate
from news_api.services import topic_service

router = APIRouter(prefix="/api/topics", tags=["topics"])

@router.get("")
async def list_topics(db: AsyncSession = Depends(get_db)):
    return {"topics": await topic_service.get_topics(db)}

@router.post("", status_code=201)
async def create_topic(data: TopicCreate, db: AsyncSession = Depends(get_db)):
    try:
        return {"topic": await topic_service.create_topic(db, data)}
    except IntegrityError:
        raise Conflict("Topic already exists")
