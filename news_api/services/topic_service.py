"""
Topic service — list and create topics.

Topic slugs are primary keys; a duplicate slug raises IntegrityError on
flush, which the router translates into a 409.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.models import Topic
from news_api.schemas import TopicCreate


def _topic_to_dict(topic: Topic) -> dict:
    return {"slug": topic.slug, "description": topic.description}


async def get_topics(db: AsyncSession) -> list[dict]:
    result = await db.execute(select(Topic).order_by(Topic.slug))
    return [_topic_to_dict(t) for t in result.scalars().all()]


async def create_topic(db: AsyncSession, data: TopicCreate) -> dict:
    topic = Topic(slug=data.slug, description=data.description)
    db.add(topic)
    await db.flush()
    return _topic_to_dict(topic)
