"""
User service — read-only access to the User aggregate.

Users are created out of band (seed script); the API only lists them and
looks them up by username.
"""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.models import User


def _user_to_dict(user: User) -> dict:
    return {
        "username": user.username,
        "name": user.name,
        "avatar_url": user.avatar_url,
    }


async def get_users(db: AsyncSession) -> list[dict]:
    """Return all users ordered by username."""
    result = await db.execute(select(User).order_by(User.username))
    return [_user_to_dict(u) for u in result.scalars().all()]


async def get_user(db: AsyncSession, username: str) -> dict | None:
    """Return the user called *username*, or None when there is none."""
    user = await db.get(User, username)
    if user is None:
        return None
    return _user_to_dict(user)
