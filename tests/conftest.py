"""
Test infrastructure for the news API.

Strategy
--------
- SQLite in-memory via aiosqlite eliminates the need for a running Postgres
  instance in CI, keeping the suite fast and self-contained.
- StaticPool forces all async tasks to share the same in-memory database
  connection, which is required because SQLite in-memory databases are
  connection-scoped; a new connection would see an empty database.
- SQLite ignores foreign keys unless asked, so ``PRAGMA foreign_keys=ON``
  is issued on connect; reference violations and ON DELETE CASCADE then
  behave as they do on Postgres.
- The app's get_db dependency is overridden so every test-time request uses
  the test session factory rather than the production one.
- All tables are created fresh before each test and dropped after, giving
  each test a clean isolated state without needing transactions or truncation.
- ``seeded`` loads a fixed dataset (13 articles, 11 comments on article 1)
  with explicit timestamps so that default ordering is deterministic.
"""
from datetime import datetime, timedelta

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from news_api.database import Base, create_engine_for, get_db
from news_api.main import app
from news_api.models import Article, Comment, Topic, User

# ---------------------------------------------------------------------------
# Test database engine: SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Same instrumentation as the production engine: query counter plus
# SQLite foreign key enforcement.
engine_test = create_engine_for(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

async_session_test = async_sessionmaker(
    engine_test,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Dependency override: replace production get_db with the test session factory
# ---------------------------------------------------------------------------

async def override_get_db():
    async with async_session_test() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


app.dependency_overrides[get_db] = override_get_db


# ---------------------------------------------------------------------------
# Test dataset
# ---------------------------------------------------------------------------

BASE_TIME = datetime(2020, 11, 3, 12, 0, 0)

TOPICS = [
    ("mitch", "The man, the Mitch, the legend"),
    ("cats", "Not dogs"),
    # Exists but has no articles.
    ("paper", "what books are made of"),
]

USERS = [
    ("butter_bridge", "jonny"),
    ("icellusedkars", "sam"),
    ("rogersop", "paul"),
    ("lurker", "do_nothing"),
]

NUM_ARTICLES = 13
CATS_ARTICLE_ID = 5
ARTICLE_1_COMMENTS = 11


async def seed_database(session: AsyncSession) -> None:
    for slug, description in TOPICS:
        session.add(Topic(slug=slug, description=description))
    for username, name in USERS:
        session.add(User(
            username=username,
            name=name,
            avatar_url=f"https://avatars.example.com/{username}.png",
        ))
    await session.flush()

    # Article k is k days older than BASE_TIME, so newest-first is id order.
    for k in range(1, NUM_ARTICLES + 1):
        session.add(Article(
            title=f"Article {k:02d}",
            topic="cats" if k == CATS_ARTICLE_ID else "mitch",
            author=USERS[k % 3][0],
            body=f"Body of article {k}",
            created_at=BASE_TIME - timedelta(days=k),
            votes=100 if k == 1 else k,
        ))
        await session.flush()

    # Comment i on article 1 is i hours older, so newest-first is id order.
    for i in range(1, ARTICLE_1_COMMENTS + 1):
        session.add(Comment(
            body=f"Comment {i} on article 1",
            article_id=1,
            author=USERS[i % 4][0],
            votes=i,
            created_at=BASE_TIME - timedelta(hours=i),
        ))
        await session.flush()

    session.add(Comment(body="Only comment on 3", article_id=3, author="lurker", created_at=BASE_TIME))
    session.add(Comment(body="Another on 3", article_id=3, author="rogersop", created_at=BASE_TIME))
    await session.commit()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create all tables before each test, drop after to guarantee isolation."""
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session() -> AsyncSession:
    """
    Yield a live AsyncSession for tests that call services directly.
    """
    async with async_session_test() as session:
        yield session


@pytest_asyncio.fixture
async def seeded() -> None:
    """Load the fixed test dataset."""
    async with async_session_test() as session:
        await seed_database(session)


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """
    Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
