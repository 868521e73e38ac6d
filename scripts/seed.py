"""Database seeder for local development of the news API."""
import asyncio
import argparse
import random
import time
from datetime import datetime, timezone, timedelta
from news_api.database import engine, async_session, Base
from news_api.models import User, Article, Comment, Topic

TOPICS = [
    ("coding", "Code is love, code is life"),
    ("football", "FOOTIE!"),
    ("cooking", "Hey good looking, what you got cooking?"),
]

USERS = [
    ("tickle122", "Tom Tickle"),
    ("grumpy19", "Paul Grump"),
    ("happyamy2016", "Amy Happy"),
    ("cooljmessy", "Peter Messy"),
    ("weegembump", "Gemma Bump"),
    ("jessjelly", "Jess Jelly"),
]

async def seed(small: bool = False):
    num_articles = 12 if small else 500
    max_comments_per_article = 3 if small else 20

    print(f"Seeding: {len(TOPICS)} topics, {len(USERS)} users, {num_articles} articles")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        for slug, description in TOPICS:
            session.add(Topic(slug=slug, description=description))
        for username, name in USERS:
            session.add(User(
                username=username,
                name=name,
                avatar_url=f"https://avatars.example.com/{username}.png",
            ))
        await session.flush()
        print(f"  Created {len(TOPICS)} topics and {len(USERS)} users")

        now = datetime.now(timezone.utc)
        articles = []
        for i in range(num_articles):
            slug = random.choice(TOPICS)[0]
            article = Article(
                title=f"Article {i}: notes on {slug}",
                topic=slug,
                author=random.choice(USERS)[0],
                body=f"This is the full body of article {i}. " * 10,
                created_at=now - timedelta(hours=i),
                votes=random.randint(-5, 100),
            )
            session.add(article)
            articles.append(article)
        await session.flush()

        total_comments = 0
        for article in articles:
            for j in range(random.randint(0, max_comments_per_article)):
                session.add(Comment(
                    body=f"Comment {j} on article {article.article_id}.",
                    article_id=article.article_id,
                    author=random.choice(USERS)[0],
                    votes=random.randint(0, 20),
                    created_at=article.created_at + timedelta(minutes=j + 1),
                ))
                total_comments += 1
        await session.flush()

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")
    print(f"  Articles: {num_articles}")
    print(f"  Comments: {total_comments}")


def main():
    parser = argparse.ArgumentParser(description="Seed the news database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (12 articles)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
