import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from news_api.config import settings
from news_api.errors import install_error_handlers
from news_api.middleware import TimingMiddleware
from news_api.routers import api, articles, comments, topics, users

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="News API",
    description="Topics, articles, comments and users with paginated listings",
    version="1.0.0",
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Routers
app.include_router(api.router)
app.include_router(articles.router)
app.include_router(comments.router)
app.include_router(topics.router)
app.include_router(users.router)
