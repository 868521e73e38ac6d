from fastapi import APIRouter

router = APIRouter(prefix="/api", tags=["api"])

_LISTING_QUERIES = ["sort_by", "order", "limit", "page"]
_PAGINATION_EXAMPLE = {
    "total_count": 13,
    "current_page": 1,
    "total_pages": 3,
    "next_page": 2,
    "prev_page": None,
}

ENDPOINTS = {
    "GET /api": {
        "description": "serves a json representation of all the available endpoints of the api",
    },
    "GET /api/healthCheck": {
        "description": "responds with a liveness message",
        "exampleResponse": {"msg": "Alive!"},
    },
    "GET /api/topics": {
        "description": "serves an array of all topics",
        "queries": [],
        "exampleResponse": {
            "topics": [{"slug": "football", "description": "Footie!"}],
        },
    },
    "POST /api/topics": {
        "description": "creates a topic; slug must be 3-20 lowercase letters or dashes",
        "exampleRequest": {"slug": "football", "description": "Footie!"},
        "exampleResponse": {"topic": {"slug": "football", "description": "Footie!"}},
    },
    "GET /api/articles": {
        "description": "serves a page of articles with comment counts",
        "queries": ["topic", *_LISTING_QUERIES],
        "exampleResponse": {
            "articles": [
                {
                    "article_id": 1,
                    "title": "Seafood substitutions are increasing",
                    "topic": "cooking",
                    "author": "weegembump",
                    "created_at": "2018-05-30T15:59:13",
                    "votes": 0,
                    "article_img_url": "https://default.co.uk/some/random/img.jpg",
                    "comment_count": 6,
                }
            ],
            "pagination": _PAGINATION_EXAMPLE,
        },
    },
    "POST /api/articles": {
        "description": "creates an article; article_img_url is optional",
        "exampleRequest": {
            "author": "weegembump",
            "title": "Seafood substitutions are increasing",
            "body": "Text from the article..",
            "topic": "cooking",
        },
    },
    "GET /api/articles/:article_id": {
        "description": "serves a single article including its body and comment count",
    },
    "PATCH /api/articles/:article_id": {
        "description": "adds inc_votes to the article's votes",
        "exampleRequest": {"inc_votes": 1},
    },
    "DELETE /api/articles/:article_id": {
        "description": "deletes an article and its comments",
    },
    "GET /api/articles/:article_id/comments": {
        "description": "serves a page of an article's comments, newest first",
        "queries": _LISTING_QUERIES,
        "exampleResponse": {
            "comments": [
                {
                    "comment_id": 1,
                    "body": "Great read",
                    "article_id": 1,
                    "author": "weegembump",
                    "votes": 0,
                    "created_at": "2020-04-06T12:17:00",
                }
            ],
            "pagination": _PAGINATION_EXAMPLE,
        },
    },
    "POST /api/articles/:article_id/comments": {
        "description": "adds a comment to an article",
        "exampleRequest": {"username": "weegembump", "body": "Great read"},
    },
    "PATCH /api/comments/:comment_id": {
        "description": "adds inc_votes to the comment's votes",
        "exampleRequest": {"inc_votes": 1},
    },
    "DELETE /api/comments/:comment_id": {
        "description": "deletes a comment",
    },
    "GET /api/users": {
        "description": "serves an array of all users",
        "exampleResponse": {
            "users": [{"username": "weegembump", "name": "Jess", "avatar_url": None}],
        },
    },
    "GET /api/users/:username": {
        "description": "serves a single user",
    },
}

@router.get("")
async def get_api():
    return {"endpoints": ENDPOINTS}

@router.get("/healthCheck")
async def health_check():
    return {"msg": "Alive!"}
