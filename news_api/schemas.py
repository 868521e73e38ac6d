import re

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator, model_validator
from pydantic_core import PydanticCustomError

from news_api.config import settings

# Error type of every request body check below; ``news_api.errors`` returns
# the message of such an error verbatim.
INVALID_BODY = "invalid_body"

SLUG_RE = re.compile(r"[a-z-]{3,20}")


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError(INVALID_BODY, message)


def _require_object(data) -> dict:
    if not isinstance(data, dict):
        raise _invalid("Invalid data")
    return data


def _whole_number(value, *, wrong_type: str, not_whole: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _invalid(wrong_type)
    if isinstance(value, float):
        if not value.is_integer():
            raise _invalid(not_whole)
        return int(value)
    return value


# --- Topic ---

class TopicCreate(BaseModel):
    slug: StrictStr
    description: StrictStr

    @model_validator(mode="before")
    @classmethod
    def _check_fields(cls, data):
        data = _require_object(data)
        slug = data.get("slug")
        if not slug or not isinstance(slug, str):
            raise _invalid("Invalid type of slug")
        if not SLUG_RE.fullmatch(slug):
            raise _invalid("Invalid format of slug")
        if not isinstance(data.get("description"), str):
            raise _invalid("Invalid type of description")
        return data


# --- Article ---

class ArticleCreate(BaseModel):
    author: StrictStr
    title: StrictStr = Field(max_length=300)
    body: StrictStr
    topic: StrictStr
    article_img_url: str = settings.DEFAULT_ARTICLE_IMG_URL

    @model_validator(mode="before")
    @classmethod
    def _check_types(cls, data):
        data = _require_object(data)
        for key in ("author", "title", "body", "topic"):
            if not isinstance(data.get(key), str):
                raise _invalid(f"Invalid type of {key}")
        return data

    @field_validator("article_img_url", mode="before")
    @classmethod
    def _default_img_url(cls, value):
        # A missing or non-string image URL is replaced, never rejected.
        if not isinstance(value, str) or not value:
            return settings.DEFAULT_ARTICLE_IMG_URL
        return value


# --- Comment ---

class CommentCreate(BaseModel):
    username: StrictStr
    body: StrictStr

    @model_validator(mode="before")
    @classmethod
    def _check_fields(cls, data):
        data = _require_object(data)
        if not data:
            raise _invalid("Invalid data")
        body = data.get("body")
        if not isinstance(body, str):
            raise _invalid("Element 'body' has wrong type")
        if len(body) < 3:
            raise _invalid("Element 'body' is too short")
        if not isinstance(data.get("username"), str):
            raise _invalid("Element 'username' has wrong type")
        return data


# --- Votes ---

class ArticleVotesUpdate(BaseModel):
    inc_votes: StrictInt

    @model_validator(mode="before")
    @classmethod
    def _check_inc_votes(cls, data):
        data = _require_object(data)
        inc_votes = _whole_number(
            data.get("inc_votes"),
            wrong_type="Element 'inc_votes' has invalid type",
            not_whole="Invalid 'inc_votes', expected whole number",
        )
        return {**data, "inc_votes": inc_votes}


class CommentVotesUpdate(BaseModel):
    inc_votes: StrictInt

    @model_validator(mode="before")
    @classmethod
    def _check_inc_votes(cls, data):
        data = _require_object(data)
        inc_votes = _whole_number(
            data.get("inc_votes"),
            wrong_type="Invalid type of inc_votes",
            not_whole="Invalid type of inc_votes",
        )
        return {**data, "inc_votes": inc_votes}


# --- Pagination ---

class Pagination(BaseModel):
    total_count: int
    current_page: int
    total_pages: int
    next_page: int | None
    prev_page: int | None
