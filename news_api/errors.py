"""Exception handlers converting errors into ``{"msg": ...}`` responses."""
import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from news_api.exceptions import ApiError
from news_api.schemas import INVALID_BODY

logger = logging.getLogger(__name__)


async def api_error_handler(request: Request, exc: ApiError):
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.msg)
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.msg})


def _body_error_message(error: dict) -> str:
    if error["type"] == INVALID_BODY:
        return error["msg"]
    loc = error["loc"]
    if len(loc) > 1 and error["type"] != "json_invalid":
        return f"Invalid value of {loc[-1]}"
    return "Invalid data"


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """
    A malformed path parameter (e.g. ``/api/articles/hello``) is a 400
    "Received invalid type".  A rejected request body is a 400 carrying
    the message of its first error; anything else keeps FastAPI's 422.
    """
    errors = exc.errors()
    if any(error["loc"][:1] == ("path",) for error in errors):
        return JSONResponse(status_code=400, content={"msg": "Received invalid type"})

    body_errors = [error for error in errors if error["loc"][:1] == ("body",)]
    if body_errors:
        msg = _body_error_message(body_errors[0])
        logger.info("%s %s -> 400 %s", request.method, request.url.path, msg)
        return JSONResponse(status_code=400, content={"msg": msg})
    return await request_validation_exception_handler(request, exc)


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.info("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=400, content={"msg": "Received invalid reference value"})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"msg": "Something went wrong!"})


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
