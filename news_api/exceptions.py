"""
Client-facing error taxonomy.

Every :class:`ApiError` carries the HTTP status and the exact ``msg`` the
API returns; ``news_api.errors`` turns them into JSON responses.
"""


class ApiError(Exception):
    """Base error with an HTTP status and a client-visible message."""

    status_code: int = 400

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 409


class InvalidQuery(ApiError):
    """A listing query parameter was rejected."""

    parameter: str = "query"

    def __init__(self) -> None:
        super().__init__(f"Invalid {self.parameter} query")


class InvalidSortColumn(InvalidQuery):
    parameter = "sort_by"


class InvalidOrder(InvalidQuery):
    parameter = "order"


class InvalidTopicFilter(InvalidQuery):
    parameter = "topic"
