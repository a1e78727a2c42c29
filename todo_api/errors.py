"""Error taxonomy shared by the auth gate, the services and the routers.

Each error carries the HTTP status it maps to; ``todo_api.main`` turns them
into ``{"detail": message}`` responses.
"""


class TodoAPIError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TodoAPIError):
    status_code = 400


class AuthError(TodoAPIError):
    status_code = 401


class NotFoundError(TodoAPIError):
    status_code = 404


class StoreError(TodoAPIError):
    """Any failure reported by the database; the driver message is kept as-is."""

    status_code = 500
