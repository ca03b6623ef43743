__all__ = [
    "BaseError",
    "BadRequestError",
    "ConflictError",
    "ConnectionNotConfiguredError",
    "DocumentNotFoundError",
    "IndexNotConfiguredError",
    "InternalError",
    "InvalidScopeError",
    "MassAssignmentError",
    "NotFoundError",
    "NotSupportedError",
    "ScopeNotFoundError",
]

from typing import Any


class BaseError(Exception):
    status_code: int


class BadRequestError(BaseError):
    status_code = 400


class NotFoundError(BaseError):
    status_code = 404


class ConflictError(BaseError):
    status_code = 409


class NotSupportedError(BaseError):
    status_code = 415


class InternalError(Exception):
    status_code = 500


class DocumentNotFoundError(NotFoundError):
    """No document matched a lookup that had to succeed."""

    model: type | None
    ids: list[Any]
    query: dict | None

    def __init__(
        self,
        model: type | None = None,
        ids: Any = None,
        query: dict | None = None,
        message: str | None = None,
    ):
        self.model = model
        self.query = query
        if ids is None:
            self.ids = []
        elif isinstance(ids, (list, tuple, set)):
            self.ids = list(ids)
        else:
            self.ids = [ids]
        if message is None:
            name = model.__name__ if model is not None else "document"
            message = f"No query results for model [{name}]"
            if self.ids:
                message += " " + ", ".join(str(id) for id in self.ids)
        super().__init__(message)


class MassAssignmentError(BadRequestError):
    key: str

    def __init__(self, key: str, model: type | None = None):
        self.key = key
        name = model.__name__ if model is not None else "model"
        super().__init__(
            f"Add [{key}] to fillable property to allow "
            f"mass assignment on [{name}]."
        )


class InvalidScopeError(BadRequestError):
    pass


class ScopeNotFoundError(BadRequestError):
    pass


class ConnectionNotConfiguredError(BadRequestError):
    pass


class IndexNotConfiguredError(BadRequestError):
    pass
