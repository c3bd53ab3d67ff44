# teamhub/errors.py
from __future__ import annotations

from fastapi import HTTPException, status

NOT_ALLOWED = "You do not have the rights to perform these actions"


class Unauthenticated(HTTPException):
    """No (valid) identity on a request that needs one."""

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    """
    Caller is authenticated but not allowed.
    The message is fixed on purpose: a wrong role, an out-of-scope instance
    and a missing instance must all look the same from outside.
    """

    def __init__(self) -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=NOT_ALLOWED)


class NotFound(HTTPException):
    def __init__(self, entity: str) -> None:
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{entity} not found, please check provided data or try again later",
        )


class BadRequest(HTTPException):
    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class LimitReached(BadRequest):
    def __init__(self, entity: str) -> None:
        super().__init__(f"{entity} can not be created, because limit has been reached")


class Conflict(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


def missing(scope, entity: str) -> HTTPException:
    """
    Error for a record that is not found under the caller's scope.
    Scoped callers get the same Forbidden as any other denial; only
    unrestricted callers learn that the record does not exist.
    """
    if scope is None or scope.unrestricted:
        return NotFound(entity)
    return Forbidden()
