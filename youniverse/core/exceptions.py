"""Custom HTTP exceptions for the Youniverse API."""

from fastapi import HTTPException, status


class InvalidCredentialsException(HTTPException):
    """Raised when email or password is wrong."""

    def __init__(self, detail: str = "Incorrect email or password"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AccountInactiveException(HTTPException):

    def __init__(self, detail: str = "Account is inactive"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


class NotFoundException(HTTPException):
    """
    Raised when a requested resource does not exist.

    Usage:
        >>> raise NotFoundException("Post")
        >>> # {"detail": "Post not found"}
    """

    def __init__(self, resource: str = "Resource"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )


class ConflictException(HTTPException):

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


__all__ = [
    "InvalidCredentialsException",
    "AccountInactiveException",
    "NotFoundException",
    "ConflictException",
]
