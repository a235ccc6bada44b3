"""FastAPI dependency injection functions for authentication and database access."""

import logging
from typing import Generator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from youniverse.core.security import decode_token
from youniverse.crud import crud_user
from youniverse.database import SessionLocal
from youniverse.models.user import User

logger = logging.getLogger(__name__)

# OAuth2 Bearer token scheme
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")
oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency to get database session.
    
    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_user_from_token(db: Session, token: str) -> Optional[User]:
    """Resolve a bearer token to its user, or None if the token is unusable."""
    try:
        payload = decode_token(token)
    except HTTPException:
        logger.warning("[AUTH] Token decode failed")
        return None

    email = payload.get("sub")
    if email is None:
        logger.warning("[AUTH] Email is None in token payload")
        return None

    user = crud_user.get_by_email(db, email)
    if user is None:
        logger.warning(f"[AUTH] User not found for email: {email}")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency to get current authenticated user from JWT token.

    Raises:
        HTTPException: 401 if token is invalid or user not found
    """
    user = get_user_from_token(db, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug(f"[AUTH] User authenticated: id={user.id}")
    return user


def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Dependency to verify current user is active.
        
    Raises:
        HTTPException: 403 if user is inactive
    """
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )
    return current_user


def get_optional_current_user(
    token: Optional[str] = Depends(oauth2_scheme_optional),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """
    Dependency to optionally get current authenticated user.
    Returns None if no valid token provided.

    Used by the public feed, where `is_liked` flags need a viewer.
    """
    if not token:
        return None

    user = get_user_from_token(db, token)
    if user is None or not user.is_active:
        return None
    return user


__all__ = [
    "oauth2_scheme",
    "oauth2_scheme_optional",
    "get_db",
    "get_user_from_token",
    "get_current_user",
    "get_current_active_user",
    "get_optional_current_user",
]
