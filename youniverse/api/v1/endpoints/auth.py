"""Authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from youniverse.api.deps import get_current_active_user, get_db
from youniverse.core.exceptions import AccountInactiveException, InvalidCredentialsException
from youniverse.core.security import create_access_token
from youniverse.crud import crud_user
from youniverse.models.user import User
from youniverse.schemas.user import (
    RegisterResponse,
    TokenResponse,
    UserCreate,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
def register(
    user_in: UserCreate,
    db: Session = Depends(get_db),
) -> RegisterResponse:
    """
    Register a new student account.

    New accounts start with default profile values and `is_new_user=True`
    until the profile setup is completed.
        
    Raises:
        HTTPException: 400 if email already registered
    """
    if crud_user.get_by_email(db, user_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )
    
    db_user = crud_user.create_user(db, user_in=user_in)
    logger.info(f"[AUTH] Registered user id={db_user.id}")
    
    return RegisterResponse(
        user=UserResponse.model_validate(db_user),
        access_token=create_access_token(db_user.email),
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Login with email and password",
    description="OAuth2 password flow. Send the email as `username`.",
)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> TokenResponse:
    user = crud_user.authenticate(db, email=form_data.username, password=form_data.password)
    if not user:
        logger.info("[AUTH] Login failed: bad credentials")
        raise InvalidCredentialsException()
    if not user.is_active:
        raise AccountInactiveException()
    
    return TokenResponse(access_token=create_access_token(user.email))


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user",
)
def read_me(
    current_user: User = Depends(get_current_active_user),
) -> UserResponse:
    return UserResponse.model_validate(current_user)
