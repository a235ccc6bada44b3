"""Student profile and search endpoints."""

from typing import Optional
from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from youniverse.api.deps import get_current_active_user, get_db
from youniverse.core.exceptions import NotFoundException
from youniverse.crud import crud_connection, crud_user
from youniverse.models.user import User
from youniverse.schemas.user import (
    ProfileComplete,
    ProfileUpdate,
    StudentListResponse,
    StudentResponse,
    UserResponse,
)

router = APIRouter(
    prefix="/profiles",
    tags=["Profiles"],
)


@router.get(
    "",
    response_model=StudentListResponse,
    status_code=status.HTTP_200_OK,
    summary="Search students",
    description="""
    Search other students. All filters are optional and combine with AND.
    
    - `role`, `country`, `course`: exact match
    - `search`: case-insensitive match on name, university, course or bio
    
    Each result carries `connection_status` (`none`, `pending`, `connected`) relative to the caller.
    """,
)
def search_students(
    role: Optional[str] = Query(None, pattern="^(student_in_india|student_abroad)$"),
    country: Optional[str] = Query(None),
    course: Optional[str] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=100),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> StudentListResponse:
    students = crud_user.search_students(
        db,
        exclude_user_id=current_user.id,
        role=role,
        country=country,
        course=course,
        search=search,
        skip=skip,
        limit=limit,
    )
    statuses = crud_connection.get_status_map(db, user_id=current_user.id)
    
    results = [
        StudentResponse(
            **UserResponse.model_validate(student).model_dump(),
            connection_status=statuses.get(student.id, "none"),
        )
        for student in students
    ]
    return StudentListResponse(students=results, total=len(results))


@router.get(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get own profile",
)
def get_my_profile(
    current_user: User = Depends(get_current_active_user),
) -> UserResponse:
    return UserResponse.model_validate(current_user)


@router.put(
    "/me",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Update own profile",
    description="Partial update; only fields present in the body are changed.",
)
def update_my_profile(
    profile_in: ProfileUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    user = crud_user.update(db, db_obj=current_user, obj_in=profile_in)
    return UserResponse.model_validate(user)


@router.post(
    "/me/complete",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Complete profile setup",
)
def complete_my_profile(
    profile_in: ProfileComplete,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Finish onboarding: save the setup form and clear the new-user flag."""
    user = crud_user.complete_profile(db, db_obj=current_user, profile_in=profile_in)
    return UserResponse.model_validate(user)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get a student's profile",
)
def get_profile(
    user_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
) -> UserResponse:
    user = crud_user.get(db, user_id)
    if not user or not user.is_active:
        raise NotFoundException("User")
    return UserResponse.model_validate(user)
