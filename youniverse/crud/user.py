"""CRUD operations for `User` model."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select, or_
from sqlalchemy.orm import Session

from youniverse.core.security import get_password_hash, verify_password
from youniverse.crud.base import CRUDBase
from youniverse.models.user import User
from youniverse.schemas.user import UserCreate, ProfileUpdate, ProfileComplete


DEFAULT_ROLE = "student_in_india"
DEFAULT_COUNTRY = "India"


class CRUDUser(CRUDBase[User, UserCreate, ProfileUpdate]):
    def get_by_email(self, db: Session, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        stmt = select(User).where(User.email == email.strip().lower()).limit(1)
        return db.scalars(stmt).first()

    def create_user(self, db: Session, *, user_in: UserCreate) -> User:
        """Create a fresh account with onboarding defaults."""
        db_obj = User(
            email=user_in.email,
            password_hash=get_password_hash(user_in.password),
            name=user_in.name,
            role=DEFAULT_ROLE,
            country=DEFAULT_COUNTRY,
            bio="",
            profile_completed=False,
            is_new_user=True,
        )
        return self._save(db, db_obj)

    def authenticate(self, db: Session, *, email: str, password: str) -> Optional[User]:
        user = self.get_by_email(db, email)
        if not user:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def complete_profile(self, db: Session, *, db_obj: User, profile_in: ProfileComplete) -> User:
        """Apply the setup form and leave onboarding."""
        for field, value in profile_in.model_dump(exclude_unset=True).items():
            setattr(db_obj, field, value)
        db_obj.profile_completed = True
        db_obj.is_new_user = False
        return self._save(db, db_obj)

    def search_students(
        self,
        db: Session,
        *,
        exclude_user_id: Optional[int] = None,
        role: Optional[str] = None,
        country: Optional[str] = None,
        course: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> List[User]:
        """
        Find students matching every given filter, newest profiles first.

        `role`, `country` and `course` are exact matches. `search` is a
        case-insensitive substring match on name, university, course or bio.
        Empty strings are treated as "no filter".
        """
        conditions = [User.is_active == True]
        if exclude_user_id is not None:
            conditions.append(User.id != exclude_user_id)
        if role:
            conditions.append(User.role == role)
        if country:
            conditions.append(User.country == country)
        if course:
            conditions.append(User.course == course)
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            conditions.append(
                or_(
                    User.name.ilike(pattern),
                    User.university.ilike(pattern),
                    User.course.ilike(pattern),
                    User.bio.ilike(pattern),
                )
            )

        stmt = (
            select(User)
            .where(*conditions)
            .order_by(User.created_at.desc(), User.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())


crud_user = CRUDUser(User)
