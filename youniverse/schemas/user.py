"""Pydantic schemas for `User` profiles."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


ALLOWED_ROLES = {"student_in_india", "student_abroad"}

ConnectionStatus = Literal["none", "pending", "connected"]


def _validate_role(v: Optional[str]) -> Optional[str]:
	if v is not None and v not in ALLOWED_ROLES:
		raise ValueError(f"Role must be one of {sorted(ALLOWED_ROLES)}")
	return v


class UserCreate(BaseModel):
	email: EmailStr
	password: str = Field(..., min_length=6)
	name: str = Field(..., min_length=1, max_length=255)

	@field_validator("email", mode="before")
	@classmethod
	def normalize_email(cls, v):
		if isinstance(v, str):
			return v.strip().lower()
		return v

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"email": "priya@example.com",
			"password": "StrongPass!234",
			"name": "Priya Sharma",
		}
	})


class ProfileUpdate(BaseModel):
	name: Optional[str] = Field(None, min_length=1, max_length=255)
	image_url: Optional[str] = None
	role: Optional[str] = None
	bio: Optional[str] = None
	country: Optional[str] = None
	university: Optional[str] = None
	course: Optional[str] = None
	year_of_study: Optional[str] = None
	preferred_destination: Optional[str] = None
	phone: Optional[str] = None
	current_education_level: Optional[str] = None
	expected_admission_year: Optional[str] = None
	current_city: Optional[str] = None

	@field_validator("name", "role", "country")
	@classmethod
	def reject_null(cls, v: Optional[str]) -> str:
		# Required columns may be omitted from an update but never cleared
		if v is None:
			raise ValueError("Field cannot be null")
		return v

	@field_validator("role")
	@classmethod
	def validate_role(cls, v: Optional[str]) -> Optional[str]:
		return _validate_role(v)


class ProfileComplete(ProfileUpdate):
	"""Payload of the first-login profile setup."""
	role: str
	country: str = Field(..., min_length=1)

	model_config = ConfigDict(json_schema_extra={
		"example": {
			"role": "student_abroad",
			"country": "Germany",
			"university": "TU Munich",
			"course": "Computer Science",
			"year_of_study": "2",
		}
	})


class UserResponse(BaseModel):
	id: int
	email: str
	name: str
	image_url: Optional[str] = None
	role: str
	bio: Optional[str] = None
	country: str
	university: Optional[str] = None
	course: Optional[str] = None
	year_of_study: Optional[str] = None
	preferred_destination: Optional[str] = None
	phone: Optional[str] = None
	current_education_level: Optional[str] = None
	expected_admission_year: Optional[str] = None
	current_city: Optional[str] = None
	profile_completed: bool
	is_new_user: bool
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class StudentResponse(UserResponse):
	"""Search result, annotated with the viewer's connection state."""
	connection_status: ConnectionStatus = "none"


class StudentListResponse(BaseModel):
	students: List[StudentResponse]
	total: int


class TokenResponse(BaseModel):
	access_token: str
	token_type: str = "bearer"


class RegisterResponse(TokenResponse):
	user: UserResponse
