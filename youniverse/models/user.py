from sqlalchemy import Column, Integer, String, Text, Boolean, TIMESTAMP, CheckConstraint
from sqlalchemy.sql import func
from ..database import Base


class User(Base):
    __tablename__ = "users"
    
    # Primary Key
    id = Column(Integer, primary_key=True, index=True)
    
    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    
    # Profile
    name = Column(String(255), nullable=False)
    image_url = Column(String(500))
    role = Column(String(50), nullable=False, default="student_in_india", index=True)
    bio = Column(Text)
    country = Column(String(100), nullable=False, default="India", index=True)
    university = Column(String(255))
    course = Column(String(255), index=True)
    year_of_study = Column(String(50))
    preferred_destination = Column(String(100))
    phone = Column(String(20))
    current_education_level = Column(String(100))
    expected_admission_year = Column(String(10))
    current_city = Column(String(100))
    
    # Onboarding
    profile_completed = Column(Boolean, default=False)
    is_new_user = Column(Boolean, default=True)
    
    # Account Status
    is_active = Column(Boolean, default=True, index=True)
    
    # Timestamps
    created_at = Column(TIMESTAMP, server_default=func.now(), index=True)
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
    
    # Constraints
    __table_args__ = (
        CheckConstraint(
            "role IN ('student_in_india', 'student_abroad')",
            name="check_user_role"
        ),
    )
