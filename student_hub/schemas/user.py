from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from student_hub.enums.app_enum import RoleEnum


def _lower(value):
    return value.lower() if value else value


class UserCreate(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8)
    role: RoleEnum
    department: str = Field(min_length=1, max_length=100)
    year: Optional[int] = Field(default=None, ge=1, le=10)
    student_id: Optional[str] = Field(default=None, max_length=50)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value):
        return _lower(value)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    email: Optional[EmailStr] = None
    role: Optional[RoleEnum] = None
    department: Optional[str] = Field(default=None, max_length=100)
    year: Optional[int] = Field(default=None, ge=1, le=10)
    student_id: Optional[str] = Field(default=None, max_length=50)
    is_active: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, value):
        return _lower(value)


class ProfileUpdate(BaseModel):
    phone: Optional[str] = Field(default=None, max_length=20)
    date_of_birth: Optional[date] = None
    gender: Optional[Literal["Male", "Female", "Other"]] = None
    address: Optional[str] = None
    languages: Optional[str] = Field(default=None, max_length=255)
    skills: Optional[str] = Field(default=None, max_length=500)
    achievements: Optional[str] = None
    projects: Optional[str] = None
    certifications: Optional[str] = None
    linkedin_url: Optional[str] = Field(default=None, max_length=255)
    github_url: Optional[str] = Field(default=None, max_length=255)
    portfolio_url: Optional[str] = Field(default=None, max_length=255)

    @field_validator("linkedin_url", "github_url", "portfolio_url")
    @classmethod
    def check_url(cls, value):
        if value is not None and not value.startswith(("http://", "https://")):
            raise ValueError("must be a valid http(s) URL")
        return value
