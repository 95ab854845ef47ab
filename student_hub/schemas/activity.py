from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from student_hub.enums.app_enum import ActivityStatusEnum, ActivityTypeEnum
from student_hub.models.activity import MAX_CREDITS


class ActivitySubmission(BaseModel):
    title: str = Field(min_length=3, max_length=200)
    type: ActivityTypeEnum
    description: Optional[str] = Field(default=None, max_length=1000)
    date: date
    duration: Optional[str] = Field(default=None, max_length=50)
    organizer: Optional[str] = Field(default=None, max_length=200)
    credits: float = Field(default=0, ge=0)

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 3:
            raise ValueError("title must be at least 3 characters")
        return value

    @field_validator("credits")
    @classmethod
    def cap_credits(cls, value: float) -> float:
        # requested credits above the ceiling are capped, not rejected
        return min(value, float(MAX_CREDITS))


class ReviewRequest(BaseModel):
    status: ActivityStatusEnum
    credits: Optional[float] = Field(default=None, ge=0, le=MAX_CREDITS)
    remarks: Optional[str] = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def check_decision(self):
        if self.status == ActivityStatusEnum.pending:
            raise ValueError("status must be approved or rejected")
        if self.status == ActivityStatusEnum.rejected and self.credits is not None:
            raise ValueError("credits are not allowed when rejecting an activity")
        return self
