from datetime import date
from typing import Literal

from pydantic import BaseModel, model_validator


class ReportQuery(BaseModel):
    start_date: date
    end_date: date
    status: Literal["all", "pending", "approved", "rejected"] = "all"
    format: Literal["json", "csv"] = "json"

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self
