# rental/schemas/common.py
from datetime import date

from pydantic import BaseModel, Field, model_validator


class ErrorResponse(BaseModel):
    detail: str = Field(description="Error message")

    model_config = {"json_schema_extra": {"examples": [{"detail": "Not Found"}]}}


class OkResponse(BaseModel):
    ok: bool = Field(description="Always true on success")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}


class DateRange(BaseModel):
    """Inclusive calendar range; both days are part of the rental."""

    date_from: date
    date_to: date

    @model_validator(mode="after")
    def _check_order(self):
        if self.date_from > self.date_to:
            raise ValueError("date_from must not be after date_to")
        return self
