"""Validation result models."""

from typing import Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A user-facing problem with one input field."""

    field: str = Field(..., description="Related input field")
    message: str = Field(..., description="German message for the user")

    model_config = {"frozen": True}


class RetirementStartCheck(BaseModel):
    """Outcome of checking a requested retirement start."""

    is_valid: bool = Field(...)
    warning: Optional[str] = Field(default=None)

    model_config = {"frozen": True}
