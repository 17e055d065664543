"""
Common response models.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response schema."""

    message: str = Field(description="Human-readable error message")
    error: str | None = Field(default=None, description="Underlying error text")
    details: dict | None = Field(default=None, description="Additional error context")
