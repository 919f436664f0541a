"""
Pydantic schemas for the portfolio API.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class RecordResponse(BaseModel):
    id: int
    size: Optional[str] = None
    img: Optional[str] = None
    text: Optional[str] = None
    pdfUrl: Optional[str] = None
    textPara: list[str] = Field(default_factory=list)
    detailsRoute: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


class ContactRequest(BaseModel):
    firstName: str = ""
    lastName: str = ""
    email: str = ""
    phone: str = ""
    message: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> str:
        # Whatever the form sends is embedded as-is in the mail template.
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class ContactResponse(BaseModel):
    success: bool
    message: str
