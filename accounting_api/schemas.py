"""Shared request-body building blocks"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class RequestModel(BaseModel):
    """
    Base for every request body.

    The web client sends loosely typed JSON (numeric ids, extra keys), so
    numbers are accepted where text is expected and unknown keys are ignored.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    def provided(self, field_name: str) -> bool:
        """True when the client sent the key, even with a null value"""
        return field_name in self.model_fields_set


def text(value: Optional[str], default: str = "") -> str:
    """Stripped text with a fallback for blank values"""
    stripped = (value or "").strip()
    return stripped or default


def require_text(value: Optional[str], field_name: str) -> str:
    stripped = text(value)
    if not stripped:
        raise ValueError(f"{field_name} is required")
    return stripped



class DocumentResponse(BaseModel):
    """Document metadata as returned inside profiles and cases"""

    id: str
    name: str
    type: str
    size: int
    uploadedAt: int


class OkResponse(BaseModel):
    ok: bool
