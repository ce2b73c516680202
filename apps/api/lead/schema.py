# apps/api/lead/schema.py
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from core.response.models import CustomBaseModel


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class LeadCreate(CustomBaseModel):
    """
    Public lead form. Any ``status`` sent by the client is ignored, new
    leads always start as ``new``.
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    email: EmailStr | None = Field(None)
    phone: str = Field(..., min_length=1, max_length=50)
    contact_preference: str | None = Field(None, max_length=20)
    preferred_car: str | None = Field(None)
    notes: str | None = Field(None)

    @field_validator("last_name", "email", "contact_preference", "notes", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)

    @field_validator("preferred_car", mode="before")
    @classmethod
    def car_reference_as_text(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return _blank_to_none(v)


class LeadStatusUpdate(CustomBaseModel):
    # validated against LeadStatus by the service so the error reads the same
    # whether or not the lead exists
    status: str | None = Field(None)


class LeadResponse(CustomBaseModel):
    id: int = Field(...)
    first_name: str = Field(...)
    last_name: str | None = Field(None)
    email: str | None = Field(None)
    phone: str | None = Field(None)
    contact_preference: str | None = Field(None)
    preferred_car: str | None = Field(None)
    notes: str | None = Field(None)
    status: str = Field(...)
    created_at: datetime | None = Field(None)
    updated_at: datetime | None = Field(None)
