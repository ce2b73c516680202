# apps/api/car/schema.py
from datetime import datetime
from typing import Annotated, Optional

from pydantic import Field, StringConstraints, field_validator

from apps.api.car.models import DEFAULT_CITY, DEFAULT_STATE
from core.response.models import CustomBaseModel

ImageUrl = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class CarFields(CustomBaseModel):
    @field_validator("year", "price", mode="before", check_fields=False)
    @classmethod
    def blank_numbers_are_missing(cls, v):
        return _blank_to_none(v)


class CarCreate(CarFields):
    year: int | None = Field(None)
    make: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    price: float | None = Field(None, ge=0)
    mileage: float = Field(0, ge=0)
    transmission: str | None = Field(None, max_length=50)
    fuel: str | None = Field(None, max_length=50)
    color: str | None = Field(None, max_length=50)
    city: str = Field(DEFAULT_CITY, max_length=100)
    state: str = Field(DEFAULT_STATE, max_length=50)
    image_url: str | None = Field(None)
    description: str | None = Field(None)
    featured: bool = Field(False)
    images: list[ImageUrl] = Field(default_factory=list)

    @field_validator("mileage", mode="before")
    @classmethod
    def blank_mileage_is_zero(cls, v):
        v = _blank_to_none(v)
        return 0 if v is None else v

    @field_validator("city", mode="before")
    @classmethod
    def default_city(cls, v):
        return _blank_to_none(v) or DEFAULT_CITY

    @field_validator("state", mode="before")
    @classmethod
    def default_state(cls, v):
        return _blank_to_none(v) or DEFAULT_STATE


class CarUpdate(CarFields):
    """Partial update. Only the fields present in the payload are applied."""

    year: int | None = Field(None)
    make: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    price: float | None = Field(None, ge=0)
    mileage: Optional[float] = Field(None, ge=0)
    transmission: str | None = Field(None, max_length=50)
    fuel: str | None = Field(None, max_length=50)
    color: str | None = Field(None, max_length=50)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    image_url: str | None = Field(None)
    description: str | None = Field(None)
    featured: Optional[bool] = Field(None)
    images: Optional[list[ImageUrl]] = Field(None)

    @field_validator("mileage", "city", "state", mode="before")
    @classmethod
    def blank_is_missing(cls, v):
        return _blank_to_none(v)


class CarImageCreate(CustomBaseModel):
    image_url: str = Field(..., min_length=1)


class CarImageResponse(CustomBaseModel):
    id: int = Field(...)
    car_id: int = Field(...)
    image_url: str = Field(...)
    created_at: datetime | None = Field(None)


class CarResponse(CustomBaseModel):
    id: int = Field(...)
    year: int | None = Field(None)
    make: str = Field(...)
    model: str = Field(...)
    price: float | None = Field(None)
    mileage: float | None = Field(None)
    transmission: str | None = Field(None)
    fuel: str | None = Field(None)
    color: str | None = Field(None)
    city: str | None = Field(None)
    state: str | None = Field(None)
    image_url: str | None = Field(None)
    description: str | None = Field(None)
    featured: bool = Field(False)
    images: list[str] = Field(default_factory=list)
    display_images: list[str] = Field(default_factory=list)
    created_at: datetime | None = Field(None)
    updated_at: datetime | None = Field(None)

    @field_validator("images", mode="before")
    @classmethod
    def gallery_urls(cls, v):
        return [getattr(image, "image_url", image) for image in v or []]


class DeletedImageCounts(CustomBaseModel):
    featured: int = Field(0)
    gallery: int = Field(0)


class CarDeleteResponse(CustomBaseModel):
    message: str = Field(...)
    deleted_images: DeletedImageCounts = Field(...)
