# apps/api/upload/schema.py
from pydantic import Field

from core.response.models import CustomBaseModel


class ImageUploadResponse(CustomBaseModel):
    image_url: str = Field(...)


class MultipleImageUploadResponse(CustomBaseModel):
    image_urls: list[str] = Field(default_factory=list)
