# apps/api/upload/router.py
from typing import List

from fastapi import APIRouter, File, UploadFile

from apps.api.auth.dependency import AdminDependency
from apps.api.upload.schema import ImageUploadResponse, MultipleImageUploadResponse
from apps.api.upload.service import ImageStoreServiceDependency

router = APIRouter(tags=["Upload"])


@router.post("/upload", description="Upload a single car image (admin)")
async def upload_image_endpoint(
    admin: AdminDependency,
    image_store: ImageStoreServiceDependency,
    image: UploadFile = File(...),
) -> ImageUploadResponse:
    url = await image_store.store_upload(image)
    return ImageUploadResponse(image_url=url)


@router.post("/upload-multiple", description="Upload several car images at once (admin)")
async def upload_images_endpoint(
    admin: AdminDependency,
    image_store: ImageStoreServiceDependency,
    images: List[UploadFile] = File(...),
) -> MultipleImageUploadResponse:
    urls = await image_store.store_uploads(images)
    return MultipleImageUploadResponse(image_urls=urls)
