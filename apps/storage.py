from typing import Annotated

from fastapi import Depends, Request

from apps.settings import AppConfig
from core.storage.storage_class.abstract import Storage
from core.storage.storage_class.filestorage import FileSystemStorage
from core.storage.storage_class.s3storage import S3Storage


def create_storage(settings: AppConfig) -> Storage:
    if settings.STORAGE_BACKEND == "s3":
        if not settings.S3_BUCKET:
            raise RuntimeError("APP_S3_BUCKET must be set when STORAGE_BACKEND is s3")
        return S3Storage(
            bucket_name=settings.S3_BUCKET,
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
            region_name=settings.S3_REGION,
            base_path=settings.STORAGE_BASE_PATH,
            url_prefix=settings.S3_PUBLIC_URL_PREFIX,
            timeout=settings.STORAGE_TIMEOUT_SECONDS,
        )

    return FileSystemStorage(
        volume=settings.STORAGE_VOLUME,
        base_path=settings.STORAGE_BASE_PATH,
        url_prefix=settings.STORAGE_URL_PREFIX,
    )


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


StorageDep = Annotated[Storage, Depends(get_storage)]
