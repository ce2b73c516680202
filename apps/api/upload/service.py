# apps/api/upload/service.py
import io
import logging
from typing import Annotated, Optional

from fastapi import UploadFile
from PIL import Image as PILImage
from PIL import UnidentifiedImageError
from starlette.concurrency import run_in_threadpool

from apps.settings import SettingsDep
from apps.storage import StorageDep
from core.architecture.service import AbstractService
from core.exceptions import InvalidRequestException, StorageException
from core.storage.inputs.file import InputFile

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


class ImageStoreService(AbstractService):
    """Validates image payloads and hands them to the configured storage backend."""

    DEPENDENCIES = {"storage": StorageDep, "settings": SettingsDep}

    def __init__(self, storage: StorageDep, settings: SettingsDep, **kwargs):
        super().__init__(storage=storage, settings=settings, **kwargs)
        self.storage = storage
        self.settings = settings

    def _check_content_type(self, content_type: Optional[str]) -> str:
        content_type = (content_type or "").split(";")[0].strip().lower()
        if content_type not in self.settings.ALLOWED_IMAGE_TYPES:
            raise InvalidRequestException(
                "Only image files allowed (JPEG, PNG, WebP, GIF)",
                error_code="UNSUPPORTED_IMAGE_TYPE",
            )
        return content_type

    def _check_size(self, size: int):
        if size == 0:
            raise InvalidRequestException("Uploaded file is empty", error_code="EMPTY_FILE")
        if size > self.settings.MAX_UPLOAD_SIZE:
            raise InvalidRequestException(
                f"Image size exceeds maximum allowed size of {self.settings.MAX_UPLOAD_SIZE} bytes",
                error_code="IMAGE_TOO_LARGE",
            )

    def _detect_image_type(self, content: bytes) -> str:
        """
        Decode the payload with Pillow and return the MIME type of the
        detected format.

        Raises:
            InvalidRequestException: If the bytes are not an image of an allowed format.
        """
        try:
            with PILImage.open(io.BytesIO(content)) as img:
                img.verify()
                mime_type = PILImage.MIME.get(img.format or "")
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise InvalidRequestException(
                f"Invalid image file: {e}", error_code="INVALID_IMAGE"
            )

        if mime_type not in self.settings.ALLOWED_IMAGE_TYPES:
            raise InvalidRequestException(
                "Only image files allowed (JPEG, PNG, WebP, GIF)",
                error_code="UNSUPPORTED_IMAGE_TYPE",
            )
        return mime_type

    async def store(
        self,
        content: bytes,
        content_type: Optional[str],
        original_name: Optional[str] = None,
    ) -> str:
        """
        Save an image and return its public URL.

        The declared content type is checked against the allow-list before
        anything is read or written.
        """
        self._check_content_type(content_type)
        self._check_size(len(content))
        mime_type = self._detect_image_type(content)

        input_file = InputFile(
            content=content,
            filename=original_name or "",
            content_type=mime_type,
            extension=IMAGE_EXTENSIONS.get(mime_type),
            unique_filename=True,
            prefix_date=True,
        )
        try:
            await run_in_threadpool(
                self.storage.save,
                content=input_file.content,
                filepath=input_file.filename,
                content_type=mime_type,
            )
        except IOError as e:
            logger.error(f"Image upload failed for {original_name}: {e}")
            raise StorageException("Upload failed", error_code="UPLOAD_FAILED")

        url = self.storage.get_url(input_file.filename)
        logger.info(f"Image uploaded: {url}")
        return url

    async def store_upload(self, upload: UploadFile) -> str:
        self._check_content_type(upload.content_type)
        # read one byte past the ceiling so oversized files are caught without buffering them whole
        content = await upload.read(self.settings.MAX_UPLOAD_SIZE + 1)
        return await self.store(
            content=content,
            content_type=upload.content_type,
            original_name=upload.filename,
        )

    async def store_uploads(self, uploads: list[UploadFile]) -> list[str]:
        if not uploads:
            raise InvalidRequestException("No files uploaded", error_code="NO_FILES")
        if len(uploads) > self.settings.MAX_UPLOAD_FILES:
            raise InvalidRequestException(
                f"At most {self.settings.MAX_UPLOAD_FILES} images can be uploaded at once",
                error_code="TOO_MANY_FILES",
            )
        for upload in uploads:
            self._check_content_type(upload.content_type)
        return [await self.store_upload(upload) for upload in uploads]

    async def delete(self, url: str) -> bool:
        """
        Remove the stored object behind ``url``.

        Returns False when the URL is not served by this store (nothing to
        delete). Raises StorageException when the backend fails.
        """
        filepath = self.storage.get_filepath_from_url(url)
        if not filepath:
            logger.debug(f"Skipping delete of external image {url}")
            return False
        try:
            await run_in_threadpool(self.storage.delete, filepath)
        except IOError as e:
            raise StorageException(str(e), error_code="DELETE_FAILED")
        logger.info(f"Image deleted: {url}")
        return True


ImageStoreServiceDependency = Annotated[
    ImageStoreService, ImageStoreService.get_dependency()
]
