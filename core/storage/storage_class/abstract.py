import io
from abc import ABC, abstractmethod
from typing import Optional


class Storage(ABC):
    def __init__(self, volume: str, base_path: str, url_prefix: Optional[str] = None):
        """
        Initialize a storage instance.

        Args:
            volume (str): Root directory, mount point or bucket for storage.
            base_path (str): Subdirectory inside the volume to store files.
            url_prefix (str | None): Public URL under which stored files are served.
        """
        self.volume = volume
        self.base_path = base_path.strip("/")
        self.url_prefix = (url_prefix or "").rstrip("/")

    def _get_bytes(self, content: bytes | io.BytesIO) -> bytes:
        """
        Convert the input content to bytes.

        Args:
            content (Union[BytesIO, bytes]): The file content.

        Returns:
            bytes: The content as bytes.
        """
        if isinstance(content, io.BytesIO):
            return content.getvalue()
        elif isinstance(content, bytes):
            return content
        else:
            raise TypeError("Unsupported content. Must be BytesIO or bytes.")

    def _get_key(self, filepath: str) -> str:
        filepath = filepath.strip("/")
        return f"{self.base_path}/{filepath}" if self.base_path else filepath

    def get_filepath_from_url(self, url: str) -> Optional[str]:
        """
        Map a public URL produced by ``get_url`` back to the relative file path.

        Returns None when the URL is not served by this storage, e.g. an
        external placeholder image.
        """
        if not url or not self.url_prefix:
            return None
        prefix = f"{self.url_prefix}/"
        if not url.startswith(prefix):
            return None
        key = url[len(prefix):].split("?", 1)[0]
        if self.base_path:
            if not key.startswith(f"{self.base_path}/"):
                return None
            key = key[len(self.base_path) + 1:]
        parts = key.replace("\\", "/").split("/")
        # keys resolving outside the base path are never ours
        if not key or any(part in ("", ".", "..") for part in parts):
            return None
        return key

    @abstractmethod
    def save(
        self,
        content: bytes,
        filepath: str,
        content_type: str | None = None,
    ) -> str:
        """
        Synchronously save a file to the storage system.

        Args:
            content (Union[BytesIO, bytes]): The file content.
            filepath (str): Relative file path where the file should be stored.
            content_type (str | None): MIME type of the file, optional.

        Returns:
            str: The final saved file path.

        Raises:
            IOError: If saving the file fails.
        """
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def delete(self, filepath: str) -> None:
        """
        Synchronously remove a file from the storage system.

        Args:
            filepath (str): Relative file path.

        Raises:
            IOError: If the file could not be removed.
        """
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def get_path(self, filepath: str) -> str:
        """
        Get the full path to a file in the storage system.

        Args:
            filepath (str): Relative file path.

        Returns:
            str: Full path to the file in the storage system.
        """
        raise NotImplementedError("Subclasses must implement this method.")

    @abstractmethod
    def get_url(self, filepath: str) -> str:
        """
        Get the URL for accessing a file in the storage system.

        Args:
            filepath (str): Relative file path.

        Returns:
            str: URL to access the file.
        """
        raise NotImplementedError("Subclasses must implement this method.")
