from pathlib import Path

from core.storage.storage_class.abstract import Storage


class FileSystemStorage(Storage):
    """Stores files under ``volume/base_path`` on the local disk."""

    def __init__(self, volume, base_path="", url_prefix=None):
        super().__init__(volume, base_path, url_prefix)

    def save(self, content, filepath, *args, **kwargs):
        """
        Synchronously save a file buffer to the local filesystem at volume/base_path/filepath.

        Args:
            content (bytes or BytesIO): The file data to write.
            filepath (str): The relative path where the file should be saved.

        Returns:
            str: The full path to the saved file.

        Raises:
            IOError: If the file could not be written.
        """
        full_path = Path(self.get_path(filepath))

        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)

            with open(full_path, "wb") as f:
                f.write(self._get_bytes(content))

            return str(full_path)

        except Exception as e:
            raise IOError(f"Failed to save file to {full_path}: {e}")

    def delete(self, filepath):
        full_path = Path(self.get_path(filepath)).resolve()
        if not full_path.is_relative_to(Path(self.volume).resolve()):
            raise IOError(f"Refusing to delete {full_path}: outside storage volume")
        try:
            full_path.unlink()
        except Exception as e:
            raise IOError(f"Failed to delete file {full_path}: {e}")

    def exists(self, filepath) -> bool:
        return Path(self.get_path(filepath)).is_file()

    def get_path(self, filepath):
        return str(Path(self.volume) / self._get_key(filepath))

    def get_url(self, filepath):
        """
        Get the URL for a file stored in the local filesystem.

        Args:
            filepath (str): The relative path to the file.

        Returns:
            str: The URL to access the file, or the disk path when no
            url prefix is configured.
        """
        key = self._get_key(filepath)
        if self.url_prefix:
            return f"{self.url_prefix}/{key}"
        return self.get_path(filepath)
