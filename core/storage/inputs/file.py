from datetime import date
from typing import Optional
from uuid import uuid4


class InputFile:
    def __init__(
        self,
        content: bytes,
        filename: str,
        content_type: Optional[str] = None,
        folder: str = None,
        extension: Optional[str] = None,
        prefix_date: bool = True,
        unique_filename: bool = True,
    ):
        """
        Wrap uploaded content and work out the relative path it is stored under.

        Args:
            content (bytes): The file content.
            filename (str): Name the client sent the file with.
            content_type (str | None): MIME type of the content.
            folder (str | None): Folder prepended to the generated name.
            extension (str | None): Extension to use instead of the one in filename.
            prefix_date (bool): Prepend an ISO date folder.
            unique_filename (bool): Replace the name with a random uuid.
        """
        self.content = content
        self.original_filename = filename
        self.content_type = content_type

        ext = extension
        if ext is None and filename and "." in filename:
            ext = filename.rsplit(".", 1)[-1].lower()

        if unique_filename or not filename:
            filename = str(uuid4()) + (f".{ext}" if ext else "")
        else:
            filename = "_".join(filename.split())

        if folder:
            filename = f"{folder.strip('/')}/{filename}"

        if prefix_date:
            filename = f"{date.today().isoformat()}/{filename}"

        self.filename = filename

    @property
    def size(self) -> int:
        return len(self.content)
