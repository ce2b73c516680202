from typing import Optional

import boto3
from botocore.config import Config

from core.storage.storage_class.abstract import Storage


class S3Storage(Storage):
    def __init__(
        self,
        bucket_name: str,
        aws_access_key_id: Optional[str],
        aws_secret_access_key: Optional[str],
        region_name: str,
        base_path: str = "",
        url_prefix: Optional[str] = None,
        timeout: float = 10,
        client=None,
    ):
        """
        Initialize the S3Storage.

        Args:
            bucket_name (str): Name of the S3 bucket.
            aws_access_key_id (str): AWS access key.
            aws_secret_access_key (str): AWS secret key.
            region_name (str): AWS region.
            base_path (str): Prefix path in the bucket (optional).
            url_prefix (str): Public URL of the bucket. Defaults to the
                virtual-hosted style S3 URL. Objects are uploaded
                public-read so the URLs can be stored on records.
            timeout (float): Connect and read timeout in seconds.
            client: Pre-built boto3 client, used instead of creating one.
        """
        super().__init__(
            volume=bucket_name,
            base_path=base_path,
            url_prefix=url_prefix
            or f"https://{bucket_name}.s3.{region_name}.amazonaws.com",
        )
        self.bucket_name = bucket_name
        self.s3_client = client or boto3.client(
            "s3",
            aws_access_key_id=aws_access_key_id,
            aws_secret_access_key=aws_secret_access_key,
            region_name=region_name,
            config=Config(
                connect_timeout=timeout,
                read_timeout=timeout,
                retries={"max_attempts": 1},
            ),
        )

    def save(
        self,
        content: bytes,
        filepath: str,
        content_type: str | None = None,
        *args,
        **kwargs,
    ) -> str:
        """
        Synchronously uploads a file to S3.

        Args:
            content (BytesIO | bytes): File content to upload.
            filepath (str): Relative path (key) in the S3 bucket.
            content_type (str | None): MIME type (optional).

        Returns:
            str: The full S3 object key.

        Raises:
            IOError: If the upload fails.
        """
        s3_key = self.get_path(filepath)

        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=s3_key,
                Body=self._get_bytes(content),
                ContentType=content_type or "application/octet-stream",
                ACL="public-read",
            )
            return s3_key

        except Exception as e:
            raise IOError(f"Failed to upload file to S3 at {s3_key}: {e}")

    def delete(self, filepath: str) -> None:
        s3_key = self.get_path(filepath)
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=s3_key)
        except Exception as e:
            raise IOError(f"Failed to delete S3 object {s3_key}: {e}")

    def get_path(self, filepath):
        """
        Get the full S3 object key.

        Args:
            filepath (str): Relative path in the S3 bucket.

        Returns:
            str: The full S3 object key.
        """
        return self._get_key(filepath)

    def get_url(self, filepath):
        return f"{self.url_prefix}/{self.get_path(filepath)}"

