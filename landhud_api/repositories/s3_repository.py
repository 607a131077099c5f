"""
S3 Repository for lead list file storage.
Objects are keyed by bare filename in a single bucket.
"""
from typing import BinaryIO, List, Optional
from urllib.parse import urlparse
import boto3
from botocore.exceptions import ClientError
from landhud_api.core import config
from landhud_api.core.exceptions import StorageCleanupError, StorageException


class S3Repository:
    """Repository for S3 file operations."""

    def __init__(self):
        self.s3_client = boto3.client('s3', region_name=config.settings.aws_region)
        self.bucket_name = config.settings.s3_bucket_name

    def upload_file(self, file: BinaryIO, file_name: str, content_type: str) -> dict:
        """
        Upload a file to S3.

        Args:
            file: File object to upload
            file_name: Storage filename (object key)
            content_type: MIME type stored with the object

        Returns:
            dict: file_name and public file_url

        Raises:
            StorageException: If upload fails
        """
        try:
            self.s3_client.upload_fileobj(
                file,
                self.bucket_name,
                file_name,
                ExtraArgs={'ContentType': content_type}
            )
        except ClientError as e:
            raise StorageException(f"Failed to upload file: {str(e)}") from e
        except Exception as e:
            raise StorageException(f"Unexpected error during file upload: {str(e)}") from e

        return {
            'file_name': file_name,
            'file_url': self.get_public_url(file_name)
        }

    def get_public_url(self, file_name: str) -> str:
        """Public URL for a stored file."""
        base_url = config.settings.storage_public_base_url
        if base_url:
            return f"{base_url.rstrip('/')}/{file_name}"
        return f"https://{self.bucket_name}.s3.{config.settings.aws_region}.amazonaws.com/{file_name}"

    def remove_files(self, file_names: List[str]) -> None:
        """
        Remove files from S3 in a single batch request.

        Args:
            file_names: Storage filenames to delete

        Raises:
            StorageCleanupError: If the request fails or any object could not be removed
        """
        if not file_names:
            return

        try:
            response = self.s3_client.delete_objects(
                Bucket=self.bucket_name,
                Delete={'Objects': [{'Key': name} for name in file_names], 'Quiet': True}
            )
        except ClientError as e:
            raise StorageCleanupError(f"Failed to remove files: {str(e)}") from e
        except Exception as e:
            raise StorageCleanupError(f"Unexpected error removing files: {str(e)}") from e

        errors = response.get('Errors', [])
        if errors:
            failed = ", ".join(f"{err.get('Key')} ({err.get('Code')})" for err in errors)
            raise StorageCleanupError(f"Failed to remove files: {failed}")

    @staticmethod
    def file_name_from_url(url: Optional[str]) -> Optional[str]:
        """
        Extract the storage filename (trailing path segment) from a file URL.

        Returns:
            Filename, or None if the URL is empty or has no trailing segment
        """
        if not url:
            return None
        path = urlparse(url).path
        file_name = path.rsplit('/', 1)[-1]
        return file_name or None
