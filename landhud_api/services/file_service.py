"""
File Service for lead list uploads.
Handles upload validation and storage filename generation.
"""
import os
import re
import time
from landhud_api.core import config
from landhud_api.core.exceptions import ValidationError


class FileService:
    """Service for lead list file checks."""

    CONTENT_TYPES = {
        '.csv': 'text/csv',
        '.xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
        '.xls': 'application/vnd.ms-excel',
    }

    def get_extension(self, filename: str) -> str:
        """Lowercased extension including the dot, or '' if none."""
        return os.path.splitext(filename or '')[1].lower()

    def validate_upload(self, filename: str, size: int) -> str:
        """
        Validate an uploaded lead list file.

        Args:
            filename: Original filename
            size: File size in bytes

        Returns:
            The lowercased file extension

        Raises:
            ValidationError: If the type is not allowed or the file is too large
        """
        if not filename:
            raise ValidationError("No file provided")

        extension = self.get_extension(filename)
        if extension not in self.CONTENT_TYPES:
            raise ValidationError("Only CSV and Excel files (.csv, .xlsx, .xls) are allowed")

        max_size_mb = config.settings.max_file_size_mb
        if size > max_size_mb * 1024 * 1024:
            raise ValidationError(f"File size exceeds {max_size_mb}MB limit")

        return extension

    def generate_file_name(self, county: str, state: str, extension: str) -> str:
        """
        Generate a unique storage filename.

        Format: {county-slug}-{state}-{epoch millis}{extension}
        """
        county_slug = re.sub(r'[^a-z0-9]', '-', county.lower())
        timestamp = int(time.time() * 1000)
        return f"{county_slug}-{state.lower()}-{timestamp}{extension}"

    def get_content_type(self, extension: str) -> str:
        return self.CONTENT_TYPES.get(extension, 'application/octet-stream')
