"""
Custom exceptions for the LandHud Lead List API.
Provides specific error types for different failure scenarios.
"""


class LeadListException(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(LeadListException):
    """Raised when required input is missing or invalid."""
    pass


class AuthenticationError(LeadListException):
    """Raised when a request cannot be authenticated."""
    pass


class NotFoundError(LeadListException):
    """Raised when an import record does not exist."""
    pass


class PersistenceError(LeadListException):
    """Raised when the record store write, read or delete fails."""
    pass


class StorageException(LeadListException):
    """Raised when uploading a file to blob storage fails."""
    pass


class StorageCleanupError(LeadListException):
    """Raised when removing files from blob storage fails. Logged, never surfaced."""
    pass


class NotificationError(LeadListException):
    """Raised when the external processor webhook fails. Logged, never surfaced."""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)
