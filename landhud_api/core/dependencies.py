"""
Dependency injection container for FastAPI.
Provides singleton-like behavior for services and repositories.
"""
from functools import lru_cache
from landhud_api.clients.processor_client import ProcessorClient
from landhud_api.repositories.record_repository import RecordRepository
from landhud_api.repositories.s3_repository import S3Repository
from landhud_api.services.file_service import FileService
from landhud_api.services.lead_list_service import LeadListService


@lru_cache()
def get_record_repository() -> RecordRepository:
    """Get RecordRepository singleton instance."""
    return RecordRepository()


@lru_cache()
def get_s3_repository() -> S3Repository:
    """Get S3Repository singleton instance."""
    return S3Repository()


@lru_cache()
def get_processor_client() -> ProcessorClient:
    """Get ProcessorClient singleton instance."""
    return ProcessorClient()


@lru_cache()
def get_file_service() -> FileService:
    """Get FileService singleton instance."""
    return FileService()


@lru_cache()
def get_lead_list_service() -> LeadListService:
    """Get LeadListService singleton instance with injected dependencies."""
    return LeadListService(
        record_repository=get_record_repository(),
        s3_repository=get_s3_repository(),
        processor_client=get_processor_client(),
        file_service=get_file_service()
    )


def clear_caches() -> None:
    """Drop all cached instances so the next request picks up fresh settings."""
    for provider in (
        get_record_repository,
        get_s3_repository,
        get_processor_client,
        get_file_service,
        get_lead_list_service
    ):
        provider.cache_clear()
