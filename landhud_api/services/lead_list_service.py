"""
Lead List Service for business logic.
Orchestrates the upload, status, callback and delete lifecycle of lead
list imports between the API, the record store, blob storage and the
external processor.
"""
from datetime import datetime, timezone
from typing import BinaryIO, Optional
from fastapi import BackgroundTasks
from loguru import logger
from landhud_api.clients.processor_client import ProcessorClient
from landhud_api.core import config
from landhud_api.core.exceptions import (
    NotFoundError,
    PersistenceError,
    StorageCleanupError,
    ValidationError
)
from landhud_api.models.dto.lead_list_dto import (
    CallbackResponse,
    DeleteResponse,
    ImportRecordView,
    ProcessorCallback,
    ProcessorNotification,
    RecordListResponse,
    StatusResponse,
    SubmitResponse
)
from landhud_api.models.import_record import ImportRecord, ImportStatus
from landhud_api.repositories.record_repository import RecordRepository
from landhud_api.repositories.s3_repository import S3Repository
from landhud_api.services.file_service import FileService


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class LeadListService:
    """Service for lead list import operations."""

    def __init__(
        self,
        record_repository: RecordRepository = None,
        s3_repository: S3Repository = None,
        processor_client: ProcessorClient = None,
        file_service: FileService = None
    ):
        self.record_repository = record_repository or RecordRepository()
        self.s3_repository = s3_repository or S3Repository()
        self.processor_client = processor_client or ProcessorClient()
        self.file_service = file_service or FileService()

    def submit(
        self,
        file_url: str,
        file_name: str,
        county: str,
        state: str,
        notes: Optional[str] = None,
        original_filename: Optional[str] = None,
        background_tasks: Optional[BackgroundTasks] = None
    ) -> SubmitResponse:
        """
        Register an uploaded lead list and hand it to the external processor.

        Args:
            file_url: URL of the already-uploaded source file
            file_name: Storage filename of the upload
            county: County the list covers
            state: State the list covers
            notes: Optional uploader notes
            original_filename: Filename on the uploader's machine
            background_tasks: When given, the processor webhook runs after the response

        Returns:
            SubmitResponse with the new record id

        Raises:
            ValidationError: If a required field is missing
            PersistenceError: If the record cannot be created
        """
        required = {
            'fileName': file_name,
            'fileUrl': file_url,
            'county': county,
            'state': state
        }
        missing = [field for field, value in required.items() if _blank(value)]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        file_url = file_url.strip()
        file_name = file_name.strip()
        county = county.strip()
        state = state.strip()
        notes = notes if not _blank(notes) else None

        record = ImportRecord(
            name=ImportRecord.build_name(county, state, datetime.now(timezone.utc)),
            county=county,
            state=state,
            status=ImportStatus.PROCESSING,
            source_file_url=file_url,
            notes=notes
        )

        try:
            record = self.record_repository.create(record)
        except PersistenceError as e:
            logger.error(f"[Upload] Database error: {e.message}")
            self._remove_files([file_name], context="Upload")
            raise

        # Webhook outcome never reaches the caller
        notification = ProcessorNotification(
            file_url=file_url,
            county=county,
            state=state,
            record_id=record.id,
            callback_url=config.settings.callback_url,
            original_filename=original_filename or file_name,
            notes=notes
        )
        if background_tasks is not None:
            background_tasks.add_task(self.processor_client.notify_detached, notification)
        else:
            self.processor_client.notify_detached(notification)

        logger.info(f"[Upload] Created record {record.id} for {record.name}")

        return SubmitResponse(
            record_id=record.id,
            file_name=file_name,
            file_url=file_url,
            message="File uploaded successfully. Processing started."
        )

    def upload_and_submit(
        self,
        file: BinaryIO,
        original_filename: str,
        size: int,
        county: str,
        state: str,
        notes: Optional[str] = None,
        background_tasks: Optional[BackgroundTasks] = None
    ) -> SubmitResponse:
        """
        Store a lead list file and submit it for processing.

        Raises:
            ValidationError: If the file or metadata is invalid
            StorageException: If the file cannot be stored
            PersistenceError: If the record cannot be created
        """
        if not original_filename:
            raise ValidationError("No file provided")
        if _blank(county) or _blank(state):
            raise ValidationError("County and state are required")

        extension = self.file_service.validate_upload(original_filename, size)
        file_name = self.file_service.generate_file_name(county.strip(), state.strip(), extension)

        upload_result = self.s3_repository.upload_file(
            file,
            file_name,
            self.file_service.get_content_type(extension)
        )

        return self.submit(
            file_url=upload_result['file_url'],
            file_name=upload_result['file_name'],
            county=county,
            state=state,
            notes=notes,
            original_filename=original_filename,
            background_tasks=background_tasks
        )

    def get_status(self, record_id: str) -> StatusResponse:
        """
        Get the current state of an import record.

        Raises:
            ValidationError: If record_id is empty
            NotFoundError: If the record does not exist
        """
        if _blank(record_id):
            raise ValidationError("Record ID is required")

        record = self.record_repository.get_by_id(record_id)
        if record is None:
            raise NotFoundError("Record not found")

        return StatusResponse(record=ImportRecordView.from_record(record))

    def list_records(self) -> RecordListResponse:
        """List all import records, newest first."""
        records = [ImportRecordView.from_record(r) for r in self.record_repository.list_all()]
        return RecordListResponse(records=records, count=len(records))

    def delete_record(self, record_id: str, cancel: bool = False) -> DeleteResponse:
        """
        Delete an import record and its files.

        With cancel=True on a record still processing, this doubles as
        cancellation. Nothing is sent to the processor, which may still call
        back for the deleted id.

        Raises:
            ValidationError: If record_id is empty
            NotFoundError: If the record does not exist
            PersistenceError: If the record cannot be deleted
        """
        if _blank(record_id):
            raise ValidationError("Record ID is required")

        record = self.record_repository.get_by_id(record_id)
        if record is None:
            raise NotFoundError("Record not found")

        cancelled = cancel and record.status == ImportStatus.PROCESSING
        if cancelled:
            logger.info(f"[Delete] Cancelling processing record {record_id}")

        file_names = [
            name for name in (
                S3Repository.file_name_from_url(record.source_file_url),
                S3Repository.file_name_from_url(record.file_url)
            )
            if name
        ]
        self._remove_files(file_names, context="Delete")

        try:
            self.record_repository.delete(record_id)
        except PersistenceError as e:
            logger.error(f"[Delete] Failed to delete record {record_id}: {e.message}")
            raise

        logger.info(f"[Delete] Deleted record {record_id}{' (cancelled)' if cancelled else ''}")

        if cancelled:
            return DeleteResponse(message="Processing cancelled and record deleted")
        return DeleteResponse(message="Record deleted successfully")

    def handle_callback(self, callback: ProcessorCallback) -> CallbackResponse:
        """
        Apply the processor's completion signal to a record.

        Idempotent per record id. A callback for a missing record, or for a
        record that already left processing, is logged and ignored.

        Raises:
            ValidationError: If a ready callback carries no file_url
            PersistenceError: If the record store fails
        """
        record_id = callback.record_id
        status = ImportStatus(callback.status)

        if status == ImportStatus.READY:
            if _blank(callback.file_url):
                raise ValidationError("file_url is required when status is ready")
            updates = {
                'status': status.value,
                'file_url': callback.file_url,
                'record_count': callback.record_count or 0,
                'error_message': None
            }
        else:
            updates = {
                'status': status.value,
                'file_url': None,
                'record_count': None,
                'error_message': callback.error_message or "Processing failed"
            }

        record = self.record_repository.get_by_id(record_id)
        if record is None:
            logger.warning(f"[Callback] Record {record_id} not found; callback ignored")
            return CallbackResponse(applied=False, record_id=record_id, message="Record not found; callback ignored")

        if record.is_terminal:
            return self._ignore_terminal(record, status, updates)

        # Applies only while the stored status is still processing
        updated = self.record_repository.update(
            record_id,
            updates,
            expected_status=ImportStatus.PROCESSING.value
        )
        if updated is None:
            record = self.record_repository.get_by_id(record_id)
            if record is None:
                logger.warning(f"[Callback] Record {record_id} deleted during callback; callback ignored")
                return CallbackResponse(
                    applied=False,
                    record_id=record_id,
                    message="Record not found; callback ignored"
                )
            return self._ignore_terminal(record, status, updates)

        logger.info(f"[Callback] Record {record_id} marked {status.value}")
        return CallbackResponse(applied=True, record_id=record_id, message=f"Record marked {status.value}")

    def _ignore_terminal(self, record: ImportRecord, status: ImportStatus, updates: dict) -> CallbackResponse:
        if self._matches(record, updates):
            logger.info(f"[Callback] Duplicate {status.value} callback for record {record.id}")
            return CallbackResponse(applied=False, record_id=record.id, message="Duplicate callback ignored")
        logger.warning(
            f"[Callback] Record {record.id} already {record.status.value}; "
            f"{status.value} callback ignored"
        )
        return CallbackResponse(
            applied=False,
            record_id=record.id,
            message=f"Record already {record.status.value}; callback ignored"
        )

    def _matches(self, record: ImportRecord, updates: dict) -> bool:
        return all(
            getattr(record, key) == (value if key != 'status' else ImportStatus(value))
            for key, value in updates.items()
        )

    def _remove_files(self, file_names: list, context: str) -> None:
        """Best-effort blob removal; failures are logged and swallowed."""
        if not file_names:
            return
        try:
            self.s3_repository.remove_files(file_names)
        except StorageCleanupError as e:
            logger.warning(f"[{context}] Failed to delete files from storage: {e.message}")
