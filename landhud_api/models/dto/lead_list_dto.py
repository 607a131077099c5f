"""
Data Transfer Objects for the Lead List API.
Defines request and response envelopes for API endpoints and the
payloads exchanged with the external processor.
"""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field
from landhud_api.models.import_record import ImportRecord


class SubmitRequest(BaseModel):
    """Request schema for registering an already-uploaded lead list file."""
    model_config = ConfigDict(populate_by_name=True)

    file_name: Optional[str] = Field(default=None, alias="fileName", description="Storage filename of the upload")
    file_url: Optional[str] = Field(default=None, alias="fileUrl", description="URL of the uploaded source file")
    county: Optional[str] = Field(default=None, description="County the list covers")
    state: Optional[str] = Field(default=None, description="State the list covers")
    notes: Optional[str] = Field(default=None, description="Free-text notes from the uploader")
    original_filename: Optional[str] = Field(default=None, alias="originalFilename", description="Filename on the uploader's machine")


class SubmitResponse(BaseModel):
    """Response schema for a submitted lead list."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    record_id: str = Field(..., alias="recordId")
    file_name: str = Field(..., alias="fileName")
    file_url: str = Field(..., alias="fileUrl")
    message: str


class ImportRecordView(BaseModel):
    """Read-only projection of an import record."""
    id: str
    name: str
    county: str
    state: str
    status: str
    source_file_url: str
    file_url: Optional[str] = None
    record_count: Optional[int] = None
    error_message: Optional[str] = None
    notes: Optional[str] = None
    date_imported: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, record: ImportRecord) -> "ImportRecordView":
        return cls(
            id=record.id,
            name=record.name,
            county=record.county,
            state=record.state,
            status=record.status.value,
            source_file_url=record.source_file_url,
            file_url=record.file_url,
            record_count=record.record_count,
            error_message=record.error_message,
            notes=record.notes,
            date_imported=record.date_imported,
            created_at=record.created_at,
            updated_at=record.updated_at
        )


class StatusResponse(BaseModel):
    """Response schema for a status query."""
    success: bool = True
    record: ImportRecordView


class RecordListResponse(BaseModel):
    """Response schema for listing import records."""
    success: bool = True
    records: list[ImportRecordView]
    count: int


class DeleteRequest(BaseModel):
    """Request schema for deleting or cancelling an import."""
    id: Optional[str] = Field(default=None, description="Import record ID")
    cancel: bool = Field(default=False, description="Cancel in-flight processing")


class DeleteResponse(BaseModel):
    """Response schema for a deleted import."""
    success: bool = True
    message: str


class ProcessorNotification(BaseModel):
    """Outbound webhook body sent to the external processor."""
    file_url: str
    county: str
    state: str
    record_id: str
    callback_url: str
    original_filename: str
    notes: Optional[str] = None


class ProcessorCallback(BaseModel):
    """Completion signal sent back by the external processor."""
    record_id: str = Field(..., min_length=1)
    status: Literal["ready", "failed"]
    file_url: Optional[str] = None
    record_count: Optional[int] = Field(default=None, ge=0)
    error_message: Optional[str] = None


class CallbackResponse(BaseModel):
    """Response schema for the processor callback."""
    success: bool = True
    applied: bool
    record_id: str
    message: str
