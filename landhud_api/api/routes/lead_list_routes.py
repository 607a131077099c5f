"""
Lead List API routes.
Handles HTTP endpoints for lead list uploads, status polling, deletion
and the external processor callback.
"""
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, Query, UploadFile, status
from landhud_api.core.auth_dependencies import verify_callback_secret, verify_token
from landhud_api.core.dependencies import get_lead_list_service
from landhud_api.core.exceptions import ValidationError
from landhud_api.models.dto.lead_list_dto import (
    CallbackResponse,
    DeleteRequest,
    DeleteResponse,
    ProcessorCallback,
    RecordListResponse,
    StatusResponse,
    SubmitRequest,
    SubmitResponse
)
from landhud_api.services.lead_list_service import LeadListService

router = APIRouter(prefix="/v1/api/lead-lists", tags=["Lead Lists"])


@router.post("", response_model=SubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_lead_list(
    request: SubmitRequest,
    background_tasks: BackgroundTasks,
    lead_list_service: LeadListService = Depends(get_lead_list_service),
    username: str = Depends(verify_token)
):
    """
    Register a lead list file that was uploaded directly to storage.

    The record is created in `processing` state and the external processor
    is notified after the response is sent.
    """
    return lead_list_service.submit(
        file_url=request.file_url,
        file_name=request.file_name,
        county=request.county,
        state=request.state,
        notes=request.notes,
        original_filename=request.original_filename,
        background_tasks=background_tasks
    )


@router.post("/upload", response_model=SubmitResponse, status_code=status.HTTP_201_CREATED)
async def upload_lead_list(
    background_tasks: BackgroundTasks,
    file: Optional[UploadFile] = File(None, description="CSV or Excel lead list"),
    county: Optional[str] = Form(None),
    state: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
    lead_list_service: LeadListService = Depends(get_lead_list_service),
    username: str = Depends(verify_token)
):
    """
    Upload a lead list file to storage and submit it for processing.
    """
    if file is None or not file.filename:
        raise ValidationError("No file provided")

    return lead_list_service.upload_and_submit(
        file=file.file,
        original_filename=file.filename,
        size=file.size,
        county=county,
        state=state,
        notes=notes,
        background_tasks=background_tasks
    )


@router.get("", response_model=RecordListResponse)
async def list_lead_lists(
    lead_list_service: LeadListService = Depends(get_lead_list_service),
    username: str = Depends(verify_token)
):
    """
    List all lead list imports, newest first.
    """
    return lead_list_service.list_records()


@router.get("/status", response_model=StatusResponse)
async def get_lead_list_status(
    id: Optional[str] = Query(default=None, description="Import record ID"),
    lead_list_service: LeadListService = Depends(get_lead_list_service),
    username: str = Depends(verify_token)
):
    """
    Get the processing status of a lead list import. Safe to poll.
    """
    return lead_list_service.get_status(id)


@router.delete("/delete", response_model=DeleteResponse)
async def delete_lead_list(
    request: DeleteRequest,
    lead_list_service: LeadListService = Depends(get_lead_list_service),
    username: str = Depends(verify_token)
):
    """
    Delete a lead list import and its files.

    - **cancel**: set when abandoning an import that is still processing
    """
    return lead_list_service.delete_record(request.id, cancel=request.cancel)


@router.post("/webhook", response_model=CallbackResponse, dependencies=[Depends(verify_callback_secret)])
async def processor_callback(
    callback: ProcessorCallback,
    lead_list_service: LeadListService = Depends(get_lead_list_service)
):
    """
    Completion callback from the external processor.
    """
    return lead_list_service.handle_callback(callback)
