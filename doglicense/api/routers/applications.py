"""API endpoints for submitting and tracking applications."""
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.datastructures import UploadFile

from ..core.config import settings
from ..deps import get_repository
from ..repositories.application_repo import ApplicationRepository, SubmissionListCorruptedError
from ..schemas.application import CertificateFile, DraftApplication, SubmittedApplication, SubmissionResponse
from ..services.application_service import ApplicationNotFoundError, application_service
from ..services.validation import validate_all
from ..services.wizard import SUBMIT_FAILED_MESSAGE

router = APIRouter(prefix="/api/applications", tags=["applications"])
tracking_router = APIRouter(tags=["tracking"])
logger = logging.getLogger(__name__)


async def _certificate_from_upload(upload: UploadFile) -> CertificateFile:
    size = upload.size
    if size is None:
        size = len(await upload.read())
    return CertificateFile(
        name=upload.filename or "certificate",
        content_type=upload.content_type or "",
        size=size,
    )


@router.post("/", status_code=201, response_model=SubmissionResponse)
async def submit_application(request: Request, repo: ApplicationRepository = Depends(get_repository)):
    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}
    upload = form.get("vaccinationCertificate")
    certificate = await _certificate_from_upload(upload) if isinstance(upload, UploadFile) else None

    draft = DraftApplication.model_validate(fields)
    errors = validate_all(draft, certificate)
    if errors:
        return JSONResponse(
            status_code=422,
            content={"errors": {to_camel(name): message for name, message in errors.items()}},
        )

    try:
        record = application_service.submit(repo, draft, certificate)
    except Exception as exc:
        logger.exception("Error submitting application")
        raise HTTPException(status_code=500, detail=SUBMIT_FAILED_MESSAGE) from exc

    return SubmissionResponse(
        application_id=record.id,
        message=f"Application submitted successfully! Your application ID is: {record.id}",
        redirect_url=application_service.tracking_url(record.id),
        redirect_delay_s=settings.redirect_delay_s,
    )


@router.get("/", response_model=List[SubmittedApplication], response_model_by_alias=True)
def list_applications(repo: ApplicationRepository = Depends(get_repository)) -> List[SubmittedApplication]:
    try:
        return application_service.list_applications(repo)
    except SubmissionListCorruptedError as exc:
        logger.error("Cannot read submitted applications: %s", exc)
        raise HTTPException(status_code=500, detail="Stored applications could not be read") from exc


@tracking_router.get(settings.tracking_route, response_model=SubmittedApplication, response_model_by_alias=True)
def track_application(
    application_id: str = Query(..., alias="id"),
    repo: ApplicationRepository = Depends(get_repository),
) -> SubmittedApplication:
    try:
        return application_service.get_application(repo, application_id)
    except ApplicationNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except SubmissionListCorruptedError as exc:
        logger.error("Cannot read submitted applications: %s", exc)
        raise HTTPException(status_code=500, detail="Stored applications could not be read") from exc
