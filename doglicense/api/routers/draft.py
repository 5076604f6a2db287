"""Endpoints for the single in-progress draft."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response

from ..deps import get_repository
from ..repositories.application_repo import ApplicationRepository, DraftCorruptedError
from ..schemas.application import DraftApplication

router = APIRouter(prefix="/api/draft", tags=["draft"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=DraftApplication, response_model_by_alias=True)
def read_draft(repo: ApplicationRepository = Depends(get_repository)) -> DraftApplication:
    try:
        draft = repo.load_draft()
    except DraftCorruptedError as exc:
        logger.error("Error loading saved form data: %s", exc)
        draft = None
    return draft or DraftApplication()


@router.put("/", response_model=DraftApplication, response_model_by_alias=True)
def save_draft(payload: DraftApplication, repo: ApplicationRepository = Depends(get_repository)) -> DraftApplication:
    repo.save_draft(payload)
    return payload


@router.delete("/", status_code=204)
def delete_draft(repo: ApplicationRepository = Depends(get_repository)) -> Response:
    repo.clear_draft()
    return Response(status_code=204)
