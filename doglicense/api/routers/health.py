"""Health check endpoint."""
from __future__ import annotations

from fastapi import APIRouter, Depends

from ..deps import get_repository
from ..repositories.application_repo import ApplicationRepository
from ..schemas.application import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", response_model=HealthResponse)
def healthcheck(repo: ApplicationRepository = Depends(get_repository)) -> HealthResponse:
    return HealthResponse(status="ok", submissions=repo.count_submissions())
