"""Step-gating checks for clients that keep their own wizard state."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic.alias_generators import to_camel

from ..schemas.application import CertificateFile, DraftApplication, StepInfo, StepValidationResponse
from ..services.validation import FIRST_STEP, LAST_STEP, STEPS, validate_step

router = APIRouter(prefix="/api/steps", tags=["steps"])


class StepValidationRequest(DraftApplication):
    vaccination_certificate: Optional[CertificateFile] = None


@router.get("/", response_model=list[StepInfo])
def list_steps() -> list[StepInfo]:
    return list(STEPS)


@router.post("/{step}/validate", response_model=StepValidationResponse)
def validate(step: int, payload: StepValidationRequest) -> StepValidationResponse:
    if not FIRST_STEP <= step <= LAST_STEP:
        raise HTTPException(status_code=404, detail=f"Step {step} does not exist")
    draft = DraftApplication.model_validate(payload.model_dump(exclude={"vaccination_certificate"}))
    errors = validate_step(step, draft, payload.vaccination_certificate)
    return StepValidationResponse(
        step=step,
        valid=not errors,
        errors={to_camel(name): message for name, message in errors.items()},
    )
