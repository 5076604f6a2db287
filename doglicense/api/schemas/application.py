"""Pydantic schemas for dog license applications."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict
from pydantic.functional_validators import field_validator

DRAFT_FIELDS = (
    "owner_name",
    "owner_address",
    "owner_phone",
    "dog_name",
    "dog_breed",
    "dog_age",
    "dog_color",
    "last_rabies_shot_date",
)
CERTIFICATE_FIELD = "vaccination_certificate"


class ApplicationFields(BaseModel):
    """Scalar form fields shared by drafts and submitted applications.

    Values are kept exactly as typed; the form rules decide whether they are
    acceptable. Stored JSON uses camelCase keys.
    """

    owner_name: str = ""
    owner_address: str = ""
    owner_phone: str = ""
    dog_name: str = ""
    dog_breed: str = ""
    dog_age: str = ""
    dog_color: str = ""
    last_rabies_shot_date: str = ""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator(*DRAFT_FIELDS, mode="before")
    @classmethod
    def coerce_scalar(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class DraftApplication(ApplicationFields):
    """In-progress form state. The certificate is never part of a draft."""

    def is_empty(self) -> bool:
        return not any(getattr(self, name) for name in DRAFT_FIELDS)

    def to_storage(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


class CertificateFile(BaseModel):
    """An uploaded vaccination certificate that can be inspected."""

    name: str
    content_type: str
    size: int = Field(ge=0)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @classmethod
    def from_upload(cls, upload: Any) -> "CertificateFile":
        """Build from a Streamlit ``UploadedFile``-like object (name, type, size)."""

        size = getattr(upload, "size", None)
        if size is None and hasattr(upload, "getvalue"):
            size = len(upload.getvalue())
        return cls(
            name=getattr(upload, "name", None) or getattr(upload, "filename", None) or "certificate",
            content_type=getattr(upload, "type", None) or getattr(upload, "content_type", None) or "",
            size=size or 0,
        )


class SubmittedApplication(ApplicationFields):
    id: str
    vaccination_certificate: Optional[CertificateFile] = None
    submitted_at: datetime
    status: Literal["submitted"] = "submitted"

    model_config = ConfigDict(frozen=True)

    def to_storage(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class StepInfo(BaseModel):
    id: int
    title: str
    description: str
    fields: List[str]


class StepValidationResponse(BaseModel):
    step: int
    valid: bool
    errors: Dict[str, str] = Field(default_factory=dict)


class SubmissionResponse(BaseModel):
    application_id: str
    message: str
    redirect_url: str
    redirect_delay_s: float


class HealthResponse(BaseModel):
    status: str
    submissions: int
