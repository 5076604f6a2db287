"""Field rules for the dog license form and the steps that own them."""
from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Tuple

from pydantic import ValidationError, ValidationInfo
from pydantic.config import ConfigDict
from pydantic.functional_validators import field_validator
from pydantic_core import PydanticCustomError

from ..core.config import settings
from ..schemas.application import (
    CERTIFICATE_FIELD,
    ApplicationFields,
    CertificateFile,
    DraftApplication,
    StepInfo,
)

ALLOWED_CERTIFICATE_TYPES = ("application/pdf", "image/jpeg", "image/png", "image/jpg")
MAX_DOG_AGE_YEARS = 30

STEPS: Tuple[StepInfo, ...] = (
    StepInfo(id=1, title="Owner Information", description="Your personal details",
             fields=["owner_name", "owner_address", "owner_phone"]),
    StepInfo(id=2, title="Dog Information", description="About your dog",
             fields=["dog_name", "dog_breed", "dog_age", "dog_color"]),
    StepInfo(id=3, title="Vaccination Records", description="Health documentation",
             fields=["last_rabies_shot_date", CERTIFICATE_FIELD]),
    StepInfo(id=4, title="Review & Submit", description="Confirm your application", fields=[]),
)
FIRST_STEP = STEPS[0].id
LAST_STEP = STEPS[-1].id
ALL_FIELDS: Tuple[str, ...] = tuple(name for step in STEPS for name in step.fields)

_NON_DIGITS = re.compile(r"\D")


@dataclass(frozen=True)
class PhoneResult:
    ok: bool
    digits: str = ""

    @property
    def formatted(self) -> str:
        if not self.ok:
            return ""
        return f"({self.digits[:3]}) {self.digits[3:6]}-{self.digits[6:]}"


def sanitize_us_phone(value: str) -> PhoneResult:
    """Reduce a US phone number to its 10 digits, dropping a leading country code."""

    digits = _NON_DIGITS.sub("", value or "")
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    if len(digits) != 10 or digits[0] in "01":
        return PhoneResult(ok=False)
    return PhoneResult(ok=True, digits=digits)


def coerce_date(value: str) -> Optional[date]:
    text = (value or "").strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def is_within_years(value: date, years: int, today: Optional[date] = None) -> bool:
    today = today or date.today()
    return years_before(today, years) <= value <= today


def parse_number_safe(value: str) -> Optional[float]:
    text = (value or "").strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def is_positive_number(value: float) -> bool:
    return value > 0


def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError("license_field", message)


def _check_length(value: str, low: int, high: int, too_short: str, too_long: str) -> str:
    if len(value) < low:
        raise _fail(too_short)
    if len(value) > high:
        raise _fail(too_long)
    return value


def _context(info: ValidationInfo) -> Dict[str, Any]:
    return info.context or {}


class LicenseApplicationForm(ApplicationFields):
    """Full form as validated before advancing a step or submitting."""

    vaccination_certificate: Optional[CertificateFile] = None

    model_config = ConfigDict(validate_default=True, loc_by_alias=False)

    @field_validator("owner_name")
    @classmethod
    def check_owner_name(cls, value: str) -> str:
        return _check_length(
            value, 2, 100, "Owner name must be at least 2 characters", "Owner name must be less than 100 characters"
        )

    @field_validator("owner_address")
    @classmethod
    def check_owner_address(cls, value: str) -> str:
        return _check_length(
            value, 10, 200, "Please provide a complete address", "Address must be less than 200 characters"
        )

    @field_validator("owner_phone")
    @classmethod
    def check_owner_phone(cls, value: str) -> str:
        if not sanitize_us_phone(value).ok:
            raise _fail("Please enter a valid US phone number")
        return value

    @field_validator("dog_name")
    @classmethod
    def check_dog_name(cls, value: str) -> str:
        return _check_length(value, 1, 50, "Dog name is required", "Dog name must be less than 50 characters")

    @field_validator("dog_breed")
    @classmethod
    def check_dog_breed(cls, value: str) -> str:
        return _check_length(value, 1, 50, "Dog breed is required", "Dog breed must be less than 50 characters")

    @field_validator("dog_age")
    @classmethod
    def check_dog_age(cls, value: str) -> str:
        number = parse_number_safe(value)
        if number is None or not is_positive_number(number) or number > MAX_DOG_AGE_YEARS:
            raise _fail("Dog age must be a positive number (max 30 years)")
        return value

    @field_validator("dog_color")
    @classmethod
    def check_dog_color(cls, value: str) -> str:
        return _check_length(value, 1, 30, "Dog color is required", "Dog color must be less than 30 characters")

    @field_validator("last_rabies_shot_date")
    @classmethod
    def check_rabies_date(cls, value: str, info: ValidationInfo) -> str:
        shot = coerce_date(value)
        if shot is None:
            raise _fail("Please enter a valid date")
        ctx = _context(info)
        years = ctx.get("rabies_validity_years", settings.rabies_validity_years)
        if not is_within_years(shot, years, ctx.get("today")):
            raise _fail(f"Rabies vaccination must be within the last {years} years")
        return value

    @field_validator("vaccination_certificate")
    @classmethod
    def check_certificate(cls, value: Optional[CertificateFile], info: ValidationInfo) -> Optional[CertificateFile]:
        if value is None:
            raise _fail("Vaccination certificate is required")
        max_bytes = _context(info).get("max_certificate_bytes", settings.max_certificate_bytes)
        if value.size > max_bytes:
            raise _fail(f"File size must be less than {max_bytes // (1024 * 1024)}MB")
        if value.content_type not in ALLOWED_CERTIFICATE_TYPES:
            raise _fail("File must be PDF, JPEG, or PNG format")
        return value


def fields_for_step(step: int) -> list[str]:
    for info in STEPS:
        if info.id == step:
            return list(info.fields)
    return []


def validate_fields(
    draft: DraftApplication,
    certificate: Optional[CertificateFile],
    fields: Iterable[str],
    *,
    today: Optional[date] = None,
) -> Dict[str, str]:
    """Return ``{field: message}`` for the requested fields that break a rule."""

    wanted = list(fields)
    if not wanted:
        return {}
    payload: Dict[str, Any] = draft.model_dump()
    payload[CERTIFICATE_FIELD] = certificate
    context: Dict[str, Any] = {
        "today": today,
        "rabies_validity_years": settings.rabies_validity_years,
        "max_certificate_bytes": settings.max_certificate_bytes,
    }
    try:
        LicenseApplicationForm.model_validate(payload, context=context)
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for err in exc.errors():
            name = str(err["loc"][0]) if err["loc"] else ""
            errors.setdefault(name, err["msg"])
        return {name: errors[name] for name in wanted if name in errors}
    return {}


def validate_step(
    step: int,
    draft: DraftApplication,
    certificate: Optional[CertificateFile],
    *,
    today: Optional[date] = None,
) -> Dict[str, str]:
    return validate_fields(draft, certificate, fields_for_step(step), today=today)


def validate_all(
    draft: DraftApplication,
    certificate: Optional[CertificateFile],
    *,
    today: Optional[date] = None,
) -> Dict[str, str]:
    return validate_fields(draft, certificate, ALL_FIELDS, today=today)
