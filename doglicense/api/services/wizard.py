"""Multi-step dog license wizard: step gating, draft autosave and submission."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Literal, Mapping, Optional

from ..core.config import settings
from ..repositories.application_repo import ApplicationRepository, DraftCorruptedError
from ..schemas.application import CERTIFICATE_FIELD, DRAFT_FIELDS, CertificateFile, DraftApplication, StepInfo
from .application_service import ApplicationService, application_service
from .validation import FIRST_STEP, LAST_STEP, STEPS, fields_for_step, validate_all, validate_fields

logger = logging.getLogger(__name__)

FIX_ERRORS_MESSAGE = "Please fix the errors before continuing"
RESTORED_MESSAGE = "Previous form data restored"
SUBMIT_FAILED_MESSAGE = "Failed to submit application. Please try again."


class WizardStepError(RuntimeError):
    """Raised when an action is not available on the current step."""


@dataclass(frozen=True)
class Notification:
    level: Literal["info", "success", "error"]
    message: str


@dataclass(frozen=True)
class SubmissionOutcome:
    application_id: str
    redirect_url: str
    redirect_delay_s: float


class ApplicationWizard:
    """State of one user's pass through the four application steps.

    Every draft field change is written through ``repo`` right away; the
    certificate stays in memory only. Notifications queue up until the UI
    drains them.
    """

    def __init__(
        self,
        repo: ApplicationRepository,
        *,
        service: ApplicationService = application_service,
        today: Optional[Callable[[], date]] = None,
    ) -> None:
        self.repo = repo
        self.service = service
        self.today = today
        self.step = FIRST_STEP
        self.draft = DraftApplication()
        self.certificate: Optional[CertificateFile] = None
        self.errors: Dict[str, str] = {}
        self.notifications: List[Notification] = []

    @classmethod
    def load(cls, repo: ApplicationRepository, **kwargs) -> "ApplicationWizard":
        wizard = cls(repo, **kwargs)
        wizard.restore_draft()
        return wizard

    @property
    def current(self) -> StepInfo:
        return STEPS[self.step - 1]

    @property
    def progress(self) -> float:
        return self.step / len(STEPS) * 100

    @property
    def is_last_step(self) -> bool:
        return self.step == LAST_STEP

    def restore_draft(self) -> bool:
        """Prime the form from the stored draft; a corrupt draft leaves it empty."""

        try:
            draft = self.repo.load_draft()
        except DraftCorruptedError as exc:
            logger.error("Error loading saved form data: %s", exc)
            return False
        if draft is None:
            return False
        self.draft = draft
        self.errors = {}
        self._notify("info", RESTORED_MESSAGE)
        return True

    def update_field(self, name: str, value) -> None:
        if name == CERTIFICATE_FIELD:
            self.set_certificate(value)
            return
        if name not in DRAFT_FIELDS:
            raise ValueError(f"Unknown form field: {name}")
        self.draft = self.draft.model_copy(update={name: "" if value is None else str(value)})
        self.repo.save_draft(self.draft)
        self._revalidate(name)

    def update_fields(self, values: Mapping[str, object]) -> None:
        for name, value in values.items():
            self.update_field(name, value)

    def set_certificate(self, certificate: Optional[CertificateFile]) -> None:
        self.certificate = certificate
        self._revalidate(CERTIFICATE_FIELD)

    def validate_current_step(self) -> Dict[str, str]:
        errors = validate_fields(self.draft, self.certificate, fields_for_step(self.step), today=self._today())
        for name in fields_for_step(self.step):
            self.errors.pop(name, None)
        self.errors.update(errors)
        return errors

    def next_step(self) -> bool:
        if self.validate_current_step():
            self._notify("error", FIX_ERRORS_MESSAGE)
            return False
        self.step = min(self.step + 1, LAST_STEP)
        return True

    def prev_step(self) -> None:
        self.step = max(self.step - 1, FIRST_STEP)

    def go_to(self, step: int) -> None:
        self.step = min(max(step, FIRST_STEP), LAST_STEP)

    def submit(self) -> Optional[SubmissionOutcome]:
        if not self.is_last_step:
            raise WizardStepError(f"Submit is only available on step {LAST_STEP}, current step is {self.step}")
        errors = validate_all(self.draft, self.certificate, today=self._today())
        if errors:
            self.errors = errors
            self._notify("error", FIX_ERRORS_MESSAGE)
            return None

        try:
            record = self.service.submit(self.repo, self.draft, self.certificate)
        except Exception:
            logger.exception("Error submitting application")
            self._notify("error", SUBMIT_FAILED_MESSAGE)
            return None

        self._notify("success", f"Application submitted successfully! Your application ID is: {record.id}")
        self.reset()
        return SubmissionOutcome(
            application_id=record.id,
            redirect_url=self.service.tracking_url(record.id),
            redirect_delay_s=settings.redirect_delay_s,
        )

    def reset(self) -> None:
        """Empty the form in memory and go back to step 1. Storage is untouched."""

        self.draft = DraftApplication()
        self.certificate = None
        self.errors = {}
        self.step = FIRST_STEP

    def drain_notifications(self) -> List[Notification]:
        pending, self.notifications = self.notifications, []
        return pending

    def _revalidate(self, name: str) -> None:
        # only fields already flagged are rechecked while typing
        if name not in self.errors:
            return
        errors = validate_fields(self.draft, self.certificate, [name], today=self._today())
        if name in errors:
            self.errors[name] = errors[name]
        else:
            del self.errors[name]

    def _today(self) -> Optional[date]:
        return self.today() if self.today else None

    def _notify(self, level: Literal["info", "success", "error"], message: str) -> None:
        self.notifications.append(Notification(level=level, message=message))
