"""Identifier generation and the submit transaction."""
from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Callable, List, Optional
from urllib.parse import urlencode

from ..core.config import settings
from ..repositories.application_repo import ApplicationRepository
from ..schemas.application import CertificateFile, DraftApplication, SubmittedApplication


class ApplicationNotFoundError(LookupError):
    """Raised when no submitted application has the requested identifier."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApplicationService:
    """Turn a validated draft into a stored, immutable application."""

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utcnow,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.clock = clock
        self.rng = rng or random.Random()

    def generate_application_id(self, now: Optional[datetime] = None) -> str:
        now = now or self.clock()
        millis = int(now.timestamp() * 1000)
        return f"DOG-{millis}-{self.rng.randint(0, 9999)}"

    def build_record(
        self,
        draft: DraftApplication,
        certificate: Optional[CertificateFile],
    ) -> SubmittedApplication:
        now = self.clock()
        return SubmittedApplication(
            **draft.model_dump(),
            id=self.generate_application_id(now),
            vaccination_certificate=certificate,
            submitted_at=now,
        )

    def submit(
        self,
        repo: ApplicationRepository,
        draft: DraftApplication,
        certificate: Optional[CertificateFile],
    ) -> SubmittedApplication:
        """Store the application and drop the draft. Callers validate first."""

        record = self.build_record(draft, certificate)
        repo.append_submission(record)
        repo.clear_draft()
        return record

    def list_applications(self, repo: ApplicationRepository) -> List[SubmittedApplication]:
        return repo.list_submissions()

    def get_application(self, repo: ApplicationRepository, application_id: str) -> SubmittedApplication:
        record = repo.get_submission(application_id)
        if record is None:
            raise ApplicationNotFoundError(f"Application {application_id} not found")
        return record

    @staticmethod
    def tracking_url(application_id: str) -> str:
        return f"{settings.tracking_route}?{urlencode({'id': application_id})}"


application_service = ApplicationService()
