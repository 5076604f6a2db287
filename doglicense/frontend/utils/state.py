"""Session state helpers for Streamlit."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from doglicense.api.core.config import init_storage
from doglicense.api.repositories.application_repo import ApplicationRepository
from doglicense.api.repositories.storage import SQLiteKeyValueStore
from doglicense.api.services.wizard import ApplicationWizard, SubmissionOutcome


@dataclass
class LicenseState:
    wizard: ApplicationWizard
    last_outcome: Optional[SubmissionOutcome] = None


def build_repository() -> ApplicationRepository:
    return ApplicationRepository(SQLiteKeyValueStore(init_storage()))


def get_state(session_state) -> LicenseState:
    if "license_state" not in session_state:
        session_state.license_state = LicenseState(wizard=ApplicationWizard.load(build_repository()))
    return session_state.license_state
