import os
import tempfile
from datetime import date
from pathlib import Path

import pytest

# Point the app at a throwaway storage file before anything imports the settings
os.environ.setdefault("STORAGE_PATH", str(Path(tempfile.mkdtemp(prefix="doglicense-tests-")) / "local_storage.db"))

from doglicense.api.repositories.application_repo import ApplicationRepository  # noqa: E402
from doglicense.api.repositories.storage import InMemoryKeyValueStore  # noqa: E402
from doglicense.api.schemas.application import CertificateFile  # noqa: E402


@pytest.fixture
def today() -> date:
    return date(2026, 10, 19)


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def repo(store) -> ApplicationRepository:
    return ApplicationRepository(store)


@pytest.fixture
def owner_values() -> dict:
    return {
        "owner_name": "Jane Doe",
        "owner_address": "123 Main St, Springfield, IL 62701",
        "owner_phone": "(555) 123-4567",
    }


@pytest.fixture
def dog_values() -> dict:
    return {"dog_name": "Rex", "dog_breed": "Labrador", "dog_age": "4", "dog_color": "Black"}


@pytest.fixture
def pdf_certificate() -> CertificateFile:
    return CertificateFile(name="rabies.pdf", content_type="application/pdf", size=2 * 1024 * 1024)
