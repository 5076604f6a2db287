"""Common FastAPI dependencies."""
from __future__ import annotations

from typing import Generator

from .core.config import settings
from .repositories.application_repo import ApplicationRepository
from .repositories.storage import SQLiteKeyValueStore


def get_repository() -> Generator[ApplicationRepository, None, None]:
    yield ApplicationRepository(SQLiteKeyValueStore(settings.storage_path.resolve()))
