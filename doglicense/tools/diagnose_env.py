"""Utility script to inspect runtime environment and local storage."""
from __future__ import annotations

import platform
import sys
from importlib import metadata

from doglicense.api.core.config import init_storage, settings
from doglicense.api.repositories.application_repo import ApplicationRepository, DraftCorruptedError
from doglicense.api.repositories.storage import SQLiteKeyValueStore

PACKAGES = ("fastapi", "uvicorn", "pydantic", "pydantic-settings", "python-multipart", "streamlit", "pandas")


def main() -> None:
    print("Python:", sys.version)
    print("Platform:", platform.platform())
    print("Installed packages:")
    for name in PACKAGES:
        try:
            print(f" - {name}=={metadata.version(name)}")
        except metadata.PackageNotFoundError:
            print(f" - {name}: missing")

    path = init_storage()
    repo = ApplicationRepository(SQLiteKeyValueStore(path))
    print("Storage:", path)
    try:
        draft = repo.load_draft()
    except DraftCorruptedError as exc:
        print("Draft: unreadable", f"({exc})")
    else:
        print("Draft:", "none" if draft is None else ("empty" if draft.is_empty() else "in progress"))
    print("Submitted applications:", repo.count_submissions())
    print("Tracking route:", settings.tracking_route)


if __name__ == "__main__":
    main()
