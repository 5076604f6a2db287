"""Persistence boundary for drafts and submitted applications."""
from __future__ import annotations

import json
import logging
from typing import List, Optional

from pydantic import ValidationError

from ..core.config import settings
from ..schemas.application import DraftApplication, SubmittedApplication
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class DraftCorruptedError(ValueError):
    """Raised when the stored draft is not a JSON object of form fields."""


class SubmissionListCorruptedError(RuntimeError):
    """Raised when the stored submission list cannot be decoded as a JSON array."""


class ApplicationRepository:
    """Draft slot and submission list on top of a local key/value store."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        draft_key: Optional[str] = None,
        submissions_key: Optional[str] = None,
    ):
        self.store = store
        self.draft_key = draft_key or settings.draft_key
        self.submissions_key = submissions_key or settings.submissions_key

    def load_draft(self) -> Optional[DraftApplication]:
        raw = self.store.get_item(self.draft_key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise DraftCorruptedError(f"Draft is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise DraftCorruptedError(f"Draft must be a JSON object, got {type(data).__name__}")
        try:
            return DraftApplication.model_validate(data)
        except ValidationError as exc:
            raise DraftCorruptedError(f"Draft has invalid fields: {exc.error_count()} error(s)") from exc

    def save_draft(self, draft: DraftApplication) -> None:
        self.store.set_item(self.draft_key, json.dumps(draft.to_storage()))

    def clear_draft(self) -> None:
        self.store.remove_item(self.draft_key)

    def has_draft(self) -> bool:
        return self.store.get_item(self.draft_key) is not None

    def append_submission(self, record: SubmittedApplication) -> int:
        """Append ``record`` to the submission list and return the new list length."""

        def _append(current: Optional[str]) -> str:
            items = self._decode_list(current)
            items.append(record.to_storage())
            return json.dumps(items)

        stored = self.store.update_item(self.submissions_key, _append)
        count = len(json.loads(stored))
        logger.info("Stored application %s (%d total)", record.id, count)
        return count

    def list_submissions(self) -> List[SubmittedApplication]:
        items = self._decode_list(self.store.get_item(self.submissions_key))
        return [SubmittedApplication.model_validate(item) for item in items]

    def get_submission(self, application_id: str) -> Optional[SubmittedApplication]:
        for item in self._decode_list(self.store.get_item(self.submissions_key)):
            if isinstance(item, dict) and item.get("id") == application_id:
                return SubmittedApplication.model_validate(item)
        return None

    def count_submissions(self) -> int:
        return len(self._decode_list(self.store.get_item(self.submissions_key)))

    def _decode_list(self, raw: Optional[str]) -> list:
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise SubmissionListCorruptedError(f"Submission list under {self.submissions_key!r} is not valid JSON: {exc}") from exc
        if not isinstance(items, list):
            raise SubmissionListCorruptedError(f"Submission list under {self.submissions_key!r} is not a JSON array")
        return items
