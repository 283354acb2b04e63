# core/legacy/demo_users.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.models.library import LibraryItem
from core.sa.models import EntrySource

logger = logging.getLogger(__name__)


class DemoUserStore:
    """Read-only view of the demo users file.

    The file is a JSON list of user records. Each record is identified by
    ``_id`` or ``id`` (historically the user's email) and may carry a
    ``library`` list of loosely shaped item dicts. The file is re-read on
    every lookup so edits show up without a restart.
    """

    def __init__(self, path: Optional[str]):
        self.path = Path(path) if path else None

    def _read(self) -> List[Dict[str, Any]]:
        if self.path is None or not self.path.exists():
            return []
        with self.path.open(encoding='utf-8') as handle:
            data = json.load(handle)
        if not isinstance(data, list):
            raise ValueError(f"{self.path} must contain a JSON list of user records")
        return data

    def get_by_id(self, user_key: str) -> Optional[Dict[str, Any]]:
        for record in self._read():
            if isinstance(record, dict) and user_key in (record.get('_id'), record.get('id')):
                return record
        return None

    def get_library(self, user_key: str) -> List[LibraryItem]:
        """Return the fallback library items recorded for a user.

        Raises whatever reading or parsing the file raises; callers decide
        whether the fallback is worth failing for.
        """
        record = self.get_by_id(user_key)
        if not record or not record.get('library'):
            return []
        items = [
            LibraryItem.from_legacy_record(raw, source=EntrySource.DEMO_FALLBACK)
            for raw in record['library']
            if isinstance(raw, dict)
        ]
        logger.debug("Loaded %d demo library items for %s", len(items), user_key)
        return items
