"""
JSON file persistence adapter.

All collections live in one JSON object keyed by module key, mirroring a
browser's key/value storage. Writes go to a temp file that replaces the
original, so a crash mid-write leaves the previous file intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional

from qmsrec.records.errors import PersistenceError
from qmsrec.storage.base import PersistenceAdapter, decode_collection, logger


class JsonFileAdapter(PersistenceAdapter):
    def __init__(self, path: Optional[Path] = None):
        if path is None:
            from qmsrec.core.config import RECORD_PATHS

            path = RECORD_PATHS.json_file
        self.path = Path(path)

    @property
    def backend_name(self) -> str:
        return "json"

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        return data

    def load_data(self, key: str) -> List[Dict[str, Any]]:
        try:
            data = self._read_all()
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load '%s' from %s: %s", key, self.path, exc)
            return []
        return decode_collection(key, data.get(key))

    def save_data(self, key: str, records: List[Dict[str, Any]]) -> None:
        try:
            data = self._read_all()
        except (OSError, ValueError) as exc:
            logger.warning("Rewriting unreadable store %s: %s", self.path, exc)
            data = {}

        data[key] = list(records)

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".records-", suffix=".json"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, ensure_ascii=False, indent=2, default=str)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Failed to save '{key}': {exc}") from exc

        logger.debug("Saved %d records to '%s' in %s", len(records), key, self.path)
