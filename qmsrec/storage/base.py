"""
Persistence adapter contract.

An adapter maps an opaque module key to a stored record collection.
Loads never fail loudly: a missing, unreadable, or malformed collection
comes back as an empty list. Saves replace the whole collection and
raise on failure so the caller can roll back.
"""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

from qmsrec.core import get_logger

logger = get_logger("qmsrec.storage")


class PersistenceAdapter(ABC):
    """Abstract key -> record collection store."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        pass

    @abstractmethod
    def load_data(self, key: str) -> List[Dict[str, Any]]:
        """Return the stored collection for ``key`` or an empty list."""

    @abstractmethod
    def save_data(self, key: str, records: List[Dict[str, Any]]) -> None:
        """Durably replace the stored collection for ``key``."""

    def clear_all(self, keys: Iterable[str]) -> None:
        """Replace every listed collection with an empty one."""
        for key in keys:
            self.save_data(key, [])


def decode_collection(key: str, raw: Any) -> List[Dict[str, Any]]:
    """
    Turn a stored payload into a list of record dicts.

    Accepts a JSON string or an already-decoded value. Anything that is
    not a list decodes to []; non-dict entries are dropped.
    """
    if raw is None:
        return []

    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("Stored data for '%s' is not valid JSON: %s", key, exc)
            return []

    if not isinstance(raw, list):
        logger.warning(
            "Stored data for '%s' is %s, expected a list", key, type(raw).__name__
        )
        return []

    records = [r for r in raw if isinstance(r, dict)]
    if len(records) != len(raw):
        logger.warning(
            "Dropped %d malformed entries from '%s'", len(raw) - len(records), key
        )
    return records


def encode_collection(records: List[Dict[str, Any]]) -> str:
    """Serialize a collection to JSON text."""
    return json.dumps(list(records), ensure_ascii=False, default=str)
