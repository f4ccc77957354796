"""In-process persistence adapter."""

import copy
from typing import Any, Dict, List

from qmsrec.storage.base import PersistenceAdapter, decode_collection


class MemoryAdapter(PersistenceAdapter):
    """Keeps collections in a dict. Deep copies isolate callers from storage."""

    def __init__(self, initial: Dict[str, List[Dict[str, Any]]] = None):
        self._data: Dict[str, List[Dict[str, Any]]] = copy.deepcopy(initial or {})
        self.save_count = 0

    @property
    def backend_name(self) -> str:
        return "memory"

    def load_data(self, key: str) -> List[Dict[str, Any]]:
        return copy.deepcopy(decode_collection(key, self._data.get(key)))

    def save_data(self, key: str, records: List[Dict[str, Any]]) -> None:
        self._data[key] = copy.deepcopy(list(records))
        self.save_count += 1
