"""
Storage - persistence adapters for record collections.

Usage:
    from qmsrec.storage import get_adapter
    adapter = get_adapter()
    records = adapter.load_data("complaint_record")
"""

from typing import Optional

from qmsrec.storage.base import PersistenceAdapter
from qmsrec.storage.json_file import JsonFileAdapter
from qmsrec.storage.memory import MemoryAdapter
from qmsrec.storage.sqlite import SqliteAdapter

BACKENDS = {
    "sqlite": SqliteAdapter,
    "json": JsonFileAdapter,
    "memory": MemoryAdapter,
}


def get_adapter(backend: Optional[str] = None) -> PersistenceAdapter:
    """
    Build the adapter named by ``backend`` or by storage.backend in config.yaml.

    Raises:
        ValueError: Unknown backend name
    """
    if backend is None:
        from qmsrec.core.config import get_config_value

        backend = get_config_value("storage", "backend", default="sqlite")

    backend = str(backend).lower()
    if backend not in BACKENDS:
        raise ValueError(
            f"Unknown storage backend '{backend}'. "
            f"Valid: {', '.join(sorted(BACKENDS))}"
        )
    return BACKENDS[backend]()


__all__ = [
    "BACKENDS",
    "PersistenceAdapter",
    "SqliteAdapter",
    "JsonFileAdapter",
    "MemoryAdapter",
    "get_adapter",
]
