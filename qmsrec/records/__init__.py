"""
Records - the generic record store shared by every record type.

Usage:
    from qmsrec.records import open_store
    store = open_store("complaint_record")
    store.search({"handleStatus": "pending"})
"""

from qmsrec.records.errors import (
    PersistenceError,
    RecordError,
    RecordNotFoundError,
    ValidationError,
)
from qmsrec.records.registry import (
    all_modules,
    get_module,
    load_modules,
    open_store,
    register_module,
)
from qmsrec.records.specs import FieldDef, ModuleSpec, SearchField, StatDef

__all__ = [
    "FieldDef",
    "ModuleSpec",
    "SearchField",
    "StatDef",
    "RecordError",
    "ValidationError",
    "RecordNotFoundError",
    "PersistenceError",
    "register_module",
    "load_modules",
    "all_modules",
    "get_module",
    "open_store",
]
