"""
Module registry.

Record-type packages register their ModuleSpecs at import time via
register_module(). load_modules() imports every known package so the
registry is complete before the CLI or an exporter walks it.
"""

import importlib
from typing import Dict, List, Optional

from qmsrec.core.logging import get_logger
from qmsrec.records.specs import ModuleSpec
from qmsrec.storage.base import PersistenceAdapter

logger = get_logger("qmsrec.records.registry")

# (package, CLI group name, help text), in display order
GROUP_PACKAGES = [
    ("qmsrec.customer_service", "service", "Satisfaction surveys & complaints"),
    ("qmsrec.equipment", "equipment", "Device maintenance & environment monitoring"),
    ("qmsrec.quality_control", "quality", "Contract review"),
    ("qmsrec.internal_audit", "audit", "Internal audit records"),
    ("qmsrec.management_review", "review", "Management review planning"),
]

# Registry: module key -> spec
_MODULES: Dict[str, ModuleSpec] = {}


def register_module(spec: ModuleSpec) -> ModuleSpec:
    """Register a module spec. Re-registering the same key must be the same spec."""
    existing = _MODULES.get(spec.key)
    if existing is not None and existing is not spec:
        raise ValueError(f"Module key '{spec.key}' is already registered")
    _MODULES[spec.key] = spec
    logger.debug("Registered module '%s' from '%s'", spec.key, spec.group)
    return spec


def load_modules() -> List[ModuleSpec]:
    """Import every record package and return all registered specs."""
    for package, _, _ in GROUP_PACKAGES:
        importlib.import_module(package)
    return all_modules()


def all_modules(group: Optional[str] = None) -> List[ModuleSpec]:
    specs = list(_MODULES.values())
    if group is not None:
        specs = [s for s in specs if s.group == group]
    return specs


def get_module(name: str) -> ModuleSpec:
    """
    Look up a spec by module key or CLI command name.

    Raises:
        KeyError: Unknown module, or a command shared by several modules
    """
    if name in _MODULES:
        return _MODULES[name]

    matches = [s for s in _MODULES.values() if s.command == name]
    if len(matches) == 1:
        return matches[0]
    if matches:
        raise KeyError(
            f"Command '{name}' is ambiguous: {', '.join(s.key for s in matches)}"
        )
    raise KeyError(f"Unknown module '{name}'")


def open_store(
    name: str, adapter: Optional[PersistenceAdapter] = None, load: bool = True, **kwargs
):
    """Build a RecordStore for a registered module, loaded unless load=False."""
    from qmsrec.records.store import RecordStore

    store = RecordStore(get_module(name), adapter=adapter, **kwargs)
    if load:
        store.load()
    return store
