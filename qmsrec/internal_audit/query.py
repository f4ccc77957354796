"""
Cross-record audit overview and keyword query.

overview() counts the main audit record types; query() runs a
case-insensitive keyword search over one of them.
"""

from typing import Any, Dict, List, Optional

from qmsrec.internal_audit.specs import (
    AUDIT_CHECKLIST,
    AUDIT_NONCONFORMITY,
    AUDIT_PLAN,
    AUDIT_REPORT,
)
from qmsrec.records.filters import keyword_filter
from qmsrec.records.store import RecordStore
from qmsrec.storage.base import PersistenceAdapter

# Query tab -> spec, in display order
QUERY_TABS = {
    "plan": AUDIT_PLAN,
    "nonconformity": AUDIT_NONCONFORMITY,
    "checklist": AUDIT_CHECKLIST,
    "report": AUDIT_REPORT,
}


def _load(spec, adapter: Optional[PersistenceAdapter]) -> List[Dict[str, Any]]:
    store = RecordStore(spec, adapter=adapter)
    return store.load()


def overview(adapter: Optional[PersistenceAdapter] = None) -> Dict[str, int]:
    """Record counts for plans, nonconformities, checklists and reports."""
    return {
        "plans": len(_load(AUDIT_PLAN, adapter)),
        "nonconformities": len(_load(AUDIT_NONCONFORMITY, adapter)),
        "checklists": len(_load(AUDIT_CHECKLIST, adapter)),
        "reports": len(_load(AUDIT_REPORT, adapter)),
    }


def query(
    tab: str, keyword: Optional[str] = None, adapter: Optional[PersistenceAdapter] = None
) -> List[Dict[str, Any]]:
    """
    Keyword search over one audit record type.

    Raises:
        ValueError: Unknown tab
    """
    if tab not in QUERY_TABS:
        raise ValueError(f"Unknown query tab '{tab}'. Valid: {', '.join(QUERY_TABS)}")
    spec = QUERY_TABS[tab]
    return keyword_filter(_load(spec, adapter), keyword, spec.keyword_fields)
