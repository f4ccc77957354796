"""
Internal Audit - audit plans, implementation, checklists, nonconformities,
rectifications and reports.
"""

from qmsrec.internal_audit.specs import MODULES
from qmsrec.records.registry import register_module

for _spec in MODULES:
    register_module(_spec)

from qmsrec.internal_audit.query import overview, query  # noqa: E402

__all__ = ["MODULES", "overview", "query"]
