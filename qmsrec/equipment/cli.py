"""
Equipment CLI commands.

Usage:
    qmsrec equipment maintenance list --filter maintenanceType="fault repair"
    qmsrec equipment environment stats
"""

import qmsrec.equipment  # noqa: F401  registers the modules
from qmsrec.records.cli import build_group_app

app = build_group_app("equipment")
