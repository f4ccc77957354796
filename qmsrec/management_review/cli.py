"""
Management review CLI commands.

Usage:
    qmsrec review plans list --filter planYear=2024
    qmsrec review meetings stats
"""

import qmsrec.management_review  # noqa: F401  registers the modules
from qmsrec.records.cli import build_group_app

app = build_group_app("management_review")
