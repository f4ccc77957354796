"""
Quality control CLI commands.

Usage:
    qmsrec quality contracts list --filter reviewResult=passed
"""

import qmsrec.quality_control  # noqa: F401  registers the modules
from qmsrec.records.cli import build_group_app

app = build_group_app("quality_control")
