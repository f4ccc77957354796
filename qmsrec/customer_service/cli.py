"""
Customer service CLI commands.

Usage:
    qmsrec service surveys list --filter surveyDate=2024-01-01..2024-03-31
    qmsrec service complaints add --set customerName=Acme ...
"""

import qmsrec.customer_service  # noqa: F401  registers the modules
from qmsrec.records.cli import build_group_app

app = build_group_app("customer_service")
