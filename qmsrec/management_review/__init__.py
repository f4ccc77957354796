"""Management Review - annual plans, implementation plans, inputs, meetings and reports."""

from qmsrec.management_review.specs import MODULES
from qmsrec.records.registry import register_module

for _spec in MODULES:
    register_module(_spec)
