"""Quality Control - contract review records."""

from qmsrec.quality_control.specs import MODULES
from qmsrec.records.registry import register_module

for _spec in MODULES:
    register_module(_spec)
