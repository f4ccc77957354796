"""Equipment - device maintenance and environment monitoring records."""

from qmsrec.equipment.specs import MODULES
from qmsrec.records.registry import register_module

for _spec in MODULES:
    register_module(_spec)
