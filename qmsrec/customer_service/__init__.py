"""Customer Service - satisfaction surveys and complaint records."""

from qmsrec.customer_service.specs import MODULES
from qmsrec.records.registry import register_module

for _spec in MODULES:
    register_module(_spec)
