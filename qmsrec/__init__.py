"""
QMSREC - Quality Management System record registers

Record keeping for laboratory quality management screens.

Modules:
    core               - Shared services (config, logging, db, output)
    storage            - Persistence adapters (sqlite, json file, memory)
    records            - Generic record store, filters, forms, stats, export
    customer_service   - Satisfaction surveys, complaint records
    equipment          - Device maintenance, environment monitoring
    quality_control    - Contract reviews
    internal_audit     - Audit plans, implementation, checklists,
                         nonconformities, rectifications, reports
    management_review  - Annual management review plans
"""

__version__ = "0.1.0"
