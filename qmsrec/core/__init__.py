"""
QMSREC Core - Shared services for all modules.

Usage:
    from qmsrec.core import get_db, get_config, get_logger, RECORD_PATHS
"""

from qmsrec.core.config import get_config, get_config_value, RECORD_PATHS
from qmsrec.core.db import get_db, migrate_all
from qmsrec.core.logging import get_logger

__all__ = [
    "get_config",
    "get_config_value",
    "RECORD_PATHS",
    "get_db",
    "migrate_all",
    "get_logger",
]
