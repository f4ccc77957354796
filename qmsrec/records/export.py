"""
CSV export of record collections.

Files are named ``<module key>_<YYYY-MM-DD>.csv`` and written as UTF-8
with a byte-order mark so spreadsheet tools pick up the encoding. Every
cell is quoted; the header row carries the field labels.
"""

import csv
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from qmsrec.core.logging import get_logger
from qmsrec.records.specs import ModuleSpec

logger = get_logger("qmsrec.records.export")


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


def export_filename(spec: ModuleSpec, today: Optional[Union[date, str]] = None) -> str:
    if today is None:
        today = date.today()
    day = today.isoformat() if isinstance(today, date) else str(today)
    return f"{spec.key}_{day}.csv"


def export_csv(
    spec: ModuleSpec,
    records: Iterable[Dict[str, Any]],
    directory: Union[str, Path],
    today: Optional[Union[date, str]] = None,
) -> Path:
    """
    Write ``records`` to a CSV file in ``directory``.

    Returns:
        Path of the written file

    Raises:
        ValueError: No records to export
    """
    records = list(records)
    if not records:
        raise ValueError(f"No {spec.label} records to export")

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(spec, today)

    columns = spec.export_fields
    with open(path, "w", encoding="utf-8-sig", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_ALL)
        writer.writerow([spec.label_for(c) for c in columns])
        for record in records:
            writer.writerow([_cell(record.get(c)) for c in columns])

    logger.info("Exported %d %s records to %s", len(records), spec.key, path)
    return path


def export_modules(
    stores: Iterable[Any],
    directory: Union[str, Path],
    today: Optional[Union[date, str]] = None,
) -> List[Path]:
    """
    Export every loaded store that has records; empty ones are skipped.

    Args:
        stores: RecordStore instances (already loaded)
    """
    paths = []
    for store in stores:
        if not store.all:
            logger.debug("Skipping empty module '%s'", store.key)
            continue
        paths.append(export_csv(store.spec, store.all, directory, today))
    return paths
