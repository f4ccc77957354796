"""Summary statistics over a record collection."""

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Union

from qmsrec.records.specs import ModuleSpec, StatDef


def _today(today: Optional[Union[date, str]]) -> str:
    if today is None:
        return date.today().isoformat()
    if isinstance(today, date):
        return today.isoformat()
    return str(today)


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def compute_stat(
    stat: StatDef, records: List[Dict[str, Any]], today: Optional[str] = None
) -> Union[int, float]:
    if stat.kind == "count":
        return len(records)

    if stat.kind == "count_where":
        return sum(1 for r in records if r.get(stat.field) in stat.values)

    if stat.kind == "count_today":
        day = _today(today)
        return sum(1 for r in records if r.get(stat.field) == day)

    if stat.kind == "count_month":
        month = _today(today)[:7]
        return sum(
            1 for r in records if str(r.get(stat.field) or "").startswith(month)
        )

    numbers = [n for n in (_number(r.get(stat.field)) for r in records) if n is not None]
    if not numbers:
        return 0.0
    return round(sum(numbers) / len(numbers), stat.precision)


def compute_stats(
    spec: ModuleSpec,
    records: Iterable[Dict[str, Any]],
    today: Optional[Union[date, str]] = None,
) -> Dict[str, Union[int, float]]:
    """
    Evaluate every StatDef of ``spec`` over ``records``.

    Returns:
        Stat label -> value, in declaration order
    """
    records = list(records)
    day = _today(today)
    return {stat.label: compute_stat(stat, records, day) for stat in spec.stats}
