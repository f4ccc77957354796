"""
Filter predicate builder.

Translates a sparse criteria dict into one predicate that is the AND of a
per-field check. Which check applies to a field comes from the module's
search descriptors (see ModuleSpec.matchers):

    contains    case-sensitive substring test; falsy criteria are skipped
    exact       equality; falsy criteria are skipped
    date_range  inclusive [start, end] on YYYY-MM-DD strings; applied only
                when both bounds are given

Criteria keys with no matcher are ignored.
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

Record = Dict[str, Any]
Predicate = Callable[[Record], bool]

CONTAINS = "contains"
EXACT = "exact"
DATE_RANGE = "date_range"


def _date_bounds(value: Any) -> Optional[tuple]:
    """Return (start, end) for a complete range, None otherwise."""
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    start, end = value
    if not start or not end:
        return None
    return str(start), str(end)


def _contains(name: str, needle: Any) -> Predicate:
    needle = str(needle)

    def check(record: Record) -> bool:
        value = record.get(name)
        return value is not None and needle in str(value)

    return check


def _exact(name: str, expected: Any) -> Predicate:
    def check(record: Record) -> bool:
        value = record.get(name)
        if value == expected:
            return True
        # CLI criteria arrive as strings; compare numbers by their text
        return value is not None and str(value) == str(expected)

    return check


def _in_range(name: str, start: str, end: str) -> Predicate:
    def check(record: Record) -> bool:
        value = record.get(name)
        if not value:
            return False
        return start <= str(value) <= end

    return check


def build_predicate(
    criteria: Optional[Mapping[str, Any]], matchers: Mapping[str, str]
) -> Predicate:
    """
    Build the conjunction of per-field predicates for ``criteria``.

    Args:
        criteria: field -> criterion value, sparse
        matchers: field -> match mode (contains | exact | date_range)

    Returns:
        A predicate that is always True when no criterion applies
    """
    checks: List[Predicate] = []

    for name, value in (criteria or {}).items():
        mode = matchers.get(name)
        if mode is None:
            continue

        if mode == DATE_RANGE:
            bounds = _date_bounds(value)
            if bounds is not None:
                checks.append(_in_range(name, *bounds))
        elif not value:
            continue
        elif mode == CONTAINS:
            checks.append(_contains(name, value))
        elif mode == EXACT:
            checks.append(_exact(name, value))
        else:
            raise ValueError(f"Unknown match mode '{mode}' for {name}")

    def predicate(record: Record) -> bool:
        return all(check(record) for check in checks)

    return predicate


def filter_records(
    records: Iterable[Record],
    criteria: Optional[Mapping[str, Any]],
    matchers: Mapping[str, str],
) -> List[Record]:
    """Records that satisfy every applicable criterion, order preserved."""
    predicate = build_predicate(criteria, matchers)
    return [r for r in records if predicate(r)]


def keyword_filter(
    records: Iterable[Record], keyword: Optional[str], fields: Sequence[str]
) -> List[Record]:
    """
    Keep records where any of ``fields`` contains ``keyword``, ignoring case.

    An empty keyword keeps everything.
    """
    records = list(records)
    if not keyword:
        return records

    needle = keyword.lower()
    return [
        r for r in records
        if any(needle in str(r.get(f) or "").lower() for f in fields)
    ]
