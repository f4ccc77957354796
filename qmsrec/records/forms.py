"""
Form input preparation.

Turns raw user input (typed values or CLI strings) into a record-shaped
dict: defaults for new records, type coercion, required-field checks,
and date serialization to YYYY-MM-DD.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Mapping

from qmsrec.records.errors import ValidationError
from qmsrec.records.specs import FieldDef, ModuleSpec

DATE_FORMATS = [
    "%Y-%m-%d", "%m/%d/%Y", "%m-%d-%Y",
    "%m/%d/%y", "%m-%d-%y",
    "%d/%m/%Y", "%d-%m-%Y",
    "%Y/%m/%d", "%Y.%m.%d",
    "%B %d, %Y", "%b %d, %Y",
]

RATING_RANGE = (0, 5)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def format_date(value: Any) -> Any:
    """Serialize a date or datetime to YYYY-MM-DD; other values pass through."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def parse_date(raw: Any) -> str:
    """
    Normalize a date value to YYYY-MM-DD.

    Raises:
        ValueError: Unrecognized date
    """
    if isinstance(raw, date):
        return format_date(raw)

    text = str(raw).strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue
    raise ValueError(f"unrecognized date '{raw}'")


def _coerce_field(fdef: FieldDef, raw: Any) -> Any:
    t = fdef.type

    if t == "date":
        return parse_date(raw)

    if t in ("int", "rating"):
        if isinstance(raw, bool):
            raise ValueError(f"expected a number, got {raw!r}")
        value = float(raw)
        if not value.is_integer():
            raise ValueError(f"expected a whole number, got {raw!r}")
        number = int(value)
        if t == "rating":
            low, high = RATING_RANGE
            if not low <= number <= high:
                raise ValueError(f"rating must be between {low} and {high}")
        return number

    if t == "select":
        if fdef.options and raw not in fdef.options:
            raise ValueError(f"must be one of: {', '.join(fdef.options)}")
        return raw

    return raw if isinstance(raw, str) else str(raw)


def apply_defaults(spec: ModuleSpec, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Fill absent fields of a new record from their declared defaults."""
    result = dict(data)
    for fdef in spec.fields:
        if fdef.default is None:
            continue
        if _is_empty(result.get(fdef.name)):
            result[fdef.name] = fdef.default_value()
    return result


def coerce_input(spec: ModuleSpec, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Convert values to their declared field types.

    Empty values are left alone (required checks are validate_input's job)
    and keys with no field definition pass through untouched.

    Raises:
        ValidationError: One or more values could not be converted
    """
    fields = spec.field_map
    result: Dict[str, Any] = {}
    invalid: List[str] = []
    problems: List[str] = []

    for name, raw in data.items():
        fdef = fields.get(name)
        if fdef is None or _is_empty(raw):
            result[name] = raw
            continue
        try:
            result[name] = _coerce_field(fdef, raw)
        except (TypeError, ValueError) as exc:
            invalid.append(name)
            problems.append(f"{fdef.label}: {exc}")

    if invalid:
        raise ValidationError("Invalid input - " + "; ".join(problems), invalid=invalid)
    return result


def validate_input(
    spec: ModuleSpec, data: Mapping[str, Any], partial: bool = False
) -> None:
    """
    Check required fields.

    Args:
        partial: Edit mode; only required fields present in ``data`` are
            checked, and they may not be blanked out

    Raises:
        ValidationError: Names every missing required field
    """
    missing = []
    for name in spec.required_fields:
        if partial and name not in data:
            continue
        if _is_empty(data.get(name)):
            missing.append(name)

    if missing:
        labels = ", ".join(spec.label_for(n) for n in missing)
        raise ValidationError(f"Missing required fields: {labels}", missing=missing)


def serialize_dates(spec: ModuleSpec, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Replace structured date values with YYYY-MM-DD strings."""
    return {k: format_date(v) for k, v in data.items()}


def prepare_input(
    spec: ModuleSpec, data: Mapping[str, Any], partial: bool = False
) -> Dict[str, Any]:
    """
    Full form pipeline: defaults (new records only), coercion, validation.

    Returns the cleaned dict ready for RecordStore.create / update.
    """
    if not partial:
        data = apply_defaults(spec, data)
    cleaned = coerce_input(spec, data)
    validate_input(spec, cleaned, partial=partial)
    return serialize_dates(spec, cleaned)
