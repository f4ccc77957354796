"""
Record module descriptors.

Each record type (survey, complaint, audit plan, ...) is described by a
ModuleSpec: its storage key, its form fields, which fields take part in
searches and how, the list columns, and the summary statistics.
The generic RecordStore, the filter builder, the exporter and the CLI
are all driven by these descriptors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

# Field types understood by qmsrec.records.forms
FIELD_TYPES = ("text", "select", "date", "int", "rating")

# Search criterion kinds and the match mode each one implies
SEARCH_KINDS = {
    "input": "contains",
    "select": "exact",
    "dateRange": "date_range",
}

STAT_KINDS = ("count", "count_where", "count_today", "count_month", "average")


def today_str() -> str:
    return date.today().isoformat()


def current_year() -> str:
    return str(date.today().year)


@dataclass
class FieldDef:
    """A single form field of a record type."""

    name: str                          # Data key, e.g. "customerName"
    label: str                         # Human-readable label
    type: str = "text"                 # text | select | date | int | rating
    required: bool = False
    options: List[str] = field(default_factory=list)   # select values
    default: Any = None                # value or zero-arg callable

    def __post_init__(self):
        if self.type not in FIELD_TYPES:
            raise ValueError(f"Unknown field type '{self.type}' for {self.name}")

    def default_value(self) -> Any:
        return self.default() if callable(self.default) else self.default


@dataclass
class SearchField:
    """A search criterion offered on a record list."""

    name: str
    label: str
    kind: str = "input"                # input | select | dateRange
    options: List[str] = field(default_factory=list)
    placeholder: Optional[str] = None
    match: Optional[str] = None        # contains | exact | date_range

    def __post_init__(self):
        if self.kind not in SEARCH_KINDS:
            raise ValueError(f"Unknown search kind '{self.kind}' for {self.name}")
        if self.match is None:
            self.match = SEARCH_KINDS[self.kind]


@dataclass
class StatDef:
    """A summary statistic shown above a record list."""

    label: str
    kind: str = "count"                # count | count_where | count_today | count_month | average
    field: Optional[str] = None
    values: Tuple[Any, ...] = ()
    precision: int = 1

    def __post_init__(self):
        if self.kind not in STAT_KINDS:
            raise ValueError(f"Unknown stat kind '{self.kind}' ({self.label})")
        if self.kind != "count" and not self.field:
            raise ValueError(f"Stat '{self.label}' needs a field")


@dataclass
class ModuleSpec:
    """Parameterization of the generic record store for one record type."""

    key: str                           # Storage key, e.g. "complaint_record"
    label: str                         # e.g. "Complaint Records"
    command: str                       # CLI command name, e.g. "complaints"
    group: str                         # Owning package, e.g. "customer_service"
    fields: List[FieldDef] = field(default_factory=list)
    search_fields: List[SearchField] = field(default_factory=list)
    list_columns: List[str] = field(default_factory=list)
    stats: List[StatDef] = field(default_factory=list)
    keyword_fields: List[str] = field(default_factory=list)
    export_columns: List[str] = field(default_factory=list)
    title_field: Optional[str] = None
    id_field: str = "id"

    @property
    def field_map(self) -> Dict[str, FieldDef]:
        return {f.name: f for f in self.fields}

    @property
    def required_fields(self) -> List[str]:
        return [f.name for f in self.fields if f.required]

    @property
    def date_fields(self) -> List[str]:
        return [f.name for f in self.fields if f.type == "date"]

    @property
    def matchers(self) -> Dict[str, str]:
        """Search field name -> match mode."""
        return {s.name: s.match for s in self.search_fields}

    def label_for(self, name: str) -> str:
        if name == self.id_field:
            return "ID"
        f = self.field_map.get(name)
        return f.label if f else name

    @property
    def labels(self) -> Dict[str, str]:
        labels = {f.name: f.label for f in self.fields}
        labels[self.id_field] = "ID"
        return labels

    def columns(self, names: Sequence[str] = ()) -> List[Tuple[str, str]]:
        """(field, header) pairs for table display; defaults to list_columns."""
        names = list(names) or self.list_columns or [f.name for f in self.fields]
        return [(n, self.label_for(n)) for n in names]

    @property
    def export_fields(self) -> List[str]:
        return self.export_columns or [f.name for f in self.fields]
