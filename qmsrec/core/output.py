"""
Output formatters for CLI display.

Supports human-readable, JSON, and markdown output modes for single
records and statistics, plus fixed-width tables for record lists.
"""

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple


class OutputFormat(str, Enum):
    HUMAN = "human"
    JSON = "json"
    MARKDOWN = "markdown"


def format_result(
    result: Any,
    fmt: OutputFormat = OutputFormat.HUMAN,
    title: Optional[str] = None,
    labels: Optional[Dict[str, str]] = None,
) -> str:
    """Format a result object (record dict, stats dict, dataclass) for display."""
    if fmt == OutputFormat.JSON:
        return _format_json(result)
    elif fmt == OutputFormat.MARKDOWN:
        return _format_markdown(result, title, labels)
    else:
        return _format_human(result, title, labels)


def _to_dict(result: Any) -> Dict:
    if is_dataclass(result):
        return asdict(result)
    elif isinstance(result, dict):
        return result
    elif hasattr(result, "__dict__"):
        return result.__dict__
    return {"value": str(result)}


def _label(key: str, labels: Optional[Dict[str, str]]) -> str:
    if labels and key in labels:
        return labels[key]
    return key.replace("_", " ").title()


def _format_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, float):
        return f"{value:.1f}" if abs(value) < 100 else f"{value:,.1f}"
    return str(value)


def _format_json(result: Any) -> str:
    return json.dumps(_to_dict(result), indent=2, default=str, ensure_ascii=False)


def _format_human(
    result: Any, title: Optional[str] = None, labels: Optional[Dict[str, str]] = None
) -> str:
    lines = []
    if title:
        lines.extend([title, "=" * len(title), ""])

    data = _to_dict(result)
    names = [_label(k, labels) for k in data.keys()]
    width = max(len(n) for n in names) if names else 0

    for name, value in zip(names, data.values()):
        if isinstance(value, list):
            formatted = "\n".join(f"  - {v}" for v in value) if value else "(none)"
            if value:
                formatted = "\n" + formatted
        else:
            formatted = _format_value(value)
        lines.append(f"{name:<{width + 2}}: {formatted}")

    return "\n".join(lines)


def _format_markdown(
    result: Any, title: Optional[str] = None, labels: Optional[Dict[str, str]] = None
) -> str:
    lines = []
    if title:
        lines.extend([f"# {title}", ""])

    data = _to_dict(result)
    lines.extend(["| Field | Value |", "|-------|-------|"])

    for key, value in data.items():
        if isinstance(value, list):
            formatted = ", ".join(str(v) for v in value) if value else "-"
        else:
            formatted = _format_value(value)
        lines.append(f"| {_label(key, labels)} | {formatted} |")

    return "\n".join(lines)


def format_table(
    rows: Sequence[Dict[str, Any]],
    columns: Sequence[Tuple[str, str]],
    max_width: int = 30,
) -> str:
    """
    Render rows as a fixed-width text table.

    Args:
        rows: Record dicts
        columns: (field name, header) pairs, in display order
        max_width: Cells longer than this are truncated with '...'
    """
    def cell(value: Any) -> str:
        text = _format_value(value) if value != "" else "-"
        text = text.replace("\n", " ")
        if len(text) > max_width:
            text = text[: max_width - 3] + "..."
        return text

    body: List[List[str]] = [[cell(r.get(name)) for name, _ in columns] for r in rows]
    widths = [
        max([len(header)] + [len(line[i]) for line in body])
        for i, (_, header) in enumerate(columns)
    ]

    header_line = "  ".join(h.ljust(w) for (_, h), w in zip(columns, widths))
    lines = [header_line, "-" * len(header_line)]
    for line in body:
        lines.append("  ".join(c.ljust(w) for c, w in zip(line, widths)).rstrip())
    return "\n".join(lines)
