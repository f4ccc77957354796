"""
Generic CLI commands for a record module.

build_module_app(spec) returns a Typer app with the same commands for
every record type:

    list     [--filter field=value ...] [--page N] [--page-size N]
    show     ID [--format human|json|markdown]
    add      --set field=value ...
    edit     ID --set field=value ...
    delete   ID ... [--yes]
    stats    [--format ...]
    find     KEYWORD
    export   [--output DIR]

Date-range filters take ``start..end``; a range missing either end is ignored.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from qmsrec.core.output import OutputFormat, format_result, format_table
from qmsrec.records.errors import RecordError, RecordNotFoundError
from qmsrec.records.filters import DATE_RANGE
from qmsrec.records.specs import ModuleSpec


def parse_pairs(pairs: Optional[List[str]], option: str) -> Dict[str, str]:
    """Parse ``field=value`` arguments into a dict."""
    result: Dict[str, str] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise typer.BadParameter(f"expected field=value, got '{pair}'", param_hint=option)
        result[name.strip()] = value.strip()
    return result


def parse_criteria(spec: ModuleSpec, pairs: Optional[List[str]]) -> Dict[str, Any]:
    """Turn ``--filter`` arguments into search criteria for ``spec``."""
    raw = parse_pairs(pairs, "--filter")
    matchers = spec.matchers
    criteria: Dict[str, Any] = {}

    for name, value in raw.items():
        if name not in matchers:
            typer.echo(
                f"Ignoring filter on '{name}' (searchable: {', '.join(matchers)})",
                err=True,
            )
            continue
        if matchers[name] == DATE_RANGE:
            start, _, end = value.partition("..")
            criteria[name] = [start.strip() or None, end.strip() or None]
        else:
            criteria[name] = value
    return criteria


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _open(spec: ModuleSpec):
    from qmsrec.records.registry import open_store

    return open_store(spec.key)


def build_module_app(spec: ModuleSpec) -> typer.Typer:
    """Build the list/show/add/edit/delete/stats/find/export commands for ``spec``."""
    app = typer.Typer(no_args_is_help=True, help=spec.label)
    columns = spec.columns()

    @app.command("list")
    def list_records(
        filters: Optional[List[str]] = typer.Option(
            None, "--filter", "-f", help="field=value; date ranges as start..end"
        ),
        page: int = typer.Option(1, "--page", "-p", min=1, help="Page number"),
        page_size: Optional[int] = typer.Option(None, "--page-size", min=1, help="Rows per page"),
    ):
        """List records, newest first."""
        store = _open(spec)
        criteria = parse_criteria(spec, filters)
        if criteria:
            store.search(criteria)
        rows = store.paginate(page, page_size)

        if not store.total:
            typer.echo(f"No {spec.label} records found.")
            raise typer.Exit()

        if rows:
            typer.echo(format_table(rows, columns))
        else:
            typer.echo(f"Page {page} is empty.")
        typer.echo(f"\nPage {store.page.index}/{store.page_count}  ({store.total} records)")

    @app.command("show")
    def show_record(
        record_id: str = typer.Argument(..., help="Record ID"),
        fmt: OutputFormat = typer.Option(OutputFormat.HUMAN, "--format", "-F"),
    ):
        """Show one record in full."""
        store = _open(spec)
        try:
            record = store.get(record_id)
        except RecordNotFoundError as exc:
            _fail(str(exc))

        title = record.get(spec.title_field) if spec.title_field else None
        typer.echo(format_result(record, fmt, title=title or spec.label, labels=spec.labels))

    @app.command("add")
    def add_record(
        values: Optional[List[str]] = typer.Option(None, "--set", "-s", help="field=value"),
    ):
        """Add a record."""
        from qmsrec.records.forms import prepare_input

        store = _open(spec)
        try:
            record = store.create(prepare_input(spec, parse_pairs(values, "--set")))
        except RecordError as exc:
            _fail(str(exc))

        typer.echo(f"Added {spec.label} record {record[spec.id_field]}.")

    @app.command("edit")
    def edit_record(
        record_id: str = typer.Argument(..., help="Record ID"),
        values: Optional[List[str]] = typer.Option(None, "--set", "-s", help="field=value"),
    ):
        """Update fields of a record."""
        from qmsrec.records.forms import prepare_input

        patch = parse_pairs(values, "--set")
        if not patch:
            _fail("nothing to change; pass --set field=value")

        store = _open(spec)
        try:
            store.update(record_id, prepare_input(spec, patch, partial=True))
        except RecordError as exc:
            _fail(str(exc))

        typer.echo(f"Updated {spec.label} record {record_id}.")

    @app.command("delete")
    def delete_records(
        record_ids: List[str] = typer.Argument(..., help="One or more record IDs"),
        yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    ):
        """Delete one or more records."""
        store = _open(spec)
        selected = store.select(record_ids)
        unknown = [i for i in record_ids if i not in selected]

        if not selected:
            _fail(f"no matching {spec.label} records: {', '.join(record_ids)}")
        if unknown:
            typer.echo(f"Skipping unknown IDs: {', '.join(unknown)}", err=True)

        if not yes:
            typer.confirm(f"Delete {len(selected)} {spec.label} record(s)?", abort=True)

        try:
            if len(selected) == 1:
                store.delete(selected[0])
                removed = 1
            else:
                removed = store.delete_many()
        except RecordError as exc:
            _fail(str(exc))

        typer.echo(f"Deleted {removed} {spec.label} record(s).")

    @app.command("stats")
    def show_stats(
        fmt: OutputFormat = typer.Option(OutputFormat.HUMAN, "--format", "-F"),
    ):
        """Summary statistics over all records."""
        store = _open(spec)
        typer.echo(format_result(store.stats(), fmt, title=f"{spec.label} Statistics"))

    @app.command("find")
    def find_records(keyword: str = typer.Argument(..., help="Text to look for")):
        """Case-insensitive keyword search."""
        store = _open(spec)
        rows = store.keyword_search(keyword)

        if not rows:
            typer.echo(f"No {spec.label} records match '{keyword}'.")
            raise typer.Exit()

        typer.echo(format_table(rows, columns))
        typer.echo(f"\n{len(rows)} match(es)")

    @app.command("export")
    def export_records(
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory"),
    ):
        """Export all records to CSV."""
        from qmsrec.core.config import RECORD_PATHS
        from qmsrec.records.export import export_csv

        store = _open(spec)
        if not store.all:
            typer.echo(f"No {spec.label} records to export.")
            raise typer.Exit()

        path = export_csv(spec, store.all, output or RECORD_PATHS.exports)
        typer.echo(f"Exported {len(store.all)} records to {path}")

    return app


def build_group_app(group: str, help_text: Optional[str] = None) -> typer.Typer:
    """One Typer app mounting a sub-app for every module registered under ``group``."""
    from qmsrec.records.registry import all_modules

    app = typer.Typer(no_args_is_help=True, help=help_text)
    for spec in all_modules(group):
        app.add_typer(build_module_app(spec), name=spec.command, help=spec.label)
    return app
