"""
Internal audit CLI commands.

Usage:
    qmsrec audit overview
    qmsrec audit query nonconformity "Lab"
    qmsrec audit plans list --filter planYear=2024
    qmsrec audit nonconformities stats
"""

import typer

import qmsrec.internal_audit  # noqa: F401  registers the modules
from qmsrec.records.cli import build_group_app

app = build_group_app("internal_audit")


@app.command("overview")
def show_overview():
    """Counts of audit plans, nonconformities, checklists and reports."""
    from qmsrec.internal_audit.query import overview

    counts = overview()
    typer.echo("Internal Audit Overview")
    typer.echo("=" * 23)
    for name, count in counts.items():
        typer.echo(f"  {name.title():<17} {count}")


@app.command("query")
def run_query(
    tab: str = typer.Argument(..., help="plan | nonconformity | checklist | report"),
    keyword: str = typer.Argument("", help="Case-insensitive keyword"),
):
    """Keyword search across one audit record type."""
    from qmsrec.core.output import format_table
    from qmsrec.internal_audit.query import QUERY_TABS, query

    try:
        rows = query(tab, keyword)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    if not rows:
        typer.echo("No matching records.")
        raise typer.Exit()

    spec = QUERY_TABS[tab]
    typer.echo(format_table(rows, spec.columns()))
    typer.echo(f"\n{len(rows)} record(s)")
