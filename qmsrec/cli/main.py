"""
QMSREC CLI - Main Entry Point

Unified Typer CLI that assembles every record group's sub-commands.

Usage:
    qmsrec version
    qmsrec migrate
    qmsrec modules
    qmsrec export-all
    qmsrec clear
    qmsrec service [surveys|complaints] [command]
    qmsrec equipment [maintenance|environment] [command]
    qmsrec quality [contracts] [command]
    qmsrec audit [plans|implementations|checklists|nonconformities|rectifications|reports|overview|query]
    qmsrec review [plans|implementations|inputs|meetings|reports] [command]
"""

import importlib
from pathlib import Path
from typing import Optional

import typer

import qmsrec

app = typer.Typer(
    name="qmsrec",
    help="Quality management records: surveys, equipment, audits and reviews.",
    no_args_is_help=True,
)


@app.command()
def version():
    """Show qmsrec version."""
    typer.echo(f"qmsrec {qmsrec.__version__}")


@app.command()
def migrate():
    """Create the SQLite storage tables."""
    from qmsrec.core.db import migrate_all

    migrate_all()
    typer.echo("Database migration complete.")


@app.command("modules")
def list_modules():
    """List record modules with their record counts."""
    from qmsrec.records.registry import load_modules
    from qmsrec.storage import SqliteAdapter, get_adapter

    adapter = get_adapter()
    specs = load_modules()

    # Only the SQLite backend records save times
    saved = {}
    if isinstance(adapter, SqliteAdapter):
        saved = {row["module_key"]: row["updated_at"] for row in adapter.summary()}

    typer.echo(
        f"{'Group':<18} {'Command':<16} {'Key':<32} {'Last Saved':<19} {'Records':>7}"
    )
    typer.echo("-" * 96)
    for spec in specs:
        count = len(adapter.load_data(spec.key))
        last = saved.get(spec.key) or "-"
        typer.echo(
            f"{spec.group:<18} {spec.command:<16} {spec.key:<32} {last:<19} {count:>7}"
        )


@app.command("export-all")
def export_all(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output directory"),
):
    """Export every non-empty module to CSV."""
    from qmsrec.core.config import RECORD_PATHS
    from qmsrec.records.export import export_modules
    from qmsrec.records.registry import load_modules, open_store
    from qmsrec.storage import get_adapter

    adapter = get_adapter()
    stores = [open_store(spec.key, adapter=adapter) for spec in load_modules()]
    paths = export_modules(stores, output or RECORD_PATHS.exports)

    if not paths:
        typer.echo("No records to export.")
        raise typer.Exit()

    for path in paths:
        typer.echo(f"  {path}")
    typer.echo(f"Exported {len(paths)} module(s).")


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """Delete ALL records of every module."""
    from qmsrec.records.errors import PersistenceError
    from qmsrec.records.registry import load_modules
    from qmsrec.storage import get_adapter

    keys = [spec.key for spec in load_modules()]
    if not yes:
        typer.confirm(f"Delete all records in {len(keys)} modules?", abort=True)

    try:
        get_adapter().clear_all(keys)
    except PersistenceError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Cleared {len(keys)} modules.")


def _register_modules():
    """Register group CLI sub-apps."""
    from qmsrec.records.registry import GROUP_PACKAGES

    for package, name, help_text in GROUP_PACKAGES:
        mod = importlib.import_module(f"{package}.cli")
        app.add_typer(mod.app, name=name, help=help_text)


_register_modules()


def main():
    """Entry point for the qmsrec CLI."""
    app()


if __name__ == "__main__":
    main()
