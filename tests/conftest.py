"""
Shared test fixtures for qmsrec.

Provides an in-memory database with the storage schema, an in-memory
persistence adapter patched in for the configured backend, a CLI runner,
and record seed helpers.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import patch

import pytest

from qmsrec.core.db import SCHEMA_ORDER
from qmsrec.customer_service.specs import SATISFACTION_SURVEY
from qmsrec.records.store import RecordStore
from qmsrec.storage.memory import MemoryAdapter


@pytest.fixture
def memory_db():
    """Provide an in-memory SQLite database with every schema applied."""
    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON")
    conn.row_factory = sqlite3.Row

    package_dir = Path(__file__).parent.parent / "qmsrec"
    for module in SCHEMA_ORDER:
        schema_file = package_dir / module / "schema.sql"
        if schema_file.exists():
            conn.executescript(schema_file.read_text(encoding="utf-8"))

    yield conn
    conn.close()


@pytest.fixture
def mock_db(memory_db):
    """Patch get_db everywhere to return the in-memory database."""

    @contextmanager
    def _get_db(readonly=False, db_path=None):
        yield memory_db

    with patch("qmsrec.core.db.get_db", _get_db), \
         patch("qmsrec.core.get_db", _get_db), \
         patch("qmsrec.storage.sqlite.get_db", _get_db):
        yield memory_db


@pytest.fixture
def memory_adapter():
    """Empty in-memory persistence adapter."""
    return MemoryAdapter()


@pytest.fixture
def mock_adapter(memory_adapter):
    """Make get_adapter() hand out the in-memory adapter."""
    with patch("qmsrec.storage.get_adapter", lambda backend=None: memory_adapter):
        yield memory_adapter


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()


def survey_data(**overrides):
    """A complete satisfaction survey form."""
    data = {
        "surveyDate": "2024-03-15",
        "customerName": "Acme",
        "contactPhone": "555-0100",
        "surveyMethod": "phone",
        "satisfactionScore": 5,
        "serviceAttitude": 5,
        "serviceEfficiency": 4,
        "serviceQuality": 5,
        "overallEvaluation": "very satisfied",
        "surveyPerson": "Li",
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_survey():
    """Factory for complete survey input dicts."""
    return survey_data


@pytest.fixture
def survey_store(memory_adapter):
    """Loaded, empty satisfaction survey store on the in-memory adapter."""
    store = RecordStore(
        SATISFACTION_SURVEY,
        adapter=memory_adapter,
        page_size=10,
        reapply_filter=False,
        id_strategy="timestamp",
    )
    store.load()
    return store
