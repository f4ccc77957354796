"""Tests for the persistence adapters and the adapter factory."""

import json
from unittest.mock import patch

import pytest

from qmsrec.records.errors import PersistenceError
from qmsrec.storage import BACKENDS, get_adapter
from qmsrec.storage.base import decode_collection, encode_collection
from qmsrec.storage.json_file import JsonFileAdapter
from qmsrec.storage.memory import MemoryAdapter
from qmsrec.storage.sqlite import SqliteAdapter

RECORDS = [
    {"id": "2", "customerName": "Globex"},
    {"id": "1", "customerName": "Acme"},
]


class TestDecodeCollection:
    def test_none_is_empty(self):
        assert decode_collection("k", None) == []

    def test_json_text(self):
        assert decode_collection("k", json.dumps(RECORDS)) == RECORDS

    def test_invalid_json_is_empty(self):
        assert decode_collection("k", "{not json") == []

    def test_non_list_is_empty(self):
        assert decode_collection("k", {"id": "1"}) == []

    def test_drops_non_dict_entries(self):
        assert decode_collection("k", [{"id": "1"}, "junk", 3, None]) == [{"id": "1"}]

    def test_encode_keeps_unicode(self):
        assert "检测" in encode_collection([{"item": "检测"}])


class TestMemoryAdapter:
    def test_missing_key_is_empty(self):
        assert MemoryAdapter().load_data("nothing") == []

    def test_save_then_load(self):
        adapter = MemoryAdapter()
        adapter.save_data("k", RECORDS)
        assert adapter.load_data("k") == RECORDS
        assert adapter.save_count == 1

    def test_load_returns_copies(self):
        adapter = MemoryAdapter({"k": RECORDS})
        loaded = adapter.load_data("k")
        loaded[0]["customerName"] = "changed"
        assert adapter.load_data("k")[0]["customerName"] == "Globex"

    def test_clear_all(self):
        adapter = MemoryAdapter({"a": RECORDS, "b": RECORDS})
        adapter.clear_all(["a", "b"])
        assert adapter.load_data("a") == []
        assert adapter.load_data("b") == []


class TestJsonFileAdapter:
    def test_missing_file_is_empty(self, tmp_path):
        adapter = JsonFileAdapter(tmp_path / "records.json")
        assert adapter.load_data("k") == []

    def test_save_then_load(self, tmp_path):
        adapter = JsonFileAdapter(tmp_path / "records.json")
        adapter.save_data("k", RECORDS)
        assert adapter.load_data("k") == RECORDS
        assert JsonFileAdapter(tmp_path / "records.json").load_data("k") == RECORDS

    def test_keys_share_one_file(self, tmp_path):
        path = tmp_path / "records.json"
        adapter = JsonFileAdapter(path)
        adapter.save_data("a", RECORDS[:1])
        adapter.save_data("b", RECORDS[1:])

        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data) == {"a", "b"}
        assert adapter.load_data("a") == RECORDS[:1]

    def test_corrupt_file_is_empty(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text("{broken", encoding="utf-8")
        assert JsonFileAdapter(path).load_data("k") == []

    def test_save_over_corrupt_file(self, tmp_path):
        path = tmp_path / "records.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        adapter = JsonFileAdapter(path)
        adapter.save_data("k", RECORDS)
        assert adapter.load_data("k") == RECORDS

    def test_no_temp_files_left(self, tmp_path):
        adapter = JsonFileAdapter(tmp_path / "records.json")
        adapter.save_data("k", RECORDS)
        assert [p.name for p in tmp_path.iterdir()] == ["records.json"]

    def test_unserializable_raises_persistence_error(self, tmp_path):
        adapter = JsonFileAdapter(tmp_path / "records.json")
        circular = {"id": "1"}
        circular["self"] = circular
        with pytest.raises(PersistenceError):
            adapter.save_data("k", [circular])
        assert adapter.load_data("k") == []


class TestSqliteAdapter:
    def test_missing_key_is_empty(self, mock_db):
        assert SqliteAdapter().load_data("k") == []

    def test_save_then_load(self, mock_db):
        adapter = SqliteAdapter()
        adapter.save_data("k", RECORDS)
        assert adapter.load_data("k") == RECORDS

    def test_save_replaces_wholesale(self, mock_db):
        adapter = SqliteAdapter()
        adapter.save_data("k", RECORDS)
        adapter.save_data("k", RECORDS[:1])

        row = mock_db.execute(
            "SELECT record_count FROM module_records WHERE module_key = 'k'"
        ).fetchone()
        assert row["record_count"] == 1
        assert adapter.load_data("k") == RECORDS[:1]

    def test_malformed_row_is_empty(self, mock_db):
        mock_db.execute(
            "INSERT INTO module_records (module_key, data) VALUES ('k', 'not json')"
        )
        mock_db.commit()
        assert SqliteAdapter().load_data("k") == []

    def test_summary(self, mock_db):
        adapter = SqliteAdapter()
        adapter.save_data("b", RECORDS)
        adapter.save_data("a", [])
        summary = adapter.summary()
        assert [s["module_key"] for s in summary] == ["a", "b"]
        assert summary[1]["record_count"] == 2

    def test_real_file(self, tmp_path):
        adapter = SqliteAdapter(tmp_path / "records.db")
        adapter.save_data("k", RECORDS)
        assert SqliteAdapter(tmp_path / "records.db").load_data("k") == RECORDS


class TestGetAdapter:
    def test_named_backends(self, tmp_path):
        assert isinstance(get_adapter("memory"), MemoryAdapter)
        assert isinstance(get_adapter("sqlite"), SqliteAdapter)
        assert isinstance(get_adapter("JSON"), JsonFileAdapter)

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown storage backend"):
            get_adapter("redis")

    def test_configured_backend(self):
        with patch("qmsrec.core.config.get_config_value", return_value="memory"):
            assert isinstance(get_adapter(), MemoryAdapter)

    def test_backend_names_match_registry(self):
        for name, cls in BACKENDS.items():
            assert cls().backend_name == name
