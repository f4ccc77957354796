"""Tests for the generic record store."""

from datetime import date
from unittest.mock import patch

import pytest

from qmsrec.customer_service.specs import SATISFACTION_SURVEY
from qmsrec.records.errors import PersistenceError, RecordNotFoundError, ValidationError
from qmsrec.records.forms import prepare_input
from qmsrec.records.store import RecordStore
from qmsrec.storage.memory import MemoryAdapter

KEY = SATISFACTION_SURVEY.key


def seed(store, make_survey, count):
    """Create ``count`` surveys named C0..C{count-1}; returns them newest first."""
    for i in range(count):
        store.create(make_survey(customerName=f"C{i}"))
    return list(store.all)


class TestLoad:
    def test_empty(self, survey_store):
        assert survey_store.all == []
        assert survey_store.view == []
        assert survey_store.page.index == 1

    def test_reads_adapter(self, make_survey):
        adapter = MemoryAdapter({KEY: [dict(make_survey(), id="1")]})
        store = RecordStore(SATISFACTION_SURVEY, adapter=adapter)
        assert len(store.load()) == 1
        assert store.view == store.all

    def test_idempotent(self, survey_store, make_survey):
        seed(survey_store, make_survey, 3)
        first = survey_store.load()
        second = survey_store.load()
        assert first == second
        assert survey_store.view == survey_store.all

    def test_resets_search_and_page(self, survey_store, make_survey):
        seed(survey_store, make_survey, 12)
        survey_store.search({"customerName": "C1"})
        survey_store.paginate(2)
        survey_store.load()
        assert survey_store.criteria == {}
        assert survey_store.page.index == 1
        assert len(survey_store.view) == 12

    def test_adapter_failure_is_empty(self):
        adapter = MemoryAdapter()
        with patch.object(adapter, "load_data", side_effect=OSError("disk gone")):
            store = RecordStore(SATISFACTION_SURVEY, adapter=adapter)
            assert store.load() == []

    def test_malformed_entries_dropped(self):
        adapter = MemoryAdapter({KEY: [{"id": "1"}, "junk", 42]})
        store = RecordStore(SATISFACTION_SURVEY, adapter=adapter)
        assert store.load() == [{"id": "1"}]


class TestSearch:
    def test_identity_filter(self, survey_store, make_survey):
        seed(survey_store, make_survey, 4)
        assert survey_store.search({}) == survey_store.all
        assert survey_store.search({"customerName": "", "surveyMethod": None}) == survey_store.all

    def test_search_does_not_touch_all_or_storage(self, survey_store, make_survey, memory_adapter):
        seed(survey_store, make_survey, 4)
        saves = memory_adapter.save_count
        survey_store.search({"customerName": "C2"})
        assert len(survey_store.view) == 1
        assert len(survey_store.all) == 4
        assert memory_adapter.save_count == saves

    def test_search_resets_page(self, survey_store, make_survey):
        seed(survey_store, make_survey, 15)
        survey_store.paginate(2)
        survey_store.search({"surveyMethod": "phone"})
        assert survey_store.page.index == 1

    def test_criteria_tracked(self, survey_store):
        survey_store.search({"customerName": "Acme"})
        assert survey_store.criteria == {"customerName": "Acme"}
        survey_store.reset()
        assert survey_store.criteria == {}

    def test_end_to_end(self, survey_store, make_survey):
        assert survey_store.all == []
        survey_store.create(make_survey(customerName="Acme", satisfactionScore=5))
        assert len(survey_store.search({"customerName": "Acme"})) == 1
        assert len(survey_store.search({"customerName": "Nope"})) == 0
        assert len(survey_store.reset()) == 1


class TestCreate:
    def test_grows_by_one_and_keeps_fields(self, survey_store, make_survey):
        data = make_survey()
        record = survey_store.create(data)
        assert len(survey_store.all) == 1
        stored = survey_store.all[0]
        assert {k: v for k, v in stored.items() if k != "id"} == data
        assert record == stored

    def test_persisted_and_reloadable(self, survey_store, make_survey, memory_adapter):
        record = survey_store.create(make_survey())
        fresh = RecordStore(SATISFACTION_SURVEY, adapter=memory_adapter)
        assert record in fresh.load()

    def test_prepends_newest(self, survey_store, make_survey):
        first = survey_store.create(make_survey(customerName="first"))
        second = survey_store.create(make_survey(customerName="second"))
        assert [r["id"] for r in survey_store.all] == [second["id"], first["id"]]

    def test_ids_unique_and_increasing(self, survey_store, make_survey):
        with patch("qmsrec.records.store.time.time", return_value=1700000000.0):
            records = [survey_store.create(make_survey()) for _ in range(3)]
        ids = [int(r["id"]) for r in records]
        assert ids == sorted(ids)
        assert len(set(ids)) == 3
        assert ids[0] == 1700000000000

    def test_incoming_id_replaced(self, survey_store, make_survey):
        record = survey_store.create(make_survey(id="hijack"))
        assert record["id"] != "hijack"

    def test_uuid_strategy(self, memory_adapter, make_survey):
        store = RecordStore(SATISFACTION_SURVEY, adapter=memory_adapter, id_strategy="uuid")
        record = store.create(make_survey())
        assert len(record["id"]) == 32

    def test_unknown_strategy(self, memory_adapter):
        with pytest.raises(ValueError, match="id strategy"):
            RecordStore(SATISFACTION_SURVEY, adapter=memory_adapter, id_strategy="serial")

    def test_dates_serialized(self, survey_store, make_survey):
        record = survey_store.create(make_survey(surveyDate=date(2024, 3, 5)))
        assert record["surveyDate"] == "2024-03-05"

    def test_does_not_mutate_input(self, survey_store, make_survey):
        data = make_survey()
        survey_store.create(data)
        assert "id" not in data


class TestUpdate:
    def test_merges_and_preserves(self, survey_store, make_survey):
        record = survey_store.create(make_survey(remark="first call"))
        updated = survey_store.update(record["id"], {"customerName": "Acme Ltd", "id": "x"})

        assert updated["id"] == record["id"]
        assert updated["customerName"] == "Acme Ltd"
        assert updated["remark"] == "first call"
        assert survey_store.get(record["id"]) == updated

    def test_position_unchanged(self, survey_store, make_survey):
        records = seed(survey_store, make_survey, 3)
        survey_store.update(records[1]["id"], {"remark": "x"})
        assert [r["id"] for r in survey_store.all] == [r["id"] for r in records]

    def test_persisted(self, survey_store, make_survey, memory_adapter):
        record = survey_store.create(make_survey())
        survey_store.update(record["id"], {"surveyPerson": "Wang"})
        assert memory_adapter.load_data(KEY)[0]["surveyPerson"] == "Wang"

    def test_missing_id_raises(self, survey_store, make_survey, memory_adapter):
        seed(survey_store, make_survey, 2)
        saves = memory_adapter.save_count
        with pytest.raises(RecordNotFoundError) as exc:
            survey_store.update("nope", {"remark": "x"})
        assert exc.value.record_id == "nope"
        assert memory_adapter.save_count == saves

    def test_not_found_is_key_error(self, survey_store):
        with pytest.raises(KeyError):
            survey_store.get("nope")


class TestDelete:
    def test_removes_exactly_one(self, survey_store, make_survey, memory_adapter):
        records = seed(survey_store, make_survey, 3)
        removed = survey_store.delete(records[1]["id"])

        assert removed == records[1]
        assert survey_store.all == [records[0], records[2]]
        assert records[1]["id"] not in {r["id"] for r in memory_adapter.load_data(KEY)}

    def test_missing_id_raises(self, survey_store):
        with pytest.raises(RecordNotFoundError):
            survey_store.delete("nope")

    def test_clears_selection(self, survey_store, make_survey):
        records = seed(survey_store, make_survey, 3)
        survey_store.select([records[0]["id"], records[2]["id"]])
        survey_store.delete(records[1]["id"])
        assert survey_store.selection == []

    def test_delete_many_any_order(self, survey_store, make_survey):
        records = seed(survey_store, make_survey, 5)
        wanted = [records[4]["id"], records[0]["id"], records[2]["id"]]
        assert survey_store.delete_many(wanted) == 3
        assert survey_store.all == [records[1], records[3]]

    def test_delete_many_uses_selection(self, survey_store, make_survey):
        records = seed(survey_store, make_survey, 3)
        survey_store.select([records[0]["id"], "ghost"])
        assert survey_store.selection == [records[0]["id"]]
        assert survey_store.delete_many() == 1
        assert survey_store.selection == []
        assert len(survey_store.all) == 2

    def test_delete_many_nothing_matching(self, survey_store, make_survey, memory_adapter):
        seed(survey_store, make_survey, 2)
        saves = memory_adapter.save_count
        assert survey_store.delete_many(["ghost"]) == 0
        assert memory_adapter.save_count == saves


class TestViewAfterMutation:
    def test_filter_cleared_by_default(self, survey_store, make_survey):
        seed(survey_store, make_survey, 3)
        survey_store.search({"customerName": "C1"})
        survey_store.create(make_survey(customerName="Z"))
        assert survey_store.criteria == {}
        assert survey_store.view == survey_store.all

    def test_filter_reapplied_when_enabled(self, memory_adapter, make_survey):
        store = RecordStore(SATISFACTION_SURVEY, adapter=memory_adapter, reapply_filter=True)
        store.load()
        seed(store, make_survey, 3)
        store.search({"customerName": "C1"})
        store.create(make_survey(customerName="C1 again"))
        assert store.criteria == {"customerName": "C1"}
        assert [r["customerName"] for r in store.view] == ["C1 again", "C1"]
        assert len(store.all) == 4


class TestPersistenceFailure:
    def _failing(self, store):
        return patch.object(store.adapter, "save_data", side_effect=OSError("disk full"))

    def test_create_rolls_back(self, survey_store, make_survey):
        seed(survey_store, make_survey, 2)
        before = list(survey_store.all)
        with self._failing(survey_store), pytest.raises(PersistenceError):
            survey_store.create(make_survey())
        assert survey_store.all == before
        assert survey_store.view == before

    def test_update_rolls_back(self, survey_store, make_survey):
        records = seed(survey_store, make_survey, 2)
        with self._failing(survey_store), pytest.raises(PersistenceError):
            survey_store.update(records[0]["id"], {"customerName": "changed"})
        assert survey_store.get(records[0]["id"])["customerName"] == records[0]["customerName"]

    def test_delete_rolls_back(self, survey_store, make_survey):
        records = seed(survey_store, make_survey, 2)
        with self._failing(survey_store), pytest.raises(PersistenceError):
            survey_store.delete(records[0]["id"])
        assert survey_store.all == records

    def test_adapter_persistence_error_passes_through(self, survey_store, make_survey):
        err = PersistenceError("boom")
        with patch.object(survey_store.adapter, "save_data", side_effect=err):
            with pytest.raises(PersistenceError) as exc:
                survey_store.create(make_survey())
        assert exc.value is err


class TestPagination:
    def test_second_page_of_fifteen(self, survey_store, make_survey):
        records = seed(survey_store, make_survey, 15)
        page = survey_store.paginate(2, 10)
        assert page == records[10:15]
        assert len(page) == 5

    def test_out_of_range_empty(self, survey_store, make_survey):
        seed(survey_store, make_survey, 15)
        assert survey_store.paginate(3, 10) == []

    def test_visible_follows_page(self, survey_store, make_survey):
        records = seed(survey_store, make_survey, 15)
        survey_store.paginate(1, 5)
        assert survey_store.visible == records[:5]
        assert survey_store.page_count == 3
        assert survey_store.total == 15

    def test_pages_the_filtered_view(self, survey_store, make_survey):
        seed(survey_store, make_survey, 15)
        survey_store.search({"customerName": "C1"})
        assert survey_store.total == 6  # C1, C10..C14
        assert len(survey_store.paginate(1, 4)) == 4
        assert len(survey_store.paginate(2, 4)) == 2

    def test_index_below_one_is_empty(self, survey_store, make_survey):
        seed(survey_store, make_survey, 15)
        assert survey_store.paginate(0, 10) == []
        assert survey_store.paginate(-1, 10) == []
        assert survey_store.visible == []
        assert survey_store.total == 15

    def test_invalid_size(self, survey_store):
        with pytest.raises(ValueError):
            survey_store.paginate(1, 0)


class TestStats:
    def test_over_all_records_not_view(self, survey_store, make_survey):
        survey_store.create(make_survey(overallEvaluation="dissatisfied", satisfactionScore=2))
        survey_store.create(make_survey(overallEvaluation="satisfied", satisfactionScore=4))
        survey_store.create(make_survey(overallEvaluation="very satisfied", satisfactionScore=5))
        survey_store.search({"customerName": "Nope"})

        stats = survey_store.stats()
        assert stats == {
            "Total Surveys": 3,
            "Satisfied": 2,
            "Dissatisfied": 1,
            "Average Score": 3.7,
        }


class TestKeywordSearch:
    def test_uses_input_search_fields_by_default(self, survey_store, make_survey):
        survey_store.create(make_survey(customerName="Acme"))
        survey_store.create(make_survey(customerName="Globex", surveyPerson="ACME liaison"))
        assert len(survey_store.keyword_search("acme")) == 2
        assert len(survey_store.keyword_search("globex")) == 1


class TestLegacyRecords:
    """Collections saved by the browser app carry Chinese option values."""

    LEGACY = {
        "id": "1700000000000", "surveyDate": "2023-11-14", "customerName": "Acme",
        "surveyMethod": "电话回访", "overallEvaluation": "满意", "surveyPerson": "Li",
    }

    @pytest.fixture
    def store(self):
        store = RecordStore(SATISFACTION_SURVEY, adapter=MemoryAdapter({KEY: [dict(self.LEGACY)]}))
        store.load()
        return store

    def test_loads_and_lists_unchanged(self, store):
        assert store.all == [self.LEGACY]
        assert store.paginate(1) == [self.LEGACY]

    def test_edit_other_fields_keeps_stored_values(self, store):
        patch_data = prepare_input(SATISFACTION_SURVEY, {"remark": "called back"}, partial=True)
        updated = store.update("1700000000000", patch_data)
        assert updated["surveyMethod"] == "电话回访"
        assert updated["remark"] == "called back"

    def test_select_edit_takes_english_token(self, store):
        with pytest.raises(ValidationError) as exc:
            prepare_input(SATISFACTION_SURVEY, {"surveyMethod": "电话回访"}, partial=True)
        assert exc.value.invalid == ["surveyMethod"]

        patch_data = prepare_input(SATISFACTION_SURVEY, {"surveyMethod": "phone"}, partial=True)
        assert store.update("1700000000000", patch_data)["surveyMethod"] == "phone"
