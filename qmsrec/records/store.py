"""
Generic record store.

One RecordStore instance owns one module's record collection:

    all      authoritative collection, most recent first
    view     result of the last search (or all records after reset)
    page     current page of the view

Every mutation computes the new collection, saves it through the
persistence adapter, and only then swaps it into memory. A failed save
raises PersistenceError and leaves the store exactly as it was.
"""

import threading
import time
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from qmsrec.core.logging import get_logger
from qmsrec.records.errors import PersistenceError, RecordNotFoundError
from qmsrec.records.filters import filter_records, keyword_filter
from qmsrec.records.forms import serialize_dates
from qmsrec.records.specs import ModuleSpec
from qmsrec.records.stats import compute_stats
from qmsrec.storage.base import PersistenceAdapter, decode_collection

logger = get_logger("qmsrec.records.store")

ID_STRATEGIES = ("timestamp", "uuid")

Record = Dict[str, Any]


@dataclass
class Page:
    index: int = 1
    size: int = 10


def _setting(*keys: str, default: Any) -> Any:
    from qmsrec.core.config import get_config_value

    try:
        return get_config_value(*keys, default=default)
    except FileNotFoundError:
        return default


class RecordStore:
    """
    Controller for one module's records.

    Args:
        spec: Module descriptor (storage key, fields, search matchers)
        adapter: Persistence adapter; defaults to the configured backend
        page_size: Rows per page (default: records.page_size)
        reapply_filter: After a mutation, re-run the last search instead of
            clearing it (default: records.reapply_filter_on_change)
        id_strategy: "timestamp" or "uuid" (default: records.id_strategy)
    """

    def __init__(
        self,
        spec: ModuleSpec,
        adapter: Optional[PersistenceAdapter] = None,
        page_size: Optional[int] = None,
        reapply_filter: Optional[bool] = None,
        id_strategy: Optional[str] = None,
    ):
        if adapter is None:
            from qmsrec.storage import get_adapter

            adapter = get_adapter()

        if page_size is None:
            page_size = int(_setting("records", "page_size", default=10))
        if reapply_filter is None:
            reapply_filter = bool(
                _setting("records", "reapply_filter_on_change", default=False)
            )
        if id_strategy is None:
            id_strategy = _setting("records", "id_strategy", default="timestamp")
        if id_strategy not in ID_STRATEGIES:
            raise ValueError(
                f"Unknown id strategy '{id_strategy}'. Valid: {', '.join(ID_STRATEGIES)}"
            )
        if page_size < 1:
            raise ValueError("page_size must be at least 1")

        self.spec = spec
        self.adapter = adapter
        self.reapply_filter = reapply_filter
        self.id_strategy = id_strategy

        self.all: List[Record] = []
        self.view: List[Record] = []
        self.page = Page(1, page_size)

        self._criteria: Dict[str, Any] = {}
        self._selection: List[str] = []
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<RecordStore {self.key} all={len(self.all)} view={len(self.view)}>"

    @property
    def key(self) -> str:
        return self.spec.key

    @property
    def id_field(self) -> str:
        return self.spec.id_field

    # -- loading and searching -------------------------------------------

    def load(self) -> List[Record]:
        """Fetch the stored collection. Failures yield an empty collection."""
        try:
            fetched = decode_collection(self.key, self.adapter.load_data(self.key))
        except Exception as exc:
            logger.warning("Load of '%s' failed, starting empty: %s", self.key, exc)
            fetched = []

        self.all = fetched
        self.view = list(fetched)
        self._criteria = {}
        self._selection = []
        self.page.index = 1
        logger.debug("Loaded %d records for '%s'", len(fetched), self.key)
        return list(self.all)

    def search(self, criteria: Optional[Mapping[str, Any]] = None) -> List[Record]:
        """Filter ``all`` into ``view``. Never touches ``all`` or storage."""
        self._criteria = dict(criteria or {})
        self.view = filter_records(self.all, self._criteria, self.spec.matchers)
        self.page.index = 1
        return list(self.view)

    def reset(self) -> List[Record]:
        self._criteria = {}
        self.view = list(self.all)
        self.page.index = 1
        return list(self.view)

    @property
    def criteria(self) -> Dict[str, Any]:
        """Criteria of the last search still in effect ({} after reset)."""
        return dict(self._criteria)

    # -- paging ----------------------------------------------------------

    def paginate(self, index: int, size: Optional[int] = None) -> List[Record]:
        """
        Move to page ``index`` (1-based) and return its slice.

        An index outside the view (past the end, zero or negative) gives an
        empty slice, not an error.
        """
        size = self.page.size if size is None else size
        if size < 1:
            raise ValueError("page size must be at least 1")
        self.page = Page(index, size)
        return self.visible

    @property
    def visible(self) -> List[Record]:
        if self.page.index < 1:
            return []
        start = (self.page.index - 1) * self.page.size
        return self.view[start:start + self.page.size]

    @property
    def total(self) -> int:
        return len(self.view)

    @property
    def page_count(self) -> int:
        return max(1, -(-self.total // self.page.size))

    # -- lookups ---------------------------------------------------------

    def _index_of(self, record_id: Any) -> int:
        wanted = str(record_id)
        for i, record in enumerate(self.all):
            if str(record.get(self.id_field)) == wanted:
                return i
        raise RecordNotFoundError(self.key, wanted)

    def get(self, record_id: Any) -> Record:
        return dict(self.all[self._index_of(record_id)])

    # -- selection -------------------------------------------------------

    def select(self, ids: Iterable[Any]) -> List[str]:
        """Mark records for a batch delete; unknown ids are ignored."""
        present = {str(r.get(self.id_field)) for r in self.all}
        self._selection = [i for i in dict.fromkeys(str(i) for i in ids) if i in present]
        return list(self._selection)

    @property
    def selection(self) -> List[str]:
        return list(self._selection)

    def clear_selection(self) -> None:
        self._selection = []

    # -- mutations -------------------------------------------------------

    def _new_id(self) -> str:
        if self.id_strategy == "uuid":
            return uuid.uuid4().hex

        token = int(time.time() * 1000)
        numeric = [
            int(r[self.id_field]) for r in self.all
            if str(r.get(self.id_field, "")).isdigit()
        ]
        if numeric and token <= max(numeric):
            token = max(numeric) + 1
        return str(token)

    def _commit(self, records: List[Record]) -> None:
        """Persist ``records`` and make them the authoritative collection."""
        try:
            self.adapter.save_data(self.key, records)
        except PersistenceError:
            logger.error("Save of '%s' failed; in-memory state unchanged", self.key)
            raise
        except Exception as exc:
            logger.error("Save of '%s' failed; in-memory state unchanged", self.key)
            raise PersistenceError(f"Failed to save '{self.key}': {exc}") from exc

        self.all = records
        self._rederive()

    def _rederive(self) -> None:
        if self.reapply_filter and self._criteria:
            self.view = filter_records(self.all, self._criteria, self.spec.matchers)
        else:
            self._criteria = {}
            self.view = list(self.all)

    def create(self, data: Mapping[str, Any]) -> Record:
        """
        Add a record with a fresh id, newest first.

        ``data`` is expected to be validated already; date values are
        serialized to YYYY-MM-DD and any incoming id is replaced.
        """
        with self._lock:
            record = serialize_dates(self.spec, data)
            record.pop(self.id_field, None)
            record[self.id_field] = self._new_id()

            self._commit([record] + self.all)

        logger.info("Created %s record %s", self.key, record[self.id_field])
        return dict(record)

    def update(self, record_id: Any, patch: Mapping[str, Any]) -> Record:
        """
        Merge ``patch`` over an existing record, keeping its id.

        Raises:
            RecordNotFoundError: No record with ``record_id``
        """
        with self._lock:
            idx = self._index_of(record_id)
            existing = self.all[idx]

            merged = dict(existing)
            merged.update(serialize_dates(self.spec, patch))
            merged[self.id_field] = existing[self.id_field]

            records = list(self.all)
            records[idx] = merged
            self._commit(records)

        logger.info("Updated %s record %s", self.key, merged[self.id_field])
        return dict(merged)

    def delete(self, record_id: Any) -> Record:
        """
        Remove one record.

        Raises:
            RecordNotFoundError: No record with ``record_id``
        """
        with self._lock:
            idx = self._index_of(record_id)
            removed = self.all[idx]
            self._commit(self.all[:idx] + self.all[idx + 1:])
            self._selection = []

        logger.info("Deleted %s record %s", self.key, removed[self.id_field])
        return dict(removed)

    def delete_many(self, ids: Optional[Iterable[Any]] = None) -> int:
        """
        Remove every record whose id is in ``ids`` (default: the selection).

        Ids that are not present are skipped. Returns the number removed.
        """
        wanted = {str(i) for i in (self._selection if ids is None else ids)}

        with self._lock:
            records = [r for r in self.all if str(r.get(self.id_field)) not in wanted]
            removed = len(self.all) - len(records)
            if removed:
                self._commit(records)
            self._selection = []

        logger.info("Deleted %d %s records", removed, self.key)
        return removed

    # -- reporting -------------------------------------------------------

    def stats(self, today: Optional[Union[date, str]] = None) -> Dict[str, Any]:
        """Module statistics over the whole collection, not the view."""
        return compute_stats(self.spec, self.all, today)

    def keyword_search(self, keyword: str) -> List[Record]:
        """Case-insensitive match of ``keyword`` on the module's keyword fields."""
        fields = self.spec.keyword_fields or [
            s.name for s in self.spec.search_fields if s.kind == "input"
        ]
        return keyword_filter(self.all, keyword, fields)
