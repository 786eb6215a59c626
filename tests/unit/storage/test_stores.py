"""
Unit tests for state stores and snapshot envelopes.

Tests coverage:
- InMemoryStore, JsonFileStore and SqlStateStore get/set/remove
- Atomic file writes and key sanitizing
- create_store backend selection
- wrap_snapshot / unwrap_snapshot validation
"""

from datetime import datetime, timezone

import pytest

from adaptive_highlighter.config import Settings
from adaptive_highlighter.errors import RecoverableStateError
from adaptive_highlighter.storage import (
    STATE_KEYS,
    InMemoryStore,
    JsonFileStore,
    SqlStateStore,
    create_store,
    unwrap_snapshot,
    wrap_snapshot,
)
from adaptive_highlighter.version import STATE_SCHEMA_VERSION

SAVED_AT = datetime(2026, 3, 1, tzinfo=timezone.utc)


@pytest.fixture(params=["memory", "file", "sql"])
def store(request, tmp_path):
    if request.param == "memory":
        backend = InMemoryStore()
    elif request.param == "file":
        backend = JsonFileStore(str(tmp_path / "state"))
    else:
        backend = SqlStateStore(url=f"sqlite:///{tmp_path / 'state.db'}")
    yield backend
    backend.close()


# ============================================================================
# Test Class: Store contract
# ============================================================================


@pytest.mark.unit
class TestKeyValueStore:
    """Contract shared by every backend."""

    def test_missing_key(self, store):
        assert store.get("corpus_stats") is None

    def test_set_and_get(self, store):
        value = {"total_documents": 2, "document_frequency": {"soft light": 1}}
        store.set("corpus_stats", value)

        assert store.get("corpus_stats") == value

    def test_overwrite(self, store):
        store.set("engine_options", {"max_highlights": 5})
        store.set("engine_options", {"max_highlights": 9})

        assert store.get("engine_options") == {"max_highlights": 9}

    def test_remove(self, store):
        store.set("interactions", {"records": []})
        store.remove("interactions")
        store.remove("interactions")

        assert store.get("interactions") is None

    def test_values_are_copies(self, store):
        value = {"records": []}
        store.set("interactions", value)
        value["records"].append("mutated")

        assert store.get("interactions") == {"records": []}

    def test_unicode(self, store):
        store.set("categorizer", {"seed": "café"})
        assert store.get("categorizer") == {"seed": "café"}


@pytest.mark.unit
class TestInMemoryStore:
    def test_keys(self):
        store = InMemoryStore()
        store.set("b", 1)
        store.set("a", 2)
        assert store.keys() == ["a", "b"]

    def test_corrupted_raw_value(self):
        store = InMemoryStore()
        store.set_raw("corpus_stats", "{not json")

        with pytest.raises(ValueError):
            store.get("corpus_stats")


@pytest.mark.unit
class TestJsonFileStore:
    def test_creates_directory(self, tmp_path):
        JsonFileStore(str(tmp_path / "nested" / "state"))
        assert (tmp_path / "nested" / "state").is_dir()

    def test_one_file_per_key(self, tmp_path):
        store = JsonFileStore(str(tmp_path))
        store.set("corpus_stats", {"total_documents": 1})

        assert store.path_for("corpus_stats").name == "corpus_stats.json"
        assert store.path_for("corpus_stats").exists()

    def test_no_temp_files_left(self, tmp_path):
        store = JsonFileStore(str(tmp_path))
        store.set("corpus_stats", {"total_documents": 1})

        assert [p.name for p in tmp_path.iterdir()] == ["corpus_stats.json"]

    def test_unsafe_key_sanitized(self, tmp_path):
        store = JsonFileStore(str(tmp_path))
        path = store.path_for("../escape/key")

        assert path.parent == tmp_path
        assert path.name == ".._escape_key.json"

    def test_corrupted_file(self, tmp_path):
        store = JsonFileStore(str(tmp_path))
        store.path_for("corpus_stats").write_text("{truncated", encoding="utf-8")

        with pytest.raises(ValueError):
            store.get("corpus_stats")

    def test_persists_across_instances(self, tmp_path):
        JsonFileStore(str(tmp_path)).set("engine_options", {"max_highlights": 3})
        assert JsonFileStore(str(tmp_path)).get("engine_options") == {"max_highlights": 3}


@pytest.mark.unit
class TestSqlStateStore:
    def test_persists_across_instances(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'state.db'}"
        first = SqlStateStore(url=url)
        first.set("engine_options", {"max_highlights": 3})
        first.close()

        second = SqlStateStore(url=url)
        assert second.get("engine_options") == {"max_highlights": 3}
        second.close()


@pytest.mark.unit
class TestCreateStore:
    def test_memory(self):
        assert isinstance(create_store(Settings(state_backend="memory")), InMemoryStore)

    def test_file(self, tmp_path):
        store = create_store(Settings(state_backend="file", state_dir=str(tmp_path)))
        assert isinstance(store, JsonFileStore)

    def test_sql(self, tmp_path):
        settings = Settings(state_backend="SQL", state_db_url=f"sqlite:///{tmp_path / 's.db'}")
        store = create_store(settings)

        assert isinstance(store, SqlStateStore)
        store.close()

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown state backend"):
            create_store(Settings(state_backend="redis"))


# ============================================================================
# Test Class: Snapshots
# ============================================================================


@pytest.mark.unit
class TestSnapshots:
    """Tests for versioned snapshot envelopes."""

    def test_state_keys(self):
        assert STATE_KEYS == ("corpus_stats", "categorizer", "interactions", "engine_options")

    def test_wrap_and_unwrap(self):
        envelope = wrap_snapshot({"total_documents": 3}, SAVED_AT)

        assert envelope["version"] == STATE_SCHEMA_VERSION
        assert envelope["saved_at"].startswith("2026-03-01")
        assert unwrap_snapshot("corpus_stats", envelope) == {"total_documents": 3}

    def test_nothing_stored(self):
        assert unwrap_snapshot("corpus_stats", None) is None

    def test_wrong_version(self):
        envelope = wrap_snapshot({}, SAVED_AT)
        envelope["version"] = 99

        with pytest.raises(RecoverableStateError) as exc_info:
            unwrap_snapshot("corpus_stats", envelope)
        assert exc_info.value.key == "corpus_stats"

    def test_not_an_envelope(self):
        with pytest.raises(RecoverableStateError):
            unwrap_snapshot("interactions", ["records"])

    def test_missing_saved_at(self):
        with pytest.raises(RecoverableStateError):
            unwrap_snapshot("interactions", {"version": STATE_SCHEMA_VERSION, "data": {}})
