"""
Document store tests - memory and local backends share one contract.
"""

import json

import pytest

from cargo_dispatch.core.exceptions import DocumentNotFoundError
from cargo_dispatch.persistence import (
    LocalDocumentStore,
    MemoryDocumentStore,
    create_document_store,
)

from .conftest import TEST_CONFIG


@pytest.fixture(params=["memory", "local"])
def store(request, tmp_path):
    if request.param == "memory":
        return MemoryDocumentStore()
    return LocalDocumentStore(tmp_path / "storage")


class TestDocumentStoreContract:

    def test_add_and_get(self, store):
        doc_id = store.add("drivers", {"name": "Jane", "homeCity": "Austin"})
        assert store.get("drivers", doc_id) == {"id": doc_id, "name": "Jane", "homeCity": "Austin"}

    def test_add_with_explicit_id(self, store):
        assert store.add("cargos", {"cargoId": "L-1"}, doc_id="custom") == "custom"
        assert store.get("cargos", "custom")["cargoId"] == "L-1"

    def test_add_with_existing_id_replaces(self, store):
        store.add("drivers", {"name": "First"}, doc_id="d1")
        store.add("drivers", {"name": "Other"}, doc_id="d2")
        store.add("drivers", {"name": "Second"}, doc_id="d1")
        assert store.list("drivers") == [
            {"id": "d1", "name": "Second"},
            {"id": "d2", "name": "Other"},
        ]

    def test_id_is_not_stored_in_body(self, store):
        doc_id = store.add("drivers", {"id": "ignored", "name": "Jane"}, doc_id="real")
        assert doc_id == "real"
        assert store.list("drivers") == [{"id": "real", "name": "Jane"}]

    def test_list_keeps_insertion_order(self, store):
        ids = [store.add("drivers", {"name": name}) for name in ("A", "B", "C")]
        assert [d["id"] for d in store.list("drivers")] == ids
        assert len(set(ids)) == 3

    def test_update_merges(self, store):
        doc_id = store.add("cargos", {"status": "booked", "order": 1})
        store.update("cargos", doc_id, {"order": 3})
        assert store.get("cargos", doc_id) == {"id": doc_id, "status": "booked", "order": 3}

    def test_update_missing_raises(self, store):
        with pytest.raises(DocumentNotFoundError):
            store.update("cargos", "nope", {"order": 1})

    def test_get_missing_raises(self, store):
        with pytest.raises(DocumentNotFoundError):
            store.get("cargos", "nope")

    def test_set_replaces(self, store):
        store.set("users", "u1", {"email": "a@example.com", "isAdmin": True})
        store.set("users", "u1", {"email": "b@example.com"})
        assert store.get("users", "u1") == {"id": "u1", "email": "b@example.com"}

    def test_delete(self, store):
        doc_id = store.add("drivers", {"name": "Jane"})
        store.delete("drivers", doc_id)
        store.delete("drivers", doc_id)
        assert store.list("drivers") == []

    def test_subscribe_delivers_snapshots(self, store):
        snapshots = []
        unsubscribe = store.subscribe("cargos", snapshots.append)
        assert snapshots == [[]]

        doc_id = store.add("cargos", {"order": 1})
        store.update("cargos", doc_id, {"order": 2})
        assert [s[0]["order"] for s in snapshots[1:]] == [1, 2]

        unsubscribe()
        store.delete("cargos", doc_id)
        assert len(snapshots) == 3

    def test_subscription_is_per_collection(self, store):
        snapshots = []
        store.subscribe("drivers", snapshots.append)
        store.add("cargos", {"order": 1})
        assert snapshots == [[]]


class TestLocalDocumentStore:

    def test_one_json_file_per_collection(self, tmp_path):
        store = LocalDocumentStore(tmp_path)
        doc_id = store.add("drivers", {"name": "Jane"})
        with open(tmp_path / "drivers.json") as f:
            assert json.load(f) == [{"name": "Jane", "id": doc_id}]

    def test_generated_ids_are_millisecond_strings(self, tmp_path):
        store = LocalDocumentStore(tmp_path)
        ids = [store.add("cargos", {}) for _ in range(5)]
        assert all(doc_id.isdigit() for doc_id in ids)
        assert len(set(ids)) == 5

    def test_initialize_seeds_only_missing_keys(self, tmp_path):
        store = LocalDocumentStore(tmp_path)
        store.add("cargos", {"cargoId": "existing"})
        store.initialize(
            {
                "drivers": [{"id": "1", "name": "John Doe"}, {"name": "No Id"}],
                "cargos": [{"id": "seeded"}],
            }
        )
        drivers = store.list("drivers")
        assert [d["name"] for d in drivers] == ["John Doe", "No Id"]
        assert drivers[0]["id"] == "1"
        assert drivers[1]["id"].isdigit()
        assert [c["cargoId"] for c in store.list("cargos")] == ["existing"]

        store.delete("drivers", "1")
        store.initialize({"drivers": [{"id": "1", "name": "John Doe"}]})
        assert [d["name"] for d in store.list("drivers")] == ["No Id"]

    def test_data_survives_reopen(self, tmp_path):
        LocalDocumentStore(tmp_path).add("drivers", {"name": "Jane"}, doc_id="d1")
        assert LocalDocumentStore(tmp_path).get("drivers", "d1")["name"] == "Jane"


class TestCreateDocumentStore:

    def test_memory_backend(self, config_manager):
        assert isinstance(create_document_store(config_manager), MemoryDocumentStore)

    def test_local_backend_is_seeded(self, write_config, tmp_path):
        manager = write_config(
            {**TEST_CONFIG, "storage": {"backend": "local", "local_path": str(tmp_path / "data")}}
        )
        store = create_document_store(manager)
        assert isinstance(store, LocalDocumentStore)
        assert [d["name"] for d in store.list("drivers")] == ["John Doe"]
