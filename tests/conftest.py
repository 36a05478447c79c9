"""
Cargo dispatch tests - shared fixtures.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
import yaml

from cargo_dispatch.core.config import ConfigManager
from cargo_dispatch.data.models import Cargo, CargoStatus, Driver
from cargo_dispatch.persistence import MemoryDocumentStore
from cargo_dispatch.state import create_dispatch_store

TEST_CONFIG = {
    "app": {"name": "Cargo Dispatch (test)"},
    "storage": {"backend": "memory", "local_path": "storage"},
    "collections": {"drivers": "drivers", "cargos": "cargos", "users": "users"},
    "drivers": {"public_owner_id": "all"},
    "accounting": {"recent_transactions_limit": 5},
    "seed": {
        "drivers": [
            {"id": "1", "name": "John Doe", "phone": "+1 234 567 8901", "homeCity": "New York", "ownerId": "all"},
        ]
    },
}

ENV_VARS = (
    "STORAGE_BACKEND",
    "LOCAL_STORAGE_PATH",
    "FIRESTORE_PROJECT_ID",
    "ADMIN_DEFAULT_PASSWORD",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Environment without any dispatch overrides."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def write_config(tmp_path, clean_env):
    """Write a config.yaml into a temp config dir and return its manager."""

    def _write(config: dict) -> ConfigManager:
        config_dir = tmp_path / "config"
        config_dir.mkdir(exist_ok=True)
        with open(config_dir / "config.yaml", "w") as f:
            yaml.safe_dump(config, f)
        return ConfigManager(config_dir=config_dir)

    return _write


@pytest.fixture
def config_manager(write_config):
    """Config manager for the memory backend."""
    return write_config(TEST_CONFIG)


@pytest.fixture
def memory_store():
    """Empty in-memory document store."""
    return MemoryDocumentStore()


@pytest.fixture
def dispatch_store(config_manager, memory_store):
    """Dispatch store over the memory backend."""
    return create_dispatch_store(config_manager, memory_store)


def make_cargo(doc_id: str, **overrides) -> Cargo:
    """Cargo with sensible defaults for tests."""
    fields = {
        "id": doc_id,
        "cargo_id": f"C-{doc_id}",
        "pickup_location": "Tulsa, OK",
        "delivery_location": "Dallas, TX",
        "pickup_datetime": datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc),
        "delivery_datetime": datetime(2024, 3, 2, 15, 0, tzinfo=timezone.utc),
        "status": CargoStatus.BOOKED,
        "driver_id": "d1",
        "order": 0,
        "rate": Decimal("1000"),
    }
    fields.update(overrides)
    return Cargo(**fields)


def make_driver(doc_id: str, **overrides) -> Driver:
    """Driver with sensible defaults for tests."""
    fields = {
        "id": doc_id,
        "name": f"Driver {doc_id}",
        "phone": "+1 555 0100",
        "home_city": "Chicago",
    }
    fields.update(overrides)
    return Driver(**fields)


@pytest.fixture
def cargo_factory():
    return make_cargo


@pytest.fixture
def driver_factory():
    return make_driver
