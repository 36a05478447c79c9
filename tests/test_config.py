"""
Configuration loading tests.
"""

from pathlib import Path

import pytest
import structlog

from cargo_dispatch.core.config import ConfigManager
from cargo_dispatch.core.exceptions import ConfigurationError
from cargo_dispatch.core.logging import configure_logging

from .conftest import TEST_CONFIG


class TestConfigManager:

    def test_storage_from_yaml(self, config_manager):
        storage = config_manager.get_storage_config()
        assert storage.backend == "memory"
        assert storage.local_path == Path("storage")

    def test_environment_overrides_yaml(self, config_manager, clean_env):
        clean_env.setenv("STORAGE_BACKEND", "LOCAL")
        clean_env.setenv("LOCAL_STORAGE_PATH", "/tmp/dispatch")
        storage = config_manager.get_storage_config()
        assert storage.backend == "local"
        assert storage.local_path == Path("/tmp/dispatch")

    def test_unknown_backend_rejected(self, write_config):
        manager = write_config({**TEST_CONFIG, "storage": {"backend": "postgres"}})
        with pytest.raises(ConfigurationError, match="postgres"):
            manager.get_storage_config()

    def test_missing_config_file(self, tmp_path):
        manager = ConfigManager(config_dir=tmp_path / "nowhere")
        with pytest.raises(ConfigurationError):
            manager.business_config

    def test_collection_name_defaults_to_key(self, write_config):
        manager = write_config({"collections": {"cargos": "shipments"}})
        assert manager.get_collection_name("cargos") == "shipments"
        assert manager.get_collection_name("drivers") == "drivers"

    def test_admin_password_default(self, config_manager):
        assert config_manager.env.admin_default_password == "admin123"

    def test_project_config_file_loads(self, clean_env):
        manager = ConfigManager()
        assert manager.get_app_info()["name"] == "Cargo Dispatch"
        assert manager.get_public_owner_id() == "all"
        assert [d["name"] for d in manager.get_seed_data()["drivers"]] == [
            "John Doe",
            "Jane Smith",
            "Mike Johnson",
        ]


class TestConfigureLogging:

    @pytest.fixture(autouse=True)
    def reset_structlog(self):
        yield
        structlog.reset_defaults()

    def test_level_filtering(self, capsys):
        configure_logging("warning")
        logger = structlog.get_logger()
        logger.info("cargos_fetched", count=3)
        logger.warning("document_skipped", doc_id="bad")

        out = capsys.readouterr().out
        assert "cargos_fetched" not in out
        assert "document_skipped" in out

    def test_unknown_level_falls_back_to_info(self, capsys):
        configure_logging("chatty")
        structlog.get_logger().info("drivers_fetched")
        assert "drivers_fetched" in capsys.readouterr().out
