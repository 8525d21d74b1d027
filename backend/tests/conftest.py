"""Shared test fixtures and configuration for backend tests."""
import pytest
from fastapi.testclient import TestClient

from minidrive.config import AppConfig, StorageSettings
from minidrive.files.service import FileStorageService
from minidrive.main import create_app


@pytest.fixture
def storage_root(tmp_path):
    """Storage root inside the test's temporary directory (not yet created)."""
    return tmp_path / "uploads"


@pytest.fixture
def app_config(storage_root):
    return AppConfig(storage=StorageSettings(root_dir=str(storage_root)))


@pytest.fixture
def storage(storage_root):
    return FileStorageService(storage_root)


@pytest.fixture
def api_client(app_config):
    """Provide a TestClient for an app rooted in a temporary directory."""
    return TestClient(create_app(app_config))
