from __future__ import annotations

from pathlib import Path

import pytest

from core.settings import Settings, StorageSettings
from core.storage.local import LocalStorage
from services.api.main import create_app, create_validating_app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(storage=StorageSettings(backend="local", local_root=str(tmp_path / "objects")))


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "objects")


@pytest.fixture
def store_app(settings: Settings, storage: LocalStorage):
    return create_app(settings, storage=storage)


@pytest.fixture
def validate_app(settings: Settings):
    return create_validating_app(settings)
