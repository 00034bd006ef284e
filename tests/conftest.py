from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from tests.helpers import GLOBAL_LIMIT_OVERRIDE, FakeAppCacheInfo, FakeDiskInfo, RecordingNotifier
from webstorage.settings import get_settings
from webstorage.size_manager import MIB, WebStorageSizeManager


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def manager(notifier: RecordingNotifier) -> WebStorageSizeManager:
    """512 MiB filesystem, all free: 64 MiB global limit, 16 MiB for the application cache."""
    return WebStorageSizeManager(FakeDiskInfo(512 * MIB, 512 * MIB), FakeAppCacheInfo(), notifier=notifier)


@pytest.fixture
def client(monkeypatch, tmp_path) -> Generator[TestClient]:
    """Test client with a 64 MiB global limit override and an empty cache directory."""
    monkeypatch.setenv("WEBSTORAGE_DATA_PATH", str(tmp_path))
    monkeypatch.setenv("WEBSTORAGE_GLOBAL_LIMIT_OVERRIDE", str(GLOBAL_LIMIT_OVERRIDE))
    get_settings.cache_clear()

    from webstorage.main import app

    with TestClient(app) as test_client:
        yield test_client

    get_settings.cache_clear()
