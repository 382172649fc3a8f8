import httpx
import pytest

from service_kit.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Settings are cached per process; reload them for every test"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives"""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def recording_transport():
    """Factory for a RecordingTransport around a response handler"""
    return RecordingTransport
