import pytest

from .fakes import FakeMonitoringApi


@pytest.fixture
def fake_api() -> FakeMonitoringApi:
    return FakeMonitoringApi()
