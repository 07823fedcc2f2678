import pytest

from trackcore.config import Settings
from trackcore.subject.platform_context import DeviceInfoMonitor

TEST_SETTINGS = Settings(
    _env_file=None,
    platform_context=True,
    geo_location_context=True,
    user_id="user-1",
    screen_resolution="1920x1080",
    color_depth=24,
)


class FakeDeviceInfoMonitor(DeviceInfoMonitor):
    def __init__(self) -> None:
        self.available_storage_calls = 0
        self.free_bytes = 1000

    def os_type(self) -> str:
        return "linux"

    def os_version(self) -> str | None:
        return "6.1.0"

    def device_manufacturer(self) -> str | None:
        return None

    def device_model(self) -> str | None:
        return "x86_64"

    def physical_memory(self) -> int | None:
        return 8_000_000_000

    def available_storage(self) -> int | None:
        self.available_storage_calls += 1
        return self.free_bytes

    def total_storage(self) -> int | None:
        return 500_000

    def language(self) -> str | None:
        return "en-US"


@pytest.fixture(autouse=True)
def fixed_environment(monkeypatch):
    """Pin the system-derived timezone and language so payloads are predictable."""
    monkeypatch.setenv("TZ", "Europe/Berlin")
    monkeypatch.setattr("trackcore.subject.subject.system_language", lambda: "en-US")


@pytest.fixture
def settings() -> Settings:
    return TEST_SETTINGS


@pytest.fixture
def device_monitor() -> FakeDeviceInfoMonitor:
    return FakeDeviceInfoMonitor()
