import time
from unittest.mock import patch

from trackcore.subject.models import PlatformContextProperty
from trackcore.subject.platform_context import DeviceInfoMonitor, PlatformContext, system_language


def test_all_properties_by_default(device_monitor):
    context = PlatformContext(device_info_monitor=device_monitor)
    assert context.fetch_platform_dict() == {
        "osType": "linux",
        "osVersion": "6.1.0",
        "deviceModel": "x86_64",
        "physicalMemory": 8_000_000_000,
        "totalStorage": 500_000,
        "language": "en-US",
        "availableStorage": 1000,
    }


def test_filters_optional_properties(device_monitor):
    context = PlatformContext(
        properties=[PlatformContextProperty.LANGUAGE],
        device_info_monitor=device_monitor,
    )
    payload = context.fetch_platform_dict()
    assert payload["language"] == "en-US"
    assert "physicalMemory" not in payload
    assert "availableStorage" not in payload
    # Required pairs are always present
    assert payload["osType"] == "linux"
    assert device_monitor.available_storage_calls == 0


def test_empty_properties_keeps_required_pairs(device_monitor):
    context = PlatformContext(properties=[], device_info_monitor=device_monitor)
    assert set(context.fetch_platform_dict()) == {"osType", "osVersion", "deviceModel"}


def test_dynamic_values_refreshed_after_interval(device_monitor):
    context = PlatformContext(device_info_monitor=device_monitor, update_interval=60)
    assert device_monitor.available_storage_calls == 1

    device_monitor.free_bytes = 2000
    assert context.fetch_platform_dict()["availableStorage"] == 1000
    assert device_monitor.available_storage_calls == 1

    with patch("time.monotonic", return_value=time.monotonic() + 120):
        assert context.fetch_platform_dict()["availableStorage"] == 2000
    assert device_monitor.available_storage_calls == 2


def test_fetch_returns_independent_payload(device_monitor):
    context = PlatformContext(device_info_monitor=device_monitor)
    first = context.fetch_platform_dict()
    first.add_value("osType", "tampered")
    assert context.fetch_platform_dict()["osType"] == "linux"


def test_monitor_storage_failure_is_omitted():
    monitor = DeviceInfoMonitor()
    with patch("shutil.disk_usage", side_effect=OSError("no disk")):
        assert monitor.available_storage() is None
        assert monitor.total_storage() is None


def test_system_language_from_env(monkeypatch):
    monkeypatch.setattr("locale.getlocale", lambda: (None, None))
    monkeypatch.delenv("LC_ALL", raising=False)
    monkeypatch.setenv("LANG", "pt_BR.UTF-8")
    assert system_language() == "pt-BR"

    monkeypatch.setenv("LANG", "C")
    assert system_language() is None


def test_dynamic_value_dropped_when_probe_fails(device_monitor):
    context = PlatformContext(device_info_monitor=device_monitor, update_interval=0)
    assert context.fetch_platform_dict()["availableStorage"] == 1000

    device_monitor.free_bytes = None
    payload = context.fetch_platform_dict()
    assert "availableStorage" not in payload
    assert payload["osType"] == "linux"
