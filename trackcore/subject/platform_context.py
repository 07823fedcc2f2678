"""Platform context: device attributes sent alongside events when enabled.

Fixed attributes (OS, model) are read once; storage figures are re-read at most
once per ``update_interval`` seconds.
"""
from __future__ import annotations

import locale
import logging
import os
import platform
import shutil
import time
from collections.abc import Iterable

from trackcore.subject import keys
from trackcore.subject.models import PlatformContextProperty
from trackcore.subject.payload import Payload

logger = logging.getLogger(__name__)

_OS_TYPES = {"darwin": "osx", "windows": "windows", "linux": "linux"}
_MANUFACTURERS = {"darwin": "Apple Inc."}


def system_language() -> str | None:
    """Process locale as a language tag (``en_US.UTF-8`` -> ``en-US``)."""
    try:
        lang = locale.getlocale()[0]
    except ValueError:
        lang = None
    lang = lang or os.environ.get("LC_ALL") or os.environ.get("LANG")
    if not lang:
        return None
    lang = lang.split(".", 1)[0].split("@", 1)[0]
    if lang in ("C", "POSIX"):
        return None
    return lang.replace("_", "-")


class DeviceInfoMonitor:
    """Reads device attributes from the running system. Replace in tests."""

    def os_type(self) -> str:
        system = platform.system().lower()
        return _OS_TYPES.get(system, system or "unknown")

    def os_version(self) -> str | None:
        if platform.system() == "Darwin":
            return platform.mac_ver()[0] or platform.release()
        return platform.release() or None

    def device_manufacturer(self) -> str | None:
        return _MANUFACTURERS.get(platform.system().lower())

    def device_model(self) -> str | None:
        return platform.machine() or None

    def physical_memory(self) -> int | None:
        try:
            return os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")
        except (AttributeError, ValueError, OSError):
            logger.debug("Physical memory unavailable", exc_info=True)
            return None

    def available_storage(self) -> int | None:
        try:
            return shutil.disk_usage(os.path.abspath(os.sep)).free
        except OSError:
            logger.debug("Available storage unavailable", exc_info=True)
            return None

    def total_storage(self) -> int | None:
        try:
            return shutil.disk_usage(os.path.abspath(os.sep)).total
        except OSError:
            logger.debug("Total storage unavailable", exc_info=True)
            return None

    def language(self) -> str | None:
        return system_language()


class PlatformContext:
    def __init__(
        self,
        properties: Iterable[PlatformContextProperty] | None = None,
        device_info_monitor: DeviceInfoMonitor | None = None,
        update_interval: float = 0.1,
    ) -> None:
        # None means every optional property
        self._properties = (
            set(PlatformContextProperty) if properties is None else set(properties)
        )
        self._monitor = device_info_monitor or DeviceInfoMonitor()
        self._update_interval = update_interval
        self._last_update: float | None = None
        self._platform_dict = Payload()
        self._set_platform_dict()

    def fetch_platform_dict(self) -> Payload:
        """Current platform pairs, refreshing dynamic values if they are stale."""
        now = time.monotonic()
        if self._last_update is None or now - self._last_update >= self._update_interval:
            self._set_dynamic_values()
        return Payload(self._platform_dict)

    def _should_track(self, prop: PlatformContextProperty) -> bool:
        return prop in self._properties

    def _set_platform_dict(self) -> None:
        pairs = self._platform_dict
        pairs.add_value(keys.PLATFORM_OS_TYPE, self._monitor.os_type())
        pairs.add_value(keys.PLATFORM_OS_VERSION, self._monitor.os_version())
        pairs.add_value(keys.PLATFORM_DEVICE_MANUFACTURER, self._monitor.device_manufacturer())
        pairs.add_value(keys.PLATFORM_DEVICE_MODEL, self._monitor.device_model())

        if self._should_track(PlatformContextProperty.PHYSICAL_MEMORY):
            pairs.add_value(keys.PLATFORM_PHYSICAL_MEMORY, self._monitor.physical_memory())
        if self._should_track(PlatformContextProperty.TOTAL_STORAGE):
            pairs.add_value(keys.PLATFORM_TOTAL_STORAGE, self._monitor.total_storage())
        if self._should_track(PlatformContextProperty.LANGUAGE):
            pairs.add_value(keys.PLATFORM_LANGUAGE, self._monitor.language())

        self._set_dynamic_values()

    def _set_dynamic_values(self) -> None:
        self._last_update = time.monotonic()
        if self._should_track(PlatformContextProperty.AVAILABLE_STORAGE):
            self._platform_dict.add_value(
                keys.PLATFORM_AVAILABLE_STORAGE, self._monitor.available_storage()
            )
