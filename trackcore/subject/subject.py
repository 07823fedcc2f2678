"""Subject: the user and device currently being tracked.

Holds identifiers, environment attributes and geolocation fields, and projects
them into the payloads the tracker attaches to every event. The object does no
locking of its own; share it between threads through SubjectController.
"""
from __future__ import annotations

import logging
import math
import os
import time
from collections.abc import Callable, Iterable
from numbers import Real
from pathlib import Path
from typing import Any

from trackcore.subject import keys
from trackcore.subject.exceptions import InvalidArgument
from trackcore.subject.models import PlatformContextProperty, Size, SubjectConfiguration
from trackcore.subject.payload import Payload
from trackcore.subject.platform_context import (
    DeviceInfoMonitor,
    PlatformContext,
    system_language,
)

logger = logging.getLogger(__name__)


def system_timezone() -> str | None:
    """IANA name of the local timezone, or the abbreviation when no name is available."""
    tz = os.environ.get("TZ", "").lstrip(":")
    if tz == "UTC" or ("/" in tz and not tz.startswith("/") and "," not in tz):
        return tz
    # POSIX rule strings such as "EST5EDT,M3.2.0,M11.1.0" are not zone names
    path = tz if tz.startswith("/") else "/etc/localtime"
    parts = Path(path).resolve().parts
    if "zoneinfo" in parts:
        name = "/".join(parts[parts.index("zoneinfo") + 1 :])
        if name:
            return name
    return time.tzname[0] or None


def _text(field: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidArgument(field, value, "expected a non-empty string")
    return value


def _finite(field: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise InvalidArgument(field, value, "expected a finite number")
    return float(value)


def _timestamp(field: str, value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise InvalidArgument(field, value, "expected a numeric timestamp")
    return value


def _integer(field: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgument(field, value, "expected an integer")
    return value


def _size(field: str, value: Any) -> Size:
    if isinstance(value, Size):
        return value
    if isinstance(value, tuple) and len(value) == 2:
        return Size.of(*value, field=field)
    raise InvalidArgument(field, value, "expected a Size or a (width, height) pair")


class _Field:
    """Optional attribute whose setter validates before storing. Unset reads as None."""

    def __init__(self, validate: Callable[[str, Any], Any]) -> None:
        self._validate = validate

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name
        self._attr = f"_{name}"

    def __get__(self, obj: object, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return getattr(obj, self._attr, None)

    def __set__(self, obj: object, value: Any) -> None:
        # Validate first so a rejected value never replaces the current one
        setattr(obj, self._attr, self._validate(self._name, value))


class Subject:
    user_id = _Field(_text)
    network_user_id = _Field(_text)
    domain_user_id = _Field(_text)
    useragent = _Field(_text)
    ip_address = _Field(_text)
    timezone = _Field(_text)
    language = _Field(_text)
    screen_resolution = _Field(_size)
    screen_view_port = _Field(_size)
    color_depth = _Field(_integer)

    geo_latitude = _Field(_finite)
    geo_longitude = _Field(_finite)
    geo_latitude_longitude_accuracy = _Field(_finite)
    geo_altitude = _Field(_finite)
    geo_altitude_accuracy = _Field(_finite)
    geo_bearing = _Field(_finite)
    geo_speed = _Field(_finite)
    geo_timestamp = _Field(_timestamp)

    def __init__(
        self,
        platform_context: bool = False,
        geo_location_context: bool = False,
        platform_context_properties: Iterable[PlatformContextProperty] | None = None,
        device_info_monitor: DeviceInfoMonitor | None = None,
    ) -> None:
        self._platform_context = bool(platform_context)
        self._geo_location_context = bool(geo_location_context)
        self._platform: PlatformContext | None = None
        if self._platform_context:
            self._platform = PlatformContext(
                properties=platform_context_properties,
                device_info_monitor=device_info_monitor,
            )
        self._set_default_environment()
        logger.debug(
            "Subject created (platform_context=%s, geo_location_context=%s)",
            self._platform_context,
            self._geo_location_context,
        )

    @classmethod
    def _from_configuration(
        cls,
        configuration: SubjectConfiguration,
        device_info_monitor: DeviceInfoMonitor | None = None,
    ) -> Subject:
        """Internal: build a subject from a SubjectConfiguration. Use the constructor in app code."""
        subject = cls(
            platform_context=configuration.platform_context,
            geo_location_context=configuration.geo_location_context,
            platform_context_properties=configuration.platform_context_properties,
            device_info_monitor=device_info_monitor,
        )
        for name, value in configuration.field_defaults().items():
            setattr(subject, name, value)
        return subject

    @property
    def platform_context(self) -> bool:
        return self._platform_context

    @property
    def geo_location_context(self) -> bool:
        return self._geo_location_context

    def set_resolution(self, width: int, height: int) -> None:
        self.screen_resolution = Size.of(width, height, field="screen_resolution")

    def set_view_port(self, width: int, height: int) -> None:
        self.screen_view_port = Size.of(width, height, field="screen_view_port")

    def get_standard_dict(self) -> Payload:
        """Standard pairs for every field that is currently set."""
        payload = Payload()
        payload.add_value(keys.USER_ID, self.user_id)
        payload.add_value(keys.NETWORK_USER_ID, self.network_user_id)
        payload.add_value(keys.DOMAIN_USER_ID, self.domain_user_id)
        payload.add_value(keys.USERAGENT, self.useragent)
        payload.add_value(keys.IP_ADDRESS, self.ip_address)
        payload.add_value(keys.TIMEZONE, self.timezone)
        payload.add_value(keys.LANGUAGE, self.language)
        if self.screen_resolution is not None:
            payload.add_value(keys.RESOLUTION, str(self.screen_resolution))
        if self.screen_view_port is not None:
            payload.add_value(keys.VIEWPORT, str(self.screen_view_port))
        if self.color_depth is not None:
            payload.add_value(keys.COLOR_DEPTH, str(self.color_depth))
        return payload

    def get_platform_dict(self) -> Payload | None:
        """Platform pairs, or None when the platform context is disabled."""
        if self._platform is None:
            return None
        return self._platform.fetch_platform_dict()

    def get_geo_location_dict(self) -> dict[str, float] | None:
        """Geolocation pairs, or None unless enabled and both latitude and longitude are set."""
        if not self._geo_location_context:
            return None
        if self.geo_latitude is None or self.geo_longitude is None:
            logger.debug("Geolocation context skipped: latitude and longitude are required")
            return None
        pairs = {
            keys.GEO_LATITUDE: self.geo_latitude,
            keys.GEO_LONGITUDE: self.geo_longitude,
            keys.GEO_LAT_LONG_ACCURACY: self.geo_latitude_longitude_accuracy,
            keys.GEO_ALTITUDE: self.geo_altitude,
            keys.GEO_ALTITUDE_ACCURACY: self.geo_altitude_accuracy,
            keys.GEO_BEARING: self.geo_bearing,
            keys.GEO_SPEED: self.geo_speed,
            keys.GEO_TIMESTAMP: self.geo_timestamp,
        }
        return {key: value for key, value in pairs.items() if value is not None}

    def _set_default_environment(self) -> None:
        tz = system_timezone()
        if tz:
            self.timezone = tz
        lang = system_language()
        if lang:
            self.language = lang


SUBJECT_FIELDS = frozenset(
    name for name, attr in vars(Subject).items() if isinstance(attr, _Field)
)
