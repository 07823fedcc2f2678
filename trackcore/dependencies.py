from __future__ import annotations

from trackcore.config import Settings
from trackcore.logging_config import configure_logging
from trackcore.subject.controller import SubjectController
from trackcore.subject.exceptions import InvalidArgument
from trackcore.subject.models import PlatformContextProperty, Size, SubjectConfiguration
from trackcore.subject.platform_context import DeviceInfoMonitor
from trackcore.subject.subject import Subject


def parse_platform_context_properties(value: str | None) -> list[PlatformContextProperty] | None:
    """Parse "physicalMemory, language" into properties. None keeps every property."""
    if value is None:
        return None
    properties = []
    for name in (part.strip() for part in value.split(",")):
        if not name:
            continue
        try:
            properties.append(PlatformContextProperty(name))
        except ValueError as e:
            raise InvalidArgument("platform_context_properties", name, "unknown property") from e
    return properties


def get_subject_configuration(settings: Settings) -> SubjectConfiguration:
    return SubjectConfiguration(
        platform_context=settings.platform_context,
        geo_location_context=settings.geo_location_context,
        platform_context_properties=parse_platform_context_properties(
            settings.platform_context_properties
        ),
        user_id=settings.user_id,
        network_user_id=settings.network_user_id,
        domain_user_id=settings.domain_user_id,
        useragent=settings.useragent,
        ip_address=settings.ip_address,
        timezone=settings.timezone,
        language=settings.language,
        screen_resolution=(
            Size.parse(settings.screen_resolution, field="screen_resolution")
            if settings.screen_resolution
            else None
        ),
        screen_view_port=(
            Size.parse(settings.screen_view_port, field="screen_view_port")
            if settings.screen_view_port
            else None
        ),
        color_depth=settings.color_depth,
    )


def make_subject(
    settings: Settings, device_info_monitor: DeviceInfoMonitor | None = None
) -> Subject:
    return Subject._from_configuration(get_subject_configuration(settings), device_info_monitor)


def configure_logging_from_settings(settings: Settings) -> None:
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
    )


def make_subject_controller(
    settings: Settings, device_info_monitor: DeviceInfoMonitor | None = None
) -> SubjectController:
    """Tracker-side entry point: configure logging, then build the owned subject."""
    configure_logging_from_settings(settings)
    return SubjectController(
        make_subject(settings, device_info_monitor),
        device_info_monitor=device_info_monitor,
    )
