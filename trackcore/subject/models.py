from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trackcore.subject import keys
from trackcore.subject.exceptions import InvalidArgument


class PlatformContextProperty(StrEnum):
    """Optional platform pairs. osType, osVersion, deviceManufacturer and deviceModel are always sent."""

    PHYSICAL_MEMORY = keys.PLATFORM_PHYSICAL_MEMORY
    AVAILABLE_STORAGE = keys.PLATFORM_AVAILABLE_STORAGE
    TOTAL_STORAGE = keys.PLATFORM_TOTAL_STORAGE
    LANGUAGE = keys.PLATFORM_LANGUAGE


class Size(BaseModel):
    width: int = Field(ge=0, strict=True)
    height: int = Field(ge=0, strict=True)

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"

    @classmethod
    def of(cls, width: object, height: object, field: str = "size") -> Size:
        """Build a Size, raising InvalidArgument instead of a pydantic error."""
        try:
            return cls(width=width, height=height)
        except ValidationError as e:
            raise InvalidArgument(field, (width, height), "expected two non-negative integers") from e

    @classmethod
    def parse(cls, text: str, field: str = "size") -> Size:
        """Parse a "<width>x<height>" string such as "1920x1080"."""
        width, sep, height = text.strip().lower().partition("x")
        if not sep:
            raise InvalidArgument(field, text, "expected <width>x<height>")
        try:
            parsed = int(width), int(height)
        except ValueError as e:
            raise InvalidArgument(field, text, "expected <width>x<height>") from e
        return cls.of(*parsed, field=field)


class SubjectConfiguration(BaseModel):
    """Everything needed to build a Subject: the two capability flags plus field defaults."""

    platform_context: bool = False
    geo_location_context: bool = False
    platform_context_properties: list[PlatformContextProperty] | None = None

    user_id: str | None = None
    network_user_id: str | None = None
    domain_user_id: str | None = None
    useragent: str | None = None
    ip_address: str | None = None
    timezone: str | None = None
    language: str | None = None
    screen_resolution: Size | None = None
    screen_view_port: Size | None = None
    color_depth: int | None = None

    model_config = ConfigDict(frozen=True)

    def field_defaults(self) -> dict[str, object]:
        """Subject field defaults that are actually set, in declaration order."""
        flags = {"platform_context", "geo_location_context", "platform_context_properties"}
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name not in flags and getattr(self, name) is not None
        }
