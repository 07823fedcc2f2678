from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Capability flags
    platform_context: bool = False
    geo_location_context: bool = False
    platform_context_properties: str | None = None  # comma-separated, e.g. "physicalMemory,language"

    # Subject defaults
    user_id: str | None = None
    network_user_id: str | None = None
    domain_user_id: str | None = None
    useragent: str | None = None
    ip_address: str | None = None
    timezone: str | None = None
    language: str | None = None
    screen_resolution: str | None = None  # "<width>x<height>"
    screen_view_port: str | None = None
    color_depth: int | None = None

    @field_validator(
        "user_id",
        "network_user_id",
        "domain_user_id",
        "useragent",
        "ip_address",
        "timezone",
        "language",
        "screen_resolution",
        "screen_view_port",
        "platform_context_properties",
        "color_depth",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_file: str | None = None

    model_config = {"env_file": ".env", "env_prefix": "TRACKER_"}
