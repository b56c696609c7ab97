from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dynaconf import Dynaconf, Validator


def zone_exists(name: str) -> bool:
    if name.upper() == "UTC":
        return True
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


# calendar days for date-range filters are taken in this zone
timezone_validator = Validator(
    "timezone",
    default="UTC",
    is_type_of=str,
    condition=zone_exists,
)

settings = Dynaconf(
    envvar_prefix="SALES",
    settings_files=["settings.yaml", ".secrets.yaml"],
    validators=[
        Validator("port", default=8000, is_type_of=int),
        Validator("log_level", default="INFO"),
        Validator("seed_on_startup", default=True, is_type_of=bool),
        timezone_validator,
    ],
)


def day_zone() -> tzinfo:
    if settings.timezone.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(settings.timezone)
