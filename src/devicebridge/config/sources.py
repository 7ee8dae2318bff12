"""Per-source fetch configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import Final

from .env import optional_env_var, require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig


class SourceName(StrEnum):
    LISTING = "listing"
    DEVICE_JSON = "device_json"
    MAC_JSON = "mac_json"
    SUPPORT_PAGES = "support_pages"


DEFAULT_SOURCE_URLS: Final[MappingProxyType[SourceName, str | None]] = MappingProxyType(
    {
        SourceName.LISTING: (
            "https://gist.githubusercontent.com/adamawolf/3048717/raw/Apple_mobile_device_types.txt"
        ),
        SourceName.DEVICE_JSON: (
            "https://raw.githubusercontent.com/superepicstudios/apple-devices/main/"
            "swift/Sources/AppleDevices/Resources/data.json"
        ),
        SourceName.MAC_JSON: (
            "https://raw.githubusercontent.com/voyager-software/MacLookup/refs/heads/master/"
            "Sources/MacLookup/Resources/all-macs.json"
        ),
        # Extracted from support pages offline; only read from files.
        SourceName.SUPPORT_PAGES: None,
    }
)


@dataclass(frozen=True, slots=True)
class SourceConfig:
    name: SourceName
    url: str | None
    resilience: ResilienceConfig

    def require_url(self) -> str:
        """Return the source URL; sources without a default must be configured."""

        if self.url is not None:
            return self.url
        env_var = url_env_var(self.name)
        return require_env_vars((env_var,))[env_var]


def url_env_var(name: SourceName) -> str:
    return f"DEVICEBRIDGE_{name.upper()}_URL"


def get_source_config(
    name: SourceName | str,
    *,
    resilience: ResilienceConfig | None = None,
) -> SourceConfig:
    source = SourceName(name)
    url = optional_env_var(url_env_var(source)) or DEFAULT_SOURCE_URLS[source]
    return SourceConfig(
        name=source,
        url=url,
        resilience=resilience
        or ResilienceConfig(
            name=str(source),
            ratelimit=RateLimit(max_calls=2, per_seconds=1.0),
            cache=CacheConfig(backend="sqlite"),
        ),
    )
