"""Protocol settings for discovery sessions."""

from __future__ import annotations

import ipaddress
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator


WS_DISCOVERY_MULTICAST_GROUP = ("239.255.255.250", 3702)
DEFAULT_TIMEOUT = 8.0
MIN_BUFFER_SIZE = 8192


class DiscoverySettings(BaseModel):
    """Fixed WS-Discovery parameters, overridable only by embedding code."""

    multicast_group: str = WS_DISCOVERY_MULTICAST_GROUP[0]
    port: int = Field(default=WS_DISCOVERY_MULTICAST_GROUP[1], ge=1, le=65535)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    buffer_size: int = Field(default=MIN_BUFFER_SIZE, ge=MIN_BUFFER_SIZE)
    multicast_ttl: int = Field(default=1, ge=1, le=255)

    @field_validator("multicast_group")
    @classmethod
    def validate_multicast_group(cls, value: str) -> str:
        try:
            address = ipaddress.IPv4Address(value.strip())
        except ipaddress.AddressValueError as exc:
            raise ValueError(f"Invalid IPv4 address: {value}") from exc
        if not address.is_multicast:
            raise ValueError(f"{value} is not a multicast address")
        return str(address)

    @property
    def group_address(self) -> tuple[str, int]:
        return self.multicast_group, self.port


def _read_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping at the top level")
    return data


def load_settings(path: Path | str) -> DiscoverySettings:
    """Load settings from a YAML file; missing keys fall back to protocol defaults."""

    path = Path(path)
    raw_data = _read_yaml(path)
    try:
        return DiscoverySettings.model_validate(raw_data)
    except ValidationError as exc:
        raise ValueError(f"Invalid data in {path}: {exc}") from exc
