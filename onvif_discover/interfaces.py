"""Host network interface enumeration."""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass, field

import psutil

from onvif_discover.errors import InterfaceEnumerationFailed, InterfaceUnknown


logger = logging.getLogger(__name__)


@dataclass
class NetworkInterface:
    name: str
    flags: list[str] = field(default_factory=list)
    is_up: bool = False
    ipv4_addresses: list[str] = field(default_factory=list)

    @property
    def flags_label(self) -> str:
        return "|".join(self.flags) if self.flags else "0"

    @property
    def supports_multicast(self) -> bool:
        return "multicast" in self.flags


def _parse_flags(stats) -> list[str]:
    # psutil has no flag string on Windows; fall back to the up bit.
    raw = getattr(stats, "flags", "") if stats is not None else ""
    flags = [flag.strip() for flag in raw.split(",") if flag.strip()]
    if not flags and stats is not None and stats.isup:
        flags = ["up"]
    return flags


def _build_interface(name: str, addresses, stats) -> NetworkInterface:
    ipv4 = [addr.address for addr in addresses if addr.family == socket.AF_INET]
    return NetworkInterface(
        name=name,
        flags=_parse_flags(stats),
        is_up=bool(stats.isup) if stats is not None else False,
        ipv4_addresses=ipv4,
    )


def _snapshot() -> tuple[dict, dict]:
    try:
        return psutil.net_if_addrs(), psutil.net_if_stats()
    except (OSError, psutil.Error) as exc:
        raise InterfaceEnumerationFailed("Failed to get network interfaces", str(exc)) from exc


def list_interfaces() -> list[NetworkInterface]:
    """Return every interface known to the host, sorted by name."""

    addrs, stats = _snapshot()
    interfaces = [
        _build_interface(name, addrs.get(name, []), stats.get(name))
        for name in sorted(set(addrs) | set(stats))
    ]
    logger.debug("Enumerated interfaces", extra={"event": "iface_list", "count": len(interfaces)})
    return interfaces


def resolve_interface(name: str) -> NetworkInterface:
    """Look up a single interface by its system name."""

    addrs, stats = _snapshot()
    if name not in addrs and name not in stats:
        raise InterfaceUnknown(f"Unable to find interface {name}", "no such network interface")
    return _build_interface(name, addrs.get(name, []), stats.get(name))
