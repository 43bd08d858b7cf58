"""WS-Discovery client that probes for ONVIF devices on one interface."""

from __future__ import annotations

import contextlib
import logging
import socket
import time
from enum import Enum
from typing import Callable, Optional

from onvif_discover.config import DiscoverySettings
from onvif_discover.envelope import build_probe
from onvif_discover.errors import DiscoveryError, MulticastBindFailed, ReadFailed, SendFailed
from onvif_discover.identifiers import mint_message_id
from onvif_discover.interfaces import NetworkInterface, resolve_interface
from onvif_discover.responses import ResponseDatagram, extract_transport_address


logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    INIT = "init"
    BOUND = "bound"
    SENT = "sent"
    COLLECTING = "collecting"
    DONE = "done"
    FAILED = "failed"


SocketFactory = Callable[[NetworkInterface, DiscoverySettings], socket.socket]


def open_multicast_socket(interface: NetworkInterface, settings: DiscoverySettings) -> socket.socket:
    """Open a UDP socket on the discovery port joined to the group on ``interface``."""

    if not interface.ipv4_addresses:
        raise MulticastBindFailed(
            f"Unable to bind to multicast address on {interface.name}",
            "interface has no IPv4 address",
        )
    local_address = interface.ipv4_addresses[0]

    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        if hasattr(socket, "SO_REUSEPORT"):
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEPORT, 1)
        sock.bind(("", settings.port))

        mreq = socket.inet_aton(settings.multicast_group) + socket.inet_aton(local_address)
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_ADD_MEMBERSHIP, mreq)
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_IF, socket.inet_aton(local_address))
        sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, settings.multicast_ttl)
    except OSError as exc:
        sock.close()
        raise MulticastBindFailed(
            f"Unable to bind to multicast address on {interface.name}", str(exc)
        ) from exc

    logger.debug(
        "Joined WS-Discovery group",
        extra={"event": "wsd_bind", "interface": interface.name, "local_address": local_address},
    )
    return sock


class DiscoverySession:
    """
    Single-use probe-and-collect exchange. One Probe is multicast, then unicast
    replies are read until an absolute deadline passes. Each ONVIF reply
    contributes its XAddrs value to the result, in arrival order.
    """

    def __init__(
        self,
        settings: Optional[DiscoverySettings] = None,
        *,
        socket_factory: SocketFactory = open_multicast_socket,
        resolver: Callable[[str], NetworkInterface] = resolve_interface,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings or DiscoverySettings()
        self.state = SessionState.INIT
        self.error: Optional[DiscoveryError] = None
        self._socket_factory = socket_factory
        self._resolver = resolver
        self._clock = clock

    def discover(self, interface_name: str) -> list[str]:
        if self.state is not SessionState.INIT:
            raise RuntimeError("A discovery session can only be run once")

        try:
            return self._run(interface_name)
        except DiscoveryError as exc:
            self.state = SessionState.FAILED
            self.error = exc
            raise

    def _run(self, interface_name: str) -> list[str]:
        interface = self._resolver(interface_name)

        with contextlib.closing(self._socket_factory(interface, self.settings)) as sock:
            self.state = SessionState.BOUND
            deadline = self._clock() + self.settings.timeout

            probe = build_probe(mint_message_id())
            try:
                sock.sendto(probe, self.settings.group_address)
            except OSError as exc:
                raise SendFailed("Error sending discovery message", str(exc)) from exc
            self.state = SessionState.SENT
            logger.debug(
                "Probe sent",
                extra={"event": "wsd_probe_sent", "interface": interface_name, "size": len(probe)},
            )

            self.state = SessionState.COLLECTING
            addresses = self._collect(sock, deadline)

        self.state = SessionState.DONE
        logger.info(
            "Discovery finished",
            extra={"event": "wsd_done", "interface": interface_name, "matches": len(addresses)},
        )
        return addresses

    def _collect(self, sock: socket.socket, deadline: float) -> list[str]:
        addresses: list[str] = []
        while True:
            remaining = deadline - self._clock()
            if remaining <= 0:
                break
            sock.settimeout(remaining)
            try:
                payload, sender = sock.recvfrom(self.settings.buffer_size)
            except socket.timeout:
                break
            except OSError as exc:
                raise ReadFailed("Error reading from UDP", str(exc)) from exc

            datagram = ResponseDatagram(payload=payload, sender=sender[0])
            address = extract_transport_address(datagram)
            if address is None:
                logger.debug(
                    "Discarded datagram",
                    extra={"event": "wsd_discard", "sender": datagram.sender, "size": len(payload)},
                )
                continue

            logger.debug(
                "ONVIF match",
                extra={"event": "wsd_match", "sender": datagram.sender, "address": address},
            )
            addresses.append(address)
        return addresses


def discover(interface_name: str, settings: Optional[DiscoverySettings] = None) -> list[str]:
    """Run one discovery session on ``interface_name`` and return the transport addresses."""

    return DiscoverySession(settings).discover(interface_name)
