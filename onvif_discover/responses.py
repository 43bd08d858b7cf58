"""Helpers for picking transport addresses out of ProbeMatch datagrams.

These deliberately avoid a real XML parse: responders on a shared multicast
group send all kinds of payloads, and only two facts are needed from each one.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

ONVIF_MARKER = b"onvif"
WILDCARD_PREFIX = "http://0.0.0.0"


@dataclass(frozen=True)
class ResponseDatagram:
    payload: bytes
    sender: str


def is_onvif_response(payload: bytes) -> bool:
    """Case-sensitive check for the ``onvif`` byte sequence anywhere in the payload."""

    return ONVIF_MARKER in payload


def find_tag_value(payload: bytes, tag: str) -> str:
    """Return the text following the first ``<tag>`` or ``:tag>`` opening.

    Any namespace prefix is accepted. The text runs up to the next ``<``; an
    empty string is returned when the tag does not occur.
    """

    match = re.search(rb"[:<]" + re.escape(tag.encode("ascii")) + rb">([^<]*)", payload)
    if match is None:
        return ""
    return match.group(1).decode("utf-8", errors="replace")


def rewrite_wildcard_host(address: str, sender: str) -> str:
    """Replace a wildcard ``http://0.0.0.0`` host with the sender's IP, keeping port and path."""

    if address.startswith(WILDCARD_PREFIX):
        return f"http://{sender}{address[len(WILDCARD_PREFIX):]}"
    return address


def extract_transport_address(datagram: ResponseDatagram) -> Optional[str]:
    """Return the datagram's XAddrs value, or None when it should be discarded."""

    if not is_onvif_response(datagram.payload):
        return None
    address = find_tag_value(datagram.payload, "XAddrs")
    if not address:
        return None
    return rewrite_wildcard_host(address, datagram.sender)
