"""Message identifiers for outgoing WS-Discovery probes."""

from __future__ import annotations

import re
import secrets

from onvif_discover.errors import RandomSourceFailed


MESSAGE_ID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


def mint_message_id() -> str:
    """Return a UUID-shaped identifier built from 16 cryptographically random bytes.

    Version and variant bits are not set; only the 8-4-4-4-12 layout is guaranteed.
    """

    try:
        digits = secrets.token_bytes(16).hex()
    except OSError as exc:
        raise RandomSourceFailed("Unable to read from the random source", str(exc)) from exc
    return f"{digits[:8]}-{digits[8:12]}-{digits[12:16]}-{digits[16:20]}-{digits[20:]}"


def is_message_id(value: str) -> bool:
    return bool(MESSAGE_ID_PATTERN.match(value))
