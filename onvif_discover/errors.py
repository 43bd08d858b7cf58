"""Error taxonomy for WS-Discovery probe sessions."""

from __future__ import annotations


class DiscoveryError(Exception):
    """Base class for failures that terminate a discovery session."""

    kind = "DiscoveryError"

    def __init__(self, message: str, cause: str = "") -> None:
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        message = super().__str__()
        if self.cause:
            return f"{message}: {self.cause}"
        return message


class InterfaceUnknown(DiscoveryError):
    kind = "InterfaceUnknown"


class MulticastBindFailed(DiscoveryError):
    kind = "MulticastBindFailed"


class SendFailed(DiscoveryError):
    kind = "SendFailed"


class ReadFailed(DiscoveryError):
    kind = "ReadFailed"


class RandomSourceFailed(DiscoveryError):
    kind = "RandomSourceFailed"


class InterfaceEnumerationFailed(DiscoveryError):
    """Raised when the host's network interfaces cannot be listed."""

    kind = "InterfaceEnumerationFailed"
