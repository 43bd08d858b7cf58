"""Interactive command line front end: pick an interface, probe it, print the URLs."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, Optional

from onvif_discover.discovery import DiscoverySession
from onvif_discover.errors import DiscoveryError, InterfaceEnumerationFailed
from onvif_discover.interfaces import NetworkInterface, list_interfaces


logger = logging.getLogger(__name__)

RESET = "\033[0m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
CYAN = "\033[36m"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_SELECTION = 2


def color_enabled() -> bool:
    """Color only when writing to a terminal and ``NO_COLOR`` is unset."""

    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


def _paint(code: str, text: str) -> str:
    if not color_enabled():
        return text
    return f"{code}{text}{RESET}"


def cyan(text: str) -> str:
    return _paint(CYAN, text)


def green(text: str) -> str:
    return _paint(GREEN, text)


def yellow(text: str) -> str:
    return _paint(YELLOW, text)


def _print_interfaces(interfaces: list[NetworkInterface]) -> None:
    print(cyan("Available network interfaces:"))
    for index, interface in enumerate(interfaces):
        print(f"[{index}] {green(interface.name)} (Flags: {interface.flags_label})")


def _select_interface(
    interfaces: list[NetworkInterface], read_line: Callable[[str], str]
) -> Optional[NetworkInterface]:
    try:
        selection = read_line(cyan("Select an interface (enter the number): ")).strip()
    except EOFError:
        return None
    try:
        index = int(selection)
    except ValueError:
        return None
    if index < 0 or index >= len(interfaces):
        return None
    return interfaces[index]


def _print_results(urls: list[str]) -> None:
    if not urls:
        print("No ONVIF devices found.")
        return
    print("Discovered ONVIF streaming URLs:")
    for url in urls:
        print(yellow(url))


def main(
    argv: Optional[list[str]] = None,
    *,
    read_line: Callable[[str], str] = input,
    session_factory: Callable[[], DiscoverySession] = DiscoverySession,
) -> int:
    parser = argparse.ArgumentParser(
        description="Discover ONVIF devices on a local network segment via WS-Discovery"
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    try:
        interfaces = list_interfaces()
    except InterfaceEnumerationFailed as exc:
        print(f"Error listing interfaces: {exc}")
        return EXIT_ERROR

    if not interfaces:
        print("No network interfaces found.")
        return EXIT_OK

    _print_interfaces(interfaces)
    selected = _select_interface(interfaces, read_line)
    if selected is None:
        print("Invalid selection.")
        return EXIT_INVALID_SELECTION

    print(f"Selected interface: {selected.name}")
    try:
        urls = session_factory().discover(selected.name)
    except DiscoveryError as exc:
        logger.debug("Discovery failed", extra={"event": "cli_error", "kind": exc.kind})
        print(f"Error discovering streaming URLs: {exc}")
        return EXIT_ERROR

    _print_results(urls)
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
