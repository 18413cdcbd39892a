"""Network interface detection.

This module provides functionality for:
- Scanning the network interfaces of the running platform
- Flagging which of them are active
- Classifying them as Wi-Fi, Ethernet, Bluetooth or virtual
- Picking the single active interface for callers that do not offer a choice

Each call produces a fresh snapshot; nothing is cached. What "active" means
differs per OS:
- Windows: adapter status is "Up"
- macOS: the network service reports an IP address
- Linux: the link is up (loopback is never listed)

Example:
    dispatcher = create_dispatcher()
    interface = get_active_interface(dispatcher)
    print(f"Found {interface.type} interface {interface.display_name}")
"""

import json

import psutil
from loguru import logger

from dnswitch.core.exceptions import (
    ExternalCommandFailedError,
    InterfaceEnumerationFailedError,
    NoActiveInterfaceError,
)
from dnswitch.core.lib.dispatcher import CommandDispatcher
from dnswitch.core.models import NetworkInterface

# Failures that mean the interface list could not be produced
ENUMERATION_ERRORS = (
    ExternalCommandFailedError,
    psutil.Error,
    OSError,
    json.JSONDecodeError,
    KeyError,
    TypeError,
)


def scan_interfaces(dispatcher: CommandDispatcher) -> list[NetworkInterface]:
    """Scan all network interfaces of the running platform.

    Args:
        dispatcher: Dispatcher for the running platform

    Returns:
        list[NetworkInterface]: Every interface found, active or not

    Raises:
        UnsupportedPlatformError: If the platform has no strategy
        InterfaceEnumerationFailedError: If the interfaces cannot be listed
    """
    try:
        interfaces = dispatcher.scan_interfaces()
    except ENUMERATION_ERRORS as e:
        logger.error(f"Interface enumeration failed: {e}")
        raise InterfaceEnumerationFailedError(str(e)) from e

    logger.debug(f"Scanned {len(interfaces)} interfaces: {[i.system_name for i in interfaces]}")
    return interfaces


def get_active_interface(dispatcher: CommandDispatcher) -> NetworkInterface:
    """Return the first active, non-loopback interface with an IPv4 address.

    Raises:
        UnsupportedPlatformError: If the platform has no strategy
        InterfaceEnumerationFailedError: If the interfaces cannot be listed
        NoActiveInterfaceError: If no interface qualifies
    """
    try:
        interface = dispatcher.active_interface()
    except ENUMERATION_ERRORS as e:
        logger.error(f"Active interface detection failed: {e}")
        raise InterfaceEnumerationFailedError(str(e)) from e

    if interface is None:
        logger.warning("No active network interface found")
        raise NoActiveInterfaceError
    logger.info(f"Detected active interface {interface.system_name}")
    return interface
