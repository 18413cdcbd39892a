"""Value types shared by the probe, the DNS reader and the menu."""

import platform
from dataclasses import dataclass, field
from enum import StrEnum

from dnswitch.core.utils.utils import UNKNOWN_PROVIDER


class Platform(StrEnum):
    """Operating system family the process is running on."""

    WINDOWS = "Windows"
    MACOS = "MacOS"
    LINUX = "Linux"
    UNSUPPORTED = "Unsupported"

    @classmethod
    def detect(cls, system: str | None = None) -> "Platform":
        """Map ``platform.system()`` (or the given name) to a Platform."""
        system = platform.system() if system is None else system
        return {
            "Windows": cls.WINDOWS,
            "Darwin": cls.MACOS,
            "Linux": cls.LINUX,
        }.get(system, cls.UNSUPPORTED)


class InterfaceType(StrEnum):
    """Best-effort classification of a network interface."""

    WIFI = "Wi-Fi"
    ETHERNET = "Ethernet"
    BLUETOOTH = "Bluetooth"
    VIRTUAL = "Virtual"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class NetworkInterface:
    """Network interface representation with its key properties.

    Attributes:
        system_name: OS-level identifier passed to DNS commands
            (adapter alias, network service or device name)
        display_name: Human readable name shown in the menu
        is_active: Whether the interface is considered usable right now
        type: Interface classification
    """

    system_name: str
    display_name: str
    is_active: bool
    type: InterfaceType = InterfaceType.UNKNOWN


@dataclass(frozen=True)
class DNSObservation:
    """DNS servers currently bound to an interface.

    Attributes:
        provider: Name of the first matching provider, or "Unknown"
        addresses: Distinct server addresses in first-seen order
    """

    provider: str = UNKNOWN_PROVIDER
    addresses: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_known(self) -> bool:
        return self.provider != UNKNOWN_PROVIDER
