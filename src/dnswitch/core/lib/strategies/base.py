"""Base class for platform DNS strategies - implemented per operating system."""

import ipaddress
import socket
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

import psutil

from dnswitch.core.models import InterfaceType, NetworkInterface, Platform

if TYPE_CHECKING:
    from dnswitch.core.lib.dispatcher import CommandDispatcher


class PlatformOp(StrEnum):
    """Operations a strategy knows how to turn into an external command."""

    LIST_INTERFACES = "list-interfaces"
    INTERFACE_INFO = "interface-info"
    READ_DNS = "read-dns"
    SET_DNS = "set-dns"
    CLEAR_DNS = "clear-dns"


def is_loopback(name: str, stats, addrs) -> bool:
    """Check psutil flags, the conventional name and bound addresses for loopback."""
    if stats is not None and "loopback" in getattr(stats, "flags", ""):
        return True
    if name == "lo":
        return True
    ipv4 = [addr.address for addr in addrs if addr.family == socket.AF_INET]
    return bool(ipv4) and all(ipaddress.ip_address(ip).is_loopback for ip in ipv4)


def ipv4_addresses(addrs) -> list[str]:
    """Return the non-loopback IPv4 addresses from a psutil address list."""
    return [
        addr.address
        for addr in addrs
        if addr.family == socket.AF_INET and not ipaddress.ip_address(addr.address).is_loopback
    ]


class PlatformStrategy(ABC):
    """Abstract base class for per-OS interface discovery and DNS commands.

    A strategy only knows how to build argv lists and how to read the output
    of the commands it builds. Running them is left to the dispatcher, which
    is passed in whenever a strategy needs more than one command.
    """

    platform: ClassVar[Platform]

    def build_command(self, op: PlatformOp, *args) -> list[str]:
        """Build the argv for ``op``.

        Raises:
            KeyError: If this platform has no command for ``op``
        """
        builders = {
            PlatformOp.READ_DNS: self.read_dns_command,
            PlatformOp.SET_DNS: self.set_dns_command,
            PlatformOp.CLEAR_DNS: self.clear_dns_command,
            **self.extra_builders(),
        }
        if op not in builders:
            raise KeyError(f"{self.platform} has no {op} command")
        return builders[op](*args)

    def extra_builders(self) -> dict[PlatformOp, Callable[..., list[str]]]:
        """Builders for the enumeration commands this platform runs, if any."""
        return {}

    @abstractmethod
    def read_dns_command(self, interface: str) -> list[str]:
        """Command printing the DNS servers bound to ``interface``."""

    @abstractmethod
    def set_dns_command(self, interface: str, addresses: list[str]) -> list[str]:
        """Command replacing the DNS servers of ``interface``."""

    @abstractmethod
    def clear_dns_command(self, interface: str) -> list[str]:
        """Command reverting ``interface`` to automatic DNS."""

    def parse_dns(self, output: str) -> list[str]:
        """Split read-dns output into address tokens."""
        return output.split()

    @abstractmethod
    def classify(self, name: str) -> InterfaceType:
        """Guess the interface type from its name."""

    @abstractmethod
    def scan_interfaces(self, dispatcher: "CommandDispatcher") -> list[NetworkInterface]:
        """Enumerate every interface on this platform."""

    def active_interface(self, dispatcher: "CommandDispatcher") -> NetworkInterface | None:
        """Return the first up, non-loopback interface with an IPv4 address.

        Args:
            dispatcher: Unused here, platforms that need commands override this

        Returns:
            NetworkInterface | None: The interface, or None if nothing qualifies
        """
        all_addrs = psutil.net_if_addrs()
        for name, stats in psutil.net_if_stats().items():
            addrs = all_addrs.get(name, [])
            if not stats.isup or is_loopback(name, stats, addrs):
                continue
            if ipv4_addresses(addrs):
                return NetworkInterface(
                    system_name=name,
                    display_name=name,
                    is_active=True,
                    type=self.classify(name),
                )
        return None
