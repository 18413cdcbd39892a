"""macOS strategy: network services managed with ``networksetup``."""

from collections.abc import Callable
from typing import TYPE_CHECKING

from loguru import logger

from dnswitch.core.models import InterfaceType, NetworkInterface, Platform

from .base import PlatformOp, PlatformStrategy

if TYPE_CHECKING:
    from dnswitch.core.lib.dispatcher import CommandDispatcher

NETWORKSETUP = "networksetup"
DISABLED_MARKER = "*"
NO_DNS_MARKER = "There aren't any DNS Servers set"
IP_ADDRESS_PREFIX = "IP address:"
NO_IP_VALUES = {"", "(null)", "none"}


def parse_services(output: str) -> list[str]:
    """Return enabled services from ``-listallnetworkservices`` output.

    The first line is a legend about the asterisk, disabled services are
    prefixed with it.
    """
    services = []
    for line in output.strip().splitlines()[1:]:
        service = line.strip()
        if not service or service.startswith(DISABLED_MARKER):
            continue
        services.append(service)
    return services


def has_ip_address(info_output: str) -> bool:
    """Check ``-getinfo`` output for an assigned IPv4 address."""
    for line in info_output.splitlines():
        line = line.strip()
        if line.startswith(IP_ADDRESS_PREFIX):
            return line[len(IP_ADDRESS_PREFIX) :].strip() not in NO_IP_VALUES
    return False


class MacOSStrategy(PlatformStrategy):
    platform = Platform.MACOS

    def read_dns_command(self, interface: str) -> list[str]:
        return [NETWORKSETUP, "-getdnsservers", interface]

    def set_dns_command(self, interface: str, addresses: list[str]) -> list[str]:
        return [NETWORKSETUP, "-setdnsservers", interface, *addresses]

    def clear_dns_command(self, interface: str) -> list[str]:
        return [NETWORKSETUP, "-setdnsservers", interface, "Empty"]

    def extra_builders(self) -> dict[PlatformOp, Callable[..., list[str]]]:
        return {
            PlatformOp.LIST_INTERFACES: self.list_interfaces_command,
            PlatformOp.INTERFACE_INFO: self.interface_info_command,
        }

    def list_interfaces_command(self) -> list[str]:
        return [NETWORKSETUP, "-listallnetworkservices"]

    def interface_info_command(self, interface: str) -> list[str]:
        return [NETWORKSETUP, "-getinfo", interface]

    def parse_dns(self, output: str) -> list[str]:
        if NO_DNS_MARKER in output:
            return []
        return output.split()

    def classify(self, name: str) -> InterfaceType:
        lowered = name.lower()
        if "wi-fi" in lowered or "wifi" in lowered:
            return InterfaceType.WIFI
        if "ethernet" in lowered:
            return InterfaceType.ETHERNET
        if "bluetooth" in lowered:
            return InterfaceType.BLUETOOTH
        return InterfaceType.UNKNOWN

    def scan_interfaces(self, dispatcher: "CommandDispatcher") -> list[NetworkInterface]:
        result = dispatcher.execute(PlatformOp.LIST_INTERFACES)
        interfaces = []
        for service in parse_services(result.text):
            # A service can hold an IP without a DNS override, so only the IP decides
            info = dispatcher.run(PlatformOp.INTERFACE_INFO, service)
            if not info.ok:
                logger.debug(f"No info for service {service}: {info.diagnostic}")
            interfaces.append(
                NetworkInterface(
                    system_name=service,
                    display_name=service,
                    is_active=info.ok and has_ip_address(info.text),
                    type=self.classify(service),
                )
            )
        return interfaces

    def active_interface(self, dispatcher: "CommandDispatcher") -> NetworkInterface | None:
        """Return the first enabled network service that has an IP address."""
        return next(
            (interface for interface in self.scan_interfaces(dispatcher) if interface.is_active),
            None,
        )
