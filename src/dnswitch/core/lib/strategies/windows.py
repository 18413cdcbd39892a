"""Windows strategy: DNS client cmdlets run through PowerShell."""

import json
from collections.abc import Callable
from typing import TYPE_CHECKING

from loguru import logger

from dnswitch.core.models import InterfaceType, NetworkInterface, Platform

from .base import PlatformOp, PlatformStrategy

if TYPE_CHECKING:
    from dnswitch.core.lib.dispatcher import CommandDispatcher

POWERSHELL = "powershell"
LIST_ADAPTERS_SCRIPT = (
    "Get-NetAdapter | Select-Object Name, InterfaceDescription, Status, MediaType | ConvertTo-Json"
)

# Checked in order, first hit wins.
# Bluetooth PAN adapters report media type 802.3, so bluetooth comes before ethernet.
ADAPTER_TYPE_KEYWORDS: list[tuple[tuple[str, ...], InterfaceType]] = [
    (("bluetooth",), InterfaceType.BLUETOOTH),
    (("virtual", "loopback"), InterfaceType.VIRTUAL),
    (("wireless", "wi-fi", "802.11"), InterfaceType.WIFI),
    (("ethernet", "802.3"), InterfaceType.ETHERNET),
]


def quote(value: str) -> str:
    """Quote a value as a PowerShell single-quoted string."""
    return "'" + value.replace("'", "''") + "'"


def powershell(script: str) -> list[str]:
    return [POWERSHELL, "-Command", script]


def classify_adapter(description: str, media_type: str = "") -> InterfaceType:
    """Infer the adapter type from its description and media type."""
    haystack = f"{description} {media_type}".lower()
    for keywords, interface_type in ADAPTER_TYPE_KEYWORDS:
        if any(keyword in haystack for keyword in keywords):
            return interface_type
    return InterfaceType.UNKNOWN


class WindowsStrategy(PlatformStrategy):
    platform = Platform.WINDOWS

    def read_dns_command(self, interface: str) -> list[str]:
        return powershell(
            f"(Get-DnsClientServerAddress -InterfaceAlias {quote(interface)} "
            "-AddressFamily IPv4).ServerAddresses"
        )

    def set_dns_command(self, interface: str, addresses: list[str]) -> list[str]:
        return powershell(
            f"Set-DnsClientServerAddress -InterfaceAlias {quote(interface)} "
            f"-ServerAddresses {','.join(addresses)}"
        )

    def clear_dns_command(self, interface: str) -> list[str]:
        return powershell(
            f"Set-DnsClientServerAddress -InterfaceAlias {quote(interface)} -ResetServerAddresses"
        )

    def extra_builders(self) -> dict[PlatformOp, Callable[..., list[str]]]:
        return {PlatformOp.LIST_INTERFACES: self.list_interfaces_command}

    def list_interfaces_command(self) -> list[str]:
        return powershell(LIST_ADAPTERS_SCRIPT)

    def classify(self, name: str) -> InterfaceType:
        return classify_adapter(name)

    def parse_adapters(self, output: str) -> list[NetworkInterface]:
        """Turn ``ConvertTo-Json`` output into interfaces.

        PowerShell emits a bare object instead of an array when only one
        adapter exists, and nothing at all when there are none.
        """
        if not output.strip():
            return []
        data = json.loads(output)
        if isinstance(data, dict):
            data = [data]

        interfaces = []
        for adapter in data:
            name = adapter["Name"]
            description = adapter.get("InterfaceDescription") or name
            interfaces.append(
                NetworkInterface(
                    system_name=name,
                    display_name=description,
                    is_active=str(adapter.get("Status") or "").lower() == "up",
                    type=classify_adapter(description, str(adapter.get("MediaType") or "")),
                )
            )
        return interfaces

    def scan_interfaces(self, dispatcher: "CommandDispatcher") -> list[NetworkInterface]:
        result = dispatcher.execute(PlatformOp.LIST_INTERFACES)
        interfaces = self.parse_adapters(result.text)
        logger.debug(f"Found {len(interfaces)} network adapters")
        return interfaces
