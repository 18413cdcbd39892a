"""Linux strategy: ``/etc/resolv.conf`` and psutil interface enumeration."""

import shlex
from typing import TYPE_CHECKING

import psutil

from dnswitch.core.models import InterfaceType, NetworkInterface, Platform
from dnswitch.core.utils.utils import RESOLV_CONF_PATH

from .base import PlatformStrategy, is_loopback

if TYPE_CHECKING:
    from dnswitch.core.lib.dispatcher import CommandDispatcher

INTERFACE_PREFIXES: list[tuple[tuple[str, ...], InterfaceType]] = [
    (("wl",), InterfaceType.WIFI),
    (("eth", "en"), InterfaceType.ETHERNET),
    (("docker", "br-", "veth"), InterfaceType.VIRTUAL),
]


def write_resolv_conf(content: str) -> list[str]:
    """Command overwriting resolv.conf with ``content`` as root."""
    return ["sudo", "sh", "-c", f"echo {shlex.quote(content)} > {RESOLV_CONF_PATH}"]


class LinuxStrategy(PlatformStrategy):
    platform = Platform.LINUX

    def read_dns_command(self, interface: str) -> list[str]:
        # resolv.conf is global, the interface is not part of the command
        return ["sh", "-c", f"grep nameserver {RESOLV_CONF_PATH} | awk '{{print $2}}'"]

    def set_dns_command(self, interface: str, addresses: list[str]) -> list[str]:
        return write_resolv_conf("".join(f"nameserver {address}\n" for address in addresses))

    def clear_dns_command(self, interface: str) -> list[str]:
        return write_resolv_conf("")

    def classify(self, name: str) -> InterfaceType:
        for prefixes, interface_type in INTERFACE_PREFIXES:
            if name.startswith(prefixes):
                return interface_type
        return InterfaceType.UNKNOWN

    def scan_interfaces(self, dispatcher: "CommandDispatcher") -> list[NetworkInterface]:
        all_addrs = psutil.net_if_addrs()
        interfaces = []
        for name, stats in psutil.net_if_stats().items():
            if is_loopback(name, stats, all_addrs.get(name, [])):
                continue
            interfaces.append(
                NetworkInterface(
                    system_name=name,
                    display_name=name,
                    is_active=stats.isup,
                    type=self.classify(name),
                )
            )
        return interfaces
