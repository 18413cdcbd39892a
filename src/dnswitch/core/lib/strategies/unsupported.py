"""Fallback strategy for operating systems DNSwitch cannot manage."""

from typing import TYPE_CHECKING, NoReturn

from dnswitch.core.exceptions import UnsupportedPlatformError
from dnswitch.core.models import InterfaceType, NetworkInterface, Platform

from .base import PlatformOp, PlatformStrategy

if TYPE_CHECKING:
    from dnswitch.core.lib.dispatcher import CommandDispatcher


class UnsupportedStrategy(PlatformStrategy):
    """Refuses every operation without running anything."""

    platform = Platform.UNSUPPORTED

    def __init__(self, system: str) -> None:
        self.system = system

    def _refuse(self) -> NoReturn:
        raise UnsupportedPlatformError(self.system)

    def build_command(self, op: PlatformOp, *args) -> list[str]:
        self._refuse()

    def read_dns_command(self, interface: str) -> list[str]:
        self._refuse()

    def set_dns_command(self, interface: str, addresses: list[str]) -> list[str]:
        self._refuse()

    def clear_dns_command(self, interface: str) -> list[str]:
        self._refuse()

    def classify(self, name: str) -> InterfaceType:
        return InterfaceType.UNKNOWN

    def scan_interfaces(self, dispatcher: "CommandDispatcher") -> list[NetworkInterface]:
        self._refuse()

    def active_interface(self, dispatcher: "CommandDispatcher") -> NetworkInterface | None:
        self._refuse()
