"""Custom exceptions for DNS switching.

This module defines the error taxonomy shared by the interface probe, the DNS
reader and writer, and the command dispatcher:
- Unsupported operating systems
- External commands that fail or cannot be launched
- Interface enumeration failures
- Missing active interface

Every exception carries a one-line message meant to be shown to the operator
as-is before control returns to the menu.

Example:
    try:
        set_dns(dispatcher, "Wi-Fi", ["1.1.1.1", "1.0.0.1"])
    except ExternalCommandFailedError as e:
        console.print(f"[red]Error setting DNS: {e}")
"""


class DNSwitchError(Exception):
    """Base exception for DNS switching errors."""


class UnsupportedPlatformError(DNSwitchError):
    """Raised when the running OS has no DNS strategy."""

    def __init__(self, system: str) -> None:
        self.system = system
        super().__init__(f"OS {system} is not supported")


class ExternalCommandFailedError(DNSwitchError):
    """Raised when an OS utility exits non-zero or cannot be started."""

    def __init__(self, diagnostic: str, argv: list[str] | None = None) -> None:
        self.diagnostic = diagnostic
        self.argv = argv or []
        super().__init__(diagnostic)


class InterfaceEnumerationFailedError(DNSwitchError):
    """Raised when network interfaces cannot be listed."""

    def __init__(self, diagnostic: str) -> None:
        self.diagnostic = diagnostic
        super().__init__(f"Failed to list network interfaces: {diagnostic}")


class NoActiveInterfaceError(DNSwitchError):
    """Raised when no interface qualifies as active."""

    def __init__(self) -> None:
        super().__init__("No active network interface found")
