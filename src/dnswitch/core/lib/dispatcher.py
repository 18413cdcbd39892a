"""Routing of DNS operations to the strategy of the running platform.

The dispatcher is created once at startup by ``create_dispatcher`` and then
passed to the probe, reader and writer. It owns two things:
- The platform strategy, which knows the command shapes for one OS
- The command runner, which actually starts processes

On an unsupported platform every operation raises ``UnsupportedPlatformError``
before anything is executed.

Example:
    dispatcher = create_dispatcher()
    result = dispatcher.run(PlatformOp.READ_DNS, "Wi-Fi")
    if result.ok:
        print(result.text)
"""

import platform as platform_module

from loguru import logger

from dnswitch.core.exceptions import ExternalCommandFailedError, UnsupportedPlatformError
from dnswitch.core.models import NetworkInterface, Platform

from .runner import CommandResult, CommandRunner, SubprocessRunner
from .strategies import (
    LinuxStrategy,
    MacOSStrategy,
    PlatformOp,
    PlatformStrategy,
    UnsupportedStrategy,
    WindowsStrategy,
)


class CommandDispatcher:
    """Builds commands with a platform strategy and runs them."""

    def __init__(self, strategy: PlatformStrategy, runner: CommandRunner | None = None) -> None:
        """Initialize the dispatcher.

        Args:
            strategy: Strategy for the running platform
            runner: Process runner (default: ``SubprocessRunner``)
        """
        self.strategy = strategy
        self.runner = runner or SubprocessRunner()

    @property
    def platform(self) -> Platform:
        return self.strategy.platform

    def _ensure_supported(self) -> None:
        if self.platform is Platform.UNSUPPORTED:
            raise UnsupportedPlatformError(getattr(self.strategy, "system", "unknown"))

    def command_for(self, op: PlatformOp, *args) -> list[str]:
        """Return the argv ``op`` would run, without running it."""
        self._ensure_supported()
        return self.strategy.build_command(op, *args)

    def run(self, op: PlatformOp, *args) -> CommandResult:
        """Run ``op`` and return its result whether or not it succeeded.

        Raises:
            UnsupportedPlatformError: On an unsupported platform
        """
        argv = self.command_for(op, *args)
        logger.debug(f"{op} on {self.platform}: {argv}")
        return self.runner.run(argv)

    def execute(self, op: PlatformOp, *args) -> CommandResult:
        """Run ``op`` and raise if the command failed.

        Raises:
            UnsupportedPlatformError: On an unsupported platform
            ExternalCommandFailedError: On non-zero exit or launch failure
        """
        result = self.run(op, *args)
        if not result.ok:
            logger.warning(f"{op} failed: {result.diagnostic}")
            raise ExternalCommandFailedError(result.diagnostic, result.argv)
        return result

    def scan_interfaces(self) -> list[NetworkInterface]:
        self._ensure_supported()
        return self.strategy.scan_interfaces(self)

    def active_interface(self) -> NetworkInterface | None:
        self._ensure_supported()
        return self.strategy.active_interface(self)

    def parse_dns(self, output: str) -> list[str]:
        return self.strategy.parse_dns(output)


def create_strategy(platform: Platform, system: str | None = None) -> PlatformStrategy:
    """Create the strategy for ``platform``."""
    if platform is Platform.WINDOWS:
        return WindowsStrategy()
    if platform is Platform.MACOS:
        return MacOSStrategy()
    if platform is Platform.LINUX:
        return LinuxStrategy()
    return UnsupportedStrategy(system or platform_module.system() or "unknown")


def create_dispatcher(
    platform: Platform | None = None, runner: CommandRunner | None = None
) -> CommandDispatcher:
    """Create a dispatcher for the current (or given) platform.

    The platform is detected here once; callers keep the returned dispatcher
    for the lifetime of the process.
    """
    platform = platform or Platform.detect()
    logger.debug(f"Using {platform} DNS strategy")
    return CommandDispatcher(create_strategy(platform), runner)
