"""External process execution.

Every OS utility DNSwitch calls (``powershell``, ``networksetup``, ``sh``)
goes through a ``CommandRunner``. The runner launches one process, waits for
it, and captures its output; it never raises for a failed command; instead
the returned ``CommandResult`` reports ``ok`` and a ``diagnostic`` string.
Tests substitute their own runner to avoid touching the OS.

Example:
    result = SubprocessRunner().run(["networksetup", "-listallnetworkservices"])
    if result.ok:
        print(result.text)
"""

import subprocess
from dataclasses import dataclass, field
from typing import Protocol

from loguru import logger


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single external process invocation.

    Attributes:
        argv: Command line that was run
        returncode: Exit status, None when the process could not be launched
        stdout: Raw standard output
        stderr: Raw standard error
        error: OS error text for launch failures
    """

    argv: list[str]
    returncode: int | None
    stdout: bytes = b""
    stderr: bytes = b""
    error: str = field(default="")

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def text(self) -> str:
        """Standard output decoded for parsing."""
        return self.stdout.decode(errors="replace")

    @property
    def diagnostic(self) -> str:
        """Combined output or launch error, suitable for showing to the operator."""
        if self.error:
            return self.error
        combined = (self.stdout + self.stderr).decode(errors="replace").strip()
        if combined:
            return f"exit status {self.returncode}: {combined}"
        return f"exit status {self.returncode}"


class CommandRunner(Protocol):
    """Capability to run an argv and capture its result."""

    def run(self, argv: list[str]) -> CommandResult: ...


class SubprocessRunner:
    """Run commands with ``subprocess.run`` using the OS default timeout behaviour."""

    def run(self, argv: list[str]) -> CommandResult:
        logger.debug(f"Running {argv}")
        try:
            completed = subprocess.run(argv, capture_output=True, check=False)
        except OSError as e:
            logger.warning(f"Could not launch {argv[0]}: {e}")
            return CommandResult(argv=list(argv), returncode=None, error=str(e))

        result = CommandResult(
            argv=list(argv),
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
        if not result.ok:
            logger.debug(f"{argv[0]} failed with {result.diagnostic}")
        return result
