"""Pytest configuration and shared fixtures.

Provides a fake command runner and dispatchers for every platform so no
test ever starts a real process or touches the real DNS configuration.
"""

import os
import socket
import tempfile
from types import SimpleNamespace

# Keep logs and custom providers out of the real home directory
os.environ.setdefault("DNSWITCH_HOME", tempfile.mkdtemp(prefix="dnswitch-tests-"))

import pytest

from dnswitch.core.lib.dispatcher import CommandDispatcher, create_dispatcher
from dnswitch.core.lib.runner import CommandResult
from dnswitch.core.models import Platform
from dnswitch.core.providers import ProviderRegistry, ProviderStore


class FakeRunner:
    """Command runner returning canned results and recording every argv.

    ``responses`` maps an argv tuple to ``(returncode, stdout, stderr)``;
    unknown commands succeed with empty output. A returncode of None
    simulates a launch failure.
    """

    def __init__(self, responses: dict | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[list[str]] = []

    def respond(self, argv: list[str], stdout: str = "", returncode: int | None = 0, stderr: str = ""):
        self.responses[tuple(argv)] = (returncode, stdout, stderr)

    def run(self, argv: list[str]) -> CommandResult:
        self.calls.append(list(argv))
        returncode, stdout, stderr = self.responses.get(tuple(argv), (0, "", ""))
        if returncode is None:
            return CommandResult(argv=list(argv), returncode=None, error=stderr)
        return CommandResult(
            argv=list(argv),
            returncode=returncode,
            stdout=stdout.encode(),
            stderr=stderr.encode(),
        )


def make_addr(address: str, family=socket.AF_INET) -> SimpleNamespace:
    """Build an object shaped like ``psutil`` snicaddr."""
    return SimpleNamespace(family=family, address=address, netmask=None, broadcast=None, ptp=None)


def make_stats(isup: bool, flags: str = "") -> SimpleNamespace:
    """Build an object shaped like ``psutil`` snicstats."""
    return SimpleNamespace(isup=isup, duplex=0, speed=0, mtu=1500, flags=flags)


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def windows_dispatcher(fake_runner: FakeRunner) -> CommandDispatcher:
    return create_dispatcher(Platform.WINDOWS, fake_runner)


@pytest.fixture
def macos_dispatcher(fake_runner: FakeRunner) -> CommandDispatcher:
    return create_dispatcher(Platform.MACOS, fake_runner)


@pytest.fixture
def linux_dispatcher(fake_runner: FakeRunner) -> CommandDispatcher:
    return create_dispatcher(Platform.LINUX, fake_runner)


@pytest.fixture
def unsupported_dispatcher(fake_runner: FakeRunner) -> CommandDispatcher:
    return create_dispatcher(Platform.UNSUPPORTED, fake_runner)


@pytest.fixture
def store(tmp_path) -> ProviderStore:
    """Create a store backed by a temporary directory."""
    return ProviderStore(tmp_path / "custom_dns.json")


@pytest.fixture
def registry(store: ProviderStore) -> ProviderRegistry:
    return ProviderRegistry.from_store(store)
