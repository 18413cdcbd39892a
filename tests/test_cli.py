"""Tests for cmd/cli.py."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from dnswitch.cmd import cli
from dnswitch.core.lib.strategies import PlatformOp

runner = CliRunner()


@pytest.fixture
def providers_file(tmp_path):
    return tmp_path / "custom_dns.json"


@pytest.fixture
def invoke(providers_file):
    """Invoke the app against a given dispatcher without touching the OS."""

    def _invoke(dispatcher, *args: str):
        with (
            patch.object(cli, "create_dispatcher", return_value=dispatcher),
            patch.object(cli, "setup_logging"),
            patch.object(cli, "check_admin", return_value=True),
        ):
            return runner.invoke(cli.app, ["--providers-file", str(providers_file), *args])

    return _invoke


class TestProviders:
    def test_lists_defaults(self, invoke, linux_dispatcher) -> None:
        result = invoke(linux_dispatcher, "providers")
        assert result.exit_code == 0
        for name in ("403", "Shecan", "Begzar", "electrotm"):
            assert name in result.output

    def test_add_and_remove(self, invoke, linux_dispatcher, providers_file) -> None:
        result = invoke(linux_dispatcher, "add", "Cloudflare", "1.1.1.1", "1.0.0.1")
        assert result.exit_code == 0
        assert json.loads(providers_file.read_text()) == {"Cloudflare": ["1.1.1.1", "1.0.0.1"]}

        result = invoke(linux_dispatcher, "providers")
        assert "Cloudflare" in result.output

        result = invoke(linux_dispatcher, "remove", "Cloudflare")
        assert result.exit_code == 0
        assert json.loads(providers_file.read_text()) == {}

    def test_remove_default_refused(self, invoke, linux_dispatcher) -> None:
        result = invoke(linux_dispatcher, "remove", "Shecan")
        assert result.exit_code == 1
        assert "cannot be removed" in result.output

    def test_remove_unknown(self, invoke, linux_dispatcher) -> None:
        result = invoke(linux_dispatcher, "remove", "Nope")
        assert result.exit_code == 1
        assert "No custom DNS named 'Nope'" in result.output


class TestDnsCommands:
    def test_use(self, invoke, macos_dispatcher, fake_runner) -> None:
        result = invoke(macos_dispatcher, "use", "Shecan", "--interface", "Wi-Fi")
        assert result.exit_code == 0
        assert [
            "networksetup",
            "-setdnsservers",
            "Wi-Fi",
            "178.22.122.100",
            "185.51.200.2",
        ] in fake_runner.calls

    def test_use_unknown_provider(self, invoke, macos_dispatcher, fake_runner) -> None:
        result = invoke(macos_dispatcher, "use", "Nope", "-i", "Wi-Fi")
        assert result.exit_code == 1
        assert "Unknown DNS provider 'Nope'" in result.output
        assert fake_runner.calls == []

    def test_use_detects_interface(self, invoke, macos_dispatcher, fake_runner) -> None:
        fake_runner.respond(
            ["networksetup", "-listallnetworkservices"],
            "An asterisk (*) denotes that a network service is disabled.\nWi-Fi\n",
        )
        fake_runner.respond(["networksetup", "-getinfo", "Wi-Fi"], "IP address: 192.168.1.4\n")

        result = invoke(macos_dispatcher, "use", "Begzar")

        assert result.exit_code == 0
        assert "Detected active interface: Wi-Fi" in result.output

    def test_status(self, invoke, linux_dispatcher, fake_runner) -> None:
        fake_runner.respond(
            linux_dispatcher.command_for(PlatformOp.READ_DNS, "eth0"),
            "10.202.10.202\n10.202.10.102\n",
        )
        result = invoke(linux_dispatcher, "status", "-i", "eth0")
        assert result.exit_code == 0
        assert "Current DNS: 403" in result.output

    def test_clear_failure(self, invoke, windows_dispatcher, fake_runner) -> None:
        fake_runner.respond(
            windows_dispatcher.command_for(PlatformOp.CLEAR_DNS, "Wi-Fi"),
            returncode=1,
            stderr="Access is denied.",
        )
        result = invoke(windows_dispatcher, "clear", "-i", "Wi-Fi")
        assert result.exit_code == 1
        assert "Error clearing DNS settings" in result.output

    def test_unsupported_platform(self, invoke, unsupported_dispatcher, fake_runner) -> None:
        result = invoke(unsupported_dispatcher, "interfaces")
        assert result.exit_code == 1
        assert "is not supported" in result.output
        assert fake_runner.calls == []


class TestEntryPoint:
    def test_version(self, invoke, linux_dispatcher) -> None:
        result = invoke(linux_dispatcher, "--version")
        assert result.exit_code == 0
        assert "DNSwitch v" in result.output

    def test_menu_is_default(self, invoke, linux_dispatcher) -> None:
        with patch.object(cli, "DNSwitchMenu") as mock_menu:
            result = invoke(linux_dispatcher)
        assert result.exit_code == 0
        mock_menu.return_value.run.assert_called_once_with(None)

    def test_menu_end_of_input(self, invoke, linux_dispatcher) -> None:
        with patch.object(cli, "DNSwitchMenu") as mock_menu:
            mock_menu.return_value.run.side_effect = EOFError
            result = invoke(linux_dispatcher, "menu", "-i", "eth0")
        assert result.exit_code == 0


class TestUnexpectedErrors:
    def test_command_reports_and_logs(self, invoke, linux_dispatcher) -> None:
        with (
            patch.object(cli, "scan_interfaces", side_effect=RuntimeError("boom")),
            patch.object(cli, "logger") as mock_logger,
        ):
            result = invoke(linux_dispatcher, "interfaces")
        assert result.exit_code == 1
        assert "Error: boom" in result.output
        mock_logger.exception.assert_called_once()

    def test_menu_reports_and_logs(self, invoke, linux_dispatcher) -> None:
        with (
            patch.object(cli, "DNSwitchMenu") as mock_menu,
            patch.object(cli, "logger") as mock_logger,
        ):
            mock_menu.return_value.run.side_effect = KeyError("eth9")
            result = invoke(linux_dispatcher, "menu")
        assert result.exit_code == 1
        assert "Error: 'eth9'" in result.output
        mock_logger.exception.assert_called_once()

    def test_save_failure_has_context(self, invoke, linux_dispatcher, providers_file) -> None:
        with patch.object(cli.ProviderRegistry, "save", side_effect=PermissionError("read-only")):
            result = invoke(linux_dispatcher, "add", "Cloudflare", "1.1.1.1")
        assert result.exit_code == 1
        assert "Error saving custom DNS: read-only" in result.output
        assert not providers_file.exists()
