"""Tests for cmd/menu.py.

The menu is driven with scripted answers and renders to an in-memory console.
"""

import io

import pytest
from rich.console import Console

from dnswitch.cmd.menu import DNSwitchMenu
from dnswitch.core.exceptions import UnsupportedPlatformError
from dnswitch.core.lib.strategies import PlatformOp
from dnswitch.core.providers import ProviderRegistry
from dnswitch.core.utils.prompt import MenuUI

EXIT = "9"  # 4 default providers + 5 trailing actions

SERVICES = """An asterisk (*) denotes that a network service is disabled.
Wi-Fi
Ethernet
"""


class ScriptedAnswers:
    """Stand-in for ``prompt_toolkit.prompt`` returning queued answers."""

    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, message: str, **kwargs) -> str:
        self.prompts.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)


def make_menu(dispatcher, registry, *answers: str) -> tuple[DNSwitchMenu, io.StringIO]:
    buffer = io.StringIO()
    ui = MenuUI(ask=ScriptedAnswers(*answers), output=Console(file=buffer, width=120))
    return DNSwitchMenu(dispatcher, registry, ui=ui, sleep=lambda _: None), buffer


class TestMenu:
    def test_apply_provider(self, linux_dispatcher, fake_runner, registry) -> None:
        menu, output = make_menu(linux_dispatcher, registry, "2", EXIT)
        menu.run("eth0")

        set_argv = linux_dispatcher.command_for(
            PlatformOp.SET_DNS, "eth0", ["178.22.122.100", "185.51.200.2"]
        )
        assert set_argv in fake_runner.calls
        text = output.getvalue()
        assert "DNS changed to Shecan (178.22.122.100, 185.51.200.2)." in text
        assert "Thank you for using DNSwitch!" in text

    def test_shows_current_dns(self, linux_dispatcher, fake_runner, registry) -> None:
        fake_runner.respond(
            linux_dispatcher.command_for(PlatformOp.READ_DNS, "eth0"),
            "185.55.226.26\n185.55.225.25\n",
        )
        menu, output = make_menu(linux_dispatcher, registry, EXIT)
        menu.run("eth0")

        text = output.getvalue()
        assert "Current DNS: Begzar" in text
        assert "Addresses: 185.55.226.26, 185.55.225.25" in text

    def test_set_failure_keeps_looping(self, macos_dispatcher, fake_runner, registry) -> None:
        fake_runner.respond(
            ["networksetup", "-setdnsservers", "Wi-Fi", "10.202.10.202", "10.202.10.102"],
            "You must run this tool as root.",
            returncode=14,
        )
        menu, output = make_menu(macos_dispatcher, registry, "1", EXIT)
        menu.run("Wi-Fi")

        assert "Error setting DNS" in output.getvalue()
        assert "You must run this tool as root." in output.getvalue()

    def test_add_custom(self, linux_dispatcher, registry) -> None:
        menu, output = make_menu(
            linux_dispatcher, registry, "5", "Cloudflare", "1.1.1.1", "1.0.0.1", "10"
        )
        menu.run("eth0")

        assert registry.addresses("Cloudflare") == ["1.1.1.1", "1.0.0.1"]
        assert registry.store.load() == {"Cloudflare": ["1.1.1.1", "1.0.0.1"]}
        assert "Custom DNS 'Cloudflare' added successfully." in output.getvalue()

    def test_add_custom_without_name(self, linux_dispatcher, registry) -> None:
        menu, output = make_menu(linux_dispatcher, registry, "5", "", "1.1.1.1", "", EXIT)
        menu.run("eth0")

        assert registry.custom_names() == []
        assert "DNS name cannot be empty." in output.getvalue()

    def test_remove_custom(self, linux_dispatcher, store) -> None:
        registry = ProviderRegistry.from_store(store)
        registry.add("X", "1.2.3.4", "5.6.7.8")

        menu, output = make_menu(linux_dispatcher, registry, "7", "1", EXIT)
        menu.run("eth0")

        assert "X" not in registry
        assert store.load() == {}
        assert "Custom DNS 'X' removed successfully." in output.getvalue()

    def test_remove_without_custom(self, linux_dispatcher, registry) -> None:
        menu, output = make_menu(linux_dispatcher, registry, "6", EXIT)
        menu.run("eth0")
        assert "No custom DNS servers found." in output.getvalue()

    def test_clear_all(self, macos_dispatcher, fake_runner, registry) -> None:
        menu, output = make_menu(macos_dispatcher, registry, "7", EXIT)
        menu.run("Wi-Fi")

        assert ["networksetup", "-setdnsservers", "Wi-Fi", "Empty"] in fake_runner.calls
        assert "All DNS settings have been cleared." in output.getvalue()

    def test_invalid_choice_is_asked_again(self, linux_dispatcher, registry) -> None:
        menu, output = make_menu(linux_dispatcher, registry, "abc", "0", "42", EXIT)
        menu.run("eth0")
        assert output.getvalue().count("Invalid input. Please enter a valid number.") == 3

    def test_change_interface(self, macos_dispatcher, fake_runner, registry) -> None:
        fake_runner.respond(["networksetup", "-listallnetworkservices"], SERVICES)
        menu, _ = make_menu(macos_dispatcher, registry, "8", "2", EXIT)
        menu.run("Wi-Fi")

        assert ["networksetup", "-getdnsservers", "Ethernet"] in fake_runner.calls

    def test_detects_active_interface(self, macos_dispatcher, fake_runner, registry) -> None:
        fake_runner.respond(["networksetup", "-listallnetworkservices"], SERVICES)
        fake_runner.respond(["networksetup", "-getinfo", "Ethernet"], "IP address: 10.0.0.5\n")
        menu, output = make_menu(macos_dispatcher, registry, EXIT)
        menu.run()

        assert "Detected active interface: Ethernet" in output.getvalue()
        assert ["networksetup", "-getdnsservers", "Ethernet"] in fake_runner.calls

    def test_manual_selection_without_active(self, macos_dispatcher, fake_runner, registry) -> None:
        fake_runner.respond(["networksetup", "-listallnetworkservices"], SERVICES)
        menu, output = make_menu(macos_dispatcher, registry, "1", EXIT)
        menu.run()

        assert "No active network interface found" in output.getvalue()
        assert ["networksetup", "-getdnsservers", "Wi-Fi"] in fake_runner.calls

    def test_exit_from_interface_selection(self, macos_dispatcher, fake_runner, registry) -> None:
        fake_runner.respond(["networksetup", "-listallnetworkservices"], SERVICES)
        menu, output = make_menu(macos_dispatcher, registry, "3")
        menu.run()

        assert "Thank you for using DNSwitch!" in output.getvalue()
        assert not any("-getdnsservers" in call for call in fake_runner.calls)

    def test_unsupported_platform(self, unsupported_dispatcher, fake_runner, registry) -> None:
        menu, _ = make_menu(unsupported_dispatcher, registry)
        with pytest.raises(UnsupportedPlatformError):
            menu.run()
        assert fake_runner.calls == []
