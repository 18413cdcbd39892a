"""Interactive DNS switching menu.

This module provides the numbered menu loop:
- Detecting the active interface, or letting the operator pick one
- Showing the DNS provider currently configured
- Applying a provider or clearing DNS settings
- Adding and removing custom providers

Every failure is shown as a one-line message and the loop continues; only
failing to enumerate interfaces ends it.

Example:
    menu = DNSwitchMenu(create_dispatcher(), ProviderRegistry.from_store(ProviderStore()))
    menu.run()
"""

import time
from collections.abc import Callable
from enum import Enum, auto

from loguru import logger

from dnswitch.core.dns import clear_dns, read_dns, set_dns
from dnswitch.core.exceptions import DNSwitchError, NoActiveInterfaceError
from dnswitch.core.lib.dispatcher import CommandDispatcher
from dnswitch.core.network import get_active_interface, scan_interfaces
from dnswitch.core.providers import ProviderRegistry
from dnswitch.core.utils.prompt import TRAILING_ACTIONS, MenuUI
from dnswitch.core.utils.utils import MENU_REDRAW_DELAY


class Outcome(Enum):
    CONTINUE = auto()
    CHANGE_INTERFACE = auto()
    EXIT = auto()


class DNSwitchMenu:
    """Menu loop driving the probe, reader, writer and registry."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        registry: ProviderRegistry,
        ui: MenuUI | None = None,
        delay: float = MENU_REDRAW_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.dispatcher = dispatcher
        self.registry = registry
        self.ui = ui or MenuUI()
        self.delay = delay
        self._sleep = sleep

    def run(self, interface: str | None = None) -> None:
        """Run the menu until the operator exits.

        Args:
            interface: Interface to start with, detected when omitted

        Raises:
            UnsupportedPlatformError: If the platform has no strategy
            InterfaceEnumerationFailedError: If no interface can be offered
        """
        self.ui.welcome()
        if interface is None:
            interface = self.detect_interface()

        while interface is not None:
            interface = self.dns_loop(interface)

        self.ui.goodbye()

    def detect_interface(self) -> str | None:
        """Use the active interface, falling back to a manual choice."""
        try:
            with self.ui.status("Detecting active interface..."):
                active = get_active_interface(self.dispatcher)
        except NoActiveInterfaceError as e:
            self.ui.error(f"Error detecting active interface: {e}")
            return self.select_interface()

        self.ui.info(f"Detected active interface: {active.display_name}")
        return active.system_name

    def select_interface(self) -> str | None:
        """Let the operator pick an interface, None means exit."""
        with self.ui.status("Scanning network interfaces..."):
            interfaces = scan_interfaces(self.dispatcher)
        if not interfaces:
            self.ui.error("No network interfaces found")
            return None

        self.ui.show_interfaces(interfaces)
        choice = self.ui.ask_choice(len(interfaces) + 1)
        if choice == len(interfaces) + 1:
            return None
        return interfaces[choice - 1].system_name

    def dns_loop(self, interface: str) -> str | None:
        """Serve the DNS menu for one interface.

        Returns:
            str | None: Next interface to manage, None to exit
        """
        while True:
            observation = read_dns(self.dispatcher, self.registry, interface)
            self.ui.show_current_dns(interface, observation)
            options = self.ui.show_menu(self.registry)
            choice = self.ui.ask_choice(len(options) + len(TRAILING_ACTIONS))

            outcome = self.handle_choice(choice, options, interface)
            if outcome is Outcome.EXIT:
                return None
            if outcome is Outcome.CHANGE_INTERFACE:
                return self.select_interface()

            self.ui.console.print()
            self._sleep(self.delay)

    def handle_choice(self, choice: int, options: list[str], interface: str) -> Outcome:
        """Dispatch a menu number to its action."""
        actions = {
            len(options) + 1: self.add_custom,
            len(options) + 2: self.remove_custom,
            len(options) + 3: lambda: self.clear_all(interface),
        }
        if choice <= len(options):
            self.apply_provider(interface, options[choice - 1])
        elif choice in actions:
            actions[choice]()
        elif choice == len(options) + 4:
            return Outcome.CHANGE_INTERFACE
        else:
            return Outcome.EXIT
        return Outcome.CONTINUE

    def apply_provider(self, interface: str, name: str) -> None:
        addresses = self.registry.addresses(name)
        try:
            with self.ui.status(f"Switching to {name}..."):
                set_dns(self.dispatcher, interface, addresses)
        except DNSwitchError as e:
            logger.error(f"Error setting DNS to {name}: {e}")
            self.ui.error(f"Error setting DNS: {e}")
            return
        self.ui.success(f"DNS changed to {name} ({', '.join(addresses)}).")

    def clear_all(self, interface: str) -> None:
        try:
            with self.ui.status("Clearing DNS settings..."):
                clear_dns(self.dispatcher, interface)
        except DNSwitchError as e:
            logger.error(f"Error clearing DNS settings: {e}")
            self.ui.error(f"Error clearing DNS settings: {e}")
            return
        self.ui.success("All DNS settings have been cleared.")

    def add_custom(self) -> None:
        name = self.ui.ask_text("Enter DNS name: ")
        first = self.ui.ask_text("Enter first IP address: ")
        second = self.ui.ask_text("Enter second IP address: ")
        if not name:
            self.ui.error("DNS name cannot be empty.")
            return

        try:
            self.registry.add(name, *[address for address in (first, second) if address])
        except ValueError as e:
            self.ui.error(str(e))
            return
        except OSError as e:
            logger.error(f"Error saving custom DNS: {e}")
            self.ui.error(f"Error saving custom DNS: {e}")
            return
        self.ui.success(f"Custom DNS '{name}' added successfully.")

    def remove_custom(self) -> None:
        names = self.registry.custom_names()
        if not names:
            self.ui.info("No custom DNS servers found.")
            return

        self.ui.show_custom(self.registry, names)
        choice = self.ui.ask_choice(len(names) + 1)
        if choice == len(names) + 1:
            self.ui.info("Exiting remove custom DNS menu.")
            return

        name = names[choice - 1]
        try:
            self.registry.remove(name)
        except OSError as e:
            logger.error(f"Error saving custom DNS: {e}")
            self.ui.error(f"Error saving custom DNS: {e}")
            return
        self.ui.success(f"Custom DNS '{name}' removed successfully.")
