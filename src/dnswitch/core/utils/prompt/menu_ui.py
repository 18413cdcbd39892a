"""Menu rendering for the interactive DNS switcher."""

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dnswitch.core.models import DNSObservation, NetworkInterface
from dnswitch.core.providers import ProviderRegistry

from .prompt import PromptHandler

TRAILING_ACTIONS = (
    "Add custom DNS",
    "Remove custom DNS",
    "Clear all DNS settings",
    "Change interface",
    "Exit",
)


def interfaces_table(interfaces: list[NetworkInterface], *, numbered: bool = False) -> Table:
    """Build a table of interfaces with their type and status."""
    table = Table(box=None, padding=(0, 1))
    if numbered:
        table.add_column("#", style="bold", justify="right")
    table.add_column("Interface", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Type", style="magenta")
    table.add_column("Status")

    for index, interface in enumerate(interfaces, start=1):
        status = "[green]active" if interface.is_active else "[dim]inactive"
        row = [interface.system_name, interface.display_name, str(interface.type), status]
        if numbered:
            row.insert(0, str(index))
        table.add_row(*row)
    return table


def providers_table(registry: ProviderRegistry) -> Table:
    """Build a table of every provider, defaults first."""
    table = Table(box=None, padding=(0, 1))
    table.add_column("Provider", style="cyan", no_wrap=True)
    table.add_column("Addresses", style="green")
    table.add_column("Kind")
    for name, addresses in registry.items():
        kind = "default" if registry.is_default(name) else "custom"
        table.add_row(name, ", ".join(addresses), kind)
    return table


class MenuUI(PromptHandler):
    """UI handler for the DNS menu."""

    def welcome(self) -> None:
        self.console.print(
            Panel(
                Text.assemble(
                    ("Welcome to DNSwitch!\n", "bold cyan"),
                    ("This program requires administrator privileges to change DNS settings.\n"),
                    ("Please make sure you're running this program as an administrator."),
                ),
                border_style="blue",
                padding=(1, 2),
            )
        )

    def goodbye(self) -> None:
        self.console.print("[cyan]Thank you for using DNSwitch!")

    def info(self, message: str) -> None:
        self.console.print(f"[cyan]{message}")

    def success(self, message: str) -> None:
        self.console.print(f"[green]{message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]{message}")

    def show_interfaces(self, interfaces: list[NetworkInterface]) -> None:
        """Print interfaces numbered from 1, followed by an Exit entry."""
        self.console.print("Network interfaces:")
        self.console.print(interfaces_table(interfaces, numbered=True))
        self.console.print(f"[bold]{len(interfaces) + 1}.[/bold] Exit")
        self.console.print()

    def show_current_dns(self, interface: str, observation: DNSObservation) -> None:
        style = "green" if observation.is_known else "yellow"
        self.console.print(f"Interface: [cyan]{interface}")
        self.console.print(f"Current DNS: [{style}]{observation.provider}")
        if observation.addresses:
            self.console.print(f"Addresses: {', '.join(observation.addresses)}")
        self.console.print()

    def show_menu(self, registry: ProviderRegistry) -> list[str]:
        """Print the numbered providers and trailing actions.

        Returns:
            list[str]: Provider names in the order they were numbered
        """
        options = registry.ordered_names()
        table = Table(box=None, show_header=False, padding=(0, 1))
        table.add_column("#", style="bold", justify="right")
        table.add_column("Option", style="cyan")
        table.add_column("Addresses", style="green")
        for index, name in enumerate(options, start=1):
            table.add_row(f"{index}.", name, ", ".join(registry.addresses(name)))
        for offset, action in enumerate(TRAILING_ACTIONS, start=len(options) + 1):
            table.add_row(f"{offset}.", action, "")

        self.console.print("Available options:")
        self.console.print(table)
        self.console.print()
        return options

    def show_custom(self, registry: ProviderRegistry, names: list[str]) -> None:
        """Print the custom providers numbered from 1, followed by an Exit entry."""
        self.console.print("Custom DNS servers:")
        for index, name in enumerate(names, start=1):
            self.console.print(f"{index}. {name}: {', '.join(registry.addresses(name))}")
        self.console.print(f"{len(names) + 1}. Exit")
