"""Command-line interface for DNSwitch.

This module provides the main command-line interface, handling:
- Command-line argument parsing
- Logging setup
- Administrator privilege checking
- Error reporting, with unexpected errors logged in full
- Interface selection

The CLI is built using Typer and provides:
- The interactive menu (default when no command is given)
- One-shot commands to list interfaces, show, set and clear DNS
- Management of custom providers

Example:
    # Run from command line:
    $ dnswitch use Shecan --interface Wi-Fi
    $ dnswitch status
"""

import os
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from dnswitch import __version__
from dnswitch.cmd.menu import DNSwitchMenu
from dnswitch.core.dns import clear_dns, read_dns, set_dns
from dnswitch.core.exceptions import DNSwitchError
from dnswitch.core.lib.dispatcher import CommandDispatcher, create_dispatcher
from dnswitch.core.network import get_active_interface, scan_interfaces
from dnswitch.core.providers import ProviderRegistry, ProviderStore
from dnswitch.core.utils.log_config import LOG_FILE, setup_logging
from dnswitch.core.utils.prompt import MenuUI, interfaces_table, providers_table

console = Console()
app = typer.Typer(help="Switch the DNS servers of a network interface")


def interface_option():
    return typer.Option(
        None, "--interface", "-i", help="Interface to use (default: the active one)"
    )


@dataclass
class AppState:
    dispatcher: CommandDispatcher
    registry: ProviderRegistry


def check_admin() -> bool:
    """Check if the script is running with administrator privileges."""
    if os.name == "nt":  # Windows
        try:
            import ctypes

            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError):
            return False
    else:  # Unix-like
        return os.geteuid() == 0


def warn_if_not_admin() -> None:
    if not check_admin():
        logger.debug("Not running with administrator privileges")
        console.print("[yellow]Warning: changing DNS settings requires administrator privileges.")


def fail(message: str) -> typer.Exit:
    """Print ``message`` in red and return the exit to raise."""
    console.print(f"[red]Error: {message}")
    return typer.Exit(1)


@contextmanager
def report_errors(prefix: str = ""):
    """Report failures as a red one-line error and exit with status 1."""
    try:
        yield
    except typer.Exit:
        raise
    except DNSwitchError as e:
        logger.error(f"{prefix}{e}")
        raise fail(f"{prefix}{e}") from e
    except Exception as e:
        logger.exception("Unexpected error")
        raise fail(f"{prefix}{e}") from e


def resolve_interface(state: AppState, interface: str | None) -> str:
    if interface:
        return interface
    active = get_active_interface(state.dispatcher)
    console.print(f"[cyan]Detected active interface: {active.display_name}")
    return active.system_name


def version_callback(value: bool) -> None:
    if value:
        console.print(f"[cyan]DNSwitch v{__version__}[/cyan]")
        raise typer.Exit


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    providers_file: Path | None = typer.Option(
        None, "--providers-file", help="JSON file holding custom providers"
    ),
    debug: bool = typer.Option(
        default=False,
        help="Enable debug logging",
    ),
    version: bool = typer.Option(
        False, "--version", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Inspect and change the DNS servers of a network interface."""
    setup_logging(debug=debug)
    logger.debug(f"DNSwitch v{__version__}, logging to {LOG_FILE}")

    store = ProviderStore(providers_file)
    ctx.obj = AppState(
        dispatcher=create_dispatcher(),
        registry=ProviderRegistry.from_store(store),
    )

    if ctx.invoked_subcommand is None:
        menu(ctx, interface=None)


@app.command()
def menu(ctx: typer.Context, interface: str | None = interface_option()):
    """Run the interactive DNS menu."""
    state: AppState = ctx.obj
    with report_errors():
        try:
            DNSwitchMenu(state.dispatcher, state.registry, ui=MenuUI(output=console)).run(
                interface
            )
        except (KeyboardInterrupt, EOFError):
            logger.info("Menu interrupted")
            console.print()


@app.command()
def interfaces(ctx: typer.Context):
    """List network interfaces."""
    state: AppState = ctx.obj
    with report_errors():
        found = scan_interfaces(state.dispatcher)
    if not found:
        console.print("[yellow]No network interfaces found")
        return
    console.print(interfaces_table(found))


@app.command()
def status(ctx: typer.Context, interface: str | None = interface_option()):
    """Show the DNS provider configured on an interface."""
    state: AppState = ctx.obj
    with report_errors():
        name = resolve_interface(state, interface)
        observation = read_dns(state.dispatcher, state.registry, name)
    MenuUI(output=console).show_current_dns(name, observation)


@app.command()
def use(
    ctx: typer.Context,
    provider: str = typer.Argument(..., help="Provider name, see `dnswitch providers`"),
    interface: str | None = interface_option(),
):
    """Switch an interface to a provider."""
    state: AppState = ctx.obj
    if provider not in state.registry:
        raise fail(f"Unknown DNS provider '{provider}'")

    warn_if_not_admin()
    addresses = state.registry.addresses(provider)
    with report_errors("Error setting DNS: "):
        name = resolve_interface(state, interface)
        set_dns(state.dispatcher, name, addresses)
    console.print(f"[green]DNS changed to {provider} ({', '.join(addresses)}).")


@app.command()
def clear(ctx: typer.Context, interface: str | None = interface_option()):
    """Revert an interface to automatic DNS."""
    state: AppState = ctx.obj
    warn_if_not_admin()
    with report_errors("Error clearing DNS settings: "):
        name = resolve_interface(state, interface)
        clear_dns(state.dispatcher, name)
    console.print("[green]All DNS settings have been cleared.")


@app.command()
def providers(ctx: typer.Context):
    """List default and custom providers."""
    state: AppState = ctx.obj
    console.print(providers_table(state.registry))


@app.command()
def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Provider name"),
    addresses: list[str] = typer.Argument(..., help="DNS server addresses in order"),
):
    """Add or replace a custom provider."""
    state: AppState = ctx.obj
    with report_errors("Error saving custom DNS: "):
        state.registry.add(name, *addresses)
    console.print(f"[green]Custom DNS '{name}' added successfully.")


@app.command()
def remove(ctx: typer.Context, name: str = typer.Argument(..., help="Custom provider name")):
    """Remove a custom provider."""
    state: AppState = ctx.obj
    if state.registry.is_default(name):
        raise fail(f"'{name}' is a default provider and cannot be removed")
    if name not in state.registry.custom_names():
        raise fail(f"No custom DNS named '{name}'")
    with report_errors("Error saving custom DNS: "):
        state.registry.remove(name)
    console.print(f"[green]Custom DNS '{name}' removed successfully.")


if __name__ == "__main__":
    app()
