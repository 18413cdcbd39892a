"""Reading and changing the DNS servers of an interface.

``read_dns`` never raises for a failed read: the current DNS state is only
displayed, so a broken query must not stop the menu. It reports "Unknown"
with no addresses instead. ``set_dns`` and ``clear_dns`` raise
``ExternalCommandFailedError`` with the OS's own message.

Example:
    observation = read_dns(dispatcher, registry, "Wi-Fi")
    if observation.provider == "Unknown":
        set_dns(dispatcher, "Wi-Fi", registry.addresses("Shecan"))
"""

from collections.abc import Sequence

from loguru import logger

from dnswitch.core.lib.dispatcher import CommandDispatcher
from dnswitch.core.lib.strategies import PlatformOp
from dnswitch.core.models import DNSObservation
from dnswitch.core.providers import ProviderRegistry
from dnswitch.core.utils.utils import remove_duplicates


def read_dns(
    dispatcher: CommandDispatcher, registry: ProviderRegistry, interface: str
) -> DNSObservation:
    """Report which provider is configured on ``interface``.

    Args:
        dispatcher: Dispatcher for the running platform
        registry: Providers to match the observed servers against
        interface: System name of the interface

    Returns:
        DNSObservation: Matched provider name and distinct addresses

    Raises:
        UnsupportedPlatformError: If the platform has no strategy
    """
    result = dispatcher.run(PlatformOp.READ_DNS, interface)
    if not result.ok:
        logger.warning(f"Could not read DNS servers of {interface}: {result.diagnostic}")
        return DNSObservation()

    addresses = remove_duplicates(dispatcher.parse_dns(result.text))
    provider = registry.match(addresses)
    logger.debug(f"DNS on {interface}: {addresses} ({provider})")
    return DNSObservation(provider=provider, addresses=tuple(addresses))


def set_dns(dispatcher: CommandDispatcher, interface: str, addresses: Sequence[str]) -> None:
    """Replace the DNS servers of ``interface`` with ``addresses`` in order.

    Raises:
        ValueError: If ``addresses`` is empty
        UnsupportedPlatformError: If the platform has no strategy
        ExternalCommandFailedError: If the OS rejected the change
    """
    if not addresses:
        raise ValueError("At least one DNS server address is required")
    dispatcher.execute(PlatformOp.SET_DNS, interface, list(addresses))
    logger.info(f"DNS of {interface} set to {', '.join(addresses)}")


def clear_dns(dispatcher: CommandDispatcher, interface: str) -> None:
    """Revert ``interface`` to automatic DNS.

    Raises:
        UnsupportedPlatformError: If the platform has no strategy
        ExternalCommandFailedError: If the OS rejected the change
    """
    dispatcher.execute(PlatformOp.CLEAR_DNS, interface)
    logger.info(f"DNS of {interface} cleared")
