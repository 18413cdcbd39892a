"""DNS providers: built-in defaults plus operator-defined custom entries.

The registry is a plain object handed to whoever needs it (menu, CLI, DNS
reader); there is no module-level provider table. Custom providers are
mirrored to a JSON file by ``ProviderStore`` after every change.

File format::

    {"MyDNS": ["1.2.3.4", "5.6.7.8"]}

Only custom providers are written. A custom provider may reuse a default
name; it then replaces the default's addresses for this run but is still
classified as a default and therefore never persisted.
"""

import json
import os
import tempfile
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType

from loguru import logger

from dnswitch.core.utils.utils import CUSTOM_DNS_FILE, UNKNOWN_PROVIDER, contains_any

DEFAULT_PROVIDERS: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "403": ("10.202.10.202", "10.202.10.102"),
        "Shecan": ("178.22.122.100", "185.51.200.2"),
        "Begzar": ("185.55.226.26", "185.55.225.25"),
        "electrotm": ("78.157.42.101", "78.157.42.100"),
    }
)

# Canonical menu order of the defaults
DEFAULT_ORDER: tuple[str, ...] = tuple(DEFAULT_PROVIDERS)


class ProviderStore:
    """Persist custom providers as a single JSON file.

    Default location: ``~/.dnswitch/custom_dns.json``.

    Parameters
    ----------
    path : Path | None
        File holding the custom providers.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path is not None else CUSTOM_DNS_FILE

    def load(self) -> dict[str, list[str]]:
        """Read custom providers, an absent or unreadable file counts as empty."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading custom DNS from {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.error(f"Error loading custom DNS from {self.path}: expected a JSON object")
            return {}

        providers = {}
        for name, addresses in data.items():
            if not isinstance(addresses, list):
                logger.warning(f"Skipping custom DNS {name!r}: addresses must be a list")
                continue
            providers[str(name)] = [str(address) for address in addresses]
        logger.debug(f"Loaded {len(providers)} custom providers from {self.path}")
        return providers

    def save(self, providers: Mapping[str, Sequence[str]]) -> None:
        """Write ``providers`` through a temporary file renamed over the target.

        Raises
        ------
        OSError
            If the file cannot be written; the previous file is left intact.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {name: list(addresses) for name, addresses in providers.items()}

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug(f"Saved {len(payload)} custom providers to {self.path}")


class ProviderRegistry:
    """Lookup table of provider name to ordered DNS server addresses."""

    def __init__(
        self,
        custom: Mapping[str, Sequence[str]] | None = None,
        store: ProviderStore | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            custom: Custom providers layered over the defaults
            store: Where to persist changes, None keeps them in memory only
        """
        self.store = store
        self._providers: dict[str, list[str]] = {
            name: list(addresses) for name, addresses in DEFAULT_PROVIDERS.items()
        }
        for name, addresses in (custom or {}).items():
            self._providers[name] = list(addresses)

    @classmethod
    def from_store(cls, store: ProviderStore) -> "ProviderRegistry":
        """Create a registry from the custom providers saved in ``store``."""
        return cls(store.load(), store=store)

    @staticmethod
    def is_default(name: str) -> bool:
        """True iff ``name`` is one of the built-in provider names."""
        return name in DEFAULT_PROVIDERS

    def __contains__(self, name: object) -> bool:
        return name in self._providers

    def __len__(self) -> int:
        return len(self._providers)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ordered_names())

    def addresses(self, name: str) -> list[str]:
        """Return the addresses of ``name``.

        Raises:
            KeyError: If no provider has that name
        """
        return list(self._providers[name])

    def items(self) -> list[tuple[str, list[str]]]:
        """Return (name, addresses) pairs in menu order."""
        return [(name, self.addresses(name)) for name in self.ordered_names()]

    def ordered_names(self) -> list[str]:
        """Default names in canonical order, then custom names."""
        defaults = [name for name in DEFAULT_ORDER if name in self._providers]
        return defaults + self.custom_names()

    def custom_names(self) -> list[str]:
        return [name for name in self._providers if not self.is_default(name)]

    def custom(self) -> dict[str, list[str]]:
        return {name: self.addresses(name) for name in self.custom_names()}

    def match(self, observed: Sequence[str]) -> str:
        """Return the first provider sharing any address with ``observed``."""
        for name in self.ordered_names():
            if contains_any(observed, self._providers[name]):
                return name
        return UNKNOWN_PROVIDER

    def add(self, name: str, *addresses: str) -> None:
        """Insert or overwrite a provider and persist the custom set.

        Raises:
            ValueError: If no address is given
            OSError: If the custom providers cannot be saved
        """
        if not addresses:
            raise ValueError(f"Provider {name!r} needs at least one address")
        if self.is_default(name):
            logger.warning(f"Custom DNS {name!r} overrides a default provider for this run")
        snapshot = dict(self._providers)
        self._providers[name] = list(addresses)
        self._save_or_rollback(snapshot)
        logger.info(f"Added DNS provider {name}: {', '.join(addresses)}")

    def remove(self, name: str) -> None:
        """Delete a provider if present and persist the custom set."""
        if name not in self._providers:
            return
        snapshot = dict(self._providers)
        del self._providers[name]
        self._save_or_rollback(snapshot)
        logger.info(f"Removed DNS provider {name}")

    def save(self) -> None:
        if self.store is not None:
            self.store.save(self.custom())

    def _save_or_rollback(self, snapshot: dict[str, list[str]]) -> None:
        """Save, or put the table back to ``snapshot`` if the save fails."""
        try:
            self.save()
        except OSError:
            self._providers = snapshot
            raise
