"""Common constants and helper functions."""

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Final

# Application directory, holds custom providers and logs
APP_DIR: Final = Path(os.environ.get("DNSWITCH_HOME", Path.home() / ".dnswitch"))
CUSTOM_DNS_FILE: Final = APP_DIR / "custom_dns.json"
LOG_DIR: Final = APP_DIR / "logs"

# Linux resolver configuration
RESOLV_CONF_PATH: Final = "/etc/resolv.conf"

# Seconds to wait before the menu is redrawn
MENU_REDRAW_DELAY: Final = 2.0

UNKNOWN_PROVIDER: Final = "Unknown"


def remove_duplicates(items: Iterable[str]) -> list[str]:
    """Drop repeated entries, keeping the first occurrence of each.

    Args:
        items: Strings in observed order

    Returns:
        list[str]: Distinct strings in first-seen order
    """
    return list(dict.fromkeys(items))


def contains_any(observed: Iterable[str], candidates: Iterable[str]) -> bool:
    """Check whether any candidate appears in the observed strings."""
    seen = set(observed)
    return any(candidate in seen for candidate in candidates)
