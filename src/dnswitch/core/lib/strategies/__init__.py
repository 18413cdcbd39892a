"""Per-platform strategies."""

from .base import PlatformOp, PlatformStrategy
from .linux import LinuxStrategy
from .macos import MacOSStrategy
from .unsupported import UnsupportedStrategy
from .windows import WindowsStrategy

__all__ = [
    "LinuxStrategy",
    "MacOSStrategy",
    "PlatformOp",
    "PlatformStrategy",
    "UnsupportedStrategy",
    "WindowsStrategy",
]
