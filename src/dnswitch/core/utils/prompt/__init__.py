"""Prompt and UI utilities."""

from dnswitch.core.utils.prompt.menu_ui import (
    TRAILING_ACTIONS,
    MenuUI,
    interfaces_table,
    providers_table,
)
from dnswitch.core.utils.prompt.prompt import PromptHandler, console

__all__ = [
    "console",
    "interfaces_table",
    "MenuUI",
    "PromptHandler",
    "providers_table",
    "TRAILING_ACTIONS",
]
