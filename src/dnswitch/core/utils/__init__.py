"""Utility functions and helpers."""

from dnswitch.core.utils.utils import contains_any, remove_duplicates

__all__ = ["contains_any", "remove_duplicates"]
