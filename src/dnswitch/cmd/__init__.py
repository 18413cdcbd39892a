"""Command line interface modules.

This package provides the user-facing tools:
- The interactive numbered DNS menu
- One-shot commands for scripting
- Error reporting and logging setup

The command modules are thin wrappers around ``dnswitch.core``.
"""
