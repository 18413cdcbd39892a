"""Core DNS switching implementation.

This package contains the platform-abstraction layer:
- Platform detection and per-OS command strategies
- External command execution
- Network interface discovery
- Reading and changing DNS servers
- The provider registry and its persistence
- Exception handling

The core package knows nothing about the menu or the command line, which
live in ``dnswitch.cmd``.
"""
