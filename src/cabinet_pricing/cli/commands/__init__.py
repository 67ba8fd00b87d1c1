"""CLI command implementations for the cabinet-pricing application.

This package contains subcommands for the cabinet-pricing CLI, including:
- validate: Validate a catalog snapshot
"""

from cabinet_pricing.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
