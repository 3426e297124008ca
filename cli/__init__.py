"""Subcommand parsers for the `sec` command line."""
