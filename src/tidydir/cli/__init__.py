"""Command-line interface for tidydir."""
