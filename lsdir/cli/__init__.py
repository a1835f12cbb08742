"""Command-line interface for lsdir."""
