"""List a directory and query its entries with WHERE / GROUP BY / aggregates."""

__version__ = "0.1.0"
