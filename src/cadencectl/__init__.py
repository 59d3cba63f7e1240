"""Next-occurrence resolution for recurring events."""

__version__ = "0.1.0"
