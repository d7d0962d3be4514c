"""Model fallback chain configuration and resolution for the proxy."""

__version__ = "0.1.0"
