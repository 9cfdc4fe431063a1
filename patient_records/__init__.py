"""Patient records console and development record service."""

__version__ = "0.1.0"
