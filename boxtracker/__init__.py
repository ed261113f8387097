"""Moving box tracker: HTTP API and board client."""

__version__ = "0.1.0"
