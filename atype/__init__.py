"""atype: small social-network backend persisted to a single JSON file."""

__version__ = "0.1.0"
