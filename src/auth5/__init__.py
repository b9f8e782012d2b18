"""auth5 service configuration."""

__version__ = "0.1.0"
