"""Global Site Selector master gateway."""

__version__ = "1.0.0"
