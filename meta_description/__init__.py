"""AI-assisted HTML meta description service."""

__version__ = "1.4.0"
