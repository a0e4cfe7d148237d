"""AI-assisted database schema generation."""

__version__ = "0.1.0"
