"""Release packaging for phpMyAdmin source trees."""

__version__ = "1.0.0"
