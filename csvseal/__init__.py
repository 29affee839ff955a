"""Password-based encryption for files kept out of shared repositories."""

__version__ = "1.0.0"
