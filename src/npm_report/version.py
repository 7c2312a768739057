"""Version information for npm-report."""

__all__ = ["VERSION"]

VERSION = "0.1.0"
