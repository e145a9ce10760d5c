"""Changelog generation from git history with Claude."""

__version__ = "0.1.0"
