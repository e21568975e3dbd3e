"""Gym operations console: role-based access control engine."""

__version__ = "0.1.0"
