"""LiftLog: local workout tracking core (catalog, live session, history)."""

__version__ = "0.1.0"
