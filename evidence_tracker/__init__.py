"""Evidence Tracker: review workflow backend for team evidence submissions."""

__version__ = "0.1.0"
