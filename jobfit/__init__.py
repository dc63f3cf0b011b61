"""Job fit analysis for a developer portfolio."""

__version__ = "0.1.0"
