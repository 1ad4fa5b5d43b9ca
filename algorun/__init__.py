"""Models for monitoring an Algorand node and managing its participation keys."""

__version__ = "0.1.0"