"""Pricing and tax computation engine for shopping sessions."""

__version__ = "1.0.0"
