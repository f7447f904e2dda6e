"""Uniqueness scoring for congressional stock-trade disclosures."""

__version__ = "0.1.0"
