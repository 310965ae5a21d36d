"""Admission screening rule engine and audit ledger."""

__version__ = "0.1.0"
