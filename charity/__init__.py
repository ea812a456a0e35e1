"""Charity donations backend: stateless JWT auth and a consistent donation ledger."""

__version__ = "0.1.0"
