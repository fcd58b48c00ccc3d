"""Async helpers for a spot exchange API: query strings, market and account builders, wallet, streams."""

__version__ = "0.1.0"