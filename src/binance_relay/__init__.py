"""Binance signing relay: keeps exchange secret keys off the browser."""

__version__ = "1.0.0"
