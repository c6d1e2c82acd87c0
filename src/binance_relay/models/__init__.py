"""
Models package for the Binance relay

Contains data models organized by domain:
- relay: request/response models for the relay HTTP API
"""

from .relay import ErrorResponse, HealthResponse, RelayRequest, RootResponse

__all__ = [
    "RelayRequest",
    "ErrorResponse",
    "RootResponse",
    "HealthResponse",
]
