"""
Wire-level transport implementation.

This module contains the lowest-level communication components:
- XComfortClient - HTTP POST transport to the gateway
- Request, Response - A single HTTP exchange
- Session ownership and transport error mapping
"""

from .http import XComfortClient, Request, Response, ClientConst

__all__ = [
    "XComfortClient",
    "Request",
    "Response",
    "ClientConst",
]
