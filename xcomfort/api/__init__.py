"""
API-level models and protocol implementation.

This module contains models and types that belong to the API layer:
- XComfortCredentials, XComfortDevice, XComfortScene (API-level concepts)
- XComfortSessionManager (login handshake and session token)
- XComfortProtocol (implements JSON-RPC calls)
- Types and constants used by the API layer
"""

from .models import XComfortCredentials, XComfortDevice, XComfortScene, RpcRequest
from .session import XComfortSessionManager
from .protocol import XComfortProtocol
from .types import XComfortMethod, Const, Message

__all__ = [
    # API-level models
    "XComfortCredentials",
    "XComfortDevice",
    "XComfortScene",
    "RpcRequest",
    "XComfortSessionManager",
    "XComfortProtocol",

    # API-level types
    "XComfortMethod",
    "Const",
    "Message",
]
