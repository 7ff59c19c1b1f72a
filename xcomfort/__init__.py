"""
xComfort Python Library

A Python library for controlling Eaton xComfort devices through a smart home gateway.

This library provides three distinct layers of abstraction:

1. **io**: HTTP transport (session ownership, form and JSON posts)
2. **api**: Gateway API using io (login handshake, JSON-RPC calls, re-login on expiry)
3. **interface**: Pythonic interface to devices and scenes using api (name directory, validation)

Example usage:
    import xcomfort

    # High-level interface (recommended for most users)
    async with xcomfort.XComfort(base_url="http://192.168.1.100", username="admin",
                                 password="secret", import_setup_path="xcomfort.yaml") as xc:
        await xc.set_dim_state("Kitchen", 50)
        await xc.trigger_scene("Evening")

    # Low-level API access (for advanced users)
    result = await xc.query("HFM/getZones", [])
"""

# High-level interface (recommended for most users)
from .interface import XComfort, XComfortDirectory

# API-level models
from .api import XComfortProtocol, XComfortSessionManager, XComfortCredentials, XComfortDevice, XComfortScene, RpcRequest

# Low-level models
from .io import XComfortClient, Request, Response

# Setup collaborator
from .provisioning import initial_setup, import_setup, export_setup

# Shared types and exceptions
from .api.types import XComfortMethod, Const
from .exceptions import (
    XComfortError,
    XComfortConfigurationError,
    XComfortConnectionError,
    XComfortTimeoutError,
    XComfortLoginError,
    XComfortAuthError,
    XComfortResponseError,
    XComfortRpcError,
    XComfortUnsupportedMethodError,
    XComfortValidationError,
)

# Utilities
from .utils import deferred, run_with_keyboard_interrupt

__version__ = "0.1.0"

# Public API - these are the main classes users should import
__all__ = [
    # High-level interface (recommended)
    "XComfort",
    "XComfortDirectory",

    # API-level models (for advanced users)
    "XComfortProtocol",
    "XComfortSessionManager",
    "XComfortCredentials",
    "XComfortDevice",
    "XComfortScene",
    "RpcRequest",

    # Low-level models (for advanced users)
    "XComfortClient",
    "Request",
    "Response",

    # Setup
    "initial_setup",
    "import_setup",
    "export_setup",

    # Exceptions
    "XComfortError",
    "XComfortConfigurationError",
    "XComfortConnectionError",
    "XComfortTimeoutError",
    "XComfortLoginError",
    "XComfortAuthError",
    "XComfortResponseError",
    "XComfortRpcError",
    "XComfortUnsupportedMethodError",
    "XComfortValidationError",

    # Types
    "XComfortMethod",
    "Const",

    # Utilities
    "deferred",
    "run_with_keyboard_interrupt",
]
