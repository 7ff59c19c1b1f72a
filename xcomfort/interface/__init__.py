"""
High-level interface and client.

This module contains models that belong to the interface layer:
- XComfort (main client for high-level usage)
- XComfortDirectory (device and scene names to gateway addresses)
- Input validation and name resolution for device and scene control
"""

from .interface import XComfort
from .directory import XComfortDirectory

__all__ = [
    # High-level client
    "XComfort",

    # High-level models
    "XComfortDirectory",
]
