"""
xComfort library exceptions.

This module defines all custom exceptions used throughout the library.
"""

from typing import Any, Optional


class XComfortError(Exception):
    """Base exception for xComfort gateway errors"""
    pass


class XComfortConfigurationError(XComfortError):
    """Raised when configuration is invalid"""
    pass


class XComfortConnectionError(XComfortError):
    """Raised when the HTTP transport fails"""
    pass


class XComfortTimeoutError(XComfortConnectionError):
    """Raised when a request times out"""
    pass


class XComfortLoginError(XComfortError):
    """Raised when the gateway rejects a login"""
    pass


class XComfortAuthError(XComfortLoginError):
    """Raised when the gateway rejects the credentials"""
    pass


class XComfortResponseError(XComfortError):
    """Raised when receiving an invalid response"""
    pass


class XComfortRpcError(XComfortError):
    """Raised when a JSON-RPC call returns an error object"""

    def __init__(self, message: str, code: Optional[int] = None, error: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.error = error if error is not None else {"message": message, "code": code}

    @classmethod
    def from_error(cls, error: Any) -> "XComfortRpcError":
        if isinstance(error, dict):
            return cls(str(error.get("message", "")), error.get("code"), error)
        return cls(str(error), None, {"message": str(error), "code": None})


class XComfortUnsupportedMethodError(XComfortError):
    """Raised when the gateway reports an RPC method as unsupported"""
    pass


class XComfortValidationError(XComfortError):
    """Raised when arguments are rejected before any request is sent"""
    pass
