"""
xComfort API-level models.

This module contains models that belong to the api layer:
- XComfortCredentials (what a client needs to log in)
- XComfortDevice, XComfortScene (gateway addressing for names in the directory)
- RpcRequest (the JSON-RPC envelope)
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from .types import Const, Message
from ..exceptions import XComfortConfigurationError


@dataclass(frozen=True)
class XComfortCredentials:
    """Represents the login details for one gateway"""
    base_url: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    remote_key: Optional[str] = None

    def __post_init__(self):
        for name in ("base_url", "username", "password"):
            if not getattr(self, name):
                raise XComfortConfigurationError(Message.NO_FIELD.format(field=name))
        # frozen, so bypass __setattr__
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def login_form(self) -> dict[str, str]:
        return {
            "rakey": self.remote_key or "",
            "remotable_user": self.username,
            "upassword": self.password,
            "referer": Const.LOGIN_REFERER,
        }

    def __repr__(self) -> str:
        return f"XComfortCredentials(base_url={self.base_url!r}, username={self.username!r})"


@dataclass
class XComfortDevice:
    """Represents a device reachable through the gateway"""
    zone_id: str
    id: str
    type: str

    def __post_init__(self):
        if not self.zone_id or not self.id:
            raise ValueError(f"Device needs a zone_id and an id, got {self.zone_id!r}/{self.id!r}")


@dataclass
class XComfortScene:
    """Represents a scene stored on the gateway"""
    zone_id: str
    id: str

    def __post_init__(self):
        if not self.zone_id or not self.id:
            raise ValueError(f"Scene needs a zone_id and an id, got {self.zone_id!r}/{self.id!r}")


@dataclass
class RpcRequest:
    """Represents a JSON-RPC 2.0 call"""
    method: str
    params: list[Any] = field(default_factory=list)
    id: int = 1

    def to_json(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "params": list(self.params),
            "id": self.id,
            "jsonrpc": Const.JSONRPC_VERSION,
        }
