import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

import aiohttp
import yaml

from .. import provisioning
from ..api import XComfortProtocol, XComfortSessionManager, XComfortCredentials, XComfortMethod, Const, Message
from ..io import XComfortClient, ClientConst
from ..exceptions import XComfortConfigurationError, XComfortValidationError
from ..utils import deferred, Callback
from .directory import XComfortDirectory

"""
===================================================================================
This module takes the xComfort JSON-RPC API and provides a higher level interface
intended for use in a control interface or home automation system written in Python.
===================================================================================

Terms:
XComfortProtocol = A class which implements the gateway JSON-RPC API.
XComfortDirectory = Maps device and scene names to gateway addresses.
Zone id = The gateway grouping needed alongside a device or scene id.
"""


class XComfort:
    def __init__(self,
                 base_url: Optional[str] = None,
                 username: Optional[str] = None,
                 password: Optional[str] = None,
                 remote_key: Optional[str] = None,
                 auto_setup: bool = False,
                 import_setup_path: Optional[str] = None,
                 session: Optional[aiohttp.ClientSession] = None,
                 logger: Optional[logging.Logger] = None,
                 print_traffic: bool = False,
                 timeout: float = ClientConst.DEFAULT_TIMEOUT
                 ):
        self.logger = logger or logging.getLogger(__name__)
        self.credentials = XComfortCredentials(base_url=base_url, username=username, password=password, remote_key=remote_key)
        self.client = XComfortClient(self.credentials.base_url, session=session, timeout=timeout, logger=self.logger)
        self.session_manager = XComfortSessionManager(self.client, self.credentials, logger=self.logger)
        self.protocol: XComfortProtocol = XComfortProtocol(self.client, self.session_manager, logger=self.logger, print_traffic=print_traffic)
        self.directory = XComfortDirectory()

        if import_setup_path:
            provisioning.import_setup(import_setup_path, self)
        elif auto_setup:
            provisioning.initial_setup(self)

    @classmethod
    def from_config(cls, config: str | dict, **kwargs: Any) -> "XComfort":
        """Build a client from a YAML file path or an already loaded mapping with an 'xcomfort' section."""
        if isinstance(config, str):
            with open(config, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        section = config.get("xcomfort") if isinstance(config, dict) else None
        if not isinstance(section, dict):
            raise XComfortConfigurationError("No xcomfort section in configuration")
        unknown = set(section) - set(inspect.signature(cls).parameters)
        if unknown:
            raise XComfortConfigurationError(f"Unknown xcomfort setting(s): {', '.join(sorted(unknown))}")
        return cls(**{**section, **kwargs})

    def __repr__(self) -> str:
        return f"XComfort<{self.base_url}>"

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        await self.protocol.aclose()

    @property
    def base_url(self) -> str:
        return self.credentials.base_url

    @property
    def remote_key(self) -> Optional[str]:
        return self.credentials.remote_key

    @property
    def username(self) -> str:
        return self.credentials.username

    @property
    def password(self) -> str:
        return self.credentials.password

    @property
    def session_id(self) -> Optional[str]:
        return self.session_manager.session_id

    # ============================
    # Session / RPC / events
    # ============================

    async def login(self) -> str:
        return await self.session_manager.login()

    def query(self, method: str, params: Optional[list[Any]] = None, callback: Optional[Callback] = None) -> "asyncio.Task[Any]":
        return self.protocol.query(method, params, callback)

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        self.protocol.on(event, handler)

    def off(self, event: str, handler: Callable[..., Any]) -> None:
        self.protocol.off(event, handler)

    def emit(self, event: str, *args: Any) -> bool:
        return self.protocol.emit(event, *args)

    def _error(self, message: str) -> None:
        self.protocol._error(message)

    # ============================
    # Directory
    # ============================

    def get_device_names(self) -> list[str]:
        return self.directory.device_names()

    def get_scene_names(self) -> list[str]:
        return self.directory.scene_names()

    def get_name_object(self) -> dict[str, list[str]]:
        return self.directory.name_object()

    # ============================
    # Device and scene control
    # ============================

    def set_dim_state(self, device_name: str, value: str | int, callback: Optional[Callback] = None) -> "asyncio.Task[bool]":
        """Switch a device on/off or dim it to 0-100. Resolves True if the gateway reports status ok."""
        return deferred(self._set_dim_state(device_name, value), callback)

    async def _set_dim_state(self, device_name: str, value: str | int) -> bool:
        device = self.directory.get_device(device_name)
        if device is None:
            raise XComfortValidationError(Message.NO_SUCH_DEVICE)
        if not _valid_state(value):
            raise XComfortValidationError(Message.INVALID_STATE)
        result = await self.query(XComfortMethod.CONTROL_DEVICE.value, [device.zone_id, device.id, value])
        return _status_ok(result)

    def trigger_scene(self, scene_name: str, callback: Optional[Callback] = None) -> "asyncio.Task[bool]":
        """Trigger a scene by name. Resolves True if the gateway reports status ok."""
        return deferred(self._trigger_scene(scene_name), callback)

    async def _trigger_scene(self, scene_name: str) -> bool:
        scene = self.directory.get_scene(scene_name)
        if scene is None:
            raise XComfortValidationError(Message.NO_SUCH_SCENE)
        result = await self.query(XComfortMethod.TRIGGER_SCENE.value, [scene.zone_id, scene.id])
        return _status_ok(result)

    def turn_on(self, device_name: str, callback: Optional[Callback] = None) -> "asyncio.Task[bool]":
        return self.set_dim_state(device_name, "on", callback)

    def turn_off(self, device_name: str, callback: Optional[Callback] = None) -> "asyncio.Task[bool]":
        return self.set_dim_state(device_name, "off", callback)


def _valid_state(value: Any) -> bool:
    if isinstance(value, str):
        return value in Const.SWITCH_STATES
    # bool is an int subclass but never a dim level
    if isinstance(value, int) and not isinstance(value, bool):
        return Const.MIN_DIM <= value <= Const.MAX_DIM
    return False


def _status_ok(result: Any) -> bool:
    return isinstance(result, dict) and result.get("status") == Const.STATUS_OK
