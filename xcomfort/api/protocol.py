import asyncio
import inspect
import json
import logging
from typing import Any, Callable, Optional

from colorama import Fore, Style

from ..io import XComfortClient, Request, Response
from .models import RpcRequest
from .session import XComfortSessionManager
from .types import Const, Message
from ..exceptions import (
    XComfortError,
    XComfortAuthError,
    XComfortConnectionError,
    XComfortLoginError,
    XComfortResponseError,
    XComfortRpcError,
    XComfortUnsupportedMethodError,
)
from ..utils import deferred, spawn, Callback

"""
===================================================================================
This module implements the xComfort JSON-RPC API using the wire-level client.
===================================================================================
"""

class XComfortProtocol:

    def __init__(self,
                 client: XComfortClient,
                 session_manager: XComfortSessionManager,
                 logger: Optional[logging.Logger] = None,
                 print_traffic: bool = False):
        self.client = client
        self.session_manager = session_manager
        self.logger = logger or logging.getLogger(__name__)
        self.print_traffic = print_traffic
        self._next_id: int = 1
        self._handlers: dict[str, list[Callable[..., Any]]] = {}
        self._tasks: set[asyncio.Future] = set()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.aclose()

    async def aclose(self):
        await self.client.close()

    # ============================
    # EVENTS
    # ============================

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def off(self, event: str, handler: Callable[..., Any]) -> None:
        handlers = self._handlers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, *args: Any) -> bool:
        """Call every handler registered for event. Returns False if there were none."""
        handlers = list(self._handlers.get(event, []))
        for handler in handlers:
            try:
                outcome = handler(*args)
            except Exception:
                self.logger.exception(f"Handler for '{event}' raised")
                continue
            if inspect.isawaitable(outcome):
                spawn(outcome, self._tasks, self.logger)
        return bool(handlers)

    def _error(self, message: str) -> None:
        if not self.emit("error", XComfortError(message)):
            self.logger.debug(f"Unobserved error event: {message}")

    # ============================
    # JSON-RPC
    # ============================

    def query(self, method: str, params: Optional[list[Any]] = None, callback: Optional[Callback] = None) -> "asyncio.Task[Any]":
        """
        Call a JSON-RPC method on the gateway.

        Returns a task resolving to the call's result. If callback is given it is
        also called as callback(error, result) when the call completes.
        """
        return deferred(self._query(method, list(params) if params is not None else []), callback)

    async def _query(self, method: str, params: list[Any]) -> Any:
        rpc = RpcRequest(method=method, params=params, id=self._alloc_id())
        try:
            session_id = self.session_manager.session_id
            response = await self._post(rpc)
            if response.status == 401:
                self.logger.info(f"Session expired calling {method}, logging in again")
                await self.session_manager.refresh(session_id)
                response = await self._post(rpc)
                if response.status == 401:
                    raise XComfortAuthError(Message.SESSION_REJECTED)
        except (XComfortConnectionError, XComfortLoginError) as e:
            self._error(str(e))
            raise
        return self._interpret(rpc, response)

    async def _post(self, rpc: RpcRequest) -> Response:
        request = Request(path=Const.RPC_PATH, json=rpc.to_json(), cookies=self.session_manager.cookies())
        response = await self.client.send_request(request)
        if self.print_traffic:
            rtt_ms = (response.timestamp - request.timestamp) * 1000
            print(Fore.MAGENTA + f"REQUEST: {json.dumps(request.json)}  "
                + Fore.WHITE + Style.DIM + f"RTT: {rtt_ms:.0f}ms".ljust(10)
                + Style.BRIGHT + Fore.CYAN + f"  RESPONSE: {response.status} {json.dumps(response.body)}"
                + Style.RESET_ALL)
        return response

    def _interpret(self, rpc: RpcRequest, response: Response) -> Any:
        body = response.body if isinstance(response.body, dict) else {}

        if response.status != 200:
            if "error" in body:
                raise XComfortRpcError.from_error(body["error"])
            message = body["result"] if "result" in body else Message.UNKNOWN_ERROR
            self.logger.error(f"{rpc.method} failed with HTTP {response.status}: {message}")
            raise XComfortResponseError(str(message))

        if "error" in body:
            error = XComfortRpcError.from_error(body["error"])
            self.logger.debug(f"{rpc.method} returned error {error.code}: {error.message}")
            raise error

        if "result" not in body:
            raise XComfortResponseError(Message.MALFORMED_RESPONSE)

        result = body["result"]
        if isinstance(result, str) and result.lower() == Const.UNSUPPORTED_METHOD_RESULT:
            raise XComfortUnsupportedMethodError(Message.UNSUPPORTED_METHOD)
        return result

    def _alloc_id(self) -> int:
        rpc_id = self._next_id
        self._next_id += 1
        return rpc_id
