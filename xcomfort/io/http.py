"""
xComfort wire-level HTTP client.

This module implements the transport side of the xComfort gateway using aiohttp.
It contains the XComfortClient class for posting requests and receiving responses.

Terms:
- Request = A single HTTP POST sent by the Client to the gateway
- Response = The gateway's answer to a Request
- Client = A class which owns the HTTP session and sends Requests

Example usage:
async def main():
    async with XComfortClient("http://192.0.2.10") as client:
        resp = await client.send_request(Request(path="/remote/json-rpc", json={...}))
        print(resp.status, resp.body)

asyncio.run(main())
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

import aiohttp

from ..exceptions import XComfortConnectionError, XComfortTimeoutError

# Constants
class ClientConst:
    """Constants for the XComfortClient"""
    DEFAULT_TIMEOUT = 10.0
    MIN_TIMEOUT = 0.1
    MAX_TIMEOUT = 120.0
    ACCEPT = "application/json, text/plain, */*"


@dataclass
class Request:
    """Represents a request to be posted to the gateway"""
    path: str
    form: Optional[dict[str, str]] = None
    json: Optional[Any] = None
    cookies: dict[str, str] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def __post_init__(self):
        if not self.path.startswith("/"):
            raise ValueError(f"Request.path must be absolute, got {self.path!r}")
        if self.form is not None and self.json is not None:
            raise ValueError("Request cannot carry both a form and a JSON body")

    def headers(self) -> dict[str, str]:
        """Headers for the wire, including the session cookie if any"""
        headers = {"Accept": ClientConst.ACCEPT}
        if self.cookies:
            headers["Cookie"] = "; ".join(f"{k}={v}" for k, v in self.cookies.items())
        return headers


@dataclass()
class Response:
    status: int
    body: Any = None # None when the body is empty or not JSON
    set_cookies: list[str] = field(default_factory=list)
    request: Optional[Request] = None
    timestamp: float = field(default_factory=time.time)


class XComfortClient:
    """
    POST {base_url}{path}
      - form bodies are url-encoded, JSON bodies are serialised by aiohttp
      - redirects are never followed, the status is handed back as received
      - cookies are managed by the caller, never by an aiohttp cookie jar
      - transport failures raise XComfortConnectionError with the transport message
    """

    def __init__(self,
                 base_url: str,
                 session: Optional[aiohttp.ClientSession] = None,
                 timeout: float = ClientConst.DEFAULT_TIMEOUT,
                 logger: Optional[logging.Logger] = None):
        self.base_url = base_url.rstrip("/")
        self.logger = logger or logging.getLogger(__name__)
        self.timeout = max(ClientConst.MIN_TIMEOUT, min(timeout, ClientConst.MAX_TIMEOUT))
        self._session = session
        self._own_session = False

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session"""
        if not self.is_open():
            self._session = aiohttp.ClientSession(cookie_jar=aiohttp.DummyCookieJar())
            self._own_session = True
        return self._session

    async def send_request(self, req: Request) -> Response:
        session = self._get_session()
        url = f"{self.base_url}{req.path}"
        req.timestamp = time.time() # Update timestamp when sending the request
        try:
            async with session.post(
                url,
                data=req.form,
                json=req.json,
                headers=req.headers(),
                allow_redirects=False,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None
                return Response(
                    status=response.status,
                    body=body,
                    set_cookies=list(response.headers.getall("Set-Cookie", [])),
                    request=req,
                )
        except asyncio.TimeoutError as e:
            self.logger.error(f"No response from {url} after {self.timeout:.1f}s")
            raise XComfortTimeoutError(f"No response from {url} after {self.timeout:.1f}s") from e
        except aiohttp.ClientError as e:
            self.logger.error(f"HTTP request to {url} failed: {e}")
            raise XComfortConnectionError(str(e)) from e

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def is_open(self) -> bool:
        """Check if the HTTP session is usable"""
        return self._session is not None and not self._session.closed

    async def close(self):
        """Close the HTTP session, if this client created it"""
        if self._own_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._own_session = False
