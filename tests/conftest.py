"""
Pytest configuration and fixtures for the xcomfort project.

The gateway is replaced by FakeSession, a scripted stand-in for aiohttp.ClientSession
that is injected through XComfort(session=...). Replies are queued per path and
handed out in order; every post is recorded for assertions.
"""

import asyncio
import logging
import sys
from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Any, Optional

import pytest
from multidict import CIMultiDict

from xcomfort import XComfort

BASE_URL = "https://mysmarthome.example.com"
LOGIN_PATH = "/system/http/login"
RPC_PATH = "/remote/json-rpc"

PARAMS = {
    "base_url": BASE_URL,
    "remote_key": "lol",
    "username": "2",
    "password": "3",
    "auto_setup": False,
}


class FakeResponse:
    def __init__(self, status: int = 200, body: Any = None, cookies: tuple[str, ...] = ()):
        self.status = status
        self._body = body
        self.headers = CIMultiDict([("Set-Cookie", c) for c in cookies])

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        return self._body


class FakeRequestContext:
    def __init__(self, outcome: FakeResponse | BaseException):
        self.outcome = outcome

    async def __aenter__(self) -> FakeResponse:
        # Yield once so concurrent callers interleave like real network I/O
        await asyncio.sleep(0)
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        return False


@dataclass
class Call:
    url: str
    kwargs: dict[str, Any] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return self.url[len(BASE_URL):]

    @property
    def json(self) -> Any:
        return self.kwargs.get("json")

    @property
    def form(self) -> Any:
        return self.kwargs.get("data")

    @property
    def headers(self) -> dict[str, str]:
        return self.kwargs.get("headers") or {}


class FakeSession:
    def __init__(self):
        self.closed = False
        self.calls: list[Call] = []
        self._replies: dict[str, deque] = defaultdict(deque)

    def reply(self, path: str, status: int = 200, body: Any = None, cookies: tuple[str, ...] = ()) -> "FakeSession":
        self._replies[path].append(FakeResponse(status, body, cookies))
        return self

    def fail(self, path: str, error: BaseException) -> "FakeSession":
        self._replies[path].append(error)
        return self

    def calls_to(self, path: str) -> list[Call]:
        return [c for c in self.calls if c.path == path]

    def pending(self) -> int:
        return sum(len(q) for q in self._replies.values())

    def post(self, url: str, **kwargs: Any) -> FakeRequestContext:
        call = Call(url, kwargs)
        self.calls.append(call)
        queue = self._replies.get(call.path)
        if not queue:
            raise AssertionError(f"Unexpected POST to {url}")
        return FakeRequestContext(queue.popleft())

    async def close(self) -> None:
        self.closed = True


def session_cookie(session_id: str) -> str:
    return f"JSESSIONID={session_id}; Path=/; HttpOnly"


def rpc_result(result: Any, id: int = 4) -> dict[str, Any]:
    return {"id": id, "result": result, "jsonrpc": "2.0"}


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Send library logs to stdout so failing tests show what the client did."""
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt="%(levelname)-8s %(message)s - %(funcName)s:%(lineno)d "))
    logger = logging.getLogger("xcomfort")
    logger.setLevel(logging.DEBUG)
    logger.addHandler(handler)


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def xc(fake_session: FakeSession) -> XComfort:
    return XComfort(**PARAMS, session=fake_session)
