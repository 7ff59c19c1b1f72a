"""
xComfort session management.

This module owns the login handshake with the gateway and the session token
that every JSON-RPC call carries as a cookie. It never retries on its own;
deciding when to log in again is the protocol's job.
"""

import asyncio
import logging
from typing import Optional

from ..io import XComfortClient, Request, Response
from .models import XComfortCredentials
from .types import Const, Message
from ..exceptions import XComfortAuthError, XComfortLoginError


class XComfortSessionManager:
    def __init__(self,
                 client: XComfortClient,
                 credentials: XComfortCredentials,
                 logger: Optional[logging.Logger] = None):
        self.client = client
        self.credentials = credentials
        self.logger = logger or logging.getLogger(__name__)
        self._session_id: Optional[str] = None
        self._login_lock = asyncio.Lock()

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    def cookies(self) -> dict[str, str]:
        """Cookies to send with an authenticated request"""
        if self._session_id is None:
            return {}
        return {Const.SESSION_COOKIE: self._session_id}

    async def login(self) -> str:
        """Log in to the gateway and store the session token from the response cookie."""
        request = Request(path=Const.LOGIN_PATH, form=self.credentials.login_form())
        response: Response = await self.client.send_request(request)

        if response.status == 403:
            self.logger.warning(f"Login to {self.client.base_url} rejected for user {self.credentials.username}")
            raise XComfortAuthError(Message.WRONG_CREDENTIALS)
        if response.status != 200:
            self.logger.warning(f"Login to {self.client.base_url} failed with HTTP {response.status}")
            raise XComfortLoginError(Message.LOGIN_FAILED)

        session_id = self._extract_session_id(response)
        if session_id is None:
            self.logger.warning(f"Login to {self.client.base_url} returned no {Const.SESSION_COOKIE} cookie")
            raise XComfortLoginError(Message.LOGIN_FAILED)

        self._session_id = session_id
        self.logger.info(f"Logged in to {self.client.base_url} (session {session_id[:4]}...)")
        return session_id

    async def refresh(self, stale_session_id: Optional[str]) -> str:
        """
        Replace a session token the gateway has rejected.

        Concurrent callers holding the same stale token share one login: whoever
        gets the lock first logs in, the others find the token already replaced.
        """
        async with self._login_lock:
            if self._session_id is not None and self._session_id != stale_session_id:
                self.logger.debug("Session already renewed by a concurrent call")
                return self._session_id
            return await self.login()

    @staticmethod
    def _extract_session_id(response: Response) -> Optional[str]:
        for header in response.set_cookies:
            match = Const.SESSION_COOKIE_PATTERN.search(header)
            if match:
                return match.group(1)
        return None
