"""
Async BioStar 2 API transport.

Owns the long-lived HTTP session and sends wire requests with the
current session header attached.
"""
import asyncio
import logging
from typing import Optional

import aiohttp

from .config import APIConfig
from .events import EventEmitter
from .session import SessionState
from ..exceptions import NetworkError
from ..logging import get_logger
from ..models import WireRequest, RawResponse


class AsyncAPIClient:
    """
    Asynchronous BioStar 2 API transport.

    One ``aiohttp.ClientSession`` is created on first use and reused for
    every request until ``close()``. The client holds the SessionState and
    the EventEmitter shared by the auth and user services.

    Example:
        >>> config = APIConfig(base_url='https://biostar.local')
        >>> async with AsyncAPIClient(config) as client:
        ...     response = await client.send(RequestBuilder.build_logout())
    """

    def __init__(
        self,
        config: Optional[APIConfig] = None,
        session_state: Optional[SessionState] = None
    ):
        """
        Initialize async API client.

        Args:
            config: API configuration (uses defaults if not provided)
            session_state: Token holder (a fresh one if not provided)
        """
        self._config = config or APIConfig.default()
        self._state = session_state or SessionState()
        self._events = EventEmitter()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._closed = False

        self._logger = get_logger('biostarpy.api')
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            self._logger.setLevel(self._config.log_level)

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def session_state(self) -> SessionState:
        return self._state

    @property
    def events(self) -> EventEmitter:
        return self._events

    @property
    def closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> 'AsyncAPIClient':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self):
        """Close client and release resources."""
        self._closed = True

        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None

    def _build_url(self, path: str) -> str:
        return f"{self._config.base_url}{path}"

    async def send(self, request: WireRequest) -> RawResponse:
        """
        Send a request with the session header attached.

        Any status is returned as-is; classifying it is up to the caller.

        Raises:
            NetworkError: If the exchange could not be completed
        """
        if self._closed:
            raise NetworkError("Client is closed")

        session = await self._ensure_session()

        headers = {}
        if request.content_type:
            headers['Content-Type'] = request.content_type
        headers, generation = self._state.prepare(headers)

        url = self._build_url(request.path)
        self._logger.debug(f"{request.method} {request.path}")

        try:
            async with session.request(
                request.method,
                url,
                params=request.query or None,
                data=request.body,
                headers=headers,
                proxy=self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None
            ) as response:
                body = await response.text(errors='replace')
                self._logger.debug(f"{request.method} {request.path} -> {response.status}")
                return RawResponse(
                    status=response.status,
                    headers=dict(response.headers),
                    body=body,
                    session_generation=generation,
                )
        except asyncio.TimeoutError as e:
            self._logger.error(f"Timeout on {request.method} {request.path}")
            raise NetworkError(f"Request timed out: {request.method} {request.path}") from e
        except aiohttp.ClientError as e:
            self._logger.error(f"Network error on {request.method} {request.path}: {e}")
            raise NetworkError(f"Network error: {e}") from e
