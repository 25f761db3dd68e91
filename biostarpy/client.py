"""
BioStarClient - High-level async client for the BioStar 2 API.

Example:
    >>> async with BioStarClient("https://biostar.local") as biostar:
    ...     await biostar.start("admin", "password")
    ...     users = await biostar.list_users(limit=10)
    ...     for user in users:
    ...         print(user)
"""
import dataclasses
from typing import Optional, Callable, Awaitable, Union

from .core.api import (
    AsyncAPIClient,
    AsyncAuthService,
    AsyncUserService,
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
)
from .core.exceptions import ValidationError
from .core.logging import get_logger
from .core.models import (
    Credentials,
    UserQuery,
    UserRecord,
    UserCollectionResult,
    NewUserRequest,
)

# Supplies credentials on demand (e.g. a masked console prompt)
CredentialSource = Callable[[], Union[Credentials, Awaitable[Credentials]]]


class BioStarClient:
    """
    High-level async client for BioStar 2.

    Wraps the transport, the auth service and the user service around one
    session. The client never prompts by itself; pass a
    ``credential_source`` to have ``start()`` ask for credentials.

    With custom configuration:
        >>> config = BioStarClient.create_config("https://10.0.0.5", verify_ssl=False)
        >>> client = BioStarClient(config=config)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        config: Optional[APIConfig] = None,
        credential_source: Optional[CredentialSource] = None
    ):
        """
        Initialize BioStar client.

        Args:
            base_url: Server address; overrides config.base_url
            config: Optional API configuration
            credential_source: Callable returning Credentials, used by start()
        """
        self._config = config or APIConfig.default()
        if base_url:
            # Copy so a shared config keeps its own base_url
            self._config = dataclasses.replace(self._config, base_url=base_url)
        self._credential_source = credential_source
        self._logger = get_logger('biostarpy.client')

        self._api = AsyncAPIClient(self._config)
        self._auth = AsyncAuthService(self._api)
        self._users = AsyncUserService(self._api)

    # =========================================================================
    # Configuration helpers
    # =========================================================================

    @staticmethod
    def create_config(
        base_url: str = 'https://127.0.0.1',
        proxy: Optional[str] = None,
        timeout: float = 30,
        verify_ssl: bool = True,
        ca_file: Optional[str] = None,
        page_size: int = 100,
        user_agent: Optional[str] = None
    ) -> APIConfig:
        """
        Create API configuration with common options.

        Args:
            base_url: Server address (e.g. "https://10.0.0.5")
            proxy: Proxy URL (e.g. "http://proxy:8080")
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            ca_file: CA bundle for a self-signed server certificate
            page_size: Default page size for list_users
            user_agent: Custom user agent string

        Returns:
            APIConfig instance
        """
        return APIConfig(
            base_url=base_url,
            proxy=ProxyConfig(url=proxy) if proxy else None,
            timeout=TimeoutConfig(total=timeout),
            ssl=SSLConfig(verify=verify_ssl, check_hostname=verify_ssl, ca_file=ca_file),
            page_size=page_size,
            user_agent=user_agent or 'biostarpy/1.0.0'
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def api(self) -> AsyncAPIClient:
        """Underlying transport."""
        return self._api

    @property
    def is_authenticated(self) -> bool:
        return self._api.session_state.is_authenticated()

    def on(self, event: str, callback: Callable) -> 'BioStarClient':
        """Register a handler for 'login', 'logout' or 'session_expired'."""
        self._api.events.on(event, callback)
        return self

    def off(self, event: str, callback: Optional[Callable] = None) -> 'BioStarClient':
        self._api.events.off(event, callback)
        return self

    # =========================================================================
    # Session management
    # =========================================================================

    async def start(
        self,
        login_id: Optional[str] = None,
        secret: Optional[str] = None
    ) -> 'BioStarClient':
        """
        Log in with the given credentials or ask the credential source.

        Returns:
            Self for chaining
        """
        if login_id is not None and secret is not None:
            credentials = Credentials(login_id, secret)
        elif self._credential_source is not None:
            credentials = self._credential_source()
            if not isinstance(credentials, Credentials):
                credentials = await credentials
        else:
            raise ValidationError('login_id', "No credentials given and no credential source set")

        await self.login(credentials)
        return self

    async def login(self, credentials: Credentials) -> None:
        """Log in; the credentials are wiped afterwards."""
        await self._auth.login(credentials)

    async def logout(self) -> None:
        await self._auth.logout()

    async def close(self) -> None:
        """Close the transport. The session is not logged out."""
        await self._api.close()

    async def __aenter__(self) -> 'BioStarClient':
        await self._api.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # =========================================================================
    # User directory
    # =========================================================================

    async def list_users(
        self,
        query: Optional[UserQuery] = None,
        *,
        group_id: int = 1,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> UserCollectionResult:
        """Get one page of users. See AsyncUserService.list_users."""
        return await self._users.list_users(
            query, group_id=group_id, limit=limit, offset=offset
        )

    async def create_user(self, request: NewUserRequest) -> UserRecord:
        """Create a user. See AsyncUserService.create_user."""
        return await self._users.create_user(request)

    def __repr__(self) -> str:
        state = 'authenticated' if self.is_authenticated else 'unauthenticated'
        return f"<BioStarClient {self._config.base_url} ({state})>"
