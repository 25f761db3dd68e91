"""
Async authentication service.

Handles BioStar 2 login and logout.
"""
from .async_client import AsyncAPIClient
from .events import LOGIN, LOGOUT
from .request import RequestBuilder, ResponseHandler
from ..exceptions import AuthError, AuthFailure, BioStarException
from ..logging import get_logger
from ..models import Credentials


class AsyncAuthService:
    """
    Asynchronous authentication service.

    Obtains the session token and stores it in the client's SessionState.
    No retry is attempted; a failed login is reported to the caller.
    """

    def __init__(self, client: AsyncAPIClient):
        """
        Initialize auth service.

        Args:
            client: Async API client
        """
        self._client = client
        self._logger = get_logger('biostarpy.auth')

    async def login(self, credentials: Credentials) -> str:
        """
        Login to BioStar.

        Any existing session is dropped first. The credentials are wiped as
        soon as the request has been sent, whatever the outcome.

        Args:
            credentials: Operator credentials (consumed)

        Returns:
            The new session token

        Raises:
            ValidationError: If the login ID is empty
            AuthError: If the server rejects the login or omits the token
            NetworkError: If the server cannot be reached
        """
        state = self._client.session_state
        state.clear_token()
        login_id = credentials.login_id

        try:
            request = RequestBuilder.build_login(credentials)
            try:
                response = await self._client.send(request)
            finally:
                del request
        finally:
            credentials.wipe()

        if not ResponseHandler.is_success(response.status):
            self._logger.warning(f"Login rejected for {login_id}: HTTP {response.status}")
            raise AuthError(
                AuthFailure.REJECTED,
                f"Login rejected with HTTP {response.status}",
                status=response.status,
                body=response.body,
            )

        token = ResponseHandler.extract_session_token(response.headers)
        if not token:
            self._logger.error("Login succeeded but the session header was missing")
            raise AuthError(
                AuthFailure.MISSING_TOKEN,
                "Login succeeded but no session token was returned",
                status=response.status,
                body=response.body,
            )

        state.set_token(token)
        self._logger.info(f"Logged in as {login_id}")
        self._client.events.emit(LOGIN, login_id)
        return token

    async def logout(self) -> None:
        """
        Logout from BioStar.

        The server call is best-effort; the local session is always cleared.
        """
        state = self._client.session_state
        if not state.is_authenticated():
            return
        try:
            response = await self._client.send(RequestBuilder.build_logout())
            if not ResponseHandler.is_success(response.status):
                self._logger.warning(f"Logout returned HTTP {response.status}")
        except BioStarException as e:
            self._logger.warning(f"Logout request failed: {e}")
        finally:
            state.clear_token()
            self._client.events.emit(LOGOUT)
