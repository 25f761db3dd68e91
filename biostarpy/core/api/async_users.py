"""
Async user directory service.

Lists and creates users on behalf of an authenticated session.
"""
from typing import Optional

from .async_client import AsyncAPIClient
from .events import SESSION_EXPIRED
from .request import RequestBuilder, ResponseHandler
from ..exceptions import AuthError, AuthFailure, SessionExpiredError, ServerError
from ..logging import get_logger
from ..models import (
    UserQuery,
    UserRecord,
    UserCollectionResult,
    NewUserRequest,
    RawResponse,
    WireRequest,
)


class AsyncUserService:
    """
    Asynchronous user directory service.

    Every call needs an authenticated session. A 401 from the server
    clears the session and raises SessionExpiredError; the caller must
    login again before retrying.
    """

    def __init__(self, client: AsyncAPIClient):
        self._client = client
        self._logger = get_logger('biostarpy.users')

    def _require_session(self) -> None:
        if not self._client.session_state.is_authenticated():
            raise AuthError(AuthFailure.NOT_AUTHENTICATED, "Not logged in, login first")

    async def _send(self, request: WireRequest, action: str) -> RawResponse:
        """
        Send and classify the status: 401, other failures, success.

        A 401 always surfaces as SessionExpiredError. If a session_expired
        handler raises, its exception is chained as the cause.
        """
        response = await self._client.send(request)

        if response.status == 401:
            cleared = self._client.session_state.invalidate(response.session_generation)
            self._logger.warning(f"Failed to {action}: session expired (HTTP 401)")
            if cleared:
                try:
                    self._client.events.emit(SESSION_EXPIRED)
                except Exception as e:
                    self._logger.error(f"session_expired handler failed: {e}")
                    raise SessionExpiredError(body=response.body) from e
            raise SessionExpiredError(body=response.body)

        if not ResponseHandler.is_success(response.status):
            code, message = ResponseHandler.parse_error_body(response.body)
            self._logger.error(
                f"Failed to {action}: HTTP {response.status} {message or response.body}"
            )
            raise ServerError(response.status, body=response.body, code=code, message=message)

        return response

    async def list_users(
        self,
        query: Optional[UserQuery] = None,
        *,
        group_id: int = 1,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> UserCollectionResult:
        """
        Get one page of users from a user group.

        Args:
            query: Complete query; overrides the keyword arguments
            group_id: ID of the user group (1 = all users)
            limit: Maximum number of users (defaults to config page_size)
            offset: Offset for pagination

        Returns:
            UserCollectionResult with the rows and the server-side total

        Raises:
            ValidationError: If a query value is negative
            AuthError: If not logged in
            SessionExpiredError: If the server answered 401
            ServerError: For any other non-success status
            DecodeError: If the body is not a valid user listing
            NetworkError: If the server cannot be reached
        """
        if query is None:
            if limit is None:
                limit = self._client.config.page_size
            query = UserQuery(group_id=group_id, limit=limit, offset=offset)

        request = RequestBuilder.build_list_users(query)
        self._require_session()

        response = await self._send(request, 'list users')
        result = ResponseHandler.decode_user_collection(response.body)
        self._logger.debug(f"Retrieved {len(result.rows)} of {result.total} users")
        return result

    async def create_user(self, request: NewUserRequest) -> UserRecord:
        """
        Create a user.

        The request is validated locally before the session is checked or
        anything is sent.

        Args:
            request: New user parameters

        Returns:
            UserRecord echoing the submitted identity

        Raises:
            ValidationError: If a required field is missing or the validity
                period ends before it starts
            AuthError: If not logged in
            SessionExpiredError: If the server answered 401
            ServerError: For any other non-success status
            NetworkError: If the server cannot be reached
        """
        wire_request = RequestBuilder.build_create_user(request)
        self._require_session()

        await self._send(wire_request, 'create user')
        self._logger.info(f"User {request.user_id} created")
        return request.to_record()
