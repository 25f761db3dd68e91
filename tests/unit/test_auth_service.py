"""
Tests for the login operation.

Run against an in-process mock BioStar server.
"""
import pytest

from biostarpy.core.api import APIConfig, AsyncAPIClient, AsyncAuthService, TimeoutConfig
from biostarpy.core.exceptions import AuthError, AuthFailure, NetworkError, ValidationError
from biostarpy.core.models import Credentials


@pytest.fixture
def auth(api_client):
    return AsyncAuthService(api_client)


class TestLogin:
    """Test suite for AsyncAuthService.login."""

    @pytest.mark.asyncio
    async def test_login_success(self, auth, api_client, biostar_server):
        token = await auth.login(Credentials('admin', 'pw'))

        assert token == 'abc123'
        assert api_client.session_state.is_authenticated()
        assert api_client.session_state.token == 'abc123'

    @pytest.mark.asyncio
    async def test_login_request_shape(self, auth, biostar_server):
        await auth.login(Credentials('admin', 'pw'))

        sent = biostar_server.requests[0]
        assert sent['method'] == 'POST'
        assert sent['path'] == '/api/login'
        assert sent['content_type'].startswith('application/json')
        assert sent['body'] == {'User': {'login_id': 'admin', 'password': 'pw'}}
        assert sent['session_header'] is None

    @pytest.mark.asyncio
    async def test_missing_token(self, auth, api_client, biostar_server):
        biostar_server.send_token = False

        with pytest.raises(AuthError) as exc_info:
            await auth.login(Credentials('admin', 'pw'))

        assert exc_info.value.reason is AuthFailure.MISSING_TOKEN
        assert not api_client.session_state.is_authenticated()

    @pytest.mark.asyncio
    async def test_empty_token_is_missing(self, auth, api_client, biostar_server):
        biostar_server.token = ''

        with pytest.raises(AuthError) as exc_info:
            await auth.login(Credentials('admin', 'pw'))

        assert exc_info.value.reason is AuthFailure.MISSING_TOKEN

    @pytest.mark.asyncio
    @pytest.mark.parametrize('status', [400, 401, 403, 500])
    async def test_rejected(self, auth, api_client, biostar_server, status):
        biostar_server.login_status = status

        with pytest.raises(AuthError) as exc_info:
            await auth.login(Credentials('admin', 'wrong'))

        error = exc_info.value
        assert error.reason is AuthFailure.REJECTED
        assert error.status == status
        assert 'Login failed.' in error.body
        assert not api_client.session_state.is_authenticated()

    @pytest.mark.asyncio
    async def test_login_clears_previous_session(self, auth, api_client, biostar_server):
        api_client.session_state.set_token('stale')
        biostar_server.login_status = 401

        with pytest.raises(AuthError):
            await auth.login(Credentials('admin', 'wrong'))

        assert api_client.session_state.token is None
        assert biostar_server.requests[0]['session_header'] is None

    @pytest.mark.asyncio
    async def test_empty_login_id(self, auth, biostar_server):
        creds = Credentials('', 'pw')

        with pytest.raises(ValidationError):
            await auth.login(creds)

        assert biostar_server.requests == []
        assert creds.secret is None

    @pytest.mark.asyncio
    async def test_login_emits_event(self, auth, api_client, biostar_server):
        logins = []
        api_client.events.on('login', logins.append)

        await auth.login(Credentials('admin', 'pw'))

        assert logins == ['admin']


class TestCredentialWipe:
    """The secret is unreadable after login on every exit path."""

    @pytest.mark.asyncio
    async def test_wiped_after_success(self, auth, biostar_server):
        creds = Credentials('admin', 'pw')

        await auth.login(creds)

        assert creds.is_wiped
        assert creds.secret is None

    @pytest.mark.asyncio
    async def test_wiped_after_rejection(self, auth, biostar_server):
        biostar_server.login_status = 401
        creds = Credentials('admin', 'wrong')

        with pytest.raises(AuthError):
            await auth.login(creds)

        assert creds.secret is None

    @pytest.mark.asyncio
    async def test_wiped_after_missing_token(self, auth, biostar_server):
        biostar_server.send_token = False
        creds = Credentials('admin', 'pw')

        with pytest.raises(AuthError):
            await auth.login(creds)

        assert creds.secret is None

    @pytest.mark.asyncio
    async def test_wiped_after_network_error(self):
        client = AsyncAPIClient(APIConfig(base_url='http://127.0.0.1:1'))
        creds = Credentials('admin', 'pw')
        try:
            with pytest.raises(NetworkError):
                await AsyncAuthService(client).login(creds)
        finally:
            await client.close()

        assert creds.secret is None
        assert not client.session_state.is_authenticated()


class TestTransportFailures:
    """Network failures surface as NetworkError."""

    @pytest.mark.asyncio
    async def test_timeout(self, biostar_server):
        biostar_server.login_delay = 1.0
        config = APIConfig(
            base_url=biostar_server.url,
            timeout=TimeoutConfig(total=0.2, connect=0.2, sock_read=0.2)
        )
        client = AsyncAPIClient(config)
        try:
            with pytest.raises(NetworkError):
                await AsyncAuthService(client).login(Credentials('admin', 'pw'))
        finally:
            await client.close()

    @pytest.mark.asyncio
    async def test_closed_client(self, api_client, biostar_server):
        await api_client.close()

        with pytest.raises(NetworkError):
            await AsyncAuthService(api_client).login(Credentials('admin', 'pw'))

        assert biostar_server.requests == []


class TestLogout:
    """Test suite for AsyncAuthService.logout."""

    @pytest.mark.asyncio
    async def test_logout_clears_session(self, auth, api_client, biostar_server):
        await auth.login(Credentials('admin', 'pw'))

        await auth.logout()

        assert not api_client.session_state.is_authenticated()
        assert biostar_server.requests[-1]['path'] == '/api/logout'
        assert biostar_server.requests[-1]['session_header'] == 'abc123'

    @pytest.mark.asyncio
    async def test_logout_without_session_is_noop(self, auth, biostar_server):
        await auth.logout()

        assert biostar_server.requests == []
