"""Pytest fixtures for biostarpy tests."""
import asyncio
import json
from datetime import datetime

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from biostarpy.core.api import APIConfig, AsyncAPIClient


class MockBioStar:
    """
    In-process stand-in for a BioStar 2 server.

    Behaviour is switched by plain attributes; every request that reaches
    the server is recorded in ``requests``.
    """

    def __init__(self):
        self.url = None
        self.token = 'abc123'
        self.login_status = 200
        self.send_token = True
        self.login_delay = 0.0
        self.users_status = None
        self.users_body = None
        self.create_status = 200
        self.create_body = '{"Response": {"code": "0", "message": "Success"}}'
        self.users = [
            {'user_id': '3', 'name': 'Carol', 'user_group_id': {'id': '1', 'name': 'All Users'}},
            {'user_id': '2', 'name': 'Bob', 'email': 'bob@example.com'},
            {'user_id': '1', 'name': 'Administrator', 'disabled': 'false'},
        ]
        self.requests = []

    def _record(self, request, body):
        self.requests.append({
            'method': request.method,
            'path': request.path,
            'query': dict(request.query),
            'session_header': request.headers.get('bs-session-id'),
            'content_type': request.headers.get('Content-Type'),
            'body': json.loads(body) if body else None,
        })

    def _authorized(self, request) -> bool:
        return request.headers.get('bs-session-id') == self.token

    @staticmethod
    def _unauthorized():
        return web.json_response(
            {'Response': {'code': '20', 'message': 'Login required.'}}, status=401
        )

    async def login(self, request):
        body = await request.text()
        self._record(request, body)
        if self.login_delay:
            await asyncio.sleep(self.login_delay)
        if self.login_status != 200:
            return web.json_response(
                {'Response': {'code': '10', 'message': 'Login failed.'}},
                status=self.login_status
            )
        headers = {'bs-session-id': self.token} if self.send_token else {}
        return web.json_response({'User': {'user_id': '1', 'name': 'admin'}}, headers=headers)

    async def logout(self, request):
        self._record(request, None)
        return web.json_response({'Response': {'code': '0'}})

    async def list_users(self, request):
        self._record(request, None)
        if not self._authorized(request):
            return self._unauthorized()
        if self.users_status is not None:
            return web.Response(
                status=self.users_status,
                text=self.users_body or '',
                content_type='application/json'
            )
        if self.users_body is not None:
            return web.Response(text=self.users_body, content_type='application/json')

        limit = int(request.query.get('limit', 0)) or len(self.users)
        offset = int(request.query.get('offset', 0))
        rows = self.users[offset:offset + limit]
        return web.json_response({
            'UserCollection': {'rows': rows, 'total': str(len(self.users))},
            'Response': {'code': '0'},
        })

    async def create_user(self, request):
        body = await request.text()
        self._record(request, body)
        if not self._authorized(request):
            return self._unauthorized()
        return web.Response(
            status=self.create_status,
            text=self.create_body,
            content_type='application/json'
        )

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_post('/api/login', self.login)
        app.router.add_post('/api/logout', self.logout)
        app.router.add_get('/api/users', self.list_users)
        app.router.add_post('/api/users', self.create_user)
        return app


@pytest_asyncio.fixture
async def biostar_server():
    """Running mock BioStar server."""
    mock = MockBioStar()
    server = TestServer(mock.make_app())
    await server.start_server()
    mock.url = f"http://{server.host}:{server.port}"
    yield mock
    await server.close()


@pytest.fixture
def api_config(biostar_server):
    return APIConfig(base_url=biostar_server.url)


@pytest_asyncio.fixture
async def api_client(api_config):
    """Transport pointed at the mock server."""
    client = AsyncAPIClient(api_config)
    yield client
    await client.close()


@pytest.fixture
def validity_period():
    """A valid (start, expiry) pair."""
    return datetime(2025, 1, 1, 0, 0, 0), datetime(2030, 12, 31, 23, 59, 0)
