"""BioStar 2 API module."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .session import SessionState, SESSION_HEADER
from .events import EventEmitter
from .request import RequestBuilder, ResponseHandler
from .async_client import AsyncAPIClient
from .async_auth import AsyncAuthService
from .async_users import AsyncUserService

__all__ = [
    # Client and services
    'AsyncAPIClient',
    'AsyncAuthService',
    'AsyncUserService',

    # Session
    'SessionState',
    'SESSION_HEADER',

    # Request / response
    'RequestBuilder',
    'ResponseHandler',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',

    # Events
    'EventEmitter',
]
