"""
biostarpy - Async Python client for the BioStar 2 administrative API.

Usage:
    >>> from biostarpy import BioStarClient
    >>>
    >>> async with BioStarClient("https://biostar.local") as biostar:
    ...     await biostar.start("admin", "password")
    ...     page = await biostar.list_users(limit=20)
    ...     print(page.total)
"""
import logging
from .client import BioStarClient

from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    AsyncAPIClient,
    AsyncAuthService,
    AsyncUserService,
    SessionState,
)

from .core.models import (
    Credentials,
    UserQuery,
    UserRecord,
    UserCollectionResult,
    NewUserRequest,
)

from .core.exceptions import (
    BioStarException,
    ValidationError,
    AuthError,
    AuthFailure,
    SessionExpiredError,
    NetworkError,
    ServerError,
    DecodeError,
)

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for biostarpy modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'biostarpy',
        'biostarpy.api',
        'biostarpy.auth',
        'biostarpy.users',
        'biostarpy.client',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'BioStarClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'AsyncAPIClient',
    'AsyncAuthService',
    'AsyncUserService',
    'SessionState',
    'Credentials',
    'UserQuery',
    'UserRecord',
    'UserCollectionResult',
    'NewUserRequest',
    'BioStarException',
    'ValidationError',
    'AuthError',
    'AuthFailure',
    'SessionExpiredError',
    'NetworkError',
    'ServerError',
    'DecodeError',
    'setup_logging',
]
