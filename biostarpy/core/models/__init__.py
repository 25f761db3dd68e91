"""Data models for the BioStar API."""
from .credentials import Credentials
from .users import UserQuery, UserRecord, UserCollectionResult, NewUserRequest
from .wire import WireRequest, RawResponse

__all__ = [
    'Credentials',
    'UserQuery',
    'UserRecord',
    'UserCollectionResult',
    'NewUserRequest',
    'WireRequest',
    'RawResponse',
]
