"""Session lifecycle events."""
from .event_emitter import EventEmitter, LOGIN, LOGOUT, SESSION_EXPIRED

__all__ = [
    'EventEmitter',
    'LOGIN',
    'LOGOUT',
    'SESSION_EXPIRED',
]
