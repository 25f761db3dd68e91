"""Session token management."""
from .session_state import SessionState, SESSION_HEADER

__all__ = [
    'SessionState',
    'SESSION_HEADER',
]
