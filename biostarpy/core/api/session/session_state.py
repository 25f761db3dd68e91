"""
Session token state for a single client instance.

Holds the ``bs-session-id`` token and injects it into outgoing headers.
"""
import threading
from typing import Optional, Dict, Tuple

SESSION_HEADER = 'bs-session-id'


class SessionState:
    """
    Thread-safe holder for the current session token.

    Each successful ``set_token`` bumps a generation counter. Operations
    remember the generation they sent under, and a 401 clears the token
    only if that generation is still current, so a stale 401 cannot wipe
    a token from a newer login.

    Example:
        >>> state = SessionState()
        >>> state.set_token('abc123')
        >>> state.header_for({})
        {'bs-session-id': 'abc123'}
    """

    def __init__(self, header_name: str = SESSION_HEADER):
        self._header_name = header_name
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        self._generation = 0

    @property
    def header_name(self) -> str:
        return self._header_name

    @property
    def token(self) -> Optional[str]:
        with self._lock:
            return self._token

    def set_token(self, token: str) -> None:
        """Store a new token (must be non-empty)."""
        if not token:
            raise ValueError("Session token must be non-empty")
        with self._lock:
            self._token = token
            self._generation += 1

    def clear_token(self) -> None:
        """Forget the current token unconditionally."""
        with self._lock:
            self._token = None
            self._generation += 1

    def is_authenticated(self) -> bool:
        with self._lock:
            return self._token is not None

    def snapshot(self) -> Tuple[Optional[str], int]:
        """Return the token together with its generation."""
        with self._lock:
            return self._token, self._generation

    def invalidate(self, generation: int) -> bool:
        """
        Clear the token if it still belongs to ``generation``.

        Returns:
            True if the token was cleared
        """
        with self._lock:
            if generation != self._generation:
                return False
            self._token = None
            self._generation += 1
            return True

    def header_for(self, headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """
        Return a copy of ``headers`` with the session header attached.

        Headers are returned unchanged (copied) when there is no token.
        """
        return self._attach(headers, self.token)

    def prepare(self, headers: Optional[Dict[str, str]] = None) -> Tuple[Dict[str, str], int]:
        """Attach the session header and return it with the generation used."""
        token, generation = self.snapshot()
        return self._attach(headers, token), generation

    def _attach(self, headers: Optional[Dict[str, str]], token: Optional[str]) -> Dict[str, str]:
        result = dict(headers or {})
        if token:
            result[self._header_name] = token
        else:
            result.pop(self._header_name, None)
        return result
