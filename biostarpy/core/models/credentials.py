"""Operator credentials for BioStar authentication."""
from typing import Optional


class Credentials:
    """
    Login identifier and secret for a single Login call.

    The secret lives in a mutable buffer so it can be overwritten once the
    login request has been sent. After ``wipe()`` the secret is gone for good.

    Example:
        >>> creds = Credentials("admin", "s3cret")
        >>> creds.wipe()
        >>> creds.secret is None
        True
    """

    __slots__ = ('login_id', '_secret', '_wiped')

    def __init__(self, login_id: str, secret: str):
        self.login_id = login_id
        self._secret = bytearray(secret.encode('utf-8'))
        self._wiped = False

    @property
    def secret(self) -> Optional[str]:
        """Secret as text, or None once wiped."""
        if self._wiped:
            return None
        return self._secret.decode('utf-8')

    @property
    def is_wiped(self) -> bool:
        return self._wiped

    def wipe(self) -> None:
        """Overwrite the secret buffer with zeros and drop it."""
        for i in range(len(self._secret)):
            self._secret[i] = 0
        self._secret = bytearray()
        self._wiped = True

    def __repr__(self) -> str:
        state = 'wiped' if self._wiped else '***'
        return f"Credentials(login_id={self.login_id!r}, secret={state})"
