"""Transport-level request/response values."""
from dataclasses import dataclass, field
from typing import Optional, Dict, Mapping


@dataclass(frozen=True)
class WireRequest:
    """A fully built HTTP request, independent of the transport."""
    method: str
    path: str
    query: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None
    content_type: Optional[str] = None


@dataclass(frozen=True)
class RawResponse:
    """
    Status, headers and undecoded body of a server response.

    ``session_generation`` is the session generation the request was sent
    under; it is used to invalidate the right token on a 401.
    """
    status: int
    headers: Mapping[str, str]
    body: str
    session_generation: int = 0
