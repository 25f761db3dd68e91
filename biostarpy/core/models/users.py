"""
User directory models.

Contains data classes for queries, records read from the server and
requests for creating new users.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any


def to_utc(value: datetime) -> datetime:
    """Normalize a timestamp to UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format a timestamp the way the server expects (ISO 8601, UTC)."""
    return to_utc(value).strftime('%Y-%m-%dT%H:%M:%S.00Z')


@dataclass
class UserQuery:
    """
    Filter and paging parameters for listing users.

    Ordering (descending by user_id) and the "no modification filter"
    marker are fixed and not part of the query.
    """
    group_id: int = 1
    limit: int = 100
    offset: int = 0


@dataclass(frozen=True)
class UserRecord:
    """
    A user as reported by the server.

    Attributes:
        user_id: Unique user identifier
        name: Display name
        email: Email address
        department: Department name
        user_title: Job title
        phone: Phone number
        login_id: Login identifier (operators only)
        user_group_id: ID of the user group
        user_group_name: Name of the user group
        disabled: Whether the user is disabled
        start_datetime: Start of validity period (raw server string)
        expiry_datetime: End of validity period (raw server string)
        extra: Any other fields returned by the server
    """
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None
    user_title: Optional[str] = None
    phone: Optional[str] = None
    login_id: Optional[str] = None
    user_group_id: Optional[int] = None
    user_group_name: Optional[str] = None
    disabled: Optional[bool] = None
    start_datetime: Optional[str] = None
    expiry_datetime: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        return f"{self.user_id} ({self.name})" if self.name else self.user_id


@dataclass(frozen=True)
class UserCollectionResult:
    """One page of users plus the server-side total of matching users."""
    rows: List[UserRecord]
    total: int

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)


@dataclass
class NewUserRequest:
    """
    Parameters for creating a user.

    Required: user_id, group_id, start_time, expiry_time.
    Every other field is optional; None means "not supplied" and the field
    is left out of the payload. An empty string is still a value.
    ``secret`` is always sent (as "" when not supplied).
    """
    user_id: str
    group_id: int
    start_time: datetime
    expiry_time: datetime
    name: Optional[str] = None
    email: Optional[str] = None
    department: Optional[str] = None
    title: Optional[str] = None
    photo: Optional[str] = None
    phone: Optional[str] = None
    permission_id: Optional[int] = None
    access_group_ids: Optional[List[int]] = None
    login_id: Optional[str] = None
    secret: Optional[str] = None
    source_ip: Optional[str] = None
    disabled: Optional[bool] = None

    def to_record(self) -> UserRecord:
        """Build the record echoed back after creation, timestamps as sent."""
        return UserRecord(
            user_id=self.user_id,
            name=self.name,
            email=self.email,
            department=self.department,
            user_title=self.title,
            phone=self.phone,
            login_id=self.login_id,
            user_group_id=self.group_id,
            disabled=self.disabled,
            start_datetime=format_timestamp(self.start_time),
            expiry_datetime=format_timestamp(self.expiry_time),
        )
