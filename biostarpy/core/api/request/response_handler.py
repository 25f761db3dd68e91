"""Response handler for BioStar API responses."""
import json
from typing import Dict, Any, Optional, Mapping, Tuple

from ..session import SESSION_HEADER
from ...exceptions import DecodeError
from ...models import UserRecord, UserCollectionResult

COLLECTION_ENVELOPE = 'UserCollection'
ERROR_ENVELOPE = 'Response'

# Keys mapped onto UserRecord attributes; everything else lands in `extra`
_RECORD_FIELDS = (
    'name', 'email', 'department', 'user_title', 'phone', 'login_id',
    'start_datetime', 'expiry_datetime',
)


class ResponseHandler:
    """Decodes API responses. Pure: no I/O, no session access."""

    @staticmethod
    def is_success(status: int) -> bool:
        return 200 <= status < 300

    @staticmethod
    def extract_session_token(headers: Mapping[str, str]) -> Optional[str]:
        """Returns the session token header, or None if absent or empty."""
        token = headers.get(SESSION_HEADER)
        if token is None:
            # Plain dicts are case-sensitive; server header casing varies
            for key, value in headers.items():
                if key.lower() == SESSION_HEADER:
                    token = value
                    break
        if token is None:
            return None
        token = token.strip()
        return token or None

    @staticmethod
    def parse_json(body: str) -> Any:
        """Parses a JSON body."""
        try:
            return json.loads(body)
        except (json.JSONDecodeError, TypeError) as e:
            raise DecodeError(f"Invalid JSON in response: {e}", body=body) from e

    @staticmethod
    def parse_error_body(body: str) -> Tuple[Optional[str], Optional[str]]:
        """
        Extracts (code, message) from an error body.

        The server wraps errors as ``{"Response": {"code": ..., "message": ...}}``.
        Anything else yields (None, None); error bodies are best-effort.
        """
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, TypeError):
            return None, None
        if not isinstance(data, dict):
            return None, None
        envelope = data.get(ERROR_ENVELOPE, data)
        if not isinstance(envelope, dict):
            return None, None
        code = envelope.get('code')
        message = envelope.get('message')
        return (
            str(code) if code is not None else None,
            str(message) if message is not None else None,
        )

    @staticmethod
    def _to_int(value: Any, name: str, body: Optional[str] = None) -> int:
        """Accepts ints and numeric strings (the server sends both)."""
        if isinstance(value, bool):
            raise DecodeError(f"'{name}' is not an integer: {value!r}", body=body)
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise DecodeError(f"'{name}' is not an integer: {value!r}", body=body)

    @staticmethod
    def decode_user_record(row: Any, body: Optional[str] = None) -> UserRecord:
        """Decodes one row of a user collection."""
        if not isinstance(row, dict):
            raise DecodeError(f"User row is not an object: {row!r}", body=body)

        user_id = row.get('user_id')
        if user_id is None or user_id == '':
            raise DecodeError("User row has no user_id", body=body)

        values: Dict[str, Any] = {}
        for key in _RECORD_FIELDS:
            value = row.get(key)
            values[key] = str(value) if value is not None else None

        group = row.get('user_group_id')
        group_id = None
        group_name = None
        if isinstance(group, dict):
            if group.get('id') is not None:
                group_id = ResponseHandler._to_int(group['id'], 'user_group_id.id', body)
            group_name = group.get('name')
        elif group is not None:
            group_id = ResponseHandler._to_int(group, 'user_group_id', body)

        disabled = row.get('disabled')
        if isinstance(disabled, str):
            disabled = disabled.lower() == 'true'
        elif disabled is not None:
            disabled = bool(disabled)

        known = set(_RECORD_FIELDS) | {'user_id', 'user_group_id', 'disabled'}
        extra = {key: value for key, value in row.items() if key not in known}

        return UserRecord(
            user_id=str(user_id),
            user_group_id=group_id,
            user_group_name=group_name,
            disabled=disabled,
            extra=extra,
            **values,
        )

    @staticmethod
    def decode_user_collection(body: str) -> UserCollectionResult:
        """
        Decodes a user listing.

        Accepts the collection with or without the ``UserCollection``
        envelope; without it, ``rows`` or ``total`` must be at the top
        level. Missing or null ``rows`` means no rows; a missing
        ``total`` falls back to the number of rows.
        """
        data = ResponseHandler.parse_json(body)
        if not isinstance(data, dict):
            raise DecodeError("User listing is not a JSON object", body=body)

        if COLLECTION_ENVELOPE in data:
            collection = data[COLLECTION_ENVELOPE]
        elif 'rows' in data or 'total' in data:
            collection = data
        else:
            raise DecodeError("Response is not a user listing", body=body)
        if not isinstance(collection, dict):
            raise DecodeError(f"'{COLLECTION_ENVELOPE}' is not an object", body=body)

        raw_rows = collection.get('rows')
        if raw_rows is None:
            raw_rows = []
        if not isinstance(raw_rows, list):
            raise DecodeError("'rows' is not a list", body=body)

        rows = [ResponseHandler.decode_user_record(row, body) for row in raw_rows]

        total = collection.get('total')
        total = len(rows) if total is None else ResponseHandler._to_int(total, 'total', body)

        return UserCollectionResult(rows=rows, total=total)
