"""Request builder for BioStar API requests."""
import json
from typing import Dict, Any, Optional

from ...exceptions import ValidationError
from ...models import Credentials, UserQuery, NewUserRequest, WireRequest
from ...models.users import to_utc, format_timestamp

LOGIN_PATH = '/api/login'
LOGOUT_PATH = '/api/logout'
USERS_PATH = '/api/users'

JSON_CONTENT_TYPE = 'application/json'

# Fixed on every user query: descending by user_id, no incremental filter
ORDER_BY = 'user_id:false'
LAST_MODIFIED = '0'


class RequestBuilder:
    """Builds wire requests. Pure: no I/O, no session access."""

    @staticmethod
    def build_login(credentials: Credentials) -> WireRequest:
        """Builds the login request from credentials."""
        if not credentials.login_id:
            raise ValidationError('login_id', "Login ID must not be empty")
        if credentials.is_wiped:
            raise ValidationError('secret', "Credentials have already been used")

        payload = {
            'User': {
                'login_id': credentials.login_id,
                'password': credentials.secret,
            }
        }
        return WireRequest(
            method='POST',
            path=LOGIN_PATH,
            body=json.dumps(payload).encode('utf-8'),
            content_type=JSON_CONTENT_TYPE,
        )

    @staticmethod
    def build_logout() -> WireRequest:
        return WireRequest(method='POST', path=LOGOUT_PATH)

    @staticmethod
    def build_list_users(query: UserQuery) -> WireRequest:
        """Builds the GET request for one page of users."""
        for name in ('group_id', 'limit', 'offset'):
            value = getattr(query, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationError(name, f"'{name}' must be an integer")
            if value < 0:
                raise ValidationError(name, f"'{name}' must be >= 0")

        return WireRequest(
            method='GET',
            path=USERS_PATH,
            query={
                'group_id': str(query.group_id),
                'limit': str(query.limit),
                'offset': str(query.offset),
                'order_by': ORDER_BY,
                'last_modified': LAST_MODIFIED,
            },
        )

    @staticmethod
    def validate_new_user(request: NewUserRequest) -> None:
        """
        Check a NewUserRequest before anything is sent.

        Raises:
            ValidationError: naming the first failing field
        """
        if not request.user_id:
            raise ValidationError('user_id', "User ID must not be empty")
        if request.group_id is None:
            raise ValidationError('group_id', "User group is required")
        if request.start_time is None:
            raise ValidationError('start_time', "Start time is required")
        if request.expiry_time is None:
            raise ValidationError('expiry_time', "Expiry time is required")
        if to_utc(request.start_time) > to_utc(request.expiry_time):
            raise ValidationError(
                'expiry_time', "Expiry time must not be before start time"
            )

    @staticmethod
    def user_payload(request: NewUserRequest) -> Dict[str, Any]:
        """
        Serialize a NewUserRequest into the ``User`` object.

        Optional fields that are None are left out entirely;
        ``password`` is always present.
        """
        user: Dict[str, Any] = {
            'user_id': request.user_id,
            'user_group_id': {'id': request.group_id},
            'start_datetime': format_timestamp(request.start_time),
            'expiry_datetime': format_timestamp(request.expiry_time),
        }

        optional: Dict[str, Optional[Any]] = {
            'disabled': request.disabled,
            'name': request.name,
            'email': request.email,
            'department': request.department,
            'user_title': request.title,
            'photo': request.photo,
            'phone': request.phone,
            'login_id': request.login_id,
            'user_ip': request.source_ip,
        }
        if request.permission_id is not None:
            optional['permission'] = {'id': request.permission_id}
        if request.access_group_ids is not None:
            optional['access_groups'] = [{'id': gid} for gid in request.access_group_ids]

        user.update({key: value for key, value in optional.items() if value is not None})
        user['password'] = request.secret if request.secret is not None else ''
        return {'User': user}

    @staticmethod
    def build_create_user(request: NewUserRequest) -> WireRequest:
        """Validates and builds the POST request creating a user."""
        RequestBuilder.validate_new_user(request)
        return WireRequest(
            method='POST',
            path=USERS_PATH,
            body=json.dumps(RequestBuilder.user_payload(request)).encode('utf-8'),
            content_type=JSON_CONTENT_TYPE,
        )
