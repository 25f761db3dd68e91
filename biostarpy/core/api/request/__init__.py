"""Request building and response decoding."""
from .request_builder import RequestBuilder, format_timestamp, to_utc
from .response_handler import ResponseHandler

__all__ = [
    'RequestBuilder',
    'ResponseHandler',
    'format_timestamp',
    'to_utc',
]
