"""REST runtime abstractions."""

from .http_client import FetchResponse, HTTPClient, ResponseHook
from .transport import FetchClient

__all__ = [
    "FetchClient",
    "FetchResponse",
    "HTTPClient",
    "ResponseHook",
]
