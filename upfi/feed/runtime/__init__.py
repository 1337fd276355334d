"""Runtime layer: network access for the feed engine."""

from .rest import FetchClient, FetchResponse, HTTPClient

__all__ = ["FetchClient", "FetchResponse", "HTTPClient"]
