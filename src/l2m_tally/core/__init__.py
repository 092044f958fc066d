"""
Core building blocks for l2m-tally.

- http: JsonFetcher and the FetchError hierarchy
- models: pydantic models for the upstream feeds
- config: environment-driven Settings
"""

from .config import Settings, get_settings
from .http import DecodeError, FetchError, HttpError, JsonFetcher, TransportError

__all__ = [
    "Settings",
    "get_settings",
    "JsonFetcher",
    "FetchError",
    "HttpError",
    "DecodeError",
    "TransportError",
]
