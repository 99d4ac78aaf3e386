"""Remote article sources."""

from .errors import DecodeFailure, InvalidRequest, NetworkError, ServerError, Unavailable
from .newsapi import NewsAPISource, RemoteSource, UnconfiguredRemoteSource, create_remote_source
from .reachability import Reachability

__all__ = [
    "DecodeFailure",
    "InvalidRequest",
    "NetworkError",
    "NewsAPISource",
    "Reachability",
    "RemoteSource",
    "ServerError",
    "Unavailable",
    "UnconfiguredRemoteSource",
    "create_remote_source",
]
