"""Search service helpers wrapping the remote search API."""

from .client import SearchClient, SearchClientProtocol, SearchResult

__all__ = ["SearchClient", "SearchClientProtocol", "SearchResult"]
