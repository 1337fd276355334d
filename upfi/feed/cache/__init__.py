"""Query cache and fetch de-duplication."""

from .coordinator import FetchCoordinator, Loader
from .query_cache import QueryCache, QueryEntry

__all__ = ["FetchCoordinator", "Loader", "QueryCache", "QueryEntry"]
