"""
Provider Adapter Base - Uniform fetch contract for upstream providers

Every adapter exposes fetch(query, limit, **options) and never raises: any
upstream error (network failure, non-2xx, malformed payload, timeout) is
logged and mapped to an empty list. The aggregator relies on this so one
failing provider never aborts the fan-out.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import logfire

from backend.config import DEFAULT_PAGE_SIZE, SEARCH_TIMEOUT
from backend.models.schema import ResultItem


class ProviderAdapter(ABC):
    """Base class for all provider adapters."""

    name: str = "provider"
    source_name: str = ""
    default_limit: int = DEFAULT_PAGE_SIZE
    timeout: float = SEARCH_TIMEOUT

    async def fetch(self, query: str, limit: Optional[int] = None, **options: Any) -> List[ResultItem]:
        """
        Fetch up to `limit` items for a query.

        Returns:
            List of ResultItem objects; empty on any upstream failure
        """
        limit = limit or self.default_limit
        try:
            items = await asyncio.wait_for(self._fetch(query, limit, **options), timeout=self.timeout)
        except asyncio.TimeoutError:
            logfire.warn(
                "{provider} timed out after {timeout}s for '{query}'",
                provider=self.name,
                timeout=self.timeout,
                query=query,
            )
            return []
        except Exception as e:
            logfire.error(
                "{provider} fetch failed for '{query}': {error}",
                provider=self.name,
                query=query,
                error=repr(e),
            )
            return []

        logfire.info(
            "{provider} returned {count} results for '{query}'",
            provider=self.name,
            count=len(items),
            query=query,
        )
        return items[:limit]

    @abstractmethod
    async def _fetch(self, query: str, limit: int, **options: Any) -> List[ResultItem]:
        """Provider-specific fetch; may raise."""
