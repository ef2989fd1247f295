"""Vault search dispatch."""
from __future__ import annotations

import logging
from typing import Optional, Union

from ..models.search import SearchMethod, SearchQuery, SearchResponse, SearchResult
from .client import CaseDevClient

logger = logging.getLogger(__name__)


class SearchDispatcher:
    """Runs vault searches and normalizes the response shapes of all methods.

    Every method returns the same SearchResult: chunks in backend order with a
    display confidence, plus the optional aggregate answer and source list
    that the graph methods produce.
    """

    def __init__(self, client: CaseDevClient):
        self.client = client

    async def search(self, query: SearchQuery) -> SearchResult:
        """Search a vault.

        An empty chunk list is returned as an empty result, not an error.
        """
        payload = query.to_payload()
        response = await self.client.request(
            f"/vault/{query.vault_id}/search",
            method="POST",
            body=payload,
            schema=SearchResponse,
        )
        result = SearchResult(
            vault_id=query.vault_id,
            query=query.text,
            method=response.method or payload["method"],
            chunks=response.chunks or [],
            response=response.response,
            sources=response.sources or [],
        )
        logger.debug(
            f"Search {result.method} in {query.vault_id} returned {len(result.chunks)} chunk(s)"
        )
        return result

    async def search_text(
        self,
        vault_id: str,
        text: str,
        method: Optional[Union[str, SearchMethod]] = None,
        top_k: Optional[int] = None,
        object_id: Optional[str] = None,
    ) -> SearchResult:
        """Convenience wrapper building the SearchQuery from plain arguments."""
        query = SearchQuery(
            vault_id=vault_id,
            text=text,
            method=SearchMethod(method) if method else SearchMethod.HYBRID,
            top_k=top_k,
            object_id=object_id,
        )
        return await self.search(query)
