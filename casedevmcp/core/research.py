"""Deep web research."""
from __future__ import annotations

import logging
from typing import Union

from ..models.search import ResearchMode, ResearchResponse, ResearchResult
from .client import CaseDevClient

logger = logging.getLogger(__name__)

KNOWN_SECTIONS = ("summary", "analysis", "sources")


class ResearchService:
    """Runs multi-step research; the deadline grows with the research mode."""

    def __init__(self, client: CaseDevClient):
        self.client = client

    async def research(
        self, query: str, mode: Union[str, ResearchMode] = ResearchMode.NORMAL
    ) -> ResearchResult:
        """Research a question.

        Args:
            query: The research question.
            mode: fast (~30s), normal (~2min) or pro (~5min).

        Returns:
            ResearchResult; empty when the backend returned no results.
        """
        mode = ResearchMode(mode)
        response = await self.client.request(
            "/search/v1/research",
            method="POST",
            body={"instructions": query, "model": mode.value},
            timeout_ms=mode.timeout_ms,
            schema=ResearchResponse,
        )

        results = response.results or {}
        sources = results.get("sources") or []
        if not isinstance(sources, list):
            sources = [sources]

        return ResearchResult(
            query=query,
            research_id=response.research_id,
            model=response.model or mode.value,
            summary=results.get("summary") or None,
            analysis=results.get("analysis") or None,
            sources=[str(source) for source in sources],
            additional_sections={
                key: value
                for key, value in results.items()
                if key not in KNOWN_SECTIONS and value
            },
        )
