"""Search and research models for CaseDevMCP."""
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

MIN_TOP_K = 1
MAX_TOP_K = 100
DEFAULT_TOP_K = 10


def clamp_top_k(top_k: Optional[int]) -> int:
    """Clamp a requested result count into ``[MIN_TOP_K, MAX_TOP_K]``."""
    if top_k is None:
        top_k = DEFAULT_TOP_K
    return min(max(int(top_k), MIN_TOP_K), MAX_TOP_K)


class SearchMethod(str, Enum):
    """Supported vault search methods."""
    HYBRID = "hybrid"
    FAST = "fast"
    GLOBAL = "global"
    ENTITY = "entity"
    LOCAL = "local"
    VECTOR = "vector"
    GRAPH = "graph"


class SearchQuery(BaseModel):
    """A vault search request."""
    vault_id: str = Field(..., description="Vault to search in")
    text: str = Field(..., description="Natural language query")
    method: SearchMethod = Field(SearchMethod.HYBRID, description="Search method")
    top_k: Optional[int] = Field(
        DEFAULT_TOP_K, description="Maximum number of results, clamped to 1-100"
    )
    object_id: Optional[str] = Field(
        None, description="Restrict results to a single document"
    )

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "query": self.text,
            "method": self.method.value,
            "topK": clamp_top_k(self.top_k),
        }
        filters = {}
        if self.object_id:
            filters["object_id"] = self.object_id
        if filters:
            payload["filters"] = filters
        return payload


class SearchChunk(BaseModel):
    """A scored document fragment."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    object_id: Optional[str] = None
    chunk_index: Optional[int] = None
    score: Optional[float] = None
    hybrid_score: Optional[float] = Field(None, alias="hybridScore")

    @computed_field
    @property
    def confidence(self) -> int:
        """Display confidence, 0-100, preferring the hybrid score."""
        if self.hybrid_score is not None:
            effective = self.hybrid_score
        elif self.score is not None:
            effective = self.score
        else:
            effective = 0.0
        return round(effective * 100)


class SearchSource(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    filename: str
    page_count: Optional[int] = Field(None, alias="pageCount")
    text_length: Optional[int] = Field(None, alias="textLength")
    chunk_count: Optional[int] = Field(None, alias="chunkCount")


class SearchResponse(BaseModel):
    """Raw search payload as returned by the backend."""

    model_config = ConfigDict(populate_by_name=True)

    method: Optional[str] = None
    query: Optional[str] = None
    response: Optional[str] = None
    chunks: Optional[List[SearchChunk]] = None
    sources: Optional[List[SearchSource]] = None
    vault_id: Optional[str] = None


class SearchResult(BaseModel):
    """Normalized search result.

    Chunks keep the backend order.
    """
    vault_id: str
    query: str
    method: str
    chunks: List[SearchChunk] = Field(default_factory=list)
    response: Optional[str] = None
    sources: List[SearchSource] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.chunks


class ResearchMode(str, Enum):
    """Research depth; deeper modes get a longer deadline."""
    FAST = "fast"
    NORMAL = "normal"
    PRO = "pro"

    @property
    def timeout_ms(self) -> int:
        return _RESEARCH_TIMEOUTS_MS[self]


_RESEARCH_TIMEOUTS_MS = {
    ResearchMode.FAST: 60000,
    ResearchMode.NORMAL: 180000,
    ResearchMode.PRO: 360000,
}


class ResearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    research_id: Optional[str] = Field(None, alias="researchId")
    model: Optional[str] = None
    results: Optional[Dict[str, Any]] = None


class ResearchResult(BaseModel):
    """Research findings.

    ``summary``, ``analysis`` and ``sources`` are the known sections; every
    other key the backend returns ends up in ``additional_sections`` in the
    order it was received.
    """
    query: str
    research_id: Optional[str] = None
    model: str
    summary: Optional[str] = None
    analysis: Optional[str] = None
    sources: List[str] = Field(default_factory=list)
    additional_sections: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not (
            self.summary or self.analysis or self.sources or self.additional_sections
        )
