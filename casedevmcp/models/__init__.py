"""Pydantic models for CaseDevMCP."""

from .format import InputFormat, OutputFormat
from .jobs import (
    JobKind,
    JobRecord,
    OcrDownload,
    OcrEngine,
    OcrFormat,
    OcrJob,
    OcrStatus,
    TranscriptFormat,
    TranscriptionJob,
    TranscriptionStatus,
    Utterance,
    Word,
)
from .request import RequestSpec, ResponseType
from .search import (
    ResearchMode,
    ResearchResult,
    SearchChunk,
    SearchMethod,
    SearchQuery,
    SearchResult,
    SearchSource,
    clamp_top_k,
)
from .vault import (
    DownloadResult,
    IngestionStatus,
    IngestOutcome,
    ObjectText,
    UploadResult,
    UploadSession,
    Vault,
    VaultCreated,
    VaultList,
    VaultObject,
    VaultObjectList,
)

__all__ = [
    "DownloadResult",
    "IngestionStatus",
    "IngestOutcome",
    "InputFormat",
    "JobKind",
    "JobRecord",
    "ObjectText",
    "OcrDownload",
    "OcrEngine",
    "OcrFormat",
    "OcrJob",
    "OcrStatus",
    "OutputFormat",
    "RequestSpec",
    "ResearchMode",
    "ResearchResult",
    "ResponseType",
    "SearchChunk",
    "SearchMethod",
    "SearchQuery",
    "SearchResult",
    "SearchSource",
    "TranscriptFormat",
    "TranscriptionJob",
    "TranscriptionStatus",
    "UploadResult",
    "UploadSession",
    "Utterance",
    "Vault",
    "VaultCreated",
    "VaultList",
    "VaultObject",
    "VaultObjectList",
    "Word",
    "clamp_top_k",
]
