"""CaseDevMCP: agent tools for the Case.dev legal AI API."""

__version__ = "0.1.0"
__license__ = "MIT"

# Import key components for easier access
from .api import app
from .core import (
    CaseDevClient,
    ClientConfig,
    CredentialResolver,
    FormatService,
    OcrJobService,
    ResearchService,
    SearchDispatcher,
    TranscriptionJobService,
    UploadPipeline,
    VaultService,
)
from .models import (
    IngestOutcome,
    OcrJob,
    RequestSpec,
    SearchMethod,
    SearchQuery,
    SearchResult,
    TranscriptionJob,
    UploadResult,
)

__all__ = [
    "app",
    "CaseDevClient",
    "ClientConfig",
    "CredentialResolver",
    "FormatService",
    "IngestOutcome",
    "OcrJob",
    "OcrJobService",
    "RequestSpec",
    "ResearchService",
    "SearchDispatcher",
    "SearchMethod",
    "SearchQuery",
    "SearchResult",
    "TranscriptionJob",
    "TranscriptionJobService",
    "UploadPipeline",
    "UploadResult",
    "VaultService",
]
