"""Core functionality for CaseDevMCP."""

from .client import CaseDevClient
from .config import ClientConfig
from .credentials import AuthStore, ConfigStore, CredentialResolver, StaticCredentials
from .errors import (
    AuthError,
    CaseDevError,
    HttpError,
    RequestTimeoutError,
    SchemaError,
    ValidationError,
)
from .formatting import FormatService
from .jobs import JobService, OcrJobService, TranscriptionJobService
from .research import ResearchService
from .search import SearchDispatcher
from .upload import UploadPipeline, content_type_for
from .vault import VaultService

__all__ = [
    "AuthError",
    "AuthStore",
    "CaseDevClient",
    "CaseDevError",
    "ClientConfig",
    "ConfigStore",
    "CredentialResolver",
    "FormatService",
    "HttpError",
    "JobService",
    "OcrJobService",
    "RequestTimeoutError",
    "ResearchService",
    "SchemaError",
    "SearchDispatcher",
    "StaticCredentials",
    "TranscriptionJobService",
    "UploadPipeline",
    "ValidationError",
    "VaultService",
    "content_type_for",
]
