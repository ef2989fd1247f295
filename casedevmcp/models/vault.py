"""Vault models for CaseDevMCP."""
import time
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class IngestionStatus(str, Enum):
    """Ingestion status of a vault object."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    def can_transition(self, to: "IngestionStatus") -> bool:
        """Whether the backend may move an object from this status to ``to``."""
        return to in _INGESTION_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _INGESTION_TRANSITIONS[self]


_INGESTION_TRANSITIONS = {
    IngestionStatus.PENDING: {IngestionStatus.PROCESSING},
    IngestionStatus.PROCESSING: {IngestionStatus.COMPLETED, IngestionStatus.FAILED},
    IngestionStatus.COMPLETED: set(),
    IngestionStatus.FAILED: set(),
}


class IngestOutcome(str, Enum):
    """Outcome of the indexing trigger at the end of an upload."""
    STARTED = "started"
    SKIPPED = "skipped"
    FAILED_TO_START = "failed to start"


class _BackendModel(BaseModel):
    """Base for records decoded from backend payloads."""

    model_config = ConfigDict(populate_by_name=True)


class Vault(_BackendModel):
    """A vault as returned by the vault listing."""
    id: str = Field(..., description="Vault ID")
    name: str = Field(..., description="Vault name")
    description: Optional[str] = Field(None, description="Vault description")
    enable_graph: bool = Field(False, alias="enableGraph")
    total_objects: int = Field(0, alias="totalObjects")
    total_bytes: int = Field(0, alias="totalBytes")
    created_at: Optional[str] = Field(None, alias="createdAt")


class VaultCreated(_BackendModel):
    """Response to a vault creation."""
    id: str
    name: str
    description: Optional[str] = None
    files_bucket: Optional[str] = Field(None, alias="filesBucket")
    vector_bucket: Optional[str] = Field(None, alias="vectorBucket")
    index_name: Optional[str] = Field(None, alias="indexName")
    region: Optional[str] = None
    created_at: Optional[str] = Field(None, alias="createdAt")


class VaultList(_BackendModel):
    vaults: List[Vault] = Field(default_factory=list)
    total: int = 0


class UploadSession(_BackendModel):
    """A presigned write slot issued for one upload.

    The slot is single use and expires ``expires_in`` seconds after it was
    issued.
    """
    object_id: str = Field(..., alias="objectId")
    upload_url: str = Field(..., alias="uploadUrl")
    expires_in: int = Field(..., alias="expiresIn", description="Lifetime in seconds")
    storage_key: Optional[str] = Field(None, alias="s3Key")
    auto_index: bool = Field(True)
    next_step: Optional[str] = Field(None)
    issued_at: float = Field(
        default_factory=time.monotonic,
        description="Monotonic clock reading when the slot was received",
    )

    def is_expired(self, now: float) -> bool:
        return now >= self.issued_at + self.expires_in


class VaultObject(_BackendModel):
    """A document stored in a vault."""
    id: str
    filename: str
    content_type: str = Field(..., alias="contentType")
    size_bytes: int = Field(..., alias="sizeBytes")
    ingestion_status: IngestionStatus = Field(..., alias="ingestionStatus")
    page_count: Optional[int] = Field(None, alias="pageCount")
    text_length: Optional[int] = Field(None, alias="textLength")
    chunk_count: Optional[int] = Field(None, alias="chunkCount")
    vector_count: Optional[int] = Field(None, alias="vectorCount")
    tags: Optional[List[str]] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: str = Field(..., alias="createdAt")
    ingestion_completed_at: Optional[str] = Field(None, alias="ingestionCompletedAt")


class VaultObjectList(_BackendModel):
    vault_id: Optional[str] = Field(None, alias="vaultId")
    objects: List[VaultObject] = Field(default_factory=list)
    count: int = 0


class ObjectText(_BackendModel):
    """Extracted text of a vault object."""
    object_id: str = Field(..., alias="objectId")
    filename: str
    text: str = ""
    page_count: Optional[int] = Field(None, alias="pageCount")
    text_length: int = Field(0, alias="textLength")


class IngestResponse(_BackendModel):
    status: str
    message: Optional[str] = None


class UploadResult(BaseModel):
    """Result of a completed upload.

    The upload counts as successful once the bytes are stored, whatever
    happened to the indexing trigger; ``ingestion`` reports that sub-step.
    """
    object_id: str
    vault_id: str
    filename: str
    size_bytes: int
    content_type: str
    auto_index: bool
    ingestion: IngestOutcome
    verified: Optional[bool] = Field(
        None, description="Read-back check result; None when not requested"
    )


class DownloadResult(BaseModel):
    """A file written to local disk."""
    saved_to: str
    size_bytes: int
