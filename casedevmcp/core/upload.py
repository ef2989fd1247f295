"""Three-step vault upload: issue a write slot, transfer bytes, trigger indexing.

The steps are not transactional. Once the transfer has succeeded the object
is stored, and a failure to start indexing is reported on the result rather
than raised.
"""
from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import aiohttp

from ..models.vault import IngestOutcome, UploadResult, UploadSession
from .client import CaseDevClient
from .errors import CaseDevError, ValidationError
from .vault import VaultService

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES = {
    # Documents
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".txt": "text/plain",
    # Audio
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".m4a": "audio/mp4",
    ".aac": "audio/aac",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    # Video
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".mov": "video/quicktime",
    ".avi": "video/x-msvideo",
}


def content_type_for(path: Union[str, Path]) -> str:
    """Map a file extension to its MIME type."""
    return CONTENT_TYPES.get(Path(path).suffix.lower(), DEFAULT_CONTENT_TYPE)


def _read_file(path: Path) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError:
        raise ValidationError(f"File not found: {path}") from None
    except IsADirectoryError:
        raise ValidationError(f"Not a file: {path}") from None


class UploadPipeline:
    """Uploads local files into a vault."""

    def __init__(self, client: CaseDevClient, vault: Optional[VaultService] = None):
        self.client = client
        self.vault = vault or VaultService(client)

    async def upload(
        self,
        vault_id: str,
        file_path: Union[str, Path],
        auto_index: bool = True,
        verify: Optional[bool] = None,
    ) -> UploadResult:
        """Upload a local file to a vault.

        Args:
            vault_id: Target vault.
            file_path: Path of the file to upload.
            auto_index: Index the object for search once stored.
            verify: Read the object back after the transfer and compare it
                with the local bytes. Defaults to ``ClientConfig.verify_uploads``.

        Returns:
            UploadResult. ``ingestion`` is ``failed to start`` when the bytes
            were stored but the indexing trigger failed.

        Raises:
            ValidationError: If the file cannot be read.
            HttpError: If the slot request or the transfer fails. No indexing
                is triggered after a failed transfer.
        """
        path = Path(file_path).expanduser().resolve()
        data = _read_file(path)
        filename = path.name
        content_type = content_type_for(path)

        session = await self.request_slot(vault_id, filename, content_type, len(data), auto_index)
        await self.transfer(session, data, content_type)
        ingestion = await self.trigger_ingestion(vault_id, session)

        if verify is None:
            verify = self.client.config.verify_uploads
        verified = await self.verify(vault_id, session.object_id, data) if verify else None

        return UploadResult(
            object_id=session.object_id,
            vault_id=vault_id,
            filename=filename,
            size_bytes=len(data),
            content_type=content_type,
            auto_index=session.auto_index,
            ingestion=ingestion,
            verified=verified,
        )

    async def request_slot(
        self,
        vault_id: str,
        filename: str,
        content_type: str,
        size_bytes: int,
        auto_index: bool = True,
    ) -> UploadSession:
        """Ask the backend for a presigned write slot."""
        session = await self.client.request(
            f"/vault/{vault_id}/upload",
            method="POST",
            body={
                "filename": filename,
                "contentType": content_type,
                "auto_index": auto_index,
                "sizeBytes": size_bytes,
            },
            schema=UploadSession,
        )
        return session.model_copy(update={"issued_at": self.client.clock()})

    async def transfer(self, session: UploadSession, data: bytes, content_type: str) -> None:
        """Send the bytes to the slot's storage URL. Attempted exactly once."""
        if session.is_expired(self.client.clock()):
            logger.warning(
                f"Upload slot for {session.object_id} expired before transfer; attempting anyway"
            )
        await self.client.put_blob(session.upload_url, data, content_type)

    async def trigger_ingestion(self, vault_id: str, session: UploadSession) -> IngestOutcome:
        if not (session.next_step and session.auto_index):
            return IngestOutcome.SKIPPED
        try:
            await self.vault.ingest(vault_id, session.object_id)
        except (CaseDevError, aiohttp.ClientError) as e:
            logger.warning(f"Object {session.object_id} stored but indexing failed to start: {e}")
            return IngestOutcome.FAILED_TO_START
        return IngestOutcome.STARTED

    async def verify(self, vault_id: str, object_id: str, data: bytes) -> bool:
        """Compare the stored object with the bytes that were sent."""
        try:
            stored = await self.vault.fetch(vault_id, object_id)
        except (CaseDevError, aiohttp.ClientError) as e:
            logger.warning(f"Could not read back {object_id}: {e}")
            return False
        matches, detail = _compare(data, stored)
        if not matches:
            logger.warning(f"Read-back of {object_id} does not match upload: {detail}")
        return matches


def _compare(sent: bytes, stored: bytes) -> Tuple[bool, str]:
    if len(sent) != len(stored):
        return False, f"size {len(stored)} != {len(sent)}"
    if hashlib.sha256(sent).digest() != hashlib.sha256(stored).digest():
        return False, "sha256 differs"
    return True, ""
