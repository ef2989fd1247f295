"""Vault operations: creation, listing, indexing and object retrieval."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from ..models.request import ResponseType
from ..models.vault import (
    DownloadResult,
    IngestResponse,
    ObjectText,
    VaultCreated,
    VaultList,
    VaultObjectList,
)
from .client import CaseDevClient

logger = logging.getLogger(__name__)


def write_local_file(save_to: Union[str, Path], data: Union[bytes, str]) -> DownloadResult:
    """Write downloaded content to disk, creating parent directories.

    Args:
        save_to: Destination path.
        data: Bytes, or text written as UTF-8.

    Returns:
        DownloadResult with the resolved path and size on disk.
    """
    path = Path(save_to).expanduser().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        data = data.encode("utf-8")
    with open(path, "wb") as f:
        f.write(data)
    size = path.stat().st_size
    logger.debug(f"Saved {size} bytes to {path}")
    return DownloadResult(saved_to=str(path), size_bytes=size)


class VaultService:
    """Service for vault management and object access."""

    def __init__(self, client: CaseDevClient):
        self.client = client

    async def create(
        self,
        name: str,
        description: Optional[str] = None,
        enable_graph: bool = True,
    ) -> VaultCreated:
        """Create a vault.

        Args:
            name: Vault name, e.g. a case name.
            description: Optional purpose of the vault.
            enable_graph: Build a GraphRAG knowledge graph for the vault.
        """
        body = {"name": name, "enableGraph": enable_graph}
        if description is not None:
            body["description"] = description
        return await self.client.request(
            "/vault", method="POST", body=body, schema=VaultCreated
        )

    async def list_vaults(self) -> VaultList:
        return await self.client.request("/vault", schema=VaultList)

    async def ingest(self, vault_id: str, object_id: str) -> IngestResponse:
        """Trigger indexing of an uploaded object."""
        return await self.client.request(
            f"/vault/{vault_id}/ingest/{object_id}",
            method="POST",
            schema=IngestResponse,
        )

    async def list_objects(self, vault_id: str) -> VaultObjectList:
        return await self.client.request(
            f"/vault/{vault_id}/objects", schema=VaultObjectList
        )

    async def object_text(self, vault_id: str, object_id: str) -> ObjectText:
        """Get the extracted text of an ingested object."""
        return await self.client.request(
            f"/vault/{vault_id}/objects/{object_id}/text", schema=ObjectText
        )

    async def fetch(self, vault_id: str, object_id: str) -> bytes:
        """Fetch the original bytes of an object."""
        return await self.client.request(
            f"/vault/{vault_id}/objects/{object_id}/download",
            response_type=ResponseType.BYTES,
        )

    async def download(
        self, vault_id: str, object_id: str, save_to: Union[str, Path]
    ) -> DownloadResult:
        """Download an object to a local path."""
        data = await self.fetch(vault_id, object_id)
        return write_local_file(save_to, data)
