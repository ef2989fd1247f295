"""Tests for vault management, object access and document formatting."""
import pytest

from casedevmcp.core import FormatService, HttpError, VaultService
from casedevmcp.models import IngestionStatus, OutputFormat

from helpers import API_URL, sent_json

VAULT_URL = f"{API_URL}/vault"
FORMAT_URL = f"{API_URL}/format/v1/document"


@pytest.mark.asyncio
async def test_create_vault(client, mock_aioresponse):
    mock_aioresponse.post(
        VAULT_URL,
        payload={"id": "vault-1", "name": "Smith v. Jones", "region": "us-east-1"},
    )

    vault = await VaultService(client).create("Smith v. Jones", description="Discovery")

    assert vault.id == "vault-1"
    assert vault.region == "us-east-1"
    assert sent_json(mock_aioresponse, "POST", VAULT_URL) == {
        "name": "Smith v. Jones",
        "enableGraph": True,
        "description": "Discovery",
    }


@pytest.mark.asyncio
async def test_list_vaults(client, mock_aioresponse):
    mock_aioresponse.get(
        VAULT_URL,
        payload={
            "vaults": [
                {
                    "id": "vault-1",
                    "name": "Smith v. Jones",
                    "enableGraph": True,
                    "totalObjects": 3,
                    "totalBytes": 2097152,
                    "createdAt": "2026-01-01T00:00:00Z",
                }
            ],
            "total": 1,
        },
    )

    result = await VaultService(client).list_vaults()

    assert result.total == 1
    assert result.vaults[0].total_objects == 3
    assert result.vaults[0].enable_graph is True


@pytest.mark.asyncio
async def test_list_objects(client, mock_aioresponse):
    mock_aioresponse.get(
        f"{VAULT_URL}/vault-1/objects",
        payload={
            "vaultId": "vault-1",
            "count": 1,
            "objects": [
                {
                    "id": "obj-1",
                    "filename": "lease.pdf",
                    "contentType": "application/pdf",
                    "sizeBytes": 4096,
                    "ingestionStatus": "completed",
                    "pageCount": 12,
                    "createdAt": "2026-01-01T00:00:00Z",
                }
            ],
        },
    )

    result = await VaultService(client).list_objects("vault-1")

    assert result.objects[0].ingestion_status is IngestionStatus.COMPLETED
    assert result.objects[0].page_count == 12


@pytest.mark.asyncio
async def test_ingest_and_object_text(client, mock_aioresponse):
    mock_aioresponse.post(
        f"{VAULT_URL}/vault-1/ingest/obj-1", payload={"status": "processing", "message": "queued"}
    )
    mock_aioresponse.get(
        f"{VAULT_URL}/vault-1/objects/obj-1/text",
        payload={"objectId": "obj-1", "filename": "lease.pdf", "text": "LEASE", "textLength": 5},
    )
    service = VaultService(client)

    ingest = await service.ingest("vault-1", "obj-1")
    text = await service.object_text("vault-1", "obj-1")

    assert ingest.status == "processing"
    assert text.text == "LEASE"
    assert text.text_length == 5


@pytest.mark.asyncio
async def test_download_writes_file(client, mock_aioresponse, tmp_path):
    mock_aioresponse.get(f"{VAULT_URL}/vault-1/objects/obj-1/download", body=b"\x89PNG data")
    target = tmp_path / "nested" / "dir" / "exhibit.png"

    result = await VaultService(client).download("vault-1", "obj-1", target)

    assert target.read_bytes() == b"\x89PNG data"
    assert result.size_bytes == 9
    assert result.saved_to == str(target.resolve())


@pytest.mark.asyncio
async def test_download_error_leaves_no_file(client, mock_aioresponse, tmp_path):
    mock_aioresponse.get(f"{VAULT_URL}/vault-1/objects/obj-1/download", status=404, body="gone")
    target = tmp_path / "exhibit.png"

    with pytest.raises(HttpError):
        await VaultService(client).download("vault-1", "obj-1", target)

    assert not target.exists()


def test_ingestion_transitions():
    assert IngestionStatus.PENDING.can_transition(IngestionStatus.PROCESSING)
    assert IngestionStatus.PROCESSING.can_transition(IngestionStatus.FAILED)
    assert not IngestionStatus.PENDING.can_transition(IngestionStatus.COMPLETED)
    assert not IngestionStatus.COMPLETED.can_transition(IngestionStatus.PROCESSING)
    assert IngestionStatus.FAILED.is_terminal
    assert not IngestionStatus.PROCESSING.is_terminal


# Formatting


@pytest.mark.asyncio
async def test_format_pdf_saves_bytes(client, mock_aioresponse, tmp_path):
    mock_aioresponse.post(FORMAT_URL, body=b"%PDF-1.7\x00memo")
    target = tmp_path / "memo.pdf"

    result = await FormatService(client).format_document("# Memo", OutputFormat.PDF, target)

    assert target.read_bytes() == b"%PDF-1.7\x00memo"
    assert result.size_bytes == 13
    assert sent_json(mock_aioresponse, "POST", FORMAT_URL) == {
        "content": "# Memo",
        "input_format": "md",
        "output_format": "pdf",
    }


@pytest.mark.asyncio
async def test_format_html_preview_saves_text(client, mock_aioresponse, tmp_path):
    mock_aioresponse.post(FORMAT_URL, body="<h1>Memo for {{client}}</h1>".encode("utf-8"))
    target = tmp_path / "memo.html"

    await FormatService(client).format_document(
        "# Memo for {{client}}",
        "html_preview",
        target,
        input_format="text",
        variables={"client": "ACME"},
    )

    assert target.read_text(encoding="utf-8") == "<h1>Memo for {{client}}</h1>"
    assert sent_json(mock_aioresponse, "POST", FORMAT_URL) == {
        "content": "# Memo for {{client}}",
        "input_format": "text",
        "output_format": "html_preview",
        "options": {
            "components": [{"content": "# Memo for {{client}}", "variables": {"client": "ACME"}}]
        },
    }


def test_output_format_decoding():
    assert OutputFormat.PDF.response_type.value == "bytes"
    assert OutputFormat.DOCX.response_type.value == "bytes"
    assert OutputFormat.HTML_PREVIEW.response_type.value == "text"
