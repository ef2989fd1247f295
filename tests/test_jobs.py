"""Tests for OCR and transcription job submission and polling."""
import base64
import json

import pytest

from casedevmcp.core import OcrJobService, SchemaError, TranscriptionJobService, ValidationError
from casedevmcp.models import (
    OcrEngine,
    OcrFormat,
    OcrStatus,
    TranscriptFormat,
    TranscriptionStatus,
)

from helpers import API_URL, request_count, sent_json, sent_timeout

OCR_URL = f"{API_URL}/ocr/v1/process"
TRANSCRIBE_URL = f"{API_URL}/voice/transcription"


def _ocr_status_url(job_id):
    return f"{API_URL}/ocr/v1/{job_id}"


def _ocr_download_url(job_id, fmt):
    return f"{API_URL}/ocr/v1/{job_id}/download/{fmt}"


# OCR


@pytest.mark.asyncio
async def test_ocr_submit(client, mock_aioresponse):
    mock_aioresponse.post(OCR_URL, payload={"id": "ocr-1", "status": "pending"})

    job = await OcrJobService(client).submit(
        "https://files.example.com/scan.pdf", engine=OcrEngine.PADDLEOCR, document_id="doc-7"
    )

    assert job.id == "ocr-1"
    assert job.status is OcrStatus.PENDING
    assert not job.is_terminal
    assert sent_json(mock_aioresponse, "POST", OCR_URL) == {
        "document_url": "https://files.example.com/scan.pdf",
        "engine": "paddleocr",
        "document_id": "doc-7",
    }


@pytest.mark.asyncio
async def test_ocr_submit_omits_missing_document_id(client, mock_aioresponse):
    mock_aioresponse.post(OCR_URL, payload={"id": "ocr-1", "status": "pending"})

    await OcrJobService(client).submit("https://files.example.com/scan.pdf")

    assert sent_json(mock_aioresponse, "POST", OCR_URL) == {
        "document_url": "https://files.example.com/scan.pdf",
        "engine": "doctr",
    }


@pytest.mark.asyncio
async def test_poll_returns_fresh_snapshot_each_call(client, mock_aioresponse):
    url = _ocr_status_url("ocr-1")
    mock_aioresponse.get(url, payload={"id": "ocr-1", "status": "processing", "progress": 40})
    mock_aioresponse.get(
        url,
        payload={"id": "ocr-1", "status": "completed", "pages": 3, "completedAt": "2026-01-02"},
    )
    service = OcrJobService(client)

    first = await service.poll("ocr-1")
    second = await service.poll("ocr-1")

    assert first.status is OcrStatus.PROCESSING
    assert first.progress == 40
    assert second.status is OcrStatus.COMPLETED
    assert second.is_terminal and second.is_completed
    assert second.pages == 3
    assert second.completed_at == "2026-01-02"
    assert request_count(mock_aioresponse, "GET", url) == 2


@pytest.mark.asyncio
async def test_poll_terminal_job_is_idempotent(client, mock_aioresponse):
    url = _ocr_status_url("ocr-2")
    mock_aioresponse.get(
        url, payload={"id": "ocr-2", "status": "failed", "message": "unreadable"}, repeat=True
    )
    service = OcrJobService(client)

    snapshots = [await service.poll("ocr-2") for _ in range(3)]

    assert all(s.status is OcrStatus.FAILED for s in snapshots)
    assert snapshots[0] == snapshots[2]


@pytest.mark.asyncio
async def test_unknown_status_is_schema_error(client, mock_aioresponse):
    mock_aioresponse.get(_ocr_status_url("ocr-3"), payload={"id": "ocr-3", "status": "exploded"})

    with pytest.raises(SchemaError):
        await OcrJobService(client).poll("ocr-3")


@pytest.mark.asyncio
async def test_pdf_download_requires_save_to(client, mock_aioresponse):
    with pytest.raises(ValidationError, match="save_to"):
        await OcrJobService(client).download("ocr-1", format=OcrFormat.PDF)
    assert not mock_aioresponse.requests


@pytest.mark.asyncio
async def test_pdf_download_decodes_base64(client, mock_aioresponse, tmp_path):
    pdf = b"%PDF-1.7 searchable"
    mock_aioresponse.get(
        _ocr_download_url("ocr-1", "pdf"),
        payload={"content": base64.b64encode(pdf).decode("ascii"), "pages": 2},
    )
    target = tmp_path / "out" / "scan.pdf"

    result = await OcrJobService(client).download("ocr-1", format="pdf", save_to=target)

    assert target.read_bytes() == pdf
    assert result.saved_to == str(target.resolve())
    assert result.content is None
    assert result.pages == 2


@pytest.mark.asyncio
async def test_pdf_download_rejects_bad_base64(client, mock_aioresponse, tmp_path):
    mock_aioresponse.get(_ocr_download_url("ocr-1", "pdf"), payload={"content": "@@not-base64@@"})

    with pytest.raises(SchemaError):
        await OcrJobService(client).download("ocr-1", format="pdf", save_to=tmp_path / "x.pdf")


@pytest.mark.asyncio
async def test_text_download(client, mock_aioresponse):
    mock_aioresponse.get(
        _ocr_download_url("ocr-1", "text"), payload={"content": "WHEREAS the parties", "pages": 1}
    )

    result = await OcrJobService(client).download("ocr-1")

    assert result.content == "WHEREAS the parties"
    assert result.saved_to is None


@pytest.mark.asyncio
async def test_text_download_rejects_non_object_payload(client, mock_aioresponse, tmp_path):
    mock_aioresponse.get(_ocr_download_url("ocr-1", "text"), payload=["page one", "page two"])
    target = tmp_path / "ocr.txt"

    with pytest.raises(SchemaError) as exc_info:
        await OcrJobService(client).download("ocr-1", save_to=target)

    assert exc_info.value.path == "/ocr/v1/ocr-1/download/text"
    assert not target.exists()


@pytest.mark.asyncio
async def test_json_download_saves_full_payload(client, mock_aioresponse, tmp_path):
    payload = {"content": {"pages": [{"text": "Page one"}]}, "format": "json"}
    mock_aioresponse.get(_ocr_download_url("ocr-1", "json"), payload=payload)
    target = tmp_path / "ocr.json"

    result = await OcrJobService(client).download("ocr-1", format="json", save_to=target)

    assert json.loads(result.content) == payload
    assert json.loads(target.read_text(encoding="utf-8")) == payload


# Transcription


@pytest.mark.asyncio
async def test_transcription_requires_a_source(client, mock_aioresponse):
    with pytest.raises(ValidationError, match="required"):
        await TranscriptionJobService(client).submit()
    assert not mock_aioresponse.requests


@pytest.mark.asyncio
async def test_transcription_rejects_both_sources(client, mock_aioresponse):
    with pytest.raises(ValidationError, match="mutually exclusive"):
        await TranscriptionJobService(client).submit(
            vault_id="v1", object_id="o1", audio_url="https://files.example.com/a.mp3"
        )
    assert not mock_aioresponse.requests


@pytest.mark.asyncio
async def test_transcription_vault_mode(client, mock_aioresponse):
    mock_aioresponse.post(TRANSCRIBE_URL, payload={"id": "tr-1", "status": "queued"})

    job = await TranscriptionJobService(client).submit(
        vault_id="v1",
        object_id="o1",
        format=TranscriptFormat.TEXT,
        speaker_labels=True,
        word_boost=["estoppel"],
    )

    assert job.status is TranscriptionStatus.QUEUED
    assert sent_json(mock_aioresponse, "POST", TRANSCRIBE_URL) == {
        "vault_id": "v1",
        "object_id": "o1",
        "format": "text",
        "speaker_labels": True,
        "word_boost": ["estoppel"],
    }
    assert sent_timeout(mock_aioresponse, "POST", TRANSCRIBE_URL) == 30.0


@pytest.mark.asyncio
async def test_transcription_url_mode(client, mock_aioresponse):
    mock_aioresponse.post(TRANSCRIBE_URL, payload={"id": "tr-2", "status": "queued"})

    await TranscriptionJobService(client).submit(
        audio_url="https://files.example.com/hearing.mp3", language_code="en_us", speakers_expected=2
    )

    assert sent_json(mock_aioresponse, "POST", TRANSCRIBE_URL) == {
        "audio_url": "https://files.example.com/hearing.mp3",
        "language_code": "en_us",
        "speakers_expected": 2,
    }


@pytest.mark.asyncio
async def test_transcription_poll_returns_transcript(client, mock_aioresponse):
    mock_aioresponse.get(
        f"{TRANSCRIBE_URL}/tr-1",
        payload={
            "id": "tr-1",
            "status": "completed",
            "audio_duration": 75.2,
            "utterances": [
                {"speaker": "A", "text": "Please state your name.", "start": 1.0, "end": 2.5},
                {"speaker": "B", "text": "John Smith.", "start": 3.0, "end": 4.0},
            ],
        },
    )

    job = await TranscriptionJobService(client).poll("tr-1")

    assert job.is_completed
    assert job.has_transcript
    assert [u.speaker for u in job.utterances] == ["A", "B"]


@pytest.mark.asyncio
async def test_completed_transcription_may_be_empty(client, mock_aioresponse):
    mock_aioresponse.get(f"{TRANSCRIBE_URL}/tr-3", payload={"id": "tr-3", "status": "completed"})

    job = await TranscriptionJobService(client).poll("tr-3")

    assert job.is_terminal
    assert not job.has_transcript


def test_terminal_states():
    assert OcrStatus.terminal() == {OcrStatus.COMPLETED, OcrStatus.FAILED}
    assert TranscriptionStatus.terminal() == {
        TranscriptionStatus.COMPLETED,
        TranscriptionStatus.ERROR,
    }
