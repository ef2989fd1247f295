"""Tests for the agent-facing text of tool results."""
import pytest

from casedevmcp.api import render
from casedevmcp.models import (
    IngestOutcome,
    IngestionStatus,
    ObjectText,
    OcrJob,
    SearchResult,
    TranscriptionJob,
    UploadResult,
)
from casedevmcp.models.search import ResearchResult


@pytest.mark.parametrize(
    "seconds,expected", [(0, "[0:00]"), (65.4, "[1:05]"), (3725, "[1:02:05]")]
)
def test_format_timestamp(seconds, expected):
    assert render.format_timestamp(seconds) == expected


@pytest.mark.parametrize(
    "seconds,expected", [(42, "42s"), (125, "2m 5s"), (3725, "1h 2m 5s")]
)
def test_format_duration(seconds, expected):
    assert render.format_duration(seconds) == expected


def test_status_symbols():
    assert render.status_symbol(IngestionStatus.COMPLETED) == "✅"
    assert render.status_symbol(IngestionStatus.PENDING) == "⏳"


def test_empty_search_renders_hint():
    result = render.search(SearchResult(vault_id="v1", query="nothing", method="hybrid"))
    assert result.title == "No results found"
    assert result.metadata["resultCount"] == 0
    assert 'No documents matched your query: "nothing"' in result.output


def test_upload_reports_failed_trigger():
    result = render.upload(
        UploadResult(
            object_id="obj-1",
            vault_id="v1",
            filename="lease.pdf",
            size_bytes=2048,
            content_type="application/pdf",
            auto_index=True,
            ingestion=IngestOutcome.FAILED_TO_START,
        )
    )
    assert "Ingestion: failed to start" in result.output
    assert "Size: 2 KB" in result.output
    assert "Verified" not in result.output


def test_object_text_is_truncated():
    text = "x" * (render.TEXT_PREVIEW_CHARS + 10)
    result = render.object_text(
        "v1",
        "obj-1",
        ObjectText(object_id="obj-1", filename="big.pdf", text=text, text_length=len(text)),
    )
    assert "...(truncated, showing first 5000 chars)" in result.output
    assert "Text length: 5,010 characters" in result.output


def test_ocr_status_points_to_download_when_complete():
    result = render.ocr_status(OcrJob(id="ocr-1", status="completed", pages=4))
    assert result.output.startswith("OCR Job Status: ✅ completed")
    assert 'casedev_ocr_download with job_id="ocr-1"' in result.output


def test_transcript_with_speakers():
    job = TranscriptionJob.model_validate(
        {
            "id": "tr-1",
            "status": "completed",
            "audio_duration": 125,
            "utterances": [{"speaker": "A", "text": "Objection.", "start": 65, "end": 66}],
        }
    )
    result = render.transcription_status(job)
    assert "Duration: 2m 5s" in result.output
    assert "[1:05] [A]: Objection." in result.output


def test_transcript_in_progress():
    result = render.transcription_status(TranscriptionJob(id="tr-1", status="queued"))
    assert "still processing" in result.output


def test_research_additional_sections():
    result = render.research(
        ResearchResult(
            query="adverse possession",
            model="normal",
            summary="Ten years in most states.",
            additional_sections={"citations": ["Smith v. Jones"], "jurisdictions": {"CA": 5}},
        )
    )
    assert "--- Summary ---\nTen years in most states." in result.output
    assert "--- Citations ---\n• Smith v. Jones" in result.output
    assert '"CA": 5' in result.output
