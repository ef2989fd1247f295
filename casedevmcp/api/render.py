"""Text rendering of tool results for the agent.

Everything here is presentation: status symbols, timestamps and previews are
applied only when a result leaves the server.
"""
import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.jobs import OcrDownload, OcrFormat, OcrJob, OcrStatus, TranscriptionJob, TranscriptionStatus
from ..models.search import ResearchResult, SearchResult
from ..models.vault import (
    DownloadResult,
    IngestionStatus,
    IngestResponse,
    ObjectText,
    UploadResult,
    VaultCreated,
    VaultList,
    VaultObjectList,
)
from .schemas import ToolResult

TEXT_PREVIEW_CHARS = 5000
OCR_PREVIEW_CHARS = 2000

UNKNOWN_SYMBOL = "❓"

STATUS_SYMBOLS: Dict[Enum, str] = {
    IngestionStatus.PENDING: "⏳",
    IngestionStatus.PROCESSING: "🔄",
    IngestionStatus.COMPLETED: "✅",
    IngestionStatus.FAILED: "❌",
    OcrStatus.PENDING: "⏳",
    OcrStatus.PROCESSING: "🔄",
    OcrStatus.COMPLETED: "✅",
    OcrStatus.FAILED: "❌",
    TranscriptionStatus.QUEUED: "⏳",
    TranscriptionStatus.PROCESSING: "🔄",
    TranscriptionStatus.COMPLETED: "✅",
    TranscriptionStatus.ERROR: "❌",
}


def status_symbol(status: Enum) -> str:
    return STATUS_SYMBOLS.get(status, UNKNOWN_SYMBOL)


def format_timestamp(seconds: float) -> str:
    """Format an offset as ``[m:ss]`` or ``[h:mm:ss]``."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"[{hours}:{minutes:02d}:{secs:02d}]"
    return f"[{minutes}:{secs:02d}]"


def format_duration(seconds: float) -> str:
    """Format a duration as ``1h 2m 3s``, dropping leading zero units."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def truncate(text: str, limit: int, marker: Optional[str] = None) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + (marker or "\n...(truncated)")


def _kb(size_bytes: int) -> int:
    return round(size_bytes / 1024)


def _short(text: str, limit: int = 30) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


# Vault


def vault_created(vault: VaultCreated) -> ToolResult:
    lines = ["Vault created successfully!", "", f"Vault ID: {vault.id}", f"Name: {vault.name}"]
    if vault.description:
        lines.append(f"Description: {vault.description}")
    lines += [
        f"Region: {vault.region or 'unknown'}",
        f"Created: {vault.created_at or 'unknown'}",
        "",
        f'Use casedev_vault_upload with vault_id="{vault.id}" to add documents.',
        f'Use casedev_vault_search with vault_id="{vault.id}" to search documents.',
    ]
    return ToolResult(
        title=f"Vault created: {vault.name}",
        metadata={"vaultId": vault.id, "name": vault.name},
        output="\n".join(lines),
    )


def vault_list(response: VaultList) -> ToolResult:
    if not response.vaults:
        return ToolResult(
            title="No vaults found",
            metadata={"count": 0},
            output="No vaults found in your account.\n\nUse casedev_vault_create to create a new vault.",
        )

    output = f"Found {len(response.vaults)} vault(s):\n\n"
    for vault in response.vaults:
        output += f"📁 {vault.name}\n"
        output += f"   ID: {vault.id}\n"
        if vault.description:
            output += f"   Description: {vault.description}\n"
        output += f"   Documents: {vault.total_objects}\n"
        output += f"   Size: {round(vault.total_bytes / 1024 / 1024)} MB\n"
        output += f"   GraphRAG: {'enabled' if vault.enable_graph else 'disabled'}\n"
        output += f"   Created: {vault.created_at}\n\n"

    return ToolResult(
        title=f"{len(response.vaults)} vault(s)",
        metadata={
            "count": len(response.vaults),
            "vaults": [{"id": v.id, "name": v.name} for v in response.vaults],
        },
        output=output,
    )


def upload(result: UploadResult) -> ToolResult:
    if result.auto_index:
        next_hint = (
            "The document is being processed for indexing. Once complete, "
            "it will be searchable via casedev_vault_search."
        )
    else:
        next_hint = "Document stored but not indexed. Use casedev_vault_ingest to process it later."
    lines = [
        "Document uploaded to vault.",
        "",
        f"Object ID: {result.object_id}",
        f"Filename: {result.filename}",
        f"Size: {_kb(result.size_bytes)} KB",
        f"Auto-index: {str(result.auto_index).lower()}",
        f"Ingestion: {result.ingestion.value}",
    ]
    if result.verified is not None:
        lines.append(f"Verified: {'yes' if result.verified else 'NO - stored object differs'}")
    lines += ["", next_hint]
    return ToolResult(
        title=f"Uploaded: {result.filename}",
        metadata={
            "objectId": result.object_id,
            "vaultId": result.vault_id,
            "filename": result.filename,
            "autoIndex": result.auto_index,
            "ingestion": result.ingestion.value,
        },
        output="\n".join(lines),
    )


def search(result: SearchResult) -> ToolResult:
    metadata: Dict[str, Any] = {
        "vaultId": result.vault_id,
        "query": result.query,
        "method": result.method,
        "resultCount": len(result.chunks),
    }
    if result.is_empty:
        return ToolResult(
            title="No results found",
            metadata=metadata,
            output=(
                f'No documents matched your query: "{result.query}"\n\n'
                "Try:\n"
                "- Using different keywords or phrasing\n"
                "- Checking if documents have been uploaded and indexed\n"
                "- Using a broader search term\n"
                "- Trying a different search method (global, fast, hybrid)"
            ),
        )

    output = f'Search results for: "{result.query}"\n'
    output += f"Method: {result.method}\n"
    output += f"Found {len(result.chunks)} relevant chunk(s)\n\n"
    if result.response:
        output += f"--- AI Analysis ---\n{result.response}\n\n"

    for i, chunk in enumerate(result.chunks, 1):
        output += f"--- Result {i} ({chunk.confidence}% match) ---\n"
        if chunk.object_id:
            output += f"Document: {chunk.object_id}"
            if chunk.chunk_index is not None:
                output += f" (chunk {chunk.chunk_index})"
            output += "\n"
        output += f"\n{chunk.text}\n\n"

    if result.sources:
        output += "--- Source Documents ---\n"
        for source in result.sources:
            output += f"• {source.filename} ({source.id})"
            if source.page_count:
                output += f" - {source.page_count} pages"
            output += "\n"

    metadata["sources"] = [s.model_dump(by_alias=True) for s in result.sources]
    return ToolResult(
        title=f'{len(result.chunks)} result(s) for "{_short(result.query)}"',
        metadata=metadata,
        output=output,
    )


def ingest(vault_id: str, object_id: str, response: IngestResponse) -> ToolResult:
    lines = [
        "Document ingestion started.",
        "",
        f"Vault ID: {vault_id}",
        f"Object ID: {object_id}",
        f"Status: {response.status}",
    ]
    if response.message:
        lines.append(f"Message: {response.message}")
    lines += [
        "",
        "The document will be OCR'd (if needed), chunked, and embedded for search.",
        "This may take a few minutes depending on document size.",
    ]
    return ToolResult(
        title=f"Ingestion started: {object_id}",
        metadata={"vaultId": vault_id, "objectId": object_id, "status": response.status},
        output="\n".join(lines),
    )


def vault_objects(vault_id: str, response: VaultObjectList) -> ToolResult:
    if not response.objects:
        return ToolResult(
            title="No documents in vault",
            metadata={"vaultId": vault_id, "count": 0},
            output=(
                f"No documents found in vault {vault_id}.\n\n"
                "Use casedev_vault_upload to add documents to this vault."
            ),
        )

    count = response.count or len(response.objects)
    output = f"Found {count} document(s) in vault:\n\n"
    for obj in response.objects:
        output += f"{status_symbol(obj.ingestion_status)} {obj.filename}\n"
        output += f"   ID: {obj.id}\n"
        output += f"   Type: {obj.content_type}\n"
        output += f"   Size: {_kb(obj.size_bytes)} KB\n"
        output += f"   Status: {obj.ingestion_status.value}\n"
        if obj.ingestion_status is IngestionStatus.COMPLETED:
            if obj.page_count:
                output += f"   Pages: {obj.page_count}\n"
            if obj.chunk_count:
                output += f"   Chunks: {obj.chunk_count}\n"
            if obj.text_length:
                output += f"   Text: {round(obj.text_length / 1000)}k chars\n"
        output += f"   Uploaded: {obj.created_at}\n"
        if obj.tags:
            output += f"   Tags: {', '.join(obj.tags)}\n"
        output += "\n"

    return ToolResult(
        title=f"{count} document(s) in vault",
        metadata={
            "vaultId": vault_id,
            "count": count,
            "objects": [
                {"id": o.id, "filename": o.filename, "status": o.ingestion_status.value}
                for o in response.objects
            ],
        },
        output=output,
    )


def object_text(vault_id: str, object_id: str, response: ObjectText) -> ToolResult:
    if not response.text:
        return ToolResult(
            title="No text available",
            metadata={"vaultId": vault_id, "objectId": object_id},
            output=(
                "No text available for this document.\n\n"
                "This could mean:\n"
                "- The document is still processing (check status with casedev_vault_objects)\n"
                "- The document failed to process\n"
                "- The document contains no extractable text (e.g., blank pages)"
            ),
        )

    text = truncate(
        response.text,
        TEXT_PREVIEW_CHARS,
        f"\n\n...(truncated, showing first {TEXT_PREVIEW_CHARS} chars)",
    )
    pages = response.page_count if response.page_count is not None else "unknown"
    output = (
        f"Document: {response.filename}\n"
        f"Pages: {pages}\n"
        f"Text length: {response.text_length:,} characters\n\n"
        f"--- Document Text ---\n\n{text}"
    )
    return ToolResult(
        title=f"Text from {response.filename}",
        metadata={
            "vaultId": vault_id,
            "objectId": object_id,
            "filename": response.filename,
            "textLength": response.text_length,
            "pageCount": response.page_count,
        },
        output=output,
    )


def vault_download(vault_id: str, object_id: str, result: DownloadResult) -> ToolResult:
    return ToolResult(
        title=f"Downloaded: {Path(result.saved_to).name}",
        metadata={
            "vaultId": vault_id,
            "objectId": object_id,
            "savedTo": result.saved_to,
            "size": result.size_bytes,
        },
        output=(
            "File downloaded successfully!\n\n"
            f"Saved to: {result.saved_to}\n"
            f"Size: {_kb(result.size_bytes)} KB\n\n"
            "The file is ready to use locally."
        ),
    )


# OCR


def ocr_submitted(job: OcrJob, document_url: str, engine: str) -> ToolResult:
    return ToolResult(
        title=f"OCR job submitted: {job.id}",
        metadata={"jobId": job.id, "status": job.status.value, "documentUrl": document_url},
        output=(
            "OCR processing started.\n\n"
            f"Job ID: {job.id}\n"
            f"Status: {job.status.value}\n"
            f"Document: {document_url}\n"
            f"Engine: {engine}\n\n"
            f'Use casedev_ocr_status with job_id="{job.id}" to check progress.\n'
            f'Once complete, use casedev_ocr_download with job_id="{job.id}" to get results.'
        ),
    )


def ocr_status(job: OcrJob) -> ToolResult:
    output = f"OCR Job Status: {status_symbol(job.status)} {job.status.value}"
    if job.progress is not None:
        output += f"\nProgress: {job.progress:g}%"
    if job.pages is not None:
        output += f"\nPages: {job.pages}"
    if job.message:
        output += f"\nMessage: {job.message}"
    if job.completed_at:
        output += f"\nCompleted: {job.completed_at}"
    if job.is_completed:
        output += f'\n\nUse casedev_ocr_download with job_id="{job.id}" to get the extracted text.'
    return ToolResult(
        title=f"OCR status: {job.status.value}",
        metadata={
            "jobId": job.id,
            "status": job.status.value,
            "progress": job.progress,
            "pages": job.pages,
        },
        output=output,
    )


def ocr_download(result: OcrDownload) -> ToolResult:
    fmt = result.format.value
    if result.format is OcrFormat.PDF:
        pages = result.pages if result.pages is not None else "unknown"
        return ToolResult(
            title=f"OCR PDF saved to {result.saved_to}",
            metadata={
                "jobId": result.job_id,
                "format": fmt,
                "savedTo": result.saved_to,
                "pages": result.pages,
            },
            output=f"Searchable PDF saved to: {result.saved_to}\nPages: {pages}",
        )

    content = result.content or ""
    if result.saved_to:
        return ToolResult(
            title=f"OCR {fmt} saved to {result.saved_to}",
            metadata={"jobId": result.job_id, "format": fmt, "savedTo": result.saved_to},
            output=(
                f"OCR results saved to: {result.saved_to}\n\n"
                f"Preview:\n{truncate(content, OCR_PREVIEW_CHARS)}"
            ),
        )
    return ToolResult(
        title=f"OCR {fmt} content",
        metadata={"jobId": result.job_id, "format": fmt, "length": len(content)},
        output=content,
    )


# Transcription


def transcription_submitted(
    job: TranscriptionJob,
    vault_id: Optional[str] = None,
    object_id: Optional[str] = None,
    audio_url: Optional[str] = None,
) -> ToolResult:
    metadata: Dict[str, Any] = {"jobId": job.id, "status": job.status.value}
    output = f"Transcription job submitted.\n\nJob ID: {job.id}\nStatus: {job.status.value}\n"
    if audio_url:
        output += (
            f"Audio URL: {audio_url}\n\n"
            f'The transcription is processing. Use casedev_transcribe_status with job_id="{job.id}" '
            "to check progress and get results."
        )
    else:
        metadata.update({"vaultId": vault_id, "objectId": object_id})
        output += (
            f"Vault: {vault_id}\n"
            f"Source: {object_id}\n\n"
            "The transcription is processing asynchronously. When complete:\n"
            "- Results will be saved to the vault\n"
            f'- Use casedev_transcribe_status with job_id="{job.id}" to check progress'
        )
    return ToolResult(
        title=f"Transcription job started: {job.id}",
        metadata=metadata,
        output=output,
    )


def transcription_status(job: TranscriptionJob) -> ToolResult:
    output = f"Transcription Status: {status_symbol(job.status)} {job.status.value}\n"
    output += f"Job ID: {job.id}\n"
    if job.audio_duration:
        output += f"Duration: {format_duration(job.audio_duration)}\n"
    if job.language_code:
        output += f"Language: {job.language_code}\n"

    if job.status is TranscriptionStatus.COMPLETED:
        output += "\n--- Transcript ---\n\n"
        if job.utterances:
            for utterance in job.utterances:
                output += f"{format_timestamp(utterance.start)} [{utterance.speaker}]: {utterance.text}\n"
        elif job.text:
            output += job.text
        else:
            output += "(no transcript content)"
    elif job.status is TranscriptionStatus.ERROR:
        output += "\nThe transcription failed. Please try again or contact support."
    else:
        output += "\nTranscription is still processing. Check back in a moment."

    return ToolResult(
        title=f"Transcription: {job.status.value}",
        metadata={
            "jobId": job.id,
            "status": job.status.value,
            "duration": job.audio_duration,
            "language": job.language_code,
        },
        output=output,
    )


# Research and formatting


def _section_title(key: str) -> str:
    return key[:1].upper() + key[1:]


def research(result: ResearchResult) -> ToolResult:
    if result.is_empty:
        return ToolResult(
            title="No results found",
            metadata={"query": result.query, "mode": result.model, "resultCount": 0},
            output=(
                f'No results found for: "{result.query}"\n\n'
                "Try:\n"
                "- Rephrasing your query\n"
                "- Using more specific legal terms\n"
                "- Breaking complex questions into simpler parts"
            ),
        )

    output = f'Research results for: "{result.query}"\n'
    output += f"Mode: {result.model}\n"
    output += f"Research ID: {result.research_id}\n\n"
    if result.summary:
        output += f"--- Summary ---\n{result.summary}\n\n"
    if result.analysis:
        output += f"--- Analysis ---\n{result.analysis}\n\n"
    if result.sources:
        output += "--- Sources ---\n"
        for source in result.sources:
            output += f"• {source}\n"

    for key, value in result.additional_sections.items():
        output += f"\n--- {_section_title(key)} ---\n"
        if isinstance(value, str):
            output += f"{value}\n"
        elif isinstance(value, list):
            for item in value:
                output += f"• {item if isinstance(item, str) else json.dumps(item)}\n"
        else:
            output += f"{json.dumps(value, indent=2)}\n"

    return ToolResult(
        title=f'Research complete: "{_short(result.query)}"',
        metadata={"query": result.query, "mode": result.model, "researchId": result.research_id},
        output=output,
    )


def formatted(output_format: str, result: DownloadResult) -> ToolResult:
    return ToolResult(
        title=f"Document created: {Path(result.saved_to).name}",
        metadata={"format": output_format, "savedTo": result.saved_to, "size": result.size_bytes},
        output=(
            "Document generated successfully!\n\n"
            f"File: {result.saved_to}\n"
            f"Format: {output_format.upper()}\n"
            f"Size: {_kb(result.size_bytes)} KB\n\n"
            "The document has been saved and is ready to use."
        ),
    )
