"""Request and response models of the tool endpoints."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..models.format import InputFormat, OutputFormat
from ..models.jobs import OcrEngine, OcrFormat, TranscriptFormat
from ..models.search import DEFAULT_TOP_K, ResearchMode, SearchMethod


class ToolResult(BaseModel):
    """What every tool returns to the agent."""
    title: str = Field(..., description="One-line summary")
    metadata: Dict[str, Any] = Field(
        default_factory=dict, description="Machine-readable details"
    )
    output: str = Field(..., description="Agent-readable text")


class VaultCreateParams(BaseModel):
    name: str = Field(..., description="Name for the vault (e.g., case name or project name)")
    description: Optional[str] = Field(None, description="Optional description of the vault's purpose")
    enable_graph: bool = Field(
        True,
        description="Enable GraphRAG knowledge graph for entity relationship mapping",
    )


class VaultUploadParams(BaseModel):
    vault_id: str = Field(..., description="The vault ID to upload to")
    file_path: str = Field(..., description="Absolute path to the file to upload")
    auto_index: bool = Field(
        True, description="Automatically process and index the file for search"
    )


class VaultSearchParams(BaseModel):
    vault_id: str = Field(..., description="The vault ID to search in")
    query: str = Field(..., description="Natural language search query")
    method: SearchMethod = Field(SearchMethod.HYBRID, description="Search method")
    top_k: Optional[int] = Field(
        DEFAULT_TOP_K, description="Maximum number of results (1-100)"
    )
    object_id: Optional[str] = Field(
        None, description="Optional: filter search to a specific document by object ID"
    )


class VaultObjectParams(BaseModel):
    vault_id: str = Field(..., description="The vault ID")
    object_id: str = Field(..., description="The object ID of the document")


class VaultIdParams(BaseModel):
    vault_id: str = Field(..., description="The vault ID")


class VaultDownloadParams(VaultObjectParams):
    save_to: str = Field(..., description="Local path where the file should be saved")


class OcrProcessParams(BaseModel):
    document_url: str = Field(..., description="URL to the document (HTTP/HTTPS or S3 path)")
    engine: OcrEngine = Field(
        OcrEngine.DOCTR,
        description="OCR engine to use. doctr is more accurate, paddleocr is faster",
    )
    document_id: Optional[str] = Field(None, description="Optional custom document ID for tracking")


class JobIdParams(BaseModel):
    job_id: str = Field(..., description="The job ID returned on submission")


class OcrDownloadParams(JobIdParams):
    format: OcrFormat = Field(OcrFormat.TEXT, description="Output format: text, json, or pdf")
    save_to: Optional[str] = Field(
        None, description="Optional path to save the output file. Required for PDF format."
    )


class TranscribeParams(BaseModel):
    vault_id: Optional[str] = Field(
        None, description="Vault ID containing the audio file (use with object_id)"
    )
    object_id: Optional[str] = Field(
        None, description="Object ID of the audio file in the vault (use with vault_id)"
    )
    audio_url: Optional[str] = Field(
        None, description="URL of the audio file to transcribe (direct URL mode)"
    )
    format: TranscriptFormat = Field(
        TranscriptFormat.JSON, description="Output format when using vault mode"
    )
    language_code: Optional[str] = Field(
        None, description="Language code (e.g., 'en_us', 'es', 'fr'). Auto-detected if not specified"
    )
    speaker_labels: Optional[bool] = Field(
        None, description="Enable speaker identification and labeling"
    )
    speakers_expected: Optional[int] = Field(
        None, description="Expected number of speakers (improves accuracy when known)"
    )
    word_boost: Optional[List[str]] = Field(
        None, description="Custom vocabulary words to boost (e.g., legal terms, names)"
    )


class ResearchParams(BaseModel):
    query: str = Field(..., description="The research question or search query")
    mode: ResearchMode = Field(
        ResearchMode.NORMAL,
        description="Research depth: fast (~30s), normal (~2min), or pro (~5min)",
    )


class FormatParams(BaseModel):
    content: str = Field(..., description="Markdown or text content to format")
    output_format: OutputFormat = Field(..., description="Output format: pdf, docx, or html_preview")
    save_to: str = Field(..., description="Path to save the output file")
    input_format: InputFormat = Field(InputFormat.MARKDOWN, description="Input format: md, json, or text")
    variables: Optional[Dict[str, str]] = Field(
        None, description="Variables for template interpolation. Use {{variable_name}} in content."
    )
