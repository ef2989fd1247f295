"""Asynchronous job models (OCR and transcription)."""
from enum import Enum
from typing import Any, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobKind(str, Enum):
    OCR = "ocr"
    TRANSCRIPTION = "transcription"


class OcrStatus(str, Enum):
    """Status of an OCR job."""
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    @classmethod
    def terminal(cls) -> FrozenSet["OcrStatus"]:
        return frozenset({cls.COMPLETED, cls.FAILED})


class TranscriptionStatus(str, Enum):
    """Status of a transcription job."""
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"

    @classmethod
    def terminal(cls) -> FrozenSet["TranscriptionStatus"]:
        return frozenset({cls.COMPLETED, cls.ERROR})


class OcrEngine(str, Enum):
    DOCTR = "doctr"
    PADDLEOCR = "paddleocr"


class OcrFormat(str, Enum):
    """Download formats of a completed OCR job."""
    TEXT = "text"
    JSON = "json"
    PDF = "pdf"


class TranscriptFormat(str, Enum):
    JSON = "json"
    TEXT = "text"


class JobRecord(BaseModel):
    """Snapshot of a remote job, as returned by a single poll."""

    model_config = ConfigDict(populate_by_name=True)

    kind: JobKind
    id: str = Field(..., description="Job ID")
    progress: Optional[float] = Field(None, description="Progress percentage")
    message: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in type(self.status).terminal()

    @property
    def is_completed(self) -> bool:
        return self.status.value == "completed"


class OcrJob(JobRecord):
    kind: JobKind = JobKind.OCR
    status: OcrStatus
    pages: Optional[int] = None
    completed_at: Optional[str] = Field(None, alias="completedAt")


class Word(BaseModel):
    text: str
    start: float
    end: float
    confidence: Optional[float] = None
    speaker: Optional[str] = None


class Utterance(BaseModel):
    """A diarized segment of a transcript."""
    text: str
    start: float
    end: float
    speaker: str
    confidence: Optional[float] = None


class TranscriptionJob(JobRecord):
    kind: JobKind = JobKind.TRANSCRIPTION
    status: TranscriptionStatus
    vault_id: Optional[str] = None
    source_object_id: Optional[str] = None
    text: Optional[str] = None
    words: Optional[List[Word]] = None
    utterances: Optional[List[Utterance]] = None
    audio_duration: Optional[float] = None
    language_code: Optional[str] = None

    @property
    def has_transcript(self) -> bool:
        """Whether the job carries any transcript content.

        A completed job with neither utterances nor text is a valid job
        with an empty transcript.
        """
        return bool(self.utterances) or bool(self.text)


class OcrDownloadPayload(BaseModel):
    """Body of an OCR download response."""

    model_config = ConfigDict(extra="allow")

    content: Any = ""
    format: Optional[str] = None
    pages: Optional[int] = None


class OcrDownload(BaseModel):
    """Result of downloading a completed OCR job."""
    job_id: str
    format: OcrFormat
    content: Optional[str] = Field(
        None, description="Text or JSON content; None for PDF downloads"
    )
    saved_to: Optional[str] = None
    pages: Optional[int] = None
