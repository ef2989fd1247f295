"""Polling contract for asynchronous OCR and transcription jobs.

Services submit a job and return its first snapshot; ``poll`` fetches one
fresh snapshot per call. There is no internal waiting, looping or caching:
the caller decides when to poll again.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from ..models.jobs import (
    JobRecord,
    OcrDownload,
    OcrDownloadPayload,
    OcrEngine,
    OcrFormat,
    OcrJob,
    TranscriptFormat,
    TranscriptionJob,
)
from .client import CaseDevClient
from .errors import SchemaError, ValidationError
from .vault import write_local_file

logger = logging.getLogger(__name__)

J = TypeVar("J", bound=JobRecord)


class JobService(Generic[J]):
    """Submit and poll jobs of one kind."""

    record_type: Type[J]
    submit_path: str
    status_path: str

    def __init__(self, client: CaseDevClient):
        self.client = client

    async def _submit(self, body: Dict[str, Any], timeout_ms: Optional[int] = None) -> J:
        job = await self.client.request(
            self.submit_path,
            method="POST",
            body=body,
            timeout_ms=timeout_ms,
            schema=self.record_type,
        )
        logger.info(f"Submitted {job.kind.value} job {job.id} ({job.status.value})")
        return job

    async def poll(self, job_id: str) -> J:
        """Fetch the current snapshot of a job."""
        return await self.client.request(
            self.status_path.format(job_id=job_id), schema=self.record_type
        )


class OcrJobService(JobService[OcrJob]):
    """OCR jobs: ``pending -> processing -> completed | failed``."""

    record_type = OcrJob
    submit_path = "/ocr/v1/process"
    status_path = "/ocr/v1/{job_id}"
    download_path = "/ocr/v1/{job_id}/download/{format}"

    async def submit(
        self,
        document_url: str,
        engine: OcrEngine = OcrEngine.DOCTR,
        document_id: Optional[str] = None,
    ) -> OcrJob:
        """Submit a document for OCR.

        Args:
            document_url: HTTP(S) or presigned URL of the document.
            engine: OCR engine; doctr is more accurate, paddleocr is faster.
            document_id: Optional caller-side tracking ID.
        """
        body: Dict[str, Any] = {
            "document_url": document_url,
            "engine": OcrEngine(engine).value,
        }
        if document_id is not None:
            body["document_id"] = document_id
        return await self._submit(body)

    async def download(
        self,
        job_id: str,
        format: OcrFormat = OcrFormat.TEXT,
        save_to: Optional[Union[str, Path]] = None,
    ) -> OcrDownload:
        """Download the results of a completed job.

        Downloading before completion is not checked locally; the backend's
        error is raised as is.

        Raises:
            ValidationError: If ``format`` is pdf and ``save_to`` is missing.
                Raised before any request is made.
            SchemaError: If the payload is not a download object, or a pdf
                payload is not valid base64.
        """
        format = OcrFormat(format)
        if format is OcrFormat.PDF and not save_to:
            raise ValidationError(
                "When downloading as PDF format, you must specify save_to path to save the file."
            )

        path = self.download_path.format(job_id=job_id, format=format.value)
        payload = await self.client.request(path, schema=OcrDownloadPayload)

        if format is OcrFormat.PDF:
            try:
                pdf = base64.b64decode(payload.content)
            except (binascii.Error, TypeError, ValueError):
                raise SchemaError(path, "PDF content is not valid base64") from None
            saved = write_local_file(save_to, pdf)
            return OcrDownload(
                job_id=job_id, format=format, saved_to=saved.saved_to, pages=payload.pages
            )

        if format is OcrFormat.JSON:
            content = json.dumps(payload.model_dump(exclude_unset=True), indent=2)
        elif isinstance(payload.content, str):
            content = payload.content
        else:
            content = json.dumps(payload.content)

        saved_to = write_local_file(save_to, content).saved_to if save_to else None
        return OcrDownload(
            job_id=job_id,
            format=format,
            content=content,
            saved_to=saved_to,
            pages=payload.pages,
        )


class TranscriptionJobService(JobService[TranscriptionJob]):
    """Transcription jobs: ``queued -> processing -> completed | error``.

    Completed transcripts are returned by ``poll``.
    """

    record_type = TranscriptionJob
    submit_path = "/voice/transcription"
    status_path = "/voice/transcription/{job_id}"

    async def submit(
        self,
        vault_id: Optional[str] = None,
        object_id: Optional[str] = None,
        audio_url: Optional[str] = None,
        format: TranscriptFormat = TranscriptFormat.JSON,
        language_code: Optional[str] = None,
        speaker_labels: Optional[bool] = None,
        speakers_expected: Optional[int] = None,
        word_boost: Optional[List[str]] = None,
    ) -> TranscriptionJob:
        """Submit audio or video for transcription.

        Exactly one source must be given: a vault object (``vault_id`` and
        ``object_id``) or a direct ``audio_url``.

        Raises:
            ValidationError: If neither or both sources are given. Raised
                before any request is made.
        """
        vault_mode = bool(vault_id and object_id)
        if vault_mode == bool(audio_url):
            raise ValidationError(
                "Either vault_id + object_id OR audio_url is required."
                if not vault_mode
                else "vault_id + object_id and audio_url are mutually exclusive."
            )

        body: Dict[str, Any] = {}
        if vault_mode:
            body["vault_id"] = vault_id
            body["object_id"] = object_id
            body["format"] = TranscriptFormat(format).value
        else:
            body["audio_url"] = audio_url

        if language_code:
            body["language_code"] = language_code
        if speaker_labels is not None:
            body["speaker_labels"] = speaker_labels
        if speakers_expected:
            body["speakers_expected"] = speakers_expected
        if word_boost:
            body["word_boost"] = word_boost

        return await self._submit(body, timeout_ms=self.client.config.timeout_ms)
