"""Document generation through the format API."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..models.format import InputFormat, OutputFormat
from ..models.vault import DownloadResult
from .client import CaseDevClient
from .vault import write_local_file

logger = logging.getLogger(__name__)


class FormatService:
    """Turns markdown, JSON or text into PDF, DOCX or an HTML preview."""

    def __init__(self, client: CaseDevClient):
        self.client = client

    async def format_document(
        self,
        content: str,
        output_format: Union[str, OutputFormat],
        save_to: Union[str, Path],
        input_format: Union[str, InputFormat] = InputFormat.MARKDOWN,
        variables: Optional[Dict[str, str]] = None,
    ) -> DownloadResult:
        """Generate a document and save it locally.

        Args:
            content: Source content. ``{{name}}`` placeholders are filled from
                ``variables``.
            output_format: pdf, docx or html_preview.
            save_to: Destination path.
            input_format: md, json or text.
            variables: Template variables.
        """
        output_format = OutputFormat(output_format)
        body: Dict[str, Any] = {
            "content": content,
            "input_format": InputFormat(input_format).value,
            "output_format": output_format.value,
        }
        if variables:
            body["options"] = {
                "components": [{"content": content, "variables": variables}]
            }

        document = await self.client.request(
            "/format/v1/document",
            method="POST",
            body=body,
            response_type=output_format.response_type,
        )
        return write_local_file(save_to, document)
