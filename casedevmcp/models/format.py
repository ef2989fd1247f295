"""Document formatting models."""
from enum import Enum

from .request import ResponseType


class InputFormat(str, Enum):
    MARKDOWN = "md"
    JSON = "json"
    TEXT = "text"


class OutputFormat(str, Enum):
    """Output formats of the format API."""
    PDF = "pdf"
    DOCX = "docx"
    HTML_PREVIEW = "html_preview"

    @property
    def response_type(self) -> ResponseType:
        """Binary formats come back as raw bytes, the HTML preview as text."""
        if self is OutputFormat.HTML_PREVIEW:
            return ResponseType.TEXT
        return ResponseType.BYTES
