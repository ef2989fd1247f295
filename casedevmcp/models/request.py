"""Request models for the Case.dev API client."""
from enum import Enum
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TIMEOUT_MS = 30000


class ResponseType(str, Enum):
    """How a successful response body is decoded."""
    JSON = "json"
    TEXT = "text"
    BYTES = "bytes"


class RequestSpec(BaseModel):
    """A single authenticated request against the Case.dev API."""

    model_config = ConfigDict(frozen=True)

    method: Literal["GET", "POST", "PUT", "DELETE"] = Field(
        "GET", description="HTTP method"
    )
    path: str = Field(..., description="Endpoint path, relative to the base URL")
    body: Optional[Any] = Field(
        None, description="JSON-serializable request body"
    )
    headers: Dict[str, str] = Field(
        default_factory=dict,
        description="Extra headers; these override the defaults"
    )
    timeout_ms: int = Field(
        DEFAULT_TIMEOUT_MS,
        description="Deadline for the whole exchange in milliseconds",
        gt=0,
    )
    response_type: ResponseType = Field(
        ResponseType.JSON, description="Expected decoding of the response body"
    )
