"""Authenticated HTTP client for the Case.dev API."""
from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union

import aiohttp
from multidict import CIMultiDict
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..models.request import RequestSpec, ResponseType
from .config import ClientConfig
from .credentials import CredentialResolver
from .errors import AuthError, HttpError, RequestTimeoutError, SchemaError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class CaseDevClient:
    """Client that executes single authenticated exchanges with the Case.dev API.

    The API key is resolved for every request and never kept on the client.
    Each request runs under its own deadline; the response is always released,
    whether the exchange succeeds, fails or times out.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        credentials: Optional[Any] = None,
        session: Optional[aiohttp.ClientSession] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """Initialize the client.

        Args:
            config: Client configuration. If None, default configuration will be used.
            credentials: Object with a ``resolve()`` method returning the API key
                or None. Defaults to a CredentialResolver built from ``config``.
            session: Optional aiohttp ClientSession to reuse. A session passed in
                is never closed by the client.
            clock: Monotonic clock used to track upload slot expiry.
        """
        self.config = config or ClientConfig()
        self.credentials = credentials or CredentialResolver.from_config(self.config)
        self.base_url = self.config.base_url.rstrip("/")
        self.clock = clock or time.monotonic
        self._session = session
        self._external_session = session is not None

    async def __aenter__(self):
        """Async context manager entry."""
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create an aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._external_session = False
        return self._session

    async def close(self) -> None:
        """Close the session if the client created it."""
        if self._session is not None and not self._external_session:
            await self._session.close()
        self._session = None

    async def execute(
        self, spec: RequestSpec, schema: Optional[Type[M]] = None
    ) -> Union[M, Any]:
        """Execute a request.

        Args:
            spec: The request to perform.
            schema: Optional pydantic model the JSON payload must match.

        Returns:
            The decoded body: a ``schema`` instance, parsed JSON, text or bytes
            depending on ``spec.response_type``.

        Raises:
            AuthError: If no API key is available. Raised before any I/O.
            RequestTimeoutError: If the deadline expires.
            HttpError: If the backend answers with a non-success status.
            SchemaError: If the payload is not valid JSON or does not match ``schema``.
        """
        api_key = self.credentials.resolve()
        if not api_key:
            raise AuthError()

        url = f"{self.base_url}{spec.path}"
        headers = CIMultiDict(
            {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}
        )
        headers.update(spec.headers)
        data = json.dumps(spec.body) if spec.body is not None else None
        timeout = aiohttp.ClientTimeout(total=spec.timeout_ms / 1000)

        logger.info(f"Case.dev API request: {spec.method} {url}")
        try:
            async with self._get_session().request(
                spec.method, url, headers=headers, data=data, timeout=timeout
            ) as response:
                if not 200 <= response.status < 300:
                    body = await _read_error_body(response)
                    raise HttpError(response.status, body)
                raw = await response.read()
                charset = response.charset or "utf-8"
        except asyncio.TimeoutError:
            raise RequestTimeoutError(spec.timeout_ms) from None

        return self._decode(spec, raw, charset, schema)

    def _decode(
        self,
        spec: RequestSpec,
        raw: bytes,
        charset: str,
        schema: Optional[Type[M]],
    ) -> Any:
        if spec.response_type is ResponseType.BYTES:
            return raw
        if spec.response_type is ResponseType.TEXT:
            try:
                return raw.decode(charset, errors="replace")
            except LookupError:
                logger.debug(f"Unknown charset {charset!r} from {spec.path}; decoding as utf-8")
                return raw.decode("utf-8", errors="replace")

        try:
            payload = json.loads(raw) if raw else None
        except ValueError as e:
            raise SchemaError(spec.path, f"invalid JSON ({e})") from None
        if schema is None:
            return payload
        try:
            return schema.model_validate(payload)
        except PydanticValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "<root>"
            raise SchemaError(
                spec.path, f"{location}: {first['msg']} ({e.error_count()} error(s))"
            ) from None

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout_ms: Optional[int] = None,
        response_type: ResponseType = ResponseType.JSON,
        schema: Optional[Type[M]] = None,
    ) -> Any:
        """Build a RequestSpec and execute it.

        ``timeout_ms`` defaults to the configured request deadline.
        """
        spec = RequestSpec(
            method=method,
            path=path,
            body=body,
            headers=headers or {},
            timeout_ms=timeout_ms or self.config.timeout_ms,
            response_type=response_type,
        )
        return await self.execute(spec, schema=schema)

    async def put_blob(
        self,
        url: str,
        data: bytes,
        content_type: str,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """Transfer bytes to a presigned storage URL.

        The URL carries its own authorization, so no API key is sent.

        Raises:
            RequestTimeoutError: If the deadline expires.
            HttpError: If storage answers with a non-success status.
        """
        timeout_ms = timeout_ms or self.config.transfer_timeout_ms
        timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
        logger.info(f"Blob transfer: PUT {len(data)} bytes ({content_type})")
        try:
            async with self._get_session().put(
                url, data=data, headers={"Content-Type": content_type}, timeout=timeout
            ) as response:
                if not 200 <= response.status < 300:
                    body = await _read_error_body(response)
                    raise HttpError(response.status, body, source="Blob storage")
        except asyncio.TimeoutError:
            raise RequestTimeoutError(timeout_ms) from None


async def _read_error_body(response: aiohttp.ClientResponse) -> str:
    """Read an error body without masking the status it came with."""
    try:
        return await response.text()
    except (aiohttp.ClientError, UnicodeDecodeError, asyncio.TimeoutError):
        return "Unknown error"
