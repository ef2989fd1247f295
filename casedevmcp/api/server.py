"""FastAPI server exposing the Case.dev tools to agents."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List

import aiohttp
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..core import (
    AuthError,
    CaseDevClient,
    ClientConfig,
    FormatService,
    HttpError,
    OcrJobService,
    RequestTimeoutError,
    ResearchService,
    SchemaError,
    SearchDispatcher,
    TranscriptionJobService,
    UploadPipeline,
    ValidationError,
    VaultService,
)
from ..models.search import SearchQuery
from . import render
from .schemas import (
    FormatParams,
    JobIdParams,
    OcrDownloadParams,
    OcrProcessParams,
    ResearchParams,
    ToolResult,
    TranscribeParams,
    VaultCreateParams,
    VaultDownloadParams,
    VaultIdParams,
    VaultObjectParams,
    VaultSearchParams,
    VaultUploadParams,
)

logger = logging.getLogger(__name__)

# Global application state
app_state: Dict[str, Any] = {}

TOOLS: Dict[str, str] = {
    "casedev_vault_create": "Create a new vault for storing and searching documents.",
    "casedev_vault_list": "List all vaults in your account.",
    "casedev_vault_upload": "Upload a local file to a vault, optionally indexing it for search.",
    "casedev_vault_search": "Search documents in a vault (hybrid, fast, global, entity, local, vector, graph).",
    "casedev_vault_ingest": "Trigger indexing of a document in a vault.",
    "casedev_vault_objects": "List all documents in a vault with their ingestion status.",
    "casedev_vault_text": "Get the full extracted text of a vault document.",
    "casedev_vault_download": "Download a file from a vault to a local path.",
    "casedev_ocr_process": "Submit a document URL for OCR and return a job ID.",
    "casedev_ocr_status": "Check the status of an OCR job.",
    "casedev_ocr_download": "Download the results of a completed OCR job (text, json or pdf).",
    "casedev_transcribe": "Transcribe audio or video from a vault object or a URL.",
    "casedev_transcribe_status": "Check a transcription job and get the transcript when complete.",
    "casedev_search": "Perform deep web research (fast, normal or pro).",
    "casedev_format": "Generate a PDF, DOCX or HTML preview from markdown, JSON or text.",
}


def get_client() -> CaseDevClient:
    """Get the Case.dev client instance.

    Returns:
        CaseDevClient instance.
    """
    if "client" not in app_state:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Case.dev client not initialized",
        )
    return app_state["client"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Args:
        app: FastAPI application instance.
    """
    created = "client" not in app_state
    try:
        if created:
            logger.info("Initializing Case.dev client...")
            config = ClientConfig.from_env()
            app_state["client"] = CaseDevClient(config=config)
            logger.info(f"Case.dev client ready for {config.base_url}")
        yield
    finally:
        if created and "client" in app_state:
            logger.info("Closing Case.dev client...")
            await app_state.pop("client").close()


# Create FastAPI application
app = FastAPI(
    title="CaseDevMCP",
    description="Agent tools for the Case.dev legal AI API",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": message})


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    return _error(status.HTTP_401_UNAUTHORIZED, str(exc))


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(422, str(exc))


@app.exception_handler(RequestTimeoutError)
async def timeout_error_handler(request: Request, exc: RequestTimeoutError) -> JSONResponse:
    return _error(status.HTTP_504_GATEWAY_TIMEOUT, str(exc))


@app.exception_handler(HttpError)
async def http_error_handler(request: Request, exc: HttpError) -> JSONResponse:
    """Report an upstream failure with its status and body."""
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": str(exc), "upstream_status": exc.status},
    )


@app.exception_handler(SchemaError)
async def schema_error_handler(request: Request, exc: SchemaError) -> JSONResponse:
    return _error(status.HTTP_502_BAD_GATEWAY, str(exc))


@app.exception_handler(aiohttp.ClientError)
async def connection_error_handler(request: Request, exc: aiohttp.ClientError) -> JSONResponse:
    logger.error(f"Could not reach Case.dev: {exc}")
    return _error(status.HTTP_502_BAD_GATEWAY, f"Could not reach Case.dev: {exc}")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other exceptions.

    Args:
        request: The request that caused the exception.
        exc: The exception.

    Returns:
        JSON response with error details.
    """
    logger.exception("Unhandled exception")
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


# API endpoints
@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/version")
async def get_version() -> Dict[str, str]:
    return {"version": __version__}


@app.get("/tools")
async def list_tools() -> List[Dict[str, str]]:
    """List the available tools."""
    return [{"name": name, "description": text} for name, text in TOOLS.items()]


# Vault tools
@app.post("/tools/casedev_vault_create", response_model=ToolResult)
async def vault_create(
    params: VaultCreateParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    vault = await VaultService(client).create(
        params.name, description=params.description, enable_graph=params.enable_graph
    )
    return render.vault_created(vault)


@app.post("/tools/casedev_vault_list", response_model=ToolResult)
async def vault_list(client: CaseDevClient = Depends(get_client)) -> ToolResult:
    return render.vault_list(await VaultService(client).list_vaults())


@app.post("/tools/casedev_vault_upload", response_model=ToolResult)
async def vault_upload(
    params: VaultUploadParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    """Upload a local file: slot, transfer, then indexing trigger."""
    result = await UploadPipeline(client).upload(
        params.vault_id, params.file_path, auto_index=params.auto_index
    )
    return render.upload(result)


@app.post("/tools/casedev_vault_search", response_model=ToolResult)
async def vault_search(
    params: VaultSearchParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    query = SearchQuery(
        vault_id=params.vault_id,
        text=params.query,
        method=params.method,
        top_k=params.top_k,
        object_id=params.object_id,
    )
    return render.search(await SearchDispatcher(client).search(query))


@app.post("/tools/casedev_vault_ingest", response_model=ToolResult)
async def vault_ingest(
    params: VaultObjectParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    response = await VaultService(client).ingest(params.vault_id, params.object_id)
    return render.ingest(params.vault_id, params.object_id, response)


@app.post("/tools/casedev_vault_objects", response_model=ToolResult)
async def vault_objects(
    params: VaultIdParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    response = await VaultService(client).list_objects(params.vault_id)
    return render.vault_objects(params.vault_id, response)


@app.post("/tools/casedev_vault_text", response_model=ToolResult)
async def vault_text(
    params: VaultObjectParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    response = await VaultService(client).object_text(params.vault_id, params.object_id)
    return render.object_text(params.vault_id, params.object_id, response)


@app.post("/tools/casedev_vault_download", response_model=ToolResult)
async def vault_download(
    params: VaultDownloadParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    result = await VaultService(client).download(
        params.vault_id, params.object_id, params.save_to
    )
    return render.vault_download(params.vault_id, params.object_id, result)


# OCR tools
@app.post("/tools/casedev_ocr_process", response_model=ToolResult)
async def ocr_process(
    params: OcrProcessParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    job = await OcrJobService(client).submit(
        params.document_url, engine=params.engine, document_id=params.document_id
    )
    return render.ocr_submitted(job, params.document_url, params.engine.value)


@app.post("/tools/casedev_ocr_status", response_model=ToolResult)
async def ocr_status(
    params: JobIdParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    return render.ocr_status(await OcrJobService(client).poll(params.job_id))


@app.post("/tools/casedev_ocr_download", response_model=ToolResult)
async def ocr_download(
    params: OcrDownloadParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    result = await OcrJobService(client).download(
        params.job_id, format=params.format, save_to=params.save_to
    )
    return render.ocr_download(result)


# Transcription tools
@app.post("/tools/casedev_transcribe", response_model=ToolResult)
async def transcribe(
    params: TranscribeParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    job = await TranscriptionJobService(client).submit(
        vault_id=params.vault_id,
        object_id=params.object_id,
        audio_url=params.audio_url,
        format=params.format,
        language_code=params.language_code,
        speaker_labels=params.speaker_labels,
        speakers_expected=params.speakers_expected,
        word_boost=params.word_boost,
    )
    if params.vault_id and params.object_id:
        return render.transcription_submitted(
            job, vault_id=params.vault_id, object_id=params.object_id
        )
    return render.transcription_submitted(job, audio_url=params.audio_url)


@app.post("/tools/casedev_transcribe_status", response_model=ToolResult)
async def transcribe_status(
    params: JobIdParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    return render.transcription_status(
        await TranscriptionJobService(client).poll(params.job_id)
    )


# Research and formatting
@app.post("/tools/casedev_search", response_model=ToolResult)
async def legal_search(
    params: ResearchParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    result = await ResearchService(client).research(params.query, mode=params.mode)
    return render.research(result)


@app.post("/tools/casedev_format", response_model=ToolResult)
async def format_document(
    params: FormatParams, client: CaseDevClient = Depends(get_client)
) -> ToolResult:
    result = await FormatService(client).format_document(
        params.content,
        params.output_format,
        params.save_to,
        input_format=params.input_format,
        variables=params.variables,
    )
    return render.formatted(params.output_format.value, result)


# Main entry point for running the server directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("casedevmcp.api.server:app", host="127.0.0.1", port=8000, reload=True)
