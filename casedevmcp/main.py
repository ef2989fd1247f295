"""Main entry point for the CaseDevMCP server."""
import argparse
import logging
import os
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from . import __version__
from .core.config import ClientConfig

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments.

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(description="CaseDevMCP - Case.dev legal AI tools for agents")
    parser.add_argument(
        "--host",
        type=str,
        default=os.getenv("HOST", "127.0.0.1"),
        help="Host to bind the server to",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to bind the server to",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        default=bool(os.getenv("RELOAD", "False").lower() == "true"),
        help="Enable auto-reload for development",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=os.getenv("LOG_LEVEL", "info"),
        choices=["debug", "info", "warning", "error", "critical"],
        help="Logging level",
    )
    parser.add_argument(
        "--api-url",
        type=str,
        default=None,
        help="Case.dev API base URL (CASEDEV_API_URL)",
    )
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=None,
        help="Default request deadline in milliseconds (CASEDEV_TIMEOUT_MS)",
    )
    parser.add_argument(
        "--transfer-timeout-ms",
        type=int,
        default=None,
        help="Deadline for uploads to blob storage in milliseconds (CASEDEV_TRANSFER_TIMEOUT_MS)",
    )
    parser.add_argument(
        "--verify-uploads",
        action="store_true",
        default=None,
        help="Read uploaded objects back and compare them (CASEDEV_VERIFY_UPLOADS)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"CaseDevMCP {__version__}",
        help="Show version and exit",
    )
    return parser.parse_args(argv)


def apply_client_options(args, environ=None) -> ClientConfig:
    """Export client options as ``CASEDEV_*`` variables and validate them.

    The server builds its client from the environment at startup, so the
    options also reach reloaded worker processes.

    Args:
        args: Parsed command line arguments.
        environ: Environment mapping to update. Defaults to ``os.environ``.

    Returns:
        The ClientConfig the server will use.

    Raises:
        ValueError: If the resulting configuration is invalid.
    """
    env = os.environ if environ is None else environ
    if args.api_url:
        env["CASEDEV_API_URL"] = args.api_url
    if args.timeout_ms is not None:
        env["CASEDEV_TIMEOUT_MS"] = str(args.timeout_ms)
    if args.transfer_timeout_ms is not None:
        env["CASEDEV_TRANSFER_TIMEOUT_MS"] = str(args.transfer_timeout_ms)
    if args.verify_uploads:
        env["CASEDEV_VERIFY_UPLOADS"] = "true"
    return ClientConfig.from_env(env)


def main():
    """Run the FastAPI application."""
    # Load environment variables from .env file if it exists
    env_path = Path(".") / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
        logger.info(f"Loaded environment variables from {env_path}")

    args = parse_args()
    logging.getLogger().setLevel(args.log_level.upper())

    try:
        config = apply_client_options(args)
    except ValueError as e:
        logger.error(f"Invalid Case.dev client configuration: {e}")
        sys.exit(2)
    logger.info(f"Case.dev API: {config.base_url} (timeout {config.timeout_ms}ms)")

    # Configure Uvicorn logging
    log_config = uvicorn.config.LOGGING_CONFIG
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_config["formatters"]["access"]["fmt"] = (
        "%(asctime)s - %(name)s - %(levelname)s - %(client_addr)s - \"%(request_line)s\" %(status_code)s"
    )

    # Each worker would build its own client; the tools are served by one process.
    uvicorn.run(
        "casedevmcp.api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
        log_config=log_config,
    )


if __name__ == "__main__":
    main()
