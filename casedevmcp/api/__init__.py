"""HTTP tool surface for CaseDevMCP."""

from .server import app

__all__ = ["app"]
