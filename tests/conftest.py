"""Pytest configuration and fixtures for CaseDevMCP tests."""
import logging
import sys
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from aioresponses import aioresponses

# Add the project root to the Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from casedevmcp.core import CaseDevClient, ClientConfig, StaticCredentials

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)

# Reduce log noise for test output
logging.getLogger("aiohttp").setLevel(logging.WARNING)
logging.getLogger("asyncio").setLevel(logging.WARNING)

TEST_API_KEY = "test-key"


@pytest.fixture
def mock_aioresponse():
    """Intercept every aiohttp request made during the test."""
    with aioresponses() as m:
        yield m


@pytest.fixture
def config(tmp_path) -> ClientConfig:
    """Client configuration isolated from the user's auth and config files."""
    return ClientConfig(
        auth_file=tmp_path / "auth.json",
        config_file=tmp_path / "opencode.json",
    )


@pytest_asyncio.fixture
async def client(config) -> AsyncGenerator[CaseDevClient, None]:
    """A client with a fixed API key."""
    async with CaseDevClient(config, credentials=StaticCredentials(TEST_API_KEY)) as c:
        yield c
