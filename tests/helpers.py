"""Helpers for inspecting requests recorded by aioresponses."""
import json
from typing import Any, Dict

from yarl import URL

API_URL = "https://api.case.dev"


def _calls(mock, method: str, url: str):
    return mock.requests.get((method, URL(url)), [])


def request_count(mock, method: str, url: str) -> int:
    return len(_calls(mock, method, url))


def sent_json(mock, method: str, url: str, index: int = 0) -> Any:
    """Return the decoded JSON body of a recorded request."""
    data = _calls(mock, method, url)[index].kwargs.get("data")
    return json.loads(data) if data is not None else None


def sent_headers(mock, method: str, url: str, index: int = 0) -> Dict[str, str]:
    return _calls(mock, method, url)[index].kwargs["headers"]


def sent_timeout(mock, method: str, url: str, index: int = 0) -> float:
    """Total timeout, in seconds, of a recorded request."""
    return _calls(mock, method, url)[index].kwargs["timeout"].total
