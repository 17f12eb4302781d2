"""Transport for the remote document listing endpoint.

Usage:
    from docstore.client import list_documents   # one page of the collection → dict
    from docstore.client import raw_get          # raw GET → dict

The collection is a public Firestore REST listing, so no credentials are sent.
Each call is a single request: no retries, no backoff. Timeouts are left to
requests via the timeout argument.
"""

from __future__ import annotations

import os
from typing import Any

import requests
from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = (
    "https://firestore.googleapis.com/v1/projects/yoani-buppan-dev"
    "/databases/(default)/documents/events-prod"
)
DEFAULT_TIMEOUT_S = 30


def _api_url() -> str:
    return os.getenv("EVENT_BOARD_API_URL") or DEFAULT_API_URL


def raw_get(url: str, timeout: int = DEFAULT_TIMEOUT_S, **params: Any) -> dict:
    """GET request that returns the decoded JSON body as a dict.

    None-valued params are dropped so callers can pass optional query
    parameters unconditionally. Raises requests.HTTPError on a non-2xx status
    and ValueError when the body is not JSON.
    """
    filtered = {k: v for k, v in params.items() if v is not None}
    r = requests.get(url, params=filtered, timeout=timeout)
    r.raise_for_status()
    data = r.json()
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object from {url}, got {type(data).__name__}")
    return data


def list_documents(
    page_token: str | None = None,
    page_size: int | None = None,
    api_url: str | None = None,
    timeout: int = DEFAULT_TIMEOUT_S,
) -> dict:
    """Fetch one page of documents from the collection.

    The response holds "documents" (may be absent on an empty page) and
    "nextPageToken" (absent on the last page).
    """
    return raw_get(
        api_url or _api_url(),
        timeout=timeout,
        pageToken=page_token or None,
        pageSize=page_size,
    )
