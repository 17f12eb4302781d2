"""Paginated event fetching from the document listing endpoint.

Each page response looks like:

    {
      "documents": [
        {
          "name": "projects/…/documents/events-prod/<id>",
          "fields": {
            "event_name": {"stringValue": "…"},
            "official_site_url": {"stringValue": "https://equal-love.jp/"}
          },
          "createTime": "2024-05-01T12:34:56.789012Z",
          "updateTime": "…"
        }
      ],
      "nextPageToken": "…"
    }

"documents" is absent on an empty page and "nextPageToken" is absent on the
last page. Only a missing (or empty) token ends pagination; an empty page
does not.

The whole collection is assembled eagerly. Any transport or parse failure
discards everything fetched so far for this run.
"""

from __future__ import annotations

import datetime
import re
from typing import Callable, Iterator, Protocol

import requests

from docstore.client import list_documents
from event_board.config import DOCUMENT_NAME_FIELD, DOCUMENT_URL_FIELD
from event_board.models import EventRecord, FetchResult
from event_board.services.classifier import classify

_EPOCH = datetime.datetime(1970, 1, 1, tzinfo=datetime.timezone.utc)
_ONE_MS = datetime.timedelta(milliseconds=1)

# RFC 3339 timestamps from the store carry up to nanosecond precision;
# datetime only accepts microseconds.
_FRACTION_RE = re.compile(r"\.(\d{1,9})")


class DocumentParseError(ValueError):
    """A raw document could not be normalized into an EventRecord."""


class ProgressCallback(Protocol):
    """Protocol for progress reporting."""
    def __call__(self, message: str) -> None: ...


PageLister = Callable[..., dict]


def iter_pages(
    list_page: PageLister | None = None,
    page_size: int | None = None,
    api_url: str | None = None,
) -> Iterator[dict]:
    """Yield raw response pages, following nextPageToken until it is absent.

    Each call starts from the first page, so the generator can be restarted
    by calling iter_pages() again.
    """
    lister = list_page or list_documents
    page_token: str | None = None
    while True:
        data = lister(page_token=page_token, page_size=page_size, api_url=api_url)
        yield data
        page_token = data.get("nextPageToken") or None
        if not page_token:
            return


def parse_document(doc: dict) -> EventRecord:
    """Convert a raw document dict to an EventRecord.

    name and official_site_url default to "" when absent; a missing fields
    bag counts as empty. A missing document path or createTime is an error.
    """
    if not isinstance(doc, dict):
        raise DocumentParseError(f"Document is not an object: {doc!r}")
    path = doc.get("name")
    if not isinstance(path, str) or not path:
        raise DocumentParseError("Document has no name/path")
    fields = doc.get("fields") or {}
    return EventRecord(
        id=path.split("/")[-1],
        name=_string_field(fields, DOCUMENT_NAME_FIELD),
        category=classify(_string_field(fields, DOCUMENT_URL_FIELD)),
        created_at=parse_timestamp_ms(doc.get("createTime")),
    )


def parse_timestamp_ms(value: object) -> int:
    """Parse an RFC 3339 timestamp into epoch milliseconds (floored)."""
    if not isinstance(value, str) or not value:
        raise DocumentParseError(f"Missing createTime: {value!r}")
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), value, count=1)
    try:
        dt = datetime.datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise DocumentParseError(f"Invalid createTime: {value!r}") from exc
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return (dt - _EPOCH) // _ONE_MS


def fetch_result(
    list_page: PageLister | None = None,
    page_size: int | None = None,
    api_url: str | None = None,
    progress: ProgressCallback | None = None,
) -> FetchResult:
    """Fetch and normalize every page. Never raises for fetch failures.

    On failure the result carries the error text and no records.
    """
    records: list[EventRecord] = []
    pages = 0
    try:
        for data in iter_pages(list_page, page_size=page_size, api_url=api_url):
            pages += 1
            documents = data.get("documents")
            if not documents:
                continue
            if not isinstance(documents, list):
                raise DocumentParseError(
                    f"Page documents is not a list: {type(documents).__name__}"
                )
            if progress:
                has_more = bool(data.get("nextPageToken"))
                progress(f"Fetched {len(documents)} entries. Has more: {has_more}")
            records.extend(parse_document(doc) for doc in documents)
    except (requests.RequestException, ValueError) as exc:
        return FetchResult(error=f"{type(exc).__name__}: {exc}", pages_fetched=pages)
    return FetchResult(records=records, pages_fetched=pages)


def fetch_events(
    list_page: PageLister | None = None,
    page_size: int | None = None,
    api_url: str | None = None,
    progress: ProgressCallback | None = None,
) -> list[EventRecord]:
    """Fail-soft fetch: returns [] when anything goes wrong.

    The error is reported through progress, so the caller sees "no events"
    rather than an exception.
    """
    result = fetch_result(list_page, page_size=page_size, api_url=api_url, progress=progress)
    if not result.ok:
        if progress:
            progress(f"Fetch error: {result.error}")
        return []
    return result.records


def _string_field(fields: dict, key: str) -> str:
    value = fields.get(key) if isinstance(fields, dict) else None
    if not isinstance(value, dict):
        return ""
    s = value.get("stringValue")
    return s if isinstance(s, str) else ""
