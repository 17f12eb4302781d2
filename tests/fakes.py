"""Raw document builders and a fake page lister shared by the tests."""

from __future__ import annotations

DOC_PREFIX = "projects/p/databases/(default)/documents/events-prod"


def make_doc(
    doc_id: str,
    name: str | None = "Event",
    url: str | None = "https://equal-love.jp/",
    create_time: str = "2024-05-01T12:00:00.000000Z",
) -> dict:
    fields: dict = {}
    if name is not None:
        fields["event_name"] = {"stringValue": name}
    if url is not None:
        fields["official_site_url"] = {"stringValue": url}
    return {
        "name": f"{DOC_PREFIX}/{doc_id}",
        "fields": fields,
        "createTime": create_time,
        "updateTime": create_time,
    }


class FakeLister:
    """Serves canned pages keyed by the page token they answer."""

    def __init__(self, pages: dict[str | None, dict]) -> None:
        self.pages = pages
        self.calls: list[dict] = []

    def __call__(self, page_token=None, page_size=None, api_url=None) -> dict:
        self.calls.append({"page_token": page_token, "page_size": page_size, "api_url": api_url})
        return self.pages[page_token]
