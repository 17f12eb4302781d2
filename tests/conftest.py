"""Pytest fixtures shared across the suite."""

import pytest

from tests.fakes import FakeLister, make_doc


@pytest.fixture
def two_page_lister() -> FakeLister:
    return FakeLister({
        None: {
            "documents": [
                make_doc("a1", "First", "https://equal-love.jp/", "2024-05-01T00:00:00Z"),
                make_doc("a2", "Second", "https://not-equal-me.jp/", "2024-05-03T00:00:00Z"),
            ],
            "nextPageToken": "tok-2",
        },
        "tok-2": {
            "documents": [
                make_doc("b1", "Third", "https://example.com/", "2024-05-02T00:00:00Z"),
            ],
        },
    })
