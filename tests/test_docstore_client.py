import pytest
import requests

from docstore import client


class FakeResponse:
    def __init__(self, payload, status=200):
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} Error")

    def json(self):
        return self.payload


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def fake_get(url, params=None, timeout=None):
        calls.append({"url": url, "params": params, "timeout": timeout})
        return calls_response.pop(0)

    calls_response: list = []
    monkeypatch.setattr(client.requests, "get", fake_get)
    monkeypatch.delenv("EVENT_BOARD_API_URL", raising=False)
    return calls, calls_response


def test_first_page_sends_no_token(captured):
    calls, responses = captured
    responses.append(FakeResponse({"documents": []}))

    assert client.list_documents() == {"documents": []}
    assert calls[0]["url"] == client.DEFAULT_API_URL
    assert calls[0]["params"] == {}
    assert calls[0]["timeout"] == client.DEFAULT_TIMEOUT_S


def test_token_and_page_size_are_sent(captured):
    calls, responses = captured
    responses.append(FakeResponse({}))

    client.list_documents(page_token="abc", page_size=20, api_url="https://example.test/c")

    assert calls[0]["url"] == "https://example.test/c"
    assert calls[0]["params"] == {"pageToken": "abc", "pageSize": 20}


def test_env_overrides_url(captured, monkeypatch):
    calls, responses = captured
    responses.append(FakeResponse({}))
    monkeypatch.setenv("EVENT_BOARD_API_URL", "https://env.test/c")

    client.list_documents()

    assert calls[0]["url"] == "https://env.test/c"


def test_http_error_propagates(captured):
    _, responses = captured
    responses.append(FakeResponse({}, status=500))

    with pytest.raises(requests.HTTPError):
        client.list_documents()


def test_non_object_body_is_rejected(captured):
    _, responses = captured
    responses.append(FakeResponse([1, 2]))

    with pytest.raises(ValueError):
        client.list_documents()
