import json

import pytest

from sentiment_dashboard import ui


class _FakeResponse:
    def __init__(self, status_code=200, content=b"", body=None):
        self.status_code = status_code
        self.ok = status_code < 400
        self.content = content
        self.text = content.decode()
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


@pytest.fixture
def posts(monkeypatch):
    calls = []
    responses = []

    def fake_post(url, **kwargs):
        calls.append((url, kwargs))
        return responses.pop(0) if responses else _FakeResponse(content=b"Text,Sentiment\n")

    ui.fetch_export.clear()
    monkeypatch.setattr(ui.requests, "post", fake_post)
    yield calls, responses
    ui.fetch_export.clear()


def test_result_card_escapes_text():
    item = {"sentiment": "NEGATIVE", "confidence": 0.8, "text": '<img src=x onerror="alert(1)"> & bad'}
    markup = ui.result_card_html(item, 2, "#ef4444", "😞")

    assert "<img" not in markup
    assert "&lt;img src=x onerror=&quot;alert(1)&quot;&gt; &amp; bad" in markup
    assert "#2 NEGATIVE" in markup
    assert "80.0% confidence" in markup


def test_fetch_export_posts_once_per_analysis(posts):
    calls, _ = posts
    analysis = json.dumps({"results": [], "summary": {"total_texts": 0}}, sort_keys=True)

    first = ui.fetch_export("http://api", "csv", analysis)
    second = ui.fetch_export("http://api", "csv", analysis)

    assert first == second == b"Text,Sentiment\n"
    assert len(calls) == 1
    url, kwargs = calls[0]
    assert url == "http://api/api/v1/export/csv"
    assert kwargs["data"] == analysis.encode("utf-8")


def test_fetch_export_refetches_for_new_analysis_or_format(posts):
    calls, _ = posts
    ui.fetch_export("http://api", "csv", '{"a": 1}')
    ui.fetch_export("http://api", "report", '{"a": 1}')
    ui.fetch_export("http://api", "csv", '{"a": 2}')
    assert len(calls) == 3


def test_fetch_export_failure_is_not_cached(posts):
    calls, responses = posts
    responses.append(_FakeResponse(status_code=404, content=b"{}", body={"detail": "Unknown export format"}))

    with pytest.raises(ui.requests.HTTPError, match="404 - Unknown export format"):
        ui.fetch_export("http://api", "xml", "{}")

    assert ui.fetch_export("http://api", "xml", "{}") == b"Text,Sentiment\n"
    assert len(calls) == 2
