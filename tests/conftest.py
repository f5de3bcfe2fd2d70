"""Shared fixtures."""
import json
import time

import pytest


class FakeResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code


def gviz_text(rows, labels=("id", "title", "permalink", "url", "created_utc")):
    """Wrap rows the way the gviz endpoint does."""
    payload = {
        "version": "0.6",
        "status": "ok",
        "table": {
            "cols": [{"id": chr(65 + i), "label": label, "type": "string"} for i, label in enumerate(labels)],
            "rows": [{"c": [None if v is None else {"v": v} for v in row]} for row in rows],
        },
    }
    return "/*O_o*/\ngoogle.visualization.Query.setResponse(" + json.dumps(payload) + ");"


@pytest.fixture
def sheet_text():
    now = time.time()
    return gviz_text([
        ("old", "Tesla is mooning", None, "https://example.com/old", str(int(now - 3 * 86400))),
        ("new", "TSLA: Tesla rockets", "https://reddit.com/r/dd/new", "https://i.redd.it/x.png", now - 60),
        ("mid", "Why Nvidia is the play", None, "https://example.com/mid", str(int(now - 3600))),
        ("bad", "No timestamp here", None, None, None),
    ])


@pytest.fixture
def fake_get(monkeypatch, sheet_text):
    """Replace requests.get in the sheet service; records calls."""
    calls = []

    def _get(url, timeout=None):
        calls.append({"url": url, "timeout": timeout})
        return FakeResponse(sheet_text)

    monkeypatch.setattr("services.sheet_posts.requests.get", _get)
    return calls
