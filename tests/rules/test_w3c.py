# tests/rules/test_w3c.py
from unittest.mock import MagicMock

import pytest
import requests
from conftest import clean_files

from frontcheck.dom.builder import DOMBuilder
from frontcheck.errors import ExternalValidatorError
from frontcheck.rules.w3c import check_w3c
from frontcheck.services.w3c_service import W3CService, locate_message

PAGE = """<!DOCTYPE html>
<html lang="en">
<body>
  <div id="x"></div>
  <div id="x"></div>
  <form class="search">
    <input type="search" name="q">
  </form>
</body>
</html>
"""


def mock_session(payload=None, exc=None):
    session = MagicMock()
    if exc is not None:
        session.post.side_effect = exc
    else:
        response = MagicMock()
        response.json.return_value = payload
        response.raise_for_status.return_value = None
        session.post.return_value = response
    return session


def test_validate_returns_only_errors():
    """Info messages are dropped; the page is posted as UTF-8 HTML."""
    session = mock_session({"messages": [
        {"type": "error", "message": "Bad value"},
        {"type": "info", "message": "Trailing slash"},
    ]})
    service = W3CService("https://validator.example/nu/?out=json", timeout=5, session=session)

    assert service.validate("<p>é</p>") == [{"type": "error", "message": "Bad value"}]
    _, kwargs = session.post.call_args
    assert kwargs["data"] == "<p>é</p>".encode("utf-8")
    assert kwargs["headers"]["Content-Type"].startswith("text/html")
    assert kwargs["timeout"] == 5


def test_validate_wraps_network_errors():
    """Network failures surface as ExternalValidatorError."""
    service = W3CService("https://validator.example", session=mock_session(exc=requests.exceptions.ConnectionError("down")))
    with pytest.raises(ExternalValidatorError, match="down"):
        service.validate("<p></p>")


def test_validate_rejects_non_document_errors():
    """A checker that could not read the document is a failure, not a finding."""
    service = W3CService("https://validator.example", session=mock_session(
        {"messages": [{"type": "non-document-error", "message": "Too big"}]}
    ))
    with pytest.raises(ExternalValidatorError, match="Too big"):
        service.validate("<p></p>")


def test_locate_message_heuristics():
    """Missing line numbers are recovered from the message text."""
    doc = DOMBuilder().parse_doc("index.html", PAGE)

    assert locate_message(doc, {"lastLine": 7, "message": "anything"}) == 7
    assert locate_message(doc, {"message": "Duplicate ID “x”."}) == 5
    assert locate_message(doc, {"message": "Element “form” is missing required attribute “action”."}) == 6
    assert locate_message(doc, {"message": "Stray end tag “span”."}) is None


def test_check_w3c_reports_errors(snapshot_of, monkeypatch):
    """Every validator error becomes a finding on its page."""
    files = {"index.html": PAGE}
    snapshot = snapshot_of(files, w3c_enabled=True)
    monkeypatch.setattr(W3CService, "validate", lambda self, html: [
        {"type": "error", "message": "Duplicate ID “x”.", "extract": '<div id="x">'},
    ])

    findings = check_w3c(snapshot)
    assert [(f.code, f.file_path, f.line) for f in findings] == [("W3C_ERROR", "index.html", 5)]
    assert findings[0].context == '<div id="x">'


def test_check_w3c_failure_is_a_finding(snapshot_of, monkeypatch):
    """An unreachable validator gives one W3C_FAILED finding per page."""
    snapshot = snapshot_of(clean_files(), w3c_enabled=True)

    def fail(self, html):
        raise ExternalValidatorError("timed out")

    monkeypatch.setattr(W3CService, "validate", fail)
    findings = check_w3c(snapshot)
    assert [(f.code, f.file_path) for f in findings] == [("W3C_FAILED", "about.html"), ("W3C_FAILED", "index.html")]
    assert findings[0].message == "W3C validation failed: timed out"


def test_check_w3c_disabled(clean_snapshot, monkeypatch):
    """Nothing is sent when the check is switched off."""
    validate = MagicMock()
    monkeypatch.setattr(W3CService, "validate", validate)
    assert check_w3c(clean_snapshot) == []
    validate.assert_not_called()
