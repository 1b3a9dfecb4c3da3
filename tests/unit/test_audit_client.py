"""Tests for the audit provider client and the page resource fetcher."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from frontal.audit.client import fetch_audit, friendly_message, validate_url
from frontal.audit.resources import extract_resources, fetch_resources
from frontal.errors import AuditError, InvalidUrlError, ResourceFetchError
from frontal.scanner.models import Language


def run_async(coro):
    """Helper to run async functions in sync tests."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop.run_until_complete(coro)


class TestValidateUrl:
    def test_trims_whitespace(self):
        assert validate_url("  https://example.com/page ") == "https://example.com/page"

    @pytest.mark.parametrize("url", ["", "example.com", "ftp://example.com", "http://"])
    def test_rejects_non_http(self, url):
        with pytest.raises(InvalidUrlError):
            validate_url(url)


class TestFetchAudit:
    def test_success(self, config, lighthouse_report):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=lighthouse_report)

        raw = run_async(
            fetch_audit("https://example.com", config, transport=httpx.MockTransport(handler))
        )
        assert raw == lighthouse_report
        assert seen == {"url": config.audit_url, "body": {"url": "https://example.com"}}

    def test_http_error_uses_server_message(self, config):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(500, json={"error": "Lighthouse crashed"})
        )
        with pytest.raises(AuditError) as exc_info:
            run_async(fetch_audit("https://example.com", config, transport=transport))
        assert exc_info.value.code == "http_error"
        assert exc_info.value.status == 500
        assert str(exc_info.value) == "Lighthouse crashed"

    def test_http_error_without_payload(self, config):
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))
        with pytest.raises(AuditError) as exc_info:
            run_async(fetch_audit("https://example.com", config, transport=transport))
        assert exc_info.value.code == "http_error"
        assert str(exc_info.value) == "Audit request failed."

    def test_non_json_response(self, config):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html></html>"))
        with pytest.raises(AuditError) as exc_info:
            run_async(fetch_audit("https://example.com", config, transport=transport))
        assert exc_info.value.code == "invalid_response"

    def test_empty_json_response(self, config):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        with pytest.raises(AuditError) as exc_info:
            run_async(fetch_audit("https://example.com", config, transport=transport))
        assert exc_info.value.code == "invalid_response"

    def test_network_error(self, config):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(AuditError) as exc_info:
            run_async(
                fetch_audit("https://example.com", config, transport=httpx.MockTransport(handler))
            )
        assert exc_info.value.code == "network_error"

    def test_timeout(self, config):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(AuditError) as exc_info:
            run_async(
                fetch_audit("https://example.com", config, transport=httpx.MockTransport(handler))
            )
        assert exc_info.value.code == "timeout"


class TestFriendlyMessage:
    def test_timeout(self):
        assert "timed out" in friendly_message(AuditError("x", "timeout"))

    def test_http_error_passes_message_through(self):
        assert friendly_message(AuditError("Quota exceeded", "http_error")) == "Quota exceeded"

    def test_other_errors_point_at_backend(self):
        assert "backend" in friendly_message(AuditError("x", "network_error"))
        assert "backend" in friendly_message(RuntimeError("boom"))

    def test_missing_error(self):
        assert friendly_message(None) == "Audit failed. Please try again."


PAGE = """<!doctype html>
<html><head>
<style>.a { color: red; }</style>
<style media="print">.b { display: none; }</style>
<script src="vendor.js"></script>
</head><body>
<script>init();</script>
<script>   </script>
</body></html>"""


class TestResources:
    def test_extract_resources(self):
        files = extract_resources(PAGE)
        assert [(f.name, f.language) for f in files] == [
            ("index.html", Language.HTML),
            ("inline-styles.css", Language.CSS),
            ("inline-scripts.js", Language.JS),
        ]
        assert files[1].content == ".a { color: red; }\n\n.b { display: none; }\n\n"
        assert files[2].content == "init();\n\n"

    def test_markup_only_page(self):
        files = extract_resources("<html><body>hi</body></html>")
        assert [f.name for f in files] == ["index.html"]

    def test_fetch_resources(self, config):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["user-agent"] == "FrontAl-Analyzer/1.0"
            return httpx.Response(200, text=PAGE)

        files = run_async(
            fetch_resources("https://example.com", config, transport=httpx.MockTransport(handler))
        )
        assert len(files) == 3

    def test_fetch_resources_http_error(self, config):
        transport = httpx.MockTransport(lambda request: httpx.Response(404))
        with pytest.raises(ResourceFetchError, match="404"):
            run_async(fetch_resources("https://example.com", config, transport=transport))

    def test_fetch_resources_network_error(self, config):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(ResourceFetchError):
            run_async(
                fetch_resources(
                    "https://example.com", config, transport=httpx.MockTransport(handler)
                )
            )
