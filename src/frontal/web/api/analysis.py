"""REST API for static analysis, resource fetching and URL audits."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from frontal import __version__
from frontal.audit.client import friendly_message, validate_url
from frontal.audit.pipeline import run_url_audit
from frontal.audit.resources import fetch_resources
from frontal.errors import (
    AuditError,
    InvalidAuditDataError,
    InvalidUrlError,
    ResourceFetchError,
)
from frontal.scanner.engine import analyze_files
from frontal.scanner.models import Language, SourceFile, to_dict

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


class FileIn(BaseModel):
    name: str
    language: str | None = None
    content: str = ""


class AnalyzeRequest(BaseModel):
    files: list[FileIn]


class UrlRequest(BaseModel):
    url: str


def _error(status_code: int, detail: str, code: str | None = None) -> JSONResponse:
    content = {"detail": detail}
    if code:
        content["code"] = code
    return JSONResponse(status_code=status_code, content=content)


@router.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


@router.post("/analyze")
async def analyze(body: AnalyzeRequest):
    files = [
        SourceFile(
            name=f.name,
            language=Language.parse(f.language, f.name),
            content=f.content,
        )
        for f in body.files
    ]
    return to_dict(analyze_files(files))


@router.post("/fetch-resources")
async def fetch_page_resources(body: UrlRequest, request: Request):
    try:
        url = validate_url(body.url)
    except InvalidUrlError as e:
        return _error(400, str(e))

    try:
        files = await fetch_resources(
            url, request.app.state.config, transport=request.app.state.transport
        )
    except ResourceFetchError as e:
        logger.warning("Resource fetch for %s failed: %s", url, e)
        return _error(502, str(e))

    return to_dict(files)


@router.post("/audit")
async def audit(body: UrlRequest, request: Request):
    try:
        result = await run_url_audit(
            body.url, request.app.state.config, transport=request.app.state.transport
        )
    except InvalidUrlError as e:
        return _error(400, str(e))
    except AuditError as e:
        status = 504 if e.code == "timeout" else 502
        return _error(status, friendly_message(e), code=e.code)
    except InvalidAuditDataError as e:
        return _error(502, str(e), code="invalid_response")

    return to_dict(result)
