"""Exception types raised outside the static analyzers."""

from __future__ import annotations


class FrontalError(Exception):
    """Base class for all frontal errors."""


class InvalidAuditDataError(FrontalError, ValueError):
    """The audit report is missing its categories or audits map."""


class InvalidUrlError(FrontalError, ValueError):
    """A URL that is not http(s)."""


class ResourceFetchError(FrontalError):
    """The page resources could not be downloaded."""


class AuditError(FrontalError):
    """The external audit provider call failed.

    ``code`` is one of ``timeout``, ``network_error``, ``http_error`` or
    ``invalid_response`` so callers can give different guidance.
    """

    def __init__(self, message: str, code: str, status: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status
