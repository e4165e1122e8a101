"""
Exception hierarchy for the audit engine.

Missing page features are never exceptions; they become ``fail`` or
``warning`` items.  Only conditions that prevent producing a result are
raised.
"""

from __future__ import annotations


class AuditError(Exception):
    """Base class for every error surfaced to callers of the audit engine."""


class FetchError(AuditError):
    """The target URL could not be retrieved (timeout, DNS, connection error)."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Could not reach {url}. Please check the URL and try again.")


class ReportRenderError(AuditError):
    """PDF layout or serialisation failed for an otherwise valid audit."""
