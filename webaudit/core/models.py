"""
Pydantic models for input validation and sanitisation.

All user-facing inputs (CLI arguments, file paths, target URLs, …) are
funnelled through these models *before* being used by any audit logic.  This
ensures:

  * Type coercion  (e.g. "15" → 15 for timeouts)
  * Early validation  with clear, actionable error messages
  * Sanitisation  (scheme normalisation, empty strings, …)

Pydantic v2 is required (``pydantic>=2.0``).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Column names: letters, digits, underscores, hyphens, spaces
_COLUMN_NAME_RE = re.compile(r"^[\w\- ]+$")


# ── Private helpers ───────────────────────────────────────────────────────────

def normalize_url(url: str) -> str:
    """Strip whitespace and default the scheme to ``https://``."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def _validate_target_url(raw: str) -> str:
    """Normalise a user-supplied URL and check it has a hostname.

    Raises:
        ValueError: If the URL is empty or has no hostname.
    """
    if not raw or not raw.strip():
        raise ValueError("A URL is required.")
    url = normalize_url(raw)
    host = urlparse(url).hostname
    if not host or ("." not in host and host != "localhost"):
        raise ValueError(f"URL '{raw}' has no valid hostname.")
    return url


# ── auditor.py model ──────────────────────────────────────────────────────────

class AuditRequestConfig(BaseModel):
    """Validated input configuration for the ``webaudit`` single-URL CLI."""

    model_config = ConfigDict(str_strip_whitespace=True)

    url: str = Field(..., description="Page to audit; https:// is assumed.")
    json_out: Optional[Path] = Field(
        default=None,
        description="Where to write the JSON payload.",
    )
    pdf: Optional[Path] = Field(
        default=None,
        description="Where to write the PDF report.",
    )
    use_ai: bool = Field(
        default=True,
        description="Request LLM-written narrative for the PDF report.",
    )
    timeout: int = Field(
        default=15,
        ge=1,
        le=60,
        description="Fetch timeout in seconds.",
    )

    @field_validator("url")
    @classmethod
    def url_must_be_auditable(cls, v: str) -> str:
        return _validate_target_url(v)

    @field_validator("json_out", "pdf")
    @classmethod
    def parent_dir_must_exist(cls, v: Optional[Path]) -> Optional[Path]:
        if v is not None and not v.resolve().parent.exists():
            raise ValueError(f"Output directory not found: '{v.parent}'.")
        return v


# ── batch_audit.py model ──────────────────────────────────────────────────────

class BatchAuditConfig(BaseModel):
    """Validated input configuration for the ``webaudit-batch`` CLI."""

    model_config = ConfigDict(str_strip_whitespace=True)

    input_csv: Path = Field(
        ...,
        description="CSV file with one URL per row.",
    )
    output: Path = Field(
        default=Path("Results/audit_scores.csv"),
        description="Path of the output CSV.",
    )
    url_column: str = Field(
        default="url",
        min_length=1,
        description="Name of the column holding URLs.",
    )
    limit: Optional[int] = Field(
        default=None,
        gt=0,
        description="Cap on number of URLs audited (for testing).",
    )
    timeout: int = Field(
        default=15,
        ge=1,
        le=60,
        description="Fetch timeout in seconds, per URL.",
    )

    @field_validator("input_csv")
    @classmethod
    def input_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Input CSV not found: '{v}'.")
        return v

    @field_validator("url_column")
    @classmethod
    def column_name_is_plain(cls, v: str) -> str:
        if not _COLUMN_NAME_RE.match(v):
            raise ValueError(f"Column name '{v}' contains unsupported characters.")
        return v
