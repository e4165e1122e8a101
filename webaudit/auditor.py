"""
auditor.py — Single-page website audit.

Pipeline (strictly sequential, one request):
  1. Fetch the page (the only network step, hard timeout)
  2. Parse the HTML and run the seven category checks
  3. Keyword and link-profile analysis
  4. Aggregate into overall score, grade and narrative
  5. Optionally: LLM narrative (static fallback) and PDF report

Usage:
    python -m webaudit.auditor example.com --json-out Results/example.json
    python -m webaudit.auditor https://example.com --pdf Results/example.pdf --no-ai
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from urllib.parse import urlparse

import click
import requests
from dotenv import load_dotenv
from pydantic import ValidationError

from webaudit.ai_insights import generate_insights_outcome, static_fallback
from webaudit.backlinks import analyze_backlinks
from webaudit.checks import parse_html, run_all_checks
from webaudit.core.exceptions import AuditError
from webaudit.core.logging_config import get_logger, setup_pipeline_logging
from webaudit.core.models import AuditRequestConfig, normalize_url
from webaudit.core.schemas import AuditResult
from webaudit.fetcher import REQUEST_TIMEOUT, FetchedPage, fetch_page
from webaudit.grading import (
    build_grade_summary,
    build_summary,
    collect_top_recommendations,
    compute_overall_score,
    get_grade,
    get_grade_label,
)
from webaudit.keywords import analyze_keywords
from webaudit.pdf_report import generate_audit_pdf

logger = get_logger(__name__)


# ============================================================================
# PIPELINE
# ============================================================================

def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a ``Z``."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _year_of(timestamp: str) -> int:
    try:
        return datetime.fromisoformat(timestamp.replace("Z", "+00:00")).year
    except ValueError:
        return datetime.now(timezone.utc).year


def audit_page(page: FetchedPage, timestamp: str | None = None) -> AuditResult:
    """Run every analysis step over an already-fetched page.

    Pure given ``page`` and ``timestamp``: the same inputs always give the
    same result.

    Args:
        page:      Output of :func:`~webaudit.fetcher.fetch_page`.
        timestamp: ISO-8601 audit time; defaults to now (UTC).

    Returns:
        The complete :class:`AuditResult`.
    """
    timestamp = timestamp or utc_timestamp()
    soup = parse_html(page.html)

    categories = run_all_checks(soup, page)
    overall = compute_overall_score(categories)
    grade = get_grade(overall)
    passed, warnings, failed = (
        sum(c.count(status) for c in categories) for status in ("pass", "warning", "fail")
    )

    result = AuditResult(
        url=page.final_url,
        timestamp=timestamp,
        overall_score=overall,
        grade=grade,
        grade_label=get_grade_label(grade),
        grade_summary=build_grade_summary(overall, passed, warnings, failed),
        categories=categories,
        summary=build_summary(overall),
        top_recommendations=collect_top_recommendations(categories),
        keyword_analysis=analyze_keywords(soup, page.final_url, _year_of(timestamp)),
        backlink_insights=analyze_backlinks(soup, page.html, page.final_url),
    )
    logger.info(
        "Audit %s -> %d/100 (%s) | pass=%d warn=%d fail=%d",
        result.url, overall, grade,
        passed, warnings, failed,
    )
    return result


def run_audit(
    url: str,
    timeout: int = REQUEST_TIMEOUT,
    session: requests.Session | None = None,
) -> AuditResult:
    """Fetch ``url`` and audit it.

    Raises:
        FetchError: If the page cannot be retrieved.
    """
    logger.info("Auditing %s (timeout=%ds)", url, timeout)
    page = fetch_page(url, timeout=timeout, session=session)
    return audit_page(page)


def write_json(result: AuditResult, path: Path) -> Path:
    path.write_text(
        json.dumps(result.to_payload(), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info("JSON written to '%s'", path)
    return path


def write_pdf(result: AuditResult, path: Path, use_ai: bool = True) -> Path:
    """Render the PDF report, with LLM narrative when enabled and configured."""
    if use_ai:
        outcome = generate_insights_outcome(result)
        logger.info("Narrative source: %s", outcome.source)
        insights = outcome.insights
    else:
        insights = static_fallback(result)
    path.write_bytes(generate_audit_pdf(result, insights))
    logger.info("PDF written to '%s'", path)
    return path


def _run_name(url: str) -> str:
    """Log file prefix for one audit, e.g. ``audit_example.com``."""
    try:
        host = urlparse(normalize_url(url)).hostname
    except ValueError:
        host = None
    return f"audit_{host}" if host else "audit"


# ============================================================================
# CLI
# ============================================================================

@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("url")
@click.option(
    "--json-out",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the JSON result to this file.",
)
@click.option(
    "--pdf",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the PDF report to this file.",
)
@click.option(
    "--ai/--no-ai",
    "use_ai",
    default=True,
    show_default=True,
    help="Use the LLM for the PDF narrative (needs OPENAI_API_KEY).",
)
@click.option(
    "--timeout",
    type=int,
    default=REQUEST_TIMEOUT,
    show_default=True,
    help="Fetch timeout in seconds.",
)
@click.option(
    "--log-dir",
    type=click.Path(file_okay=False),
    default="Logs",
    show_default=True,
    help="Directory for the run log.",
)
@click.option(
    "--no-log-file",
    is_flag=True,
    default=False,
    help="Log to the console only.",
)
def main(
    url: str,
    json_out: str | None,
    pdf: str | None,
    use_ai: bool,
    timeout: int,
    log_dir: str,
    no_log_file: bool,
) -> None:
    """Audit one web page: SEO, performance, mobile, security, accessibility,
    social and content checks, with an optional PDF report.

    URL may omit the scheme; https:// is assumed.
    """
    load_dotenv()
    setup_pipeline_logging(
        log_dir=None if no_log_file else log_dir,
        run_name=_run_name(url),
    )
    logger.info("auditor.py started - url='%s'", url)

    try:
        config = AuditRequestConfig(
            url=url,
            json_out=Path(json_out) if json_out else None,
            pdf=Path(pdf) if pdf else None,
            use_ai=use_ai,
            timeout=timeout,
        )
    except ValidationError as exc:
        click.echo(f"Configuration error:\n{exc}", err=True)
        raise SystemExit(1)

    try:
        result = run_audit(config.url, timeout=config.timeout)
        if config.json_out:
            write_json(result, config.json_out)
        if config.pdf:
            write_pdf(result, config.pdf, use_ai=config.use_ai)
    except AuditError as exc:
        logger.error("Audit failed: %s", exc)
        click.echo(str(exc), err=True)
        raise SystemExit(1)

    click.echo(
        f"{result.url}: {result.overall_score}/100 "
        f"(grade {result.grade}, {result.grade_label})"
    )
    for i, rec in enumerate(result.top_recommendations[:3], start=1):
        click.echo(f"  {i}. {rec}")


if __name__ == "__main__":
    main()
