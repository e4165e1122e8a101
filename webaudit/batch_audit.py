"""
batch_audit.py — Audit every URL of a CSV and write the scores back.

Each row is audited independently; a site that cannot be reached gets its
error message in ``audit_error`` and the batch carries on.

Usage:
    python -m webaudit.batch_audit Results/sites.csv -o Results/audit_scores.csv
    python -m webaudit.batch_audit sites.csv --url-column website --limit 20
"""

from __future__ import annotations

from pathlib import Path

import click
import pandas as pd
import requests
from dotenv import load_dotenv
from pydantic import ValidationError
from tqdm import tqdm

from webaudit.auditor import run_audit
from webaudit.core.exceptions import AuditError
from webaudit.core.logging_config import get_logger, setup_pipeline_logging
from webaudit.core.models import BatchAuditConfig
from webaudit.fetcher import REQUEST_TIMEOUT

logger = get_logger(__name__)

AUDIT_COLUMNS = [
    "overall_score",
    "grade",
    "fail_count",
    "warning_count",
    "top_recommendation",
    "audit_error",
]


def _is_blank(value: object) -> bool:
    return value is None or pd.isna(value) or not str(value).strip()


def run_batch_audit(
    input_path: str | Path,
    output_path: str | Path,
    url_column: str = "url",
    limit: int | None = None,
    timeout: int = REQUEST_TIMEOUT,
    session: requests.Session | None = None,
) -> str:
    """Audit every non-empty URL of ``url_column`` and append score columns.

    Args:
        input_path:  CSV containing a URL column.
        output_path: CSV written with :data:`AUDIT_COLUMNS` appended.
        url_column:  Name of the URL column.
        limit:       Audit at most this many rows (others keep empty columns).
        timeout:     Fetch timeout per URL, in seconds.
        session:     Shared :class:`requests.Session`; one is created if omitted.

    Returns:
        output_path (for chaining).

    Raises:
        KeyError: If ``url_column`` is missing from the CSV.
    """
    logger.info(
        "run_batch_audit('%s' -> '%s', column=%s, limit=%s)",
        input_path, output_path, url_column, limit,
    )
    df = pd.read_csv(input_path)
    if url_column not in df.columns:
        raise KeyError(f"Column '{url_column}' not found in {input_path}")

    for col in AUDIT_COLUMNS:
        df[col] = None

    targets = [idx for idx in df.index if not _is_blank(df.at[idx, url_column])]
    if limit is not None:
        targets = targets[:limit]
    logger.info("  Sites to audit: %d", len(targets))

    http = session or requests.Session()
    audited = 0
    for idx in tqdm(targets, desc="Audit", unit="site"):
        url = str(df.at[idx, url_column]).strip()
        try:
            result = run_audit(url, timeout=timeout, session=http)
        except AuditError as exc:
            logger.warning("  Audit error for '%s': %s", url, exc)
            df.at[idx, "audit_error"] = str(exc)
            continue

        audited += 1
        df.at[idx, "overall_score"] = result.overall_score
        df.at[idx, "grade"] = result.grade
        df.at[idx, "fail_count"] = result.count("fail")
        df.at[idx, "warning_count"] = result.count("warning")
        df.at[idx, "top_recommendation"] = (
            result.top_recommendations[0] if result.top_recommendations else None
        )

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    logger.info(
        "run_batch_audit -> %d/%d sites audited, written to '%s'",
        audited, len(targets), output_path,
    )
    return str(output_path)


# ============================================================================
# CLI
# ============================================================================

@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("input_csv", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    default="Results/audit_scores.csv",
    show_default=True,
    help="Output CSV path.",
)
@click.option(
    "--url-column",
    default="url",
    show_default=True,
    help="Name of the column holding URLs.",
)
@click.option(
    "--limit",
    type=int,
    default=None,
    help="Audit at most N URLs (for testing).",
)
@click.option(
    "--timeout",
    type=int,
    default=REQUEST_TIMEOUT,
    show_default=True,
    help="Fetch timeout in seconds, per URL.",
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
    input_csv: str,
    output: str,
    url_column: str,
    limit: int | None,
    timeout: int,
    log_dir: str,
    no_log_file: bool,
) -> None:
    """Audit every URL listed in INPUT_CSV and write scores to a CSV."""
    load_dotenv()
    setup_pipeline_logging(log_dir=None if no_log_file else log_dir, run_name="batch_audit")
    logger.info("batch_audit.py started - input='%s'", input_csv)

    try:
        config = BatchAuditConfig(
            input_csv=Path(input_csv),
            output=Path(output),
            url_column=url_column,
            limit=limit,
            timeout=timeout,
        )
    except ValidationError as exc:
        click.echo(f"Configuration error:\n{exc}", err=True)
        raise SystemExit(1)

    try:
        run_batch_audit(
            config.input_csv,
            config.output,
            url_column=config.url_column,
            limit=config.limit,
            timeout=config.timeout,
        )
    except KeyError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
