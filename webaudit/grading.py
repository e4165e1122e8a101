"""
Aggregation: overall score, letter grade, narrative templates and the
prioritised recommendation list.
"""

from __future__ import annotations

from webaudit.core.schemas import AuditCategory, AuditItem, round_half_up

MAX_RECOMMENDATIONS = 8

# Inclusive lower bounds, best grade first.
GRADE_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (90, "A+"),
    (85, "A"),
    (80, "A-"),
    (75, "B+"),
    (70, "B"),
    (65, "B-"),
    (60, "C+"),
    (55, "C"),
    (50, "C-"),
    (40, "D"),
)

GRADE_LABELS: dict[str, str] = {
    "A": "Excellent",
    "B": "Good",
    "C": "Fair",
    "D": "Poor",
    "F": "Critical",
}

# Listed ahead of every other failure, in this order.
CRITICAL_CHECKS: tuple[str, ...] = ("Page Title", "HTTPS/SSL")


def compute_overall_score(categories: list[AuditCategory]) -> int:
    """``100 * sum(score) / sum(max_score)`` rounded half up, 0 when nothing was scored."""
    total_max = sum(c.max_score for c in categories)
    if total_max <= 0:
        return 0
    total = sum(c.score for c in categories)
    return max(0, min(100, round_half_up(total / total_max * 100)))


def get_grade(score: int) -> str:
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def get_grade_label(grade: str) -> str:
    return GRADE_LABELS.get(grade[:1], "Critical")


def build_summary(score: int) -> str:
    if score >= 85:
        return (
            f"Great job! Your website scores {score}/100. There are a few minor "
            "improvements that could push it even higher."
        )
    if score >= 65:
        return (
            f"Your website scores {score}/100. There are several areas where targeted "
            "improvements could significantly boost your online presence."
        )
    return (
        f"Your website scores {score}/100. There are critical issues that are likely "
        "hurting your search rankings and user experience. Let's fix them."
    )


def build_grade_summary(score: int, passed: int, warnings: int, failed: int) -> str:
    """One-line verdict for the grade badge, driven by score band and counts."""
    total = passed + warnings + failed
    if score >= 85:
        head = "Your site is in excellent shape."
    elif score >= 65:
        head = "Your site has a solid base with room to grow."
    else:
        head = "Your site needs urgent attention."
    if failed:
        tail = (
            f"{passed} of {total} checks passed, {warnings} need attention and "
            f"{failed} critical issue(s) were found."
        )
    elif warnings:
        tail = f"{passed} of {total} checks passed and {warnings} need attention."
    else:
        tail = f"All {total} checks passed."
    return f"{head} {tail}"


def _critical_rank(item: AuditItem) -> int:
    if item.label in CRITICAL_CHECKS:
        return CRITICAL_CHECKS.index(item.label)
    return len(CRITICAL_CHECKS)


def collect_top_recommendations(categories: list[AuditCategory]) -> list[str]:
    """Failures before warnings, in category order, at most 8 entries.

    Within the failures, :data:`CRITICAL_CHECKS` come first so that a page
    with no title served over plain HTTP always opens its list with those two
    fixes, whatever else fails.  Everything else keeps category order.  Each
    entry is the item's recommendation, or its detail when it has none.
    """
    fails = [item for c in categories for item in c.items if item.status == "fail"]
    warnings = [item for c in categories for item in c.items if item.status == "warning"]
    fails.sort(key=_critical_rank)
    ordered = [item.recommendation or item.detail for item in fails + warnings]
    return ordered[:MAX_RECOMMENDATIONS]
