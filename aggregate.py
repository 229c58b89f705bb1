"""Grouping, severity ordering and counting of review findings."""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

from config import DEFAULT_CATEGORY_ORDER
from models import SEVERITY_ORDER, Category, Finding, SeveritySummary

logger = logging.getLogger(__name__)


def categorize(
    findings: Iterable[Finding],
    order: Sequence[Category] = DEFAULT_CATEGORY_ORDER,
) -> dict[Category, list[Finding]]:
    """
    Group findings by category.

    Every category in *order* gets a key, empty ones included, and keys
    follow *order*. Within a category findings keep their input order.

    Raises:
        ValueError: If a finding's category has no slot in *order*
    """
    grouped: dict[Category, list[Finding]] = {category: [] for category in order}

    for finding in findings:
        bucket = grouped.get(finding.category)
        if bucket is None:
            raise ValueError(
                f"Category {finding.category.value!r} is not in the category order"
            )
        bucket.append(finding)

    return grouped


def non_empty_sections(
    grouped: Mapping[Category, Sequence[Finding]],
) -> dict[Category, list[Finding]]:
    """Drop categories without findings, keeping the mapping's order."""
    return {category: list(items) for category, items in grouped.items() if items}


def sort_by_severity(findings: Iterable[Finding]) -> list[Finding]:
    """Most severe first; equal severities keep their input order."""
    return sorted(findings, key=lambda f: SEVERITY_ORDER[f.severity])


def summarize(findings: Iterable[Finding]) -> SeveritySummary:
    """Count findings per severity."""
    counts = Counter(finding.severity.value for finding in findings)
    summary = SeveritySummary(**counts)
    logger.debug("Severity summary: %s", summary.as_dict())
    return summary
