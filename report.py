"""Report assembly: findings in, rendered Markdown report out."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from aggregate import categorize, non_empty_sections, sort_by_severity, summarize
from config import CATEGORY_DISPLAY, ReportSettings
from models import Category, Finding, SeveritySummary
from renderer import render_report

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class CategorySection:
    """A non-empty category and its findings, most severe first."""

    category: Category
    findings: tuple[Finding, ...]

    @property
    def heading(self) -> str:
        icon, heading = CATEGORY_DISPLAY[self.category]
        return f"{icon} {heading}"


@dataclass(frozen=True)
class Report:
    """Result of one report build."""

    summary: SeveritySummary
    text: str
    sections: tuple[CategorySection, ...] = field(default_factory=tuple)

    @property
    def findings(self) -> list[Finding]:
        """All findings in rendered order."""
        return [finding for section in self.sections for finding in section.findings]

    @property
    def is_empty(self) -> bool:
        return not self.sections


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------
def build_report(
    findings: Iterable[Finding],
    settings: ReportSettings | None = None,
    checked: Iterable[object] = (),
    residual_risk: str | None = None,
) -> Report:
    """
    Build a review report from raw findings.

    Findings are grouped by category, ordered by severity within each
    category (stable), counted per severity and rendered.

    Args:
        findings: Findings in upstream emission order
        settings: Display settings; defaults to ``ReportSettings()``
        checked: Scope entries (or plain strings) listed if nothing was found
        residual_risk: Note on what the review could not verify

    Returns:
        Report with sections, summary and rendered text

    Raises:
        TemplateError: If a finding cannot fill the report template
    """
    settings = settings or ReportSettings()
    findings = list(findings)

    grouped = categorize(findings, settings.category_order)
    sections = {
        category: sort_by_severity(items)
        for category, items in non_empty_sections(grouped).items()
    }
    summary = summarize(findings)

    text = render_report(
        sections,
        summary,
        settings,
        checked=[str(item) for item in checked],
        residual_risk=residual_risk,
    )

    if findings:
        logger.info(
            "Built report: %d finding(s) in %d section(s)",
            summary.total,
            len(sections),
        )
    else:
        logger.info("Built report: no issues found")

    return Report(
        summary=summary,
        text=text,
        sections=tuple(
            CategorySection(category=category, findings=tuple(items))
            for category, items in sections.items()
        ),
    )
