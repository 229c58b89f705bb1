"""
Markdown rendering for review reports.

Rendering is a pure function of its inputs: the same sorted, categorized
findings and settings always give byte-identical text. Anything the
template needs but a finding lacks raises ``TemplateError``; nothing is
silently dropped.
"""

import logging
import re
from collections.abc import Iterable, Mapping, Sequence

from config import CATEGORY_DISPLAY, REMEDIATION_OPTIONS, ReportSettings
from errors import TemplateError
from models import Category, Detail, Finding, Severity, SeveritySummary

logger = logging.getLogger(__name__)

SEPARATOR = "---"
NO_ISSUES_HEADING = "## Review Result"
NO_ISSUES_STATEMENT = "✅ No issues found."
NEXT_STEPS_HEADING = "## Next Steps"
PROCEED_PROMPT = "**How would you like to proceed?**"

_BACKTICK_RUN = re.compile(r"`{3,}")


# ---------------------------------------------------------------------------
# Template checks
# ---------------------------------------------------------------------------
def _check_finding(finding: Finding) -> None:
    """Raise TemplateError when *finding* cannot fill the template."""
    title = getattr(finding, "title", None)
    if not isinstance(title, str) or not title.strip():
        raise TemplateError("Finding has no title")

    if not isinstance(getattr(finding, "severity", None), Severity):
        raise TemplateError(f"Finding {title!r} has no valid severity")

    description = getattr(finding, "description", None)
    if not isinstance(description, Detail) or (
        not description.text.strip() and description.code is None
    ):
        raise TemplateError(f"Finding {title!r} has an empty description")

    for location in getattr(finding, "locations", ()):
        if not location.path:
            raise TemplateError(f"Finding {title!r} has a location without a path")

    fix = getattr(finding, "fix", None)
    if fix is not None and not fix.text.strip() and fix.code is None:
        raise TemplateError(f"Finding {title!r} has an empty fix")


# ---------------------------------------------------------------------------
# Building blocks
# ---------------------------------------------------------------------------
def _fence(code: str) -> str:
    """Shortest backtick fence that the snippet itself cannot close."""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(code)), default=2)
    return "`" * max(3, longest + 1)


def _render_detail(label: str, detail: Detail) -> list[str]:
    """Labeled block: label line, then text, then an optional fenced snippet."""
    lines = [f"**{label}:**"]
    text = detail.text.strip()
    if text:
        lines.append(text)

    if detail.code is not None:
        if text:
            lines.append("")
        if detail.code.label:
            lines.append(detail.code.label.strip())
        code = detail.code.code.strip("\n")
        fence = _fence(code)
        lines.append(f"{fence}{detail.code.language.strip()}")
        lines.append(code)
        lines.append(fence)

    return lines


def render_finding(number: int, finding: Finding, settings: ReportSettings) -> list[str]:
    """Render one numbered finding as a list of lines."""
    _check_finding(finding)

    lines = [
        f"### {number}. {' '.join(finding.title.split())}",
        "",
        "**Status:**",
        settings.badge(finding.severity),
    ]

    if finding.locations:
        lines += ["", "**Files:**"]
        lines += [f"- `{location}`" for location in finding.locations]

    lines += [""] + _render_detail("Description", finding.description)

    if finding.fix is not None:
        lines += [""] + _render_detail("Fix", finding.fix)

    return lines


def render_section(
    category: Category,
    findings: Sequence[Finding],
    settings: ReportSettings,
) -> list[str]:
    """Heading plus findings numbered from 1, separated by rules."""
    icon, heading = CATEGORY_DISPLAY[category]
    lines = [f"## {icon} {heading}"]

    for number, finding in enumerate(findings, 1):
        if number > 1:
            lines += ["", SEPARATOR]
        lines += [""] + render_finding(number, finding, settings)

    return lines


def render_summary_line(summary: SeveritySummary, settings: ReportSettings) -> str:
    counts = ", ".join(
        f"{settings.badge(severity)}: {summary.count(severity)}" for severity in Severity
    )
    return f"Found {summary.total} issue(s): {counts}"


def render_next_steps(summary: SeveritySummary, settings: ReportSettings) -> list[str]:
    lines = [NEXT_STEPS_HEADING, "", render_summary_line(summary, settings), ""]
    lines.append(PROCEED_PROMPT)
    lines += [f"{i}. {option}" for i, option in enumerate(REMEDIATION_OPTIONS, 1)]
    return lines


def render_no_issues(
    checked: Sequence[str] = (),
    residual_risk: str | None = None,
) -> list[str]:
    """Explicit clean-review statement with what was checked and what was not."""
    lines = [NO_ISSUES_HEADING, "", NO_ISSUES_STATEMENT]

    if checked:
        lines += ["", "**Checked:**"]
        lines += [f"- {item}" for item in checked]

    if residual_risk and residual_risk.strip():
        lines += ["", "**Residual risk:**", residual_risk.strip()]

    return lines


# ---------------------------------------------------------------------------
# Full report
# ---------------------------------------------------------------------------
def render_report(
    sections: Mapping[Category, Sequence[Finding]],
    summary: SeveritySummary,
    settings: ReportSettings,
    checked: Sequence[str] = (),
    residual_risk: str | None = None,
) -> str:
    """
    Render the complete Markdown report.

    Args:
        sections: Category -> findings already sorted by severity
        summary: Severity counts for the Next Steps block
        settings: Badge style and category order
        checked: Scope descriptions listed when there are no findings
        residual_risk: Note on what the review could not verify

    Returns:
        The report text, ending with a single newline

    Raises:
        TemplateError: If a finding cannot fill the template
    """
    unplaced = [
        category.value
        for category, items in sections.items()
        if items and category not in settings.category_order
    ]
    if unplaced:
        raise TemplateError(f"No slot in the category order for: {', '.join(unplaced)}")

    blocks: list[list[str]] = []
    for category in settings.category_order:
        findings = sections.get(category)
        if findings:
            blocks.append(render_section(category, findings, settings))

    if blocks:
        blocks.append(render_next_steps(summary, settings))
    else:
        blocks.append(render_no_issues(checked, residual_risk))

    logger.debug("Rendered %d category section(s)", len(blocks) - 1)
    return "\n\n".join("\n".join(block) for block in blocks) + "\n"


# ---------------------------------------------------------------------------
# Inline annotations
# ---------------------------------------------------------------------------
def render_inline_annotation(finding: Finding, settings: ReportSettings) -> str:
    """One-line ``path:line: [badge] title: description`` marker."""
    title = getattr(finding, "title", None)
    if not isinstance(title, str) or not title.strip():
        raise TemplateError("Finding has no title")

    where = str(finding.locations[0]) if finding.locations else "General"
    text = " ".join(finding.description.text.split())
    marker = f"{where}: [{settings.badge(finding.severity)}] {' '.join(title.split())}"
    return f"{marker}: {text}" if text else marker


def render_inline_annotations(
    findings: Iterable[Finding], settings: ReportSettings
) -> list[str]:
    return [render_inline_annotation(finding, settings) for finding in findings]
