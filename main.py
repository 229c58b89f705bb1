import argparse
import logging
import sys
from pathlib import Path

from config import USE_MOCK, load_settings
from errors import ReportError
from findings_parser import parse_findings
from mock_data import MOCK_FINDINGS
from models import Category
from prompts import build_checklist_prompt
from renderer import render_inline_annotations
from report import build_report
from scope import load_scope, plan_batches

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="review-report",
        description="Render categorized code review findings as a Markdown report.",
    )
    parser.add_argument(
        "findings",
        nargs="?",
        help="Findings JSON file from the reviewing agent ('-' or omitted: stdin)",
    )
    parser.add_argument("--diff", help="Unified diff describing the review scope")
    parser.add_argument("--badge-style", choices=["emoji", "priority"])
    parser.add_argument(
        "--category-order",
        help="Comma-separated category order, e.g. security,architecture,quality,performance",
    )
    parser.add_argument(
        "--residual-risk", help="What the review could not verify (shown when clean)"
    )
    parser.add_argument(
        "--inline", action="store_true", help="Also print one-line inline annotations"
    )
    parser.add_argument(
        "--checklist",
        choices=[c.value for c in Category],
        help="Print the scanning checklist for a category and exit",
    )
    return parser


def read_findings_text(source: str | None) -> str:
    """Read the findings payload from a file, stdin, or the bundled sample."""
    if source is None and USE_MOCK:
        logger.info("[MOCK MODE - using bundled sample findings]")
        return MOCK_FINDINGS
    if source in (None, "-"):
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_arg_parser().parse_args(argv)

    if args.checklist:
        print(build_checklist_prompt(Category(args.checklist)))
        return 0

    try:
        settings = load_settings(
            badge_style=args.badge_style,
            category_order=args.category_order,
        )

        checked = []
        if args.diff:
            checked = load_scope(Path(args.diff).read_text(encoding="utf-8"))
            batches = plan_batches(checked, settings.max_batch_lines)
            logger.info(
                "Review scope: %d file(s), %d changed line(s), %d batch(es)",
                len(checked),
                sum(entry.changed_lines for entry in checked),
                len(batches),
            )

        findings = parse_findings(read_findings_text(args.findings))
        report = build_report(
            findings,
            settings,
            checked=checked,
            residual_risk=args.residual_risk,
        )

    except ReportError as e:
        logger.error("Report error: %s", e)
        return 1
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except OSError as e:
        logger.error("Could not read input: %s", e)
        return 1

    print(report.text, end="")

    if args.inline and not report.is_empty:
        print()
        for line in render_inline_annotations(report.findings, settings):
            print(line)

    return 0


if __name__ == "__main__":
    sys.exit(main())
