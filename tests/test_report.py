"""
Integration Tests: Report pipeline
===================================
Findings in emission order through categorize, sort, summarize, render.
"""
from collections import Counter

import pytest

from config import ReportSettings
from errors import TemplateError
from models import Category
from report import CategorySection, Report, build_report
from scope import ScopeEntry


class TestBuildReport:

    @pytest.fixture
    def example(self, finding):
        return [
            finding("performance", "medium", "N+1 query"),
            finding("security", "critical", "SQL injection"),
            finding("security", "medium", "Open redirect"),
        ]

    def test_example_sections_and_numbering(self, example):
        report = build_report(example)

        assert [s.category for s in report.sections] == [Category.SECURITY, Category.PERFORMANCE]
        assert [f.title for f in report.sections[0].findings] == ["SQL injection", "Open redirect"]
        assert [f.title for f in report.sections[1].findings] == ["N+1 query"]

        text = report.text
        assert "### 1. SQL injection" in text
        assert "### 2. Open redirect" in text
        assert "### 1. N+1 query" in text
        assert "Architecture & SOLID" not in text
        assert "Code Quality" not in text
        assert text.index("Security & Reliability") < text.index("## ⚡ Performance")

    def test_example_summary(self, example):
        report = build_report(example)
        assert report.summary.as_dict() == {
            "critical": 1, "high": 0, "medium": 2, "low": 0, "total": 3,
        }

    def test_numbering_restarts_per_category(self, finding):
        findings = [finding("security", "low", f"s{i}") for i in range(4)]
        findings.append(finding("quality", "low", "q0"))
        text = build_report(findings).text
        assert "### 4. s3" in text
        assert "### 1. q0" in text

    def test_same_input_same_bytes(self, example):
        assert build_report(example).text == build_report(list(example)).text

    def test_findings_preserved(self, example):
        report = build_report(example)
        assert Counter(report.findings) == Counter(example)

    def test_stable_within_category(self, finding):
        findings = [
            finding("architecture", "medium", "first"),
            finding("architecture", "high", "urgent"),
            finding("architecture", "medium", "second"),
        ]
        report = build_report(findings)
        assert [f.title for f in report.findings] == ["urgent", "first", "second"]

    def test_zero_findings(self):
        report = build_report([])
        assert report.is_empty
        assert report.sections == ()
        assert report.summary.as_dict() == {
            "critical": 0, "high": 0, "medium": 0, "low": 0, "total": 0,
        }
        assert "No issues found." in report.text
        assert "## Next Steps" not in report.text

    def test_zero_findings_lists_scope(self):
        scope = [ScopeEntry("src/app.py", "modified", 4, 4, 1)]
        report = build_report([], checked=scope, residual_risk="Not run.")
        assert "- `src/app.py` (line 4)" in report.text
        assert report.text.endswith("**Residual risk:**\nNot run.\n")

    def test_settings_applied(self, example):
        settings = ReportSettings(badge_style="priority", category_order="performance,quality,security,architecture")
        report = build_report(example, settings)
        assert report.sections[0].category is Category.PERFORMANCE
        assert "P0 - Critical" in report.text

    def test_template_error_propagates(self, finding):
        with pytest.raises(TemplateError):
            build_report([finding(description="")])

    def test_accepts_generator(self, finding):
        report = build_report(finding(title=t) for t in ("a", "b"))
        assert report.summary.total == 2


class TestReportTypes:

    def test_section_heading(self, finding):
        section = CategorySection(category=Category.ARCHITECTURE, findings=(finding(),))
        assert section.heading == "🧩 Architecture & SOLID"

    def test_report_findings_flatten_sections(self, finding):
        a, b = finding(title="a"), finding("quality", "low", "b")
        report = build_report([b, a])
        assert isinstance(report, Report)
        assert report.findings == [a, b]
