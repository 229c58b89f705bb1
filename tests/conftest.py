import pytest

from config import ReportSettings
from models import make_finding


@pytest.fixture
def settings():
    return ReportSettings()


@pytest.fixture
def finding():
    """Factory for findings with sensible defaults."""

    def _make(
        category="security",
        severity="medium",
        title="Issue",
        locations=(),
        description="Something is wrong.",
        fix=None,
    ):
        return make_finding(category, severity, title, locations, description, fix)

    return _make
