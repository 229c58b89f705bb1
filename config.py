"""Shared configuration for ReviewReport."""

import logging
import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from models import Category, Severity

# ---------------------------------------------------------------------------
# Environment & logging (initialised once on first import)
# ---------------------------------------------------------------------------
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
USE_MOCK: bool = os.getenv("USE_MOCK", "false").lower() == "true"

DEFAULT_CATEGORY_ORDER: tuple[Category, ...] = (
    Category.SECURITY,
    Category.ARCHITECTURE,
    Category.PERFORMANCE,
    Category.QUALITY,
)
DEFAULT_MAX_BATCH_LINES = 500

# Category -> (icon, heading)
CATEGORY_DISPLAY: dict[Category, tuple[str, str]] = {
    Category.SECURITY: ("🔒", "Security & Reliability"),
    Category.ARCHITECTURE: ("🧩", "Architecture & SOLID"),
    Category.PERFORMANCE: ("⚡", "Performance"),
    Category.QUALITY: ("📐", "Code Quality"),
}

BadgeStyle = Literal["emoji", "priority"]

BADGE_STYLES: dict[str, dict[Severity, str]] = {
    "emoji": {
        Severity.CRITICAL: "🔴 Critical",
        Severity.HIGH: "🟠 High",
        Severity.MEDIUM: "🟡 Medium",
        Severity.LOW: "🟢 Low",
    },
    "priority": {
        Severity.CRITICAL: "P0 - Critical",
        Severity.HIGH: "P1 - High",
        Severity.MEDIUM: "P2 - Medium",
        Severity.LOW: "P3 - Low",
    },
}

REMEDIATION_OPTIONS: tuple[str, ...] = (
    "Fix all issues",
    "Fix Critical and High issues only",
    'Fix specific items (name the category and number, e.g. "Security 1")',
    "No changes, keep the review only",
)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------
def validate_category_order(order: tuple[Category, ...]) -> tuple[Category, ...]:
    """Check that *order* lists every category exactly once.

    Returns *order* unchanged on success; raises ``ValueError`` otherwise.
    """
    duplicates = sorted({c.value for c in order if order.count(c) > 1})
    if duplicates:
        raise ValueError(f"Category order repeats: {', '.join(duplicates)}")

    missing = [c.value for c in Category if c not in order]
    if missing:
        raise ValueError(
            f"Category order is missing: {', '.join(missing)}. "
            f"Expected all of {[c.value for c in Category]}."
        )
    return order


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------
class ReportSettings(BaseModel):
    """Display configuration for one report build."""

    model_config = ConfigDict(frozen=True)

    badge_style: BadgeStyle = Field(
        default="emoji", description="emoji badges or P0-P3 priority labels"
    )
    category_order: tuple[Category, ...] = Field(default=DEFAULT_CATEGORY_ORDER)
    max_batch_lines: int = Field(default=DEFAULT_MAX_BATCH_LINES, ge=1)

    @field_validator("badge_style", mode="before")
    @classmethod
    def _normalise_badge_style(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("category_order", mode="before")
    @classmethod
    def _split_category_order(cls, value):
        if isinstance(value, str):
            return tuple(part.strip().lower() for part in value.split(",") if part.strip())
        return value

    @field_validator("category_order")
    @classmethod
    def _complete_category_order(cls, value: tuple[Category, ...]):
        return validate_category_order(value)

    def badge(self, severity: Severity) -> str:
        """Display badge for *severity* in the configured vocabulary."""
        return BADGE_STYLES[self.badge_style][severity]


def load_settings(**overrides) -> ReportSettings:
    """Build settings from the environment; non-None *overrides* win."""
    values: dict = {
        "badge_style": os.getenv("REPORT_BADGE_STYLE", "emoji"),
        "category_order": os.getenv("REPORT_CATEGORY_ORDER") or DEFAULT_CATEGORY_ORDER,
        "max_batch_lines": os.getenv(
            "REPORT_MAX_BATCH_LINES", str(DEFAULT_MAX_BATCH_LINES)
        ),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})
    settings = ReportSettings(**values)
    logger.debug(
        "Report settings: badges=%s order=%s",
        settings.badge_style,
        ",".join(c.value for c in settings.category_order),
    )
    return settings
