"""Data models for code review findings."""

from collections.abc import Iterable
from enum import Enum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from errors import ValidationError


class Category(str, Enum):
    """The four fixed report categories."""

    SECURITY = "security"
    ARCHITECTURE = "architecture"
    PERFORMANCE = "performance"
    QUALITY = "quality"


class Severity(str, Enum):
    """Finding severity, most urgent first."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return SEVERITY_ORDER[self]


SEVERITY_ORDER: dict[Severity, int] = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}

# Alternate priority vocabulary over the same four ranks
_PRIORITY_ALIASES: dict[str, str] = {
    "p0": Severity.CRITICAL.value,
    "p1": Severity.HIGH.value,
    "p2": Severity.MEDIUM.value,
    "p3": Severity.LOW.value,
}


class Location(BaseModel):
    """A file (and optionally a line) a finding points at."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1, description="File path relative to repo root")
    line: int | None = Field(default=None, ge=1, description="Line number")

    @model_validator(mode="before")
    @classmethod
    def _from_reference(cls, data):
        """Accept ``"path:line"`` strings and ``(path, line)`` pairs."""
        if isinstance(data, str):
            path, sep, line = data.strip().rpartition(":")
            if sep and path and line.isdigit():
                return {"path": path, "line": int(line)}
            return {"path": data.strip()}
        if isinstance(data, (tuple, list)) and len(data) == 2:
            return {"path": data[0], "line": data[1]}
        return data

    def __str__(self) -> str:
        if self.line is None:
            return self.path
        return f"{self.path}:{self.line}"


class CodeFragment(BaseModel):
    """A code snippet embedded in a description or fix."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(description="Snippet source")
    language: str = Field(default="", description="Fence language tag")
    label: str | None = Field(
        default=None, description="Line printed above the fence, e.g. 'Before:'"
    )


class Detail(BaseModel):
    """Free text plus an optional code fragment."""

    model_config = ConfigDict(frozen=True)

    text: str = ""
    code: CodeFragment | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_text(cls, data):
        if isinstance(data, str):
            return {"text": data}
        return data


class Finding(BaseModel):
    """A single review finding."""

    model_config = ConfigDict(frozen=True)

    category: Category = Field(
        description="security, architecture, performance, quality"
    )
    severity: Severity = Field(description="critical, high, medium, low (or P0-P3)")
    title: str = Field(description="Short human-readable summary")
    locations: tuple[Location, ...] = Field(
        default=(),
        validation_alias=AliasChoices("locations", "files"),
        description="Ordered (path, line) references; empty for repo-wide findings",
    )
    description: Detail = Field(default_factory=Detail)
    fix: Detail | None = Field(default=None, description="Absent when no fix applies")

    @field_validator("category", mode="before")
    @classmethod
    def _normalise_category(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("severity", mode="before")
    @classmethod
    def _normalise_severity(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            return _PRIORITY_ALIASES.get(value, value)
        return value

    @field_validator("title")
    @classmethod
    def _title_not_empty(cls, value: str) -> str:
        # Headings are single-line; collapse any embedded line breaks
        value = " ".join(value.split())
        if not value:
            raise ValueError("title must not be empty")
        return value

    @field_validator("fix", mode="before")
    @classmethod
    def _blank_fix_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class SeveritySummary(BaseModel):
    """Finding counts per severity across a whole report."""

    model_config = ConfigDict(frozen=True)

    critical: int = Field(default=0, ge=0)
    high: int = Field(default=0, ge=0)
    medium: int = Field(default=0, ge=0)
    low: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.critical + self.high + self.medium + self.low

    def count(self, severity: Severity) -> int:
        return getattr(self, severity.value)

    def as_dict(self) -> dict[str, int]:
        counts = {severity.value: self.count(severity) for severity in Severity}
        counts["total"] = self.total
        return counts


def describe_validation_error(error: PydanticValidationError) -> str:
    """Flatten a pydantic error into one readable line."""
    parts = []
    for item in error.errors():
        where = ".".join(str(part) for part in item["loc"]) or "finding"
        parts.append(f"{where}: {item['msg']}")
    return "; ".join(parts)


def make_finding(
    category: Category | str,
    severity: Severity | str,
    title: str,
    locations: Iterable | None = (),
    description: Detail | str = "",
    fix: Detail | str | None = None,
) -> Finding:
    """Construct a Finding, raising ``errors.ValidationError`` on bad input."""
    if locations is None:
        locations = ()
    elif isinstance(locations, Iterable) and not isinstance(locations, (str, bytes, dict)):
        locations = tuple(locations)
    try:
        return Finding(
            category=category,
            severity=severity,
            title=title,
            locations=locations,
            description=description,
            fix=fix,
        )
    except PydanticValidationError as e:
        raise ValidationError(
            f"Invalid finding {title!r}: {describe_validation_error(e)}"
        ) from e
