"""Review scope from a unified diff, using the unidiff library."""

import logging
from dataclasses import dataclass, field

from unidiff import PatchSet
from unidiff.errors import UnidiffParseError

from config import DEFAULT_MAX_BATCH_LINES

logger = logging.getLogger(__name__)


@dataclass
class FileDiff:
    """Parsed diff for a single file."""
    filename: str
    status: str                           # added, deleted, modified, renamed
    additions: int                        # count of added lines
    deletions: int                        # count of deleted lines
    added_lines: list[int] = field(default_factory=list)  # new-file line numbers


@dataclass(frozen=True)
class ScopeEntry:
    """One file under review and the line range that changed."""
    path: str
    status: str
    start_line: int
    end_line: int
    changed_lines: int

    def __str__(self) -> str:
        if self.start_line == self.end_line:
            return f"`{self.path}` (line {self.start_line})"
        return f"`{self.path}` (lines {self.start_line}-{self.end_line})"


def parse_diff(diff_text: str) -> list[FileDiff]:
    """
    Parse a unified diff into structured FileDiff objects.

    Args:
        diff_text: Raw unified diff string

    Returns:
        List of FileDiff objects, one per file, in diff order

    Raises:
        ValueError: If the text is not a valid unified diff
    """
    try:
        patch_set = PatchSet(diff_text)
    except UnidiffParseError as e:
        raise ValueError(f"Invalid unified diff: {e}") from e
    files = []

    for patched_file in patch_set:
        if patched_file.is_added_file:
            status = "added"
        elif patched_file.is_removed_file:
            status = "deleted"
        elif patched_file.is_rename:
            status = "renamed"
        else:
            status = "modified"

        added_lines = [
            line.target_line_no
            for hunk in patched_file
            for line in hunk
            if line.is_added
        ]

        files.append(FileDiff(
            filename=patched_file.path,
            status=status,
            additions=patched_file.added,
            deletions=patched_file.removed,
            added_lines=added_lines,
        ))

    return files


# File extensions to skip during review
SKIP_EXTENSIONS = {
    '.md', '.txt', '.rst', '.adoc',           # Docs
    '.lock',                                   # Lock files
    '.png', '.jpg', '.jpeg', '.gif', '.svg', '.ico', '.webp',  # Images
    '.woff', '.woff2', '.ttf', '.eot',        # Fonts
    '.csv', '.json', '.xml', '.yaml', '.yml', '.toml',  # Data
    '.min.js', '.min.css', '.map',            # Build artifacts
    '.exe', '.dll', '.so', '.dylib', '.pyc',  # Binary
    '.zip', '.tar', '.gz', '.pdf',            # Archives/docs
}

SKIP_FILENAMES = {
    'package-lock.json', 'yarn.lock', 'pnpm-lock.yaml',
    'Pipfile.lock', 'poetry.lock', 'composer.lock',
    'Gemfile.lock', 'Cargo.lock', 'uv.lock',
    '.gitignore', '.gitattributes', '.editorconfig',
    'LICENSE', 'LICENSE.md', 'LICENSE.txt',
}

SKIP_DIRECTORIES = {'node_modules/', 'vendor/', 'dist/', 'build/', '.git/', '__pycache__/', '.venv/'}


def should_review_file(filename: str) -> bool:
    """Check if file should be reviewed based on name/extension."""
    for skip_dir in SKIP_DIRECTORIES:
        if filename.startswith(skip_dir) or f'/{skip_dir}' in filename:
            return False

    basename = filename.split('/')[-1]
    if basename in SKIP_FILENAMES:
        return False

    lowered = filename.lower()
    return not any(lowered.endswith(ext) for ext in SKIP_EXTENSIONS)


def filter_files(files: list[FileDiff]) -> list[FileDiff]:
    """Drop deletions, files without added lines, and non-reviewable files."""
    return [
        file for file in files
        if should_review_file(file.filename)
        and file.status != 'deleted'
        and file.added_lines
    ]


def scope_entries(files: list[FileDiff]) -> list[ScopeEntry]:
    """One ScopeEntry per file, spanning its first to last added line."""
    return [
        ScopeEntry(
            path=file.filename,
            status=file.status,
            start_line=min(file.added_lines),
            end_line=max(file.added_lines),
            changed_lines=len(file.added_lines),
        )
        for file in files
        if file.added_lines
    ]


def plan_batches(
    entries: list[ScopeEntry],
    max_lines: int = DEFAULT_MAX_BATCH_LINES,
) -> list[list[ScopeEntry]]:
    """
    Split the scope into batches of at most *max_lines* changed lines.

    Entries keep their order. A single file larger than *max_lines* forms
    a batch of its own. Each batch is reviewed and reported independently.
    """
    if max_lines < 1:
        raise ValueError(f"max_lines must be >= 1, got {max_lines}")

    batches: list[list[ScopeEntry]] = []
    current: list[ScopeEntry] = []
    current_lines = 0

    for entry in entries:
        if current and current_lines + entry.changed_lines > max_lines:
            batches.append(current)
            current = []
            current_lines = 0

        current.append(entry)
        current_lines += entry.changed_lines

    if current:
        batches.append(current)

    logger.debug("Planned %d batch(es) for %d file(s)", len(batches), len(entries))
    return batches


def load_scope(diff_text: str) -> list[ScopeEntry]:
    """Parse, filter and summarise a diff into review scope entries."""
    all_files = parse_diff(diff_text)
    files = filter_files(all_files)
    logger.info(
        "Files in scope: %d (filtered from %d)",
        len(files),
        len(all_files),
    )
    return scope_entries(files)
