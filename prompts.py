"""Checklist and output-contract text for the reviewing agent."""

from models import Category

# =============================================================================
# SHARED PREAMBLE - included in every checklist prompt
# =============================================================================

_SEVERITY_GUIDE = (
    "Severity definitions (use these exactly):\n"
    "- critical (P0): Exploitable or data-losing in production right now"
    " (injection, auth bypass, secret leak, corrupting writes)\n"
    "- high (P1): Will cause bugs, outages or serious design damage"
    " under normal use\n"
    "- medium (P2): Maintainability concern, code smell,"
    " or edge-case bug unlikely to hit in practice\n"
    "- low (P3): Nit, stylistic preference, minor improvement\n"
)

_SCOPE_RULES = (
    "Review only the changed files and lines you were given. "
    "Do NOT flag pre-existing patterns unless the change makes them worse.\n"
    "For change sets over 500 lines, review in batches and report each "
    "batch on its own.\n"
)

_CONFIDENCE = (
    "Only report issues you are CONFIDENT about. "
    "Do NOT speculate or report theoretical issues "
    "that require unlikely conditions.\n"
)

_FIX_QUALITY = (
    "Fixes must be concrete and actionable. "
    "Include a short code snippet when possible. "
    "Leave fix out entirely when no actionable fix applies.\n"
)

FINDING_FORMAT = (
    "Respond with ONLY valid JSON. No markdown, no explanation, no extra text.\n"
    'If no issues found, return: {"findings":[],"summary":"No issues found"}\n'
    "\n"
    "Required format:\n"
    '{"findings":[{"category":"security|architecture|performance|quality",'
    '"severity":"critical|high|medium|low",'
    '"title":"short title",'
    '"locations":["path/to/file.py:42"],'
    '"description":{"text":"what is wrong and why it matters",'
    '"code":{"code":"offending snippet","language":"python","label":"Current:"}},'
    '"fix":{"text":"what to change",'
    '"code":{"code":"fixed snippet","language":"python","label":"Suggested:"}}}],'
    '"summary":"one line"}\n'
    "\n"
    "description and fix may also be plain strings. "
    "locations may be empty for repository-wide findings.\n"
)


# =============================================================================
# CHECKLISTS - one per report category
# =============================================================================

SECURITY_CHECKLIST = (
    "Security & Reliability checklist. Ask yourself:\n"
    "- Can user input reach a query, shell command, template or file path"
    " without parameterisation or validation?\n"
    "- Are secrets, tokens or passwords hardcoded, logged or echoed"
    " in error messages?\n"
    "- Is every new endpoint or handler behind the right authentication"
    " and authorization check?\n"
    "- Is untrusted data deserialized (pickle, yaml.load, eval)?\n"
    "- Can a redirect target or outbound URL be controlled by the caller"
    " (open redirect, SSRF)?\n"
    "- Is weak or home-made cryptography used (MD5/SHA1 for passwords,"
    " static IVs)?\n"
    "- Are shared resources mutated without locking, or check-then-act"
    " sequences racy?\n"
    "- Are errors swallowed, retried forever, or left without timeouts?\n"
)

ARCHITECTURE_CHECKLIST = (
    "Architecture & SOLID checklist. Ask yourself:\n"
    "- Single responsibility: does this class or module have more than one"
    " reason to change?\n"
    "- Open/closed: does adding a new variant require editing a growing"
    " if/elif or switch chain?\n"
    "- Liskov substitution: does a subclass narrow inputs, widen outputs,"
    " or raise where the base does not?\n"
    "- Interface segregation: are callers forced to depend on methods"
    " they never use?\n"
    "- Dependency inversion: does high-level policy construct its own"
    " low-level collaborators instead of receiving them?\n"
    "- Is business logic leaking into transport, persistence or UI layers?\n"
    "- Is there duplicated logic that should be one abstraction, or an"
    " abstraction with a single trivial user?\n"
)

PERFORMANCE_CHECKLIST = (
    "Performance checklist. Ask yourself:\n"
    "- Is a query or remote call issued inside a loop (N+1)?\n"
    "- Is an unbounded result set loaded into memory where paging or"
    " streaming would do?\n"
    "- Is work repeated per request that could be computed once or cached?\n"
    "- Is a quadratic algorithm used on input that can grow"
    " (nested scans, list membership in a loop)?\n"
    "- Is blocking I/O done on an event loop or a hot path?\n"
    "- Are new queries missing an index for their filter or sort column?\n"
)

QUALITY_CHECKLIST = (
    "Code Quality checklist. Ask yourself:\n"
    "- Are functions too long or deeply nested to follow?\n"
    "- Do names say what things are and do?\n"
    "- Are errors handled at the right level, with useful messages?\n"
    "- Are there magic numbers or strings that should be named constants?\n"
    "- Is there dead code, unused variables, or commented-out code?\n"
    "- Do tests cover the new behaviour, including its edge cases?\n"
    "\n"
    "Do NOT flag stylistic preferences already enforced by formatters"
    " or linters.\n"
)

CHECKLISTS: dict[Category, str] = {
    Category.SECURITY: SECURITY_CHECKLIST,
    Category.ARCHITECTURE: ARCHITECTURE_CHECKLIST,
    Category.PERFORMANCE: PERFORMANCE_CHECKLIST,
    Category.QUALITY: QUALITY_CHECKLIST,
}


def build_checklist_prompt(category: Category) -> str:
    """Full instruction text for scanning one category."""
    return (
        f"You are reviewing code for the '{category.value}' category ONLY.\n"
        "\n"
        + _SCOPE_RULES
        + "\n"
        + CHECKLISTS[category]
        + "\n"
        + _SEVERITY_GUIDE
        + "\n"
        + _CONFIDENCE
        + _FIX_QUALITY
        + "\n"
        + FINDING_FORMAT
    )
