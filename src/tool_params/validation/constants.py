"""Shared limits and canonical value sets used by parameter validation."""

DEFAULT_PAGE = 1
MIN_PAGE = 1
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100

# Sort tokens: optional '-' for descending, then a field name.
SORT_PATTERN = r"^-?[a-zA-Z][a-zA-Z0-9_]*$"

VALID_VULN_STATUSES: frozenset[str] = frozenset(
    {
        "Reported",
        "Suspicious",
        "Confirmed",
        "NotAProblem",
        "Remediated",
        "Fixed",
        "AutoRemediated",
    }
)

# Actionable statuses only (Fixed/Remediated excluded).
DEFAULT_VULN_STATUSES: tuple[str, ...] = ("Reported", "Suspicious", "Confirmed")
