from __future__ import annotations

from datetime import datetime

NO_DATE_SENTINEL = "NONE"
_DATE_FORMAT = "%Y-%m-%d"


def parse_inferred_date(raw: str | None) -> str | None:
    """
    Accept a model response only if it is a real calendar date in YYYY-MM-DD form.

    Examples:
        >>> parse_inferred_date(" 2024-03-01\\n")
        '2024-03-01'
        >>> parse_inferred_date("NONE") is None
        True
        >>> parse_inferred_date("2024-02-30") is None
        True
    """
    if raw is None:
        return None
    candidate = raw.strip()
    if not candidate or candidate.upper() == NO_DATE_SENTINEL:
        return None
    if len(candidate) != 10:
        return None
    try:
        datetime.strptime(candidate, _DATE_FORMAT)
    except ValueError:
        return None
    return candidate
