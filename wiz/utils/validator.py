"""Request validation for the wizard entry points."""

import re

MAX_QUERY_LENGTH = 2000

_WHITESPACE_RE = re.compile(r"\s+")


def validate_input(query: str) -> str:
    """Normalize a request to a single line of text.

    Runs of whitespace (including the newlines of a pasted or piped request)
    collapse to one space. Raises ValueError for anything that is not a
    string, is blank, or exceeds MAX_QUERY_LENGTH after normalizing.
    """
    if not isinstance(query, str):
        raise ValueError("Query must be a non-empty string.")
    normalized = _WHITESPACE_RE.sub(" ", query).strip()
    if not normalized:
        raise ValueError("Query must be a non-empty string.")
    if len(normalized) > MAX_QUERY_LENGTH:
        raise ValueError(f"Query is longer than {MAX_QUERY_LENGTH} characters.")
    return normalized
