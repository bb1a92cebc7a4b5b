"""Helpers for reading JSON out of model replies."""

import json
import re

_FENCE_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?\s*```", re.DOTALL)


def strip_fences(text: str) -> str:
    """Return the body of the first markdown code fence, or the stripped text when there is none."""
    match = _FENCE_RE.search(text)
    return match.group(1).strip() if match else text.strip()


def parse_json_object(text: str) -> dict:
    """Parse a model reply that should hold exactly one JSON object.

    Fences and surrounding commentary are dropped first. Raises ValueError
    (json.JSONDecodeError included) when the body is not a JSON object.
    """
    data = json.loads(strip_fences(text))
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}.")
    return data
