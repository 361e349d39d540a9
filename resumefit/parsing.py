"""Pull JSON fragments out of free-form oracle replies.

Oracle replies are prose that should contain one JSON literal somewhere in
the text. All regex scraping lives here so a structured-output oracle can
replace it without touching the callers.
"""
from __future__ import annotations

import json
import re
from typing import Any

from resumefit.errors import EmptyOrInvalidKeywords, MalformedOracleResponse

_ERROR_RE = re.compile(r'\{\s*"error"\s*:\s*"([^"]+)"')
_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def find_error_message(reply: str) -> str | None:
    """Message of an embedded ``{"error": "..."}`` object, if any."""
    m = _ERROR_RE.search(reply)
    return m.group(1) if m else None


def parse_keyword_array(reply: str) -> list[str]:
    """Parse the first ``[`` .. last ``]`` span of *reply* as a keyword list."""
    m = _ARRAY_RE.search(reply)
    if not m:
        raise MalformedOracleResponse()
    try:
        value = json.loads(m.group(0))
    except json.JSONDecodeError as exc:
        raise MalformedOracleResponse(
            f"Could not parse keyword array from AI response: {exc.msg}. Please try again."
        ) from exc

    if not isinstance(value, list) or not value:
        raise EmptyOrInvalidKeywords()
    if any(not isinstance(k, str) or not k.strip() for k in value):
        raise EmptyOrInvalidKeywords()
    return value


def parse_json_object(reply: str) -> dict[str, Any] | None:
    """First ``{`` .. last ``}`` span of *reply* as a dict; None when absent.

    Raises MalformedOracleResponse when a span exists but is not a JSON object.
    """
    m = _OBJECT_RE.search(reply)
    if not m:
        return None
    try:
        value = json.loads(m.group(0))
    except json.JSONDecodeError as exc:
        raise MalformedOracleResponse(f"Failed to parse AI response: {exc.msg}") from exc
    if not isinstance(value, dict):
        raise MalformedOracleResponse("Failed to parse AI response: expected a JSON object")
    return value
