"""Recursive cleanup of string values in decoded model records."""

import html
import re
from typing import Any

MAX_STRING_LENGTH = 1000
_TRUNCATION_MARKER = "..."

_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")


def sanitize_string(value: str, max_length: int = MAX_STRING_LENGTH) -> str:
    sanitized = _SCRIPT_RE.sub("", value)
    sanitized = _TAG_RE.sub("", sanitized)
    sanitized = html.unescape(sanitized)
    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + _TRUNCATION_MARKER
    return sanitized.strip()


def sanitize_record(value: Any, max_length: int = MAX_STRING_LENGTH) -> Any:
    """Sanitize every string inside *value*; other scalars pass through."""
    if isinstance(value, str):
        return sanitize_string(value, max_length)
    if isinstance(value, list):
        return [sanitize_record(item, max_length) for item in value]
    if isinstance(value, dict):
        return {key: sanitize_record(item, max_length) for key, item in value.items()}
    return value
