"""Deterministic cleanup of extracted résumé text.

Processing flow:
1. Recover date patterns broken by extraction (split years, dash variants).
2. Replace every character outside the allow-list with a space.
3. Drop stray 1-2 digit tokens and runs of single letters (kerning noise).
4. Collapse horizontal whitespace and blank-line runs.
5. Drop repeated lines, keeping the first occurrence.
6. Cap the length at a sentence or word boundary.

Applying ``normalize`` to its own output returns it unchanged.
"""

import re

from jobscope.logging.logger import Log

MAX_NORMALIZED_LENGTH = 40_000
ELLIPSIS = "..."

_SPLIT_YEAR_RE = re.compile(
    r"(?<!\d)(?:(19|20)[ \t]+(\d)[ \t]+(\d)|([12])[ \t]+([09])[ \t]+(\d)[ \t]+(\d))(?!\d)"
)
_DASH = r"(?:[-‐‑‒–—―−]|\bto\b)"
_PRESENT_RE = re.compile(
    rf"\b((?:19|20)\d{{2}})[ \t]*{_DASH}[ \t]*(?:present|presnt|preset|current|now)\b",
    re.IGNORECASE,
)
_YEAR_RANGE_RE = re.compile(
    rf"\b((?:19|20)\d{{2}})[ \t]*{_DASH}[ \t]*((?:19|20)\d{{2}})\b",
    re.IGNORECASE,
)

_DISALLOWED_RE = re.compile(
    r"[^A-Za-z0-9À-ÖØ-öø-ÿ \t\n@\-_/:,;.()\[\]{}\"'!?+=]"
)
_SINGLE_LETTER_RUN_RE = re.compile(
    r"(?<!\S)(?:[^\W\d_][ \t]+){3,}[^\W\d_](?!\S)"
)
_SHORT_NUMBER_RE = re.compile(r"^\d{1,2}$")
_YEAR_RE = re.compile(
    r"^(?:19|20)\d{2}(?:-(?:(?:19|20)\d{2}|present))?$", re.IGNORECASE
)
_DATE_SEPARATORS = frozenset({"-", "/", ".", ":"})
_MONTHS = frozenset(
    {
        "jan", "january", "feb", "february", "mar", "march", "apr", "april",
        "may", "jun", "june", "jul", "july", "aug", "august", "sep", "sept",
        "september", "oct", "october", "nov", "november", "dec", "december",
        "present", "current",
    }
)

_HORIZONTAL_WS_RE = re.compile(r"[ \t]+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_SENTENCE_END_RE = re.compile(r"[.!?]")


def normalize_dates(text: str) -> str:
    """Rejoin split years and canonicalize year ranges to ``YYYY-YYYY``/``YYYY-Present``."""
    text = _SPLIT_YEAR_RE.sub(lambda m: "".join(g for g in m.groups() if g), text)
    text = _PRESENT_RE.sub(r"\1-Present", text)
    return _YEAR_RANGE_RE.sub(r"\1-\2", text)


def filter_characters(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return _DISALLOWED_RE.sub(" ", text)


def _is_date_context(token: str) -> bool:
    lowered = token.lower().rstrip(".,")
    return (
        lowered in _MONTHS
        or token in _DATE_SEPARATORS
        or bool(_YEAR_RE.match(lowered))
    )


def _drop_stray_numbers(line: str) -> str:
    tokens = line.split()
    kept = []
    for i, token in enumerate(tokens):
        if _SHORT_NUMBER_RE.match(token):
            previous = tokens[i - 1] if i > 0 else ""
            following = tokens[i + 1] if i + 1 < len(tokens) else ""
            if not (_is_date_context(previous) or _is_date_context(following)):
                continue
        kept.append(token)
    return " ".join(kept)


def remove_artifacts(text: str) -> str:
    text = "\n".join(_drop_stray_numbers(line) for line in text.split("\n"))
    return _SINGLE_LETTER_RUN_RE.sub(" ", text)


def collapse_whitespace(text: str) -> str:
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    return _BLANK_RUN_RE.sub("\n\n", text).strip()


def dedupe_lines(text: str) -> str:
    """Drop lines (longer than 3 chars) already seen, ignoring case."""
    seen: set[str] = set()
    kept: list[str] = []
    for line in text.split("\n"):
        key = line.strip().lower()
        if len(key) > 3:
            if key in seen:
                continue
            seen.add(key)
        kept.append(line)
    return _BLANK_RUN_RE.sub("\n\n", "\n".join(kept)).strip()


def truncate(text: str, max_length: int) -> str:
    """Cut at the last sentence end, else word boundary, else hard, and mark it."""
    if len(text) <= max_length:
        return text
    window = text[: max(max_length - len(ELLIPSIS), 0)]
    sentence_ends = [m.end() for m in _SENTENCE_END_RE.finditer(window)]
    if sentence_ends:
        cut = window[: sentence_ends[-1]]
    else:
        space = max(window.rfind(" "), window.rfind("\n"))
        cut = window[:space] if space > 0 else window
    return cut.rstrip() + ELLIPSIS


class TextNormalizer:
    """Pure text cleanup applied to extractor output before prompting."""

    def __init__(self, max_length: int = MAX_NORMALIZED_LENGTH) -> None:
        if max_length <= len(ELLIPSIS):
            raise ValueError("max_length must leave room for the ellipsis marker")
        self._max_length = max_length

    def normalize(self, text: str) -> str:
        if not text:
            return ""
        original_length = len(text)

        cleaned = normalize_dates(text)
        cleaned = filter_characters(cleaned)
        cleaned = remove_artifacts(cleaned)
        cleaned = collapse_whitespace(cleaned)
        # Filtering can expose ranges such as "2020 -* 2023" only now.
        cleaned = normalize_dates(cleaned)
        cleaned = dedupe_lines(cleaned)
        cleaned = truncate(cleaned, self._max_length)

        Log.debug(f"Normalized text: {original_length} -> {len(cleaned)} chars")
        return cleaned
