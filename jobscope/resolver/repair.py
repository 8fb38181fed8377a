"""Brace/bracket balancing for model replies cut off by token limits.

This only recovers truncation. It does not attempt to fix arbitrary syntax
errors: a reply broken in the middle stays broken.

Known limitation: a reply cut inside a string has that whole string replaced
by ``""``. When the cut lands inside an object key the result is still invalid
and the caller gets ``UnrepairableJson``.
"""

import re
from dataclasses import dataclass, field

_CLOSERS = {"{": "}", "[": "]"}
_TRAILING_COMMA_END_RE = re.compile(r",\s*$")
_COMMA_BEFORE_CLOSER_RE = re.compile(r",\s*([\]}])")


@dataclass
class _ScanState:
    open_stack: list[str] = field(default_factory=list)
    in_string: bool = False
    string_start: int = -1


def _scan(text: str) -> _ScanState:
    """Track unclosed containers and an unterminated string, ignoring string contents."""
    state = _ScanState()
    escaped = False
    for i, char in enumerate(text):
        if state.in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                state.in_string = False
            continue
        if char == '"':
            state.in_string = True
            state.string_start = i
        elif char in _CLOSERS:
            state.open_stack.append(char)
        elif char in "}]" and state.open_stack:
            if _CLOSERS[state.open_stack[-1]] == char:
                state.open_stack.pop()
    return state


def repair_json(text: str) -> str:
    fixed = _TRAILING_COMMA_END_RE.sub("", text.strip())

    state = _scan(fixed)
    if state.in_string:
        fixed = fixed[: state.string_start] + '""'
        state = _scan(fixed)

    fixed += "".join(_CLOSERS[c] for c in reversed(state.open_stack))
    return _COMMA_BEFORE_CLOSER_RE.sub(r"\1", fixed)
