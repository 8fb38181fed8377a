import json
import re
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from jobscope.logging.logger import Log
from jobscope.resolver.models import (
    NoJsonFound,
    ParseError,
    StructuredRecord,
    UnrepairableJson,
)
from jobscope.resolver.repair import repair_json

MAX_JSON_CHARS = 100_000

_OUTERMOST_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


def locate_json(reply: str) -> str | None:
    """Outermost ``{...}`` span of *reply*, or its unterminated tail from the first ``{``."""
    match = _OUTERMOST_OBJECT_RE.search(reply)
    if match:
        return match.group(0)
    start = reply.find("{")
    if start == -1:
        return None
    return reply[start:]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StructuredResponseResolver:
    """Turns a free-form model reply into a decoded JSON object.

    Never raises on malformed replies: failures come back as ``NoJsonFound``
    or ``UnrepairableJson`` and the caller decides whether to ask the model
    again.
    """

    def __init__(
        self,
        *,
        max_json_chars: int = MAX_JSON_CHARS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._max_json_chars = max_json_chars
        self._clock = clock

    def resolve(
        self,
        reply: str,
        source: str | None = None,
    ) -> StructuredRecord | ParseError:
        """Decode the JSON object embedded in *reply*.

        When *source* is given, ``uploadedAt`` and ``fileName`` are attached
        to the decoded object.
        """
        candidate = locate_json(reply or "")
        if candidate is None:
            Log.warning("No JSON found in model reply")
            return NoJsonFound()
        if len(candidate) > self._max_json_chars:
            return UnrepairableJson(
                reason=f"Response JSON too large ({len(candidate)} chars)"
            )

        repaired = False
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError as exc:
            Log.warning(f"JSON parse failed, attempting repair: {exc}")
            outcome = self._repair(reply, candidate)
            if isinstance(outcome, UnrepairableJson):
                return outcome
            data, candidate = outcome
            repaired = True

        if not isinstance(data, dict):
            return UnrepairableJson(
                reason="JSON response must be an object", candidate=candidate
            )

        if source is not None:
            data["uploadedAt"] = self._timestamp()
            data["fileName"] = source
        return StructuredRecord(data=data, repaired=repaired)

    def _timestamp(self) -> str:
        stamp = self._clock().astimezone(timezone.utc)
        return stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    def _repair(self, reply: str, candidate: str) -> tuple[Any, str] | UnrepairableJson:
        # The greedy span of a truncated reply ends at its last inner closer.
        attempts = [candidate]
        tail = reply[reply.find("{"):]
        if tail != candidate and len(tail) <= self._max_json_chars:
            attempts.insert(0, tail)

        error: json.JSONDecodeError | None = None
        fixed = candidate
        for attempt in attempts:
            fixed = repair_json(attempt)
            Log.debug(f"Repaired JSON preview: {fixed[:200]}")
            try:
                return json.loads(fixed), fixed
            except json.JSONDecodeError as exc:
                error = exc
        Log.error(f"JSON repair failed: {error}")
        return UnrepairableJson(reason=str(error), candidate=fixed)
