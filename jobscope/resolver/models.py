from dataclasses import dataclass
from typing import Any


@dataclass
class StructuredRecord:
    """Decoded JSON object from a model reply. Shape is caller-defined."""

    data: dict[str, Any]
    repaired: bool = False


@dataclass(frozen=True)
class NoJsonFound:
    reason: str = "No JSON object found in model reply"


@dataclass(frozen=True)
class UnrepairableJson:
    reason: str
    candidate: str = ""


ParseError = NoJsonFound | UnrepairableJson
