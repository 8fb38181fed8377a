"""Reading-order reconstruction for positioned text fragments.

Coordinates are in PDF space: ``y`` grows upwards, so the first line of a
page has the largest ``y``.
"""

from collections.abc import Iterable
from dataclasses import dataclass

LINE_TOLERANCE = 5.0
SPACE_GAP = 1.0


@dataclass(frozen=True)
class TextFragment:
    text: str
    x0: float
    x1: float
    y: float


def group_lines(
    fragments: Iterable[TextFragment],
    line_tolerance: float = LINE_TOLERANCE,
) -> list[list[TextFragment]]:
    """Group fragments into lines, top of page first, each line left to right."""
    ordered = sorted(fragments, key=lambda f: (-f.y, f.x0))
    lines: list[list[TextFragment]] = []
    anchors: list[float] = []
    for fragment in ordered:
        if lines and abs(anchors[-1] - fragment.y) <= line_tolerance:
            lines[-1].append(fragment)
        else:
            lines.append([fragment])
            anchors.append(fragment.y)
    return [sorted(line, key=lambda f: f.x0) for line in lines]


def render_lines(
    lines: list[list[TextFragment]],
    space_gap: float = SPACE_GAP,
) -> str:
    rendered: list[str] = []
    for line in lines:
        parts: list[str] = []
        previous: TextFragment | None = None
        for fragment in line:
            if previous is not None and fragment.x0 - previous.x1 > space_gap:
                parts.append(" ")
            parts.append(fragment.text)
            previous = fragment
        rendered.append("".join(parts))
    return "\n".join(rendered)


def reading_order_text(
    fragments: Iterable[TextFragment],
    line_tolerance: float = LINE_TOLERANCE,
    space_gap: float = SPACE_GAP,
) -> str:
    return render_lines(group_lines(fragments, line_tolerance), space_gap)
