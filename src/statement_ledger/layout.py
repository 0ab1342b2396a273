"""Reading-order reconstruction for positioned PDF text.

The document reader gives back words with page coordinates but no notion of
a line. A statement table printed in columns comes out scrambled if the words
are joined in stream order, so words are regrouped into logical lines by
their vertical position and then read left to right.

Vertical coordinates are bottom-origin: a larger ``y`` is higher on the page,
so lines are emitted in descending ``y``.

Clustering is greedy. Fragments are scanned top to bottom and each one joins
the *first* existing line whose representative ``y`` (the ``y`` of the
fragment that started it) is within the tolerance, otherwise it starts a new
line. Membership is measured against that representative only, so lines never
chain: with a tolerance of 4, fragments at 100, 97 and 95 give two lines
(100+97 and 95). Ties are broken by the scan order, which is fixed by sorting
on ``(-y, x, text)`` before clustering, so any permutation of the same
fragments produces the same text.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from .config import get_settings


@dataclass(frozen=True)
class PositionedFragment:
    """A run of text at a position on a page."""

    x: float
    y: int
    text: str

    @classmethod
    def from_raw(cls, x: float, y: float, text: str) -> "PositionedFragment":
        """Build a fragment, rounding ``y`` half-up to an integer row key."""
        return cls(x=float(x), y=math.floor(y + 0.5), text=text)


@dataclass
class LogicalLine:
    """Fragments judged to share a baseline."""

    y: int
    fragments: list[PositionedFragment] = field(default_factory=list)

    @property
    def text(self) -> str:
        ordered = sorted(self.fragments, key=lambda f: (f.x, f.text))
        return " ".join(f.text for f in ordered)


def cluster_lines(
    fragments: Iterable[PositionedFragment], tolerance: int | None = None
) -> list[LogicalLine]:
    """Group fragments into logical lines, top of page first.

    Args:
        fragments: Fragments of a single page, in any order
        tolerance: Maximum vertical distance to a line's representative
            ``y``; defaults to the ``line_y_tolerance`` setting

    Returns:
        Lines ordered top to bottom
    """
    if tolerance is None:
        tolerance = get_settings().line_y_tolerance

    kept = [f for f in fragments if f.text and f.text.strip()]
    kept.sort(key=lambda f: (-f.y, f.x, f.text))

    lines: list[LogicalLine] = []
    for fragment in kept:
        for line in lines:
            if abs(line.y - fragment.y) <= tolerance:
                line.fragments.append(fragment)
                break
        else:
            lines.append(LogicalLine(y=fragment.y, fragments=[fragment]))

    # Stable, so equal representatives keep their creation order
    lines.sort(key=lambda line: -line.y)
    return lines


def reconstruct_page(
    fragments: Iterable[PositionedFragment], tolerance: int | None = None
) -> str:
    """Rebuild one page as newline-joined logical lines."""
    return "\n".join(line.text for line in cluster_lines(fragments, tolerance))


def reconstruct_pages(
    pages: Iterable[Iterable[PositionedFragment]], tolerance: int | None = None
) -> list[str]:
    """Rebuild every page; returns one string per page."""
    return [reconstruct_page(page, tolerance) for page in pages]
