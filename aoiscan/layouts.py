"""AOI rectangles for the two table layouts shown during the experiment.

Both layouts share the same screen area (480..1440 x 270..810 px on a
1920x1080 display): a header row (feature, option A, option B), an
attribute column on the left and one A/B cell pair per attribute row. Block 1
shows three attributes, block 2 shows four, so the row height shrinks from
135 px to 108 px.

Rectangles are stored in declaration order, which is also the order the
classifier tests them in: headers, attribute cells, then alternative cells.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple


@dataclass(frozen=True)
class AOIRect:
    """Axis-aligned rectangle with a symbolic label."""

    x_min: float
    y_min: float
    x_max: float
    y_max: float
    label: str

    def contains(self, x: float, y: float) -> bool:
        """Strict containment on both axes; points on an edge are outside."""
        return self.x_min < x < self.x_max and self.y_min < y < self.y_max


@dataclass(frozen=True)
class Layout:
    """Ordered set of AOI rectangles sharing one coordinate space."""

    name: str
    rects: Tuple[AOIRect, ...]

    def __len__(self) -> int:
        return len(self.rects)

    def __iter__(self) -> Iterator[AOIRect]:
        return iter(self.rects)

    def __getitem__(self, index: int) -> AOIRect:
        return self.rects[index]

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(rect.label for rect in self.rects)

    @classmethod
    def from_table(
        cls,
        name: str,
        bounds: Sequence[Tuple[float, float, float, float]],
        labels: Sequence[str],
    ) -> "Layout":
        """Pair a bounds table with a label table of the same length."""
        if len(bounds) != len(labels):
            raise ValueError(
                f"Layout '{name}' has {len(bounds)} rectangles but {len(labels)} labels"
            )
        rects = tuple(AOIRect(*box, label=label) for box, label in zip(bounds, labels))
        return cls(name=name, rects=rects)


_BLOCK1_BOUNDS = [
    # headers
    (480, 270, 800, 405),
    (800, 270, 1120, 405),
    (1120, 270, 1440, 405),
    # attribute column
    (480, 405, 800, 540),
    (480, 540, 800, 675),
    (480, 675, 800, 810),
    # alternatives
    (800, 405, 1120, 540),
    (1120, 405, 1440, 540),
    (800, 540, 1120, 675),
    (1120, 540, 1440, 675),
    (800, 675, 1120, 810),
    (1120, 675, 1440, 810),
]
_BLOCK1_LABELS = ["F", "A", "B", "AT1", "AT2", "AT3", "A1", "B1", "A2", "B2", "A3", "B3"]

_BLOCK2_BOUNDS = [
    # headers
    (480, 270, 800, 378),
    (800, 270, 1120, 378),
    (1120, 270, 1440, 378),
    # attribute column
    (480, 378, 800, 486),
    (480, 486, 800, 594),
    (480, 594, 800, 702),
    (480, 702, 800, 810),
    # alternatives
    (800, 378, 1120, 486),
    (1120, 378, 1440, 486),
    (800, 486, 1120, 594),
    (1120, 486, 1440, 594),
    (800, 594, 1120, 702),
    (1120, 594, 1440, 702),
    (800, 702, 1120, 810),
    (1120, 702, 1440, 810),
]
_BLOCK2_LABELS = [
    "F", "A", "B",
    "AT1", "AT2", "AT3", "AT4",
    "A1", "B1", "A2", "B2", "A3", "B3", "A4", "B4",
]

BLOCK1 = Layout.from_table("block1", _BLOCK1_BOUNDS, _BLOCK1_LABELS)
BLOCK2 = Layout.from_table("block2", _BLOCK2_BOUNDS, _BLOCK2_LABELS)


__all__ = ["AOIRect", "Layout", "BLOCK1", "BLOCK2"]
