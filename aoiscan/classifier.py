"""Map fixation centroids to AOI labels."""
from __future__ import annotations

from typing import Iterable, List, Optional

import pandas as pd

from .fixations import Fixation
from .layouts import Layout


class AOIClassifier:
    """Hit-test points against a layout; the first declared rectangle wins."""

    def __init__(self, layout: Layout) -> None:
        self.layout = layout

    def label_for(self, x: float, y: float) -> Optional[str]:
        """Label of the enclosing AOI, or ``None`` when the point hits none."""
        for rect in self.layout:
            if rect.contains(x, y):
                return rect.label
        return None

    def classify(self, fixations: Iterable[Fixation]) -> List[Optional[str]]:
        return [self.label_for(f.x, f.y) for f in fixations]

    def classify_frame(self, df: pd.DataFrame, x_col: str = "x", y_col: str = "y") -> pd.DataFrame:
        """Return a copy of ``df`` with an ``aoi`` column (``None`` outside AOIs)."""
        missing = {x_col, y_col} - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns: {', '.join(sorted(missing))}")

        df = df.copy()
        df["aoi"] = [self.label_for(x, y) for x, y in zip(df[x_col], df[y_col])]
        return df


def classify_fixations(fixations: Iterable[Fixation], layout: Layout) -> List[Optional[str]]:
    return AOIClassifier(layout).classify(fixations)


__all__ = ["AOIClassifier", "classify_fixations"]
