"""Dispersion-threshold fixation detection over one trial window.

Each sample ``z`` is compared with sample ``z-2``; skipping the sample in
between smooths single-sample jitter. Consecutive qualifying pairs form a
candidate run. A run is confirmed once it holds more than
``min_sample_run`` pairs, and a confirmed run is emitted as a fixation when
the first non-qualifying pair arrives or the window ends. Unconfirmed runs
are dropped.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .config import FixationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fixation:
    """Centroid and per-axis standard error of the points in one run."""

    x: float
    y: float
    se_x: float
    se_y: float
    # window-relative positions of the first and last sample in the run
    start: int
    end: int
    n_pairs: int

    @property
    def centroid(self) -> Tuple[float, float]:
        return self.x, self.y

    @property
    def dispersion(self) -> Tuple[float, float]:
        return self.se_x, self.se_y


class _Run:
    def __init__(self) -> None:
        self.indices: List[int] = []
        self.pairs: List[int] = []
        self.confirmed = False

    def add_pair(self, z: int, min_sample_run: int) -> None:
        self.indices.extend((z - 2, z))
        self.pairs.append(z)
        if len(self.pairs) > min_sample_run:
            self.confirmed = True


class FixationDetector:
    """Detect fixations in a 2xN array of gaze positions."""

    def __init__(self, config: Optional[FixationConfig] = None) -> None:
        self.config = config or FixationConfig()

    def iter_fixations(self, locations: np.ndarray) -> Iterator[Fixation]:
        locations = np.asarray(locations, dtype=float)
        if locations.ndim != 2 or locations.shape[0] != 2:
            raise ValueError(f"locations must have shape (2, N), got {locations.shape}")

        x, y = locations
        n = locations.shape[1]
        if n < 3:
            return

        cfg = self.config
        with np.errstate(invalid="ignore"):
            steady = (np.abs(x[2:] - x[:-2]) < cfg.min_saccade) & (
                np.abs(y[2:] - y[:-2]) < cfg.min_saccade
            )

        run = _Run()
        for z in range(2, n):
            if steady[z - 2]:
                run.add_pair(z, cfg.min_sample_run)
                continue
            if run.confirmed:
                fixation = self._summarise(x, y, run)
                if fixation is not None:
                    yield fixation
            run = _Run()

        if run.confirmed:
            fixation = self._summarise(x, y, run)
            if fixation is not None:
                yield fixation

    def detect(self, locations: np.ndarray) -> List[Fixation]:
        return list(self.iter_fixations(locations))

    def _summarise(self, x: np.ndarray, y: np.ndarray, run: _Run) -> Optional[Fixation]:
        idx = np.asarray(run.indices)
        px = x[idx]
        py = y[idx]
        cx = float(px.mean())
        cy = float(py.mean())
        missing = self.config.missing_value
        if cx == missing or cy == missing:
            logger.debug("Dropping run at samples %d-%d: no gaze recorded", idx[0], idx[-1])
            return None

        root_n = math.sqrt(len(idx))
        return Fixation(
            x=cx,
            y=cy,
            se_x=float(px.std(ddof=1)) / root_n,
            se_y=float(py.std(ddof=1)) / root_n,
            start=int(idx[0]),
            end=int(idx[-1]),
            n_pairs=len(run.pairs),
        )


def detect_fixations(locations: np.ndarray, cfg: Optional[FixationConfig] = None) -> List[Fixation]:
    return FixationDetector(cfg).detect(locations)


def fixated_sample_count(fixations: List[Fixation]) -> int:
    """Number of window samples covered by the given fixations."""
    return sum(f.end - f.start + 1 for f in fixations)


__all__ = ["Fixation", "FixationDetector", "detect_fixations", "fixated_sample_count"]
