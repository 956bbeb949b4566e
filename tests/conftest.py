from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import pytest

from aoiscan.session import EyeLinkSession

MISSING = 1e8

# Cell centres on the block 1 layout (px)
BLOCK1_CENTRES = {
    "F": (640.0, 337.0),
    "AT1": (640.0, 472.0),
    "A1": (960.0, 472.0),
    "B1": (1280.0, 472.0),
    "A2": (960.0, 607.0),
    "B2": (1280.0, 607.0),
    "A3": (960.0, 742.0),
    "B3": (1280.0, 742.0),
}

# Cell centres on the block 2 layout (px)
BLOCK2_CENTRES = {
    "A1": (960.0, 432.0),
    "B1": (1280.0, 432.0),
    "A4": (960.0, 756.0),
    "B4": (1280.0, 756.0),
}


def dwell(x: float, y: float, n: int) -> List[Tuple[float, float]]:
    return [(x, y)] * n


@dataclass
class TrialSpec:
    trial_num: int
    gaze: Sequence[Tuple[float, float]]
    response: str = "RESPONSE LEFT"


@dataclass
class SessionBuilder:
    """Assemble EyeLink-style events and 1 kHz samples for synthetic trials."""

    start_time: int = 1000
    gap_samples: int = 5
    times: List[int] = field(default_factory=list)
    xs: List[float] = field(default_factory=list)
    ys: List[float] = field(default_factory=list)
    events: List[Tuple[int, str]] = field(default_factory=list)

    def _append(self, points: Sequence[Tuple[float, float]]) -> Tuple[int, int]:
        first = self.start_time + len(self.times)
        for x, y in points:
            self.times.append(self.start_time + len(self.times))
            self.xs.append(x)
            self.ys.append(y)
        return first, self.times[-1]

    def message(self, text: str, timestamp: Optional[int] = None) -> "SessionBuilder":
        if timestamp is None:
            timestamp = self.start_time + len(self.times)
        self.events.append((timestamp, text))
        return self

    def trial(self, spec: TrialSpec) -> "SessionBuilder":
        self._append(dwell(MISSING, MISSING, self.gap_samples))
        self.message(f"TRIAL {spec.trial_num} SET 1 START")
        onset, offset = self._append(spec.gaze)
        self.message("Stimulus ON", onset)
        self.message(spec.response, offset)
        self.message("TRIAL END", offset)
        return self

    def build(self) -> EyeLinkSession:
        events = pd.DataFrame(self.events, columns=["timestamp", "message"])
        samples = pd.DataFrame({"time": self.times, "gx": self.xs, "gy": self.ys})
        return EyeLinkSession(events=events, samples=samples)

    def edf_struct(self) -> dict:
        return {
            "FEVENT": [{"message": msg, "sttime": ts} for ts, msg in self.events],
            "FSAMPLE": {
                "time": np.asarray(self.times),
                "gx": np.vstack([self.xs, np.full(len(self.xs), MISSING)]),
                "gy": np.vstack([self.ys, np.full(len(self.ys), MISSING)]),
            },
        }


def fixation_path(*cells: str, centres=BLOCK1_CENTRES, n: int = 30) -> List[Tuple[float, float]]:
    """Gaze resting ``n`` samples on each cell in turn."""
    points: List[Tuple[float, float]] = []
    for cell in cells:
        points.extend(dwell(*centres[cell], n))
    return points


@pytest.fixture
def builder() -> SessionBuilder:
    return SessionBuilder()


@pytest.fixture
def two_block_session() -> EyeLinkSession:
    """Ten trials; trial 8 is the last one shown with the block 1 layout."""
    b = SessionBuilder()
    for trial_num in range(1, 11):
        if trial_num <= 8:
            gaze = fixation_path("A1", "B1")
        else:
            gaze = fixation_path("A4", "B4", centres=BLOCK2_CENTRES)
        b.trial(TrialSpec(trial_num, gaze))
    return b.build()
