"""Data structures for one decoded EyeLink recording session.

The recording is held as two pandas DataFrames, mirroring the two facets of
an EDF export: the message events (``timestamp``, ``message``) and the raw
sample stream (``time``, ``gx``, ``gy``). Samples are looked up by exact
timestamp, the way the trial markers reference them.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

_TRIAL_NUMBER = re.compile(r"^TRIAL\s+(\d+)")


class EventKind(Enum):
    """Kinds of message events the segmenter reacts to."""

    TRIAL_START = auto()
    STIMULUS_ONSET = auto()
    RESPONSE_OR_TIMEOUT = auto()
    OTHER = auto()


@dataclass(frozen=True)
class EventMarker:
    timestamp: int
    message: str
    kind: EventKind
    trial_num: Optional[int] = None


def parse_marker(timestamp: int, message: str) -> EventMarker:
    """Classify one message event.

    The experiment writes ``TRIAL <n> SET <k> START`` at trial start,
    ``TRIAL END`` when it finishes (the 7th character is ``E``; it is not a
    trial), ``Stimulus ON`` at onset and ``RESPONSE LEFT/RIGHT`` or
    ``TIMEOUT`` at the end of the decision window. Messages of five
    characters or fewer are never markers.
    """
    if len(message) <= 5:
        return EventMarker(timestamp, message, EventKind.OTHER)

    if message.startswith("TRIAL"):
        if len(message) > 6 and message[6] != "E":
            match = _TRIAL_NUMBER.match(message)
            trial_num = int(match.group(1)) if match else None
            return EventMarker(timestamp, message, EventKind.TRIAL_START, trial_num)
        return EventMarker(timestamp, message, EventKind.OTHER)
    if message.startswith("Stim"):
        return EventMarker(timestamp, message, EventKind.STIMULUS_ONSET)
    if message.startswith(("RESP", "TIME")):
        return EventMarker(timestamp, message, EventKind.RESPONSE_OR_TIMEOUT)
    return EventMarker(timestamp, message, EventKind.OTHER)


@dataclass(eq=False)
class EyeLinkSession:
    """Message events plus the raw gaze samples of one subject."""

    events: pd.DataFrame
    samples: pd.DataFrame
    _time_index: Optional[Dict[int, int]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        missing = {"timestamp", "message"} - set(self.events.columns)
        if missing:
            raise ValueError(f"events missing columns: {', '.join(sorted(missing))}")
        missing = {"time", "gx", "gy"} - set(self.samples.columns)
        if missing:
            raise ValueError(f"samples missing columns: {', '.join(sorted(missing))}")

    def markers(self) -> List[EventMarker]:
        return [
            parse_marker(int(ts), "" if pd.isna(msg) else str(msg))
            for ts, msg in zip(self.events["timestamp"], self.events["message"])
        ]

    def sample_index(self, timestamp: int) -> Optional[int]:
        """Position of the first sample recorded exactly at ``timestamp``."""
        if self._time_index is None:
            index: Dict[int, int] = {}
            for pos, t in enumerate(self.samples["time"].to_numpy()):
                index.setdefault(int(t), pos)
            self._time_index = index
        return self._time_index.get(int(timestamp))

    def locations(self, start: int, end: int) -> np.ndarray:
        """Gaze positions ``start..end`` (inclusive) as a 2xN array of x and y rows."""
        if start > end:
            return np.empty((2, 0), dtype=float)
        gx = self.samples["gx"].to_numpy(dtype=float)[start : end + 1]
        gy = self.samples["gy"].to_numpy(dtype=float)[start : end + 1]
        return np.vstack([gx, gy])


__all__ = ["EventKind", "EventMarker", "EyeLinkSession", "parse_marker"]
