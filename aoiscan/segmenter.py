"""Slice a recorded session into per-trial sample windows.

Walks the message events in order. ``TRIAL <n> ... START`` opens a trial,
``Stimulus ON`` marks the first sample of the window and the response or
timeout message marks the last one. An onset only counts for the trial it
follows; a trial without its own ``Stimulus ON`` yields no window. Each
window carries the AOI layout that was on screen: block 1 until the trial
numbered ``block_switch_trial`` has finished, block 2 afterwards. The switch
happens on that trial's response or timeout marker, also when its own
window was dropped.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .config import SessionConfig
from .layouts import BLOCK1, BLOCK2, Layout
from .session import EventKind, EyeLinkSession

logger = logging.getLogger(__name__)

NO_TRIAL_START = "response before any trial start"
NO_STIMULUS_ONSET = "no stimulus onset marker for this trial"
TIMESTAMP_NOT_FOUND = "event timestamp not found in samples"


@dataclass(frozen=True)
class TrialWindow:
    """Inclusive sample range ``start..end`` for one trial."""

    trial_index: int  # 1-based count of trial starts seen so far
    trial_num: Optional[int]  # trial number written in the TRIAL message
    start: int
    end: int
    layout: Layout

    @property
    def is_empty(self) -> bool:
        return self.start > self.end


@dataclass(frozen=True)
class DroppedTrial:
    trial_index: int
    trial_num: Optional[int]
    reason: str

    @property
    def is_data_gap(self) -> bool:
        return self.reason == TIMESTAMP_NOT_FOUND


@dataclass
class Segmentation:
    windows: List[TrialWindow] = field(default_factory=list)
    dropped: List[DroppedTrial] = field(default_factory=list)

    @property
    def switched_at(self) -> Optional[int]:
        """Trial index of the first window shown with block 2, if any."""
        for window in self.windows:
            if window.layout is BLOCK2:
                return window.trial_index
        return None


def segment_trials(session: EyeLinkSession, config: Optional[SessionConfig] = None) -> Segmentation:
    cfg = config or SessionConfig()
    result = Segmentation()

    trial_index = 0
    trial_num: Optional[int] = None
    start: Optional[int] = None
    onset_seen = False
    switched = False

    for marker in session.markers():
        if marker.kind is EventKind.TRIAL_START:
            trial_index += 1
            trial_num = marker.trial_num
            start = None
            onset_seen = False
        elif marker.kind is EventKind.STIMULUS_ONSET:
            onset_seen = True
            start = session.sample_index(marker.timestamp)
            if start is None:
                logger.debug("No sample at stimulus onset %d", marker.timestamp)
        elif marker.kind is EventKind.RESPONSE_OR_TIMEOUT:
            end = session.sample_index(marker.timestamp)
            layout = BLOCK2 if switched else BLOCK1

            if trial_index == 0:
                result.dropped.append(DroppedTrial(0, None, NO_TRIAL_START))
                logger.warning("Response at %d precedes any trial start; skipped", marker.timestamp)
            elif not onset_seen:
                result.dropped.append(DroppedTrial(trial_index, trial_num, NO_STIMULUS_ONSET))
                logger.warning(
                    "Trial %d (TRIAL %s): no Stimulus ON marker; skipped", trial_index, trial_num
                )
            elif start is None or end is None:
                result.dropped.append(
                    DroppedTrial(trial_index, trial_num, TIMESTAMP_NOT_FOUND)
                )
                logger.warning(
                    "Trial %d (TRIAL %s): onset or response timestamp has no sample; skipped",
                    trial_index,
                    trial_num,
                )
            else:
                result.windows.append(TrialWindow(trial_index, trial_num, start, end, layout))
                logger.debug(
                    "Trial %d: samples %d-%d on %s", trial_index, start, end, layout.name
                )

            if not switched and trial_num == cfg.block_switch_trial:
                switched = True
                logger.info("Switching to %s after trial %d", BLOCK2.name, trial_index)
            start = None
            onset_seen = False

    return result


__all__ = [
    "NO_TRIAL_START",
    "NO_STIMULUS_ONSET",
    "TIMESTAMP_NOT_FOUND",
    "TrialWindow",
    "DroppedTrial",
    "Segmentation",
    "segment_trials",
]
