"""Session-level orchestration: samples -> windows -> fixations -> AOI labels."""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from .classifier import AOIClassifier
from .config import FixationConfig, SessionConfig
from .errors import DataGapWarning
from .extractor import load_session
from .fixations import Fixation, FixationDetector, fixated_sample_count
from .segmenter import DroppedTrial, TrialWindow, segment_trials
from .session import EyeLinkSession
from .writer import FixationTable, TrialFixationRecord, output_path_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrialAnalysis:
    window: TrialWindow
    fixations: List[Fixation]
    labels: List[Optional[str]]

    @property
    def fixated_samples(self) -> int:
        return fixated_sample_count(self.fixations)


@dataclass
class SessionResult:
    table: FixationTable
    trials: List[TrialAnalysis] = field(default_factory=list)
    dropped: List[DroppedTrial] = field(default_factory=list)
    output_path: Optional[Path] = None

    @property
    def records(self) -> List[TrialFixationRecord]:
        return self.table.records

    @property
    def skipped_trials(self) -> int:
        return len(self.dropped)


def analyze_trials(
    session: EyeLinkSession,
    fixation_config: Optional[FixationConfig] = None,
    session_config: Optional[SessionConfig] = None,
    checkpoint_path: Optional[Path] = None,
) -> SessionResult:
    """Run detection and AOI classification for every trial window in ``session``.

    Trials where no fixation was detected get no record. If ``checkpoint_path``
    is given the table is rewritten after each recorded trial.
    """
    session_cfg = session_config or SessionConfig()
    detector = FixationDetector(fixation_config)

    segmentation = segment_trials(session, session_cfg)
    result = SessionResult(
        table=FixationTable(session_cfg.fixation_capacity), dropped=segmentation.dropped
    )

    for window in segmentation.windows:
        fixations = detector.detect(session.locations(window.start, window.end))
        labels = AOIClassifier(window.layout).classify(fixations)
        result.trials.append(TrialAnalysis(window, fixations, labels))
        logger.debug(
            "Trial %d: %d fixations, labels %s", window.trial_index, len(fixations), labels
        )

        if not fixations:
            continue
        result.table.add(TrialFixationRecord(window.trial_index, tuple(labels)))
        if checkpoint_path is not None:
            result.table.write(checkpoint_path)

    gaps = [d for d in result.dropped if d.is_data_gap]
    if gaps:
        warnings.warn(
            f"{len(gaps)} trial window(s) dropped: event timestamp not found in samples "
            f"(trials {', '.join(str(d.trial_index) for d in gaps)})",
            DataGapWarning,
            stacklevel=2,
        )

    logger.info(
        "Analyzed %d trial windows, %d with fixations, %d skipped",
        len(segmentation.windows),
        len(result.table),
        result.skipped_trials,
    )
    return result


def analyze_session(
    source: Any,
    subject_code: object,
    output_directory: str | Path,
    fixation_config: Optional[FixationConfig] = None,
    session_config: Optional[SessionConfig] = None,
    checkpoint: bool = True,
) -> SessionResult:
    """Analyze one subject and write ``<output_directory>/function/<subject_code>.csv``.

    ``source`` is a ``.mat`` path, an in-memory EDF structure or an
    :class:`EyeLinkSession`. With ``checkpoint`` (the default) the file is
    rewritten after every trial that produced fixations, so an interrupted run
    leaves the trials finished so far on disk.
    """
    session_cfg = session_config or SessionConfig()
    session = load_session(source, session_cfg)
    path = output_path_for(output_directory, subject_code)

    result = analyze_trials(
        session,
        fixation_config,
        session_cfg,
        checkpoint_path=path if checkpoint else None,
    )
    result.output_path = result.table.write(path)
    return result


__all__ = ["TrialAnalysis", "SessionResult", "analyze_trials", "analyze_session"]
