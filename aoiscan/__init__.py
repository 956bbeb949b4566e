"""Gaze-to-AOI fixation sequences and horizontal/vertical scanning indices."""

from .config import FixationConfig, ScanIndexConfig, SessionConfig
from .errors import ConfigurationError, DataGapWarning, EmptyResultWarning
from .layouts import AOIRect, Layout, BLOCK1, BLOCK2
from .session import EyeLinkSession
from .extractor import load_session
from .fixations import Fixation, FixationDetector, detect_fixations
from .classifier import AOIClassifier, classify_fixations
from .segmenter import TrialWindow, segment_trials
from .writer import FixationTable, TrialFixationRecord, read_fixation_table
from .pipeline import SessionResult, analyze_session, analyze_trials
from .scan_index import (
    ScanIndexClassifier,
    ScanIndexResult,
    TransitionClass,
    classify_transition,
    compute_scan_index,
    save_scan_index,
)

__all__ = [
    "FixationConfig",
    "ScanIndexConfig",
    "SessionConfig",
    "ConfigurationError",
    "DataGapWarning",
    "EmptyResultWarning",
    "AOIRect",
    "Layout",
    "BLOCK1",
    "BLOCK2",
    "EyeLinkSession",
    "load_session",
    "Fixation",
    "FixationDetector",
    "detect_fixations",
    "AOIClassifier",
    "classify_fixations",
    "TrialWindow",
    "segment_trials",
    "FixationTable",
    "TrialFixationRecord",
    "read_fixation_table",
    "SessionResult",
    "analyze_session",
    "analyze_trials",
    "ScanIndexClassifier",
    "ScanIndexResult",
    "TransitionClass",
    "classify_transition",
    "compute_scan_index",
    "save_scan_index",
]
