"""Horizontal/vertical scanning index over AOI label sequences.

Only alternative cells (``A<row>``/``B<row>``) take part. For each pair of
consecutive labels in a trial:

- same column, different row: vertical transition
- different column, same row: horizontal transition
- repeats, diagonal moves, headers, attribute cells and ``NoAOI``: ignored

The trial index is ``H / (H + V)``. The block index is the same ratio over
the summed counts of all trials in the block, not the mean of the trial
indices. With no counted transition the index is ``NaN``.
"""
from __future__ import annotations

import logging
import math
import os
import re
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.io import savemat

from .config import ScanIndexConfig
from .errors import ConfigurationError
from .writer import read_fixation_table

logger = logging.getLogger(__name__)

_CELL = re.compile(r"^([AB])(\d+)$")


class TransitionClass(Enum):
    HORIZONTAL = auto()
    VERTICAL = auto()
    IGNORED = auto()


def parse_cell(label: Any) -> Optional[Tuple[str, int]]:
    """``"B3"`` -> ``("B", 3)``; anything that is not an alternative cell -> ``None``."""
    if not isinstance(label, str):
        return None
    match = _CELL.match(label)
    if match is None:
        return None
    return match.group(1), int(match.group(2))


def classify_transition(previous: Any, following: Any) -> TransitionClass:
    prev_cell = parse_cell(previous)
    next_cell = parse_cell(following)
    if prev_cell is None or next_cell is None:
        return TransitionClass.IGNORED

    (prev_col, prev_row), (next_col, next_row) = prev_cell, next_cell
    if prev_col == next_col and prev_row != next_row:
        return TransitionClass.VERTICAL
    if prev_col != next_col and prev_row == next_row:
        return TransitionClass.HORIZONTAL
    return TransitionClass.IGNORED


def count_transitions(labels: Sequence[Any]) -> Tuple[int, int]:
    """Return ``(horizontal, vertical)`` counts for one trial."""
    horizontal = vertical = 0
    for previous, following in zip(labels, labels[1:]):
        kind = classify_transition(previous, following)
        if kind is TransitionClass.HORIZONTAL:
            horizontal += 1
        elif kind is TransitionClass.VERTICAL:
            vertical += 1
    return horizontal, vertical


def scan_ratio(horizontal: int, vertical: int) -> float:
    total = horizontal + vertical
    return horizontal / total if total > 0 else float("nan")


@dataclass(frozen=True)
class TrialScanIndex:
    block_index: int
    trial_index: int  # within the block, 1-based
    horizontal: int
    vertical: int

    @property
    def scan_index(self) -> float:
        return scan_ratio(self.horizontal, self.vertical)


@dataclass(frozen=True)
class BlockScanIndex:
    block_index: int
    horizontal: int
    vertical: int
    n_trials: int

    @property
    def scan_index(self) -> float:
        return scan_ratio(self.horizontal, self.vertical)


@dataclass
class ScanIndexResult:
    config: ScanIndexConfig
    trials: List[TrialScanIndex] = field(default_factory=list)
    blocks: List[BlockScanIndex] = field(default_factory=list)

    def trial_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "block": [t.block_index for t in self.trials],
                "trial": [t.trial_index for t in self.trials],
                "scan_index": [t.scan_index for t in self.trials],
            },
            columns=["block", "trial", "scan_index"],
        )

    def block_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "block": [b.block_index for b in self.blocks],
                "scan_index": [b.scan_index for b in self.blocks],
            },
            columns=["block", "scan_index"],
        )

    def to_frames(self) -> Tuple[pd.DataFrame, pd.DataFrame]:
        return self.trial_frame(), self.block_frame()


def _rows_from_input(sequences: Any) -> List[List[Any]]:
    if isinstance(sequences, pd.DataFrame):
        return [
            [None if (isinstance(v, float) and math.isnan(v)) else v for v in row]
            for row in sequences.itertuples(index=False, name=None)
        ]
    if isinstance(sequences, (str, bytes)) or not isinstance(sequences, (Sequence, np.ndarray)):
        raise ConfigurationError(
            "Fixation sequences must be a table of AOI labels (DataFrame or list of rows), "
            f"got {type(sequences).__name__}."
        )

    rows = []
    for position, row in enumerate(sequences):
        if isinstance(row, (str, bytes)) or not isinstance(row, (Sequence, np.ndarray)):
            raise ConfigurationError(
                f"Row {position} of the fixation sequences is not a sequence of labels."
            )
        rows.append(list(row))
    return rows


class ScanIndexClassifier:
    """Chunk trials into blocks and compute trial and block scan indices."""

    def __init__(self, config: Optional[ScanIndexConfig] = None) -> None:
        self.config = config or ScanIndexConfig()

    def classify(self, sequences: Any) -> ScanIndexResult:
        cfg = self.config
        rows = _rows_from_input(sequences)
        required = cfg.trials_per_block * cfg.number_of_blocks
        used = min(len(rows), required)
        if len(rows) > required:
            logger.info(
                "Ignoring %d trial rows beyond %d blocks", len(rows) - required, cfg.number_of_blocks
            )
        elif len(rows) < required:
            logger.info("Only %d of %d expected trial rows available", len(rows), required)

        result = ScanIndexResult(config=cfg)
        for block in range(cfg.number_of_blocks):
            first = block * cfg.trials_per_block
            block_rows = rows[first : min(used, first + cfg.trials_per_block)]
            block_h = block_v = 0
            for offset, labels in enumerate(block_rows):
                h, v = count_transitions(labels)
                block_h += h
                block_v += v
                result.trials.append(TrialScanIndex(block + 1, offset + 1, h, v))
            result.blocks.append(BlockScanIndex(block + 1, block_h, block_v, len(block_rows)))
            logger.debug(
                "Block %d: %d trials, H=%d V=%d", block + 1, len(block_rows), block_h, block_v
            )
        return result

    def classify_file(self, input_path: str | Path) -> ScanIndexResult:
        return self.classify(read_fixation_table(input_path))


def compute_scan_index(sequences: Any, cfg: Optional[ScanIndexConfig] = None) -> ScanIndexResult:
    return ScanIndexClassifier(cfg).classify(sequences)


def save_scan_index(path: str | Path, result: ScanIndexResult) -> Path:
    """Write the result matrices and their parameters to a ``.mat`` file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    trial_results = np.array(
        [[t.block_index, t.trial_index, t.scan_index] for t in result.trials], dtype=float
    ).reshape(-1, 3)
    block_results = np.array([b.scan_index for b in result.blocks], dtype=float).reshape(-1, 1)
    savemat(
        os.fspath(path),
        {
            "trialResults": trial_results,
            "blockResults": block_results,
            "trialsPerBlock": result.config.trials_per_block,
            "numberOfBlocks": result.config.number_of_blocks,
        },
    )
    return path


__all__ = [
    "TransitionClass",
    "parse_cell",
    "classify_transition",
    "count_transitions",
    "scan_ratio",
    "TrialScanIndex",
    "BlockScanIndex",
    "ScanIndexResult",
    "ScanIndexClassifier",
    "compute_scan_index",
    "save_scan_index",
]
