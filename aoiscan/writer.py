"""Per-trial AOI label sequences and their CSV representation.

In memory each trial keeps a variable-length label sequence. On disk the
table is a header-less CSV with one row per trial counter: labels are
left-packed, slots past the last fixation hold ``NaN``, and trials without
a record are blank rows, so row ``i`` always belongs to trial ``i``.
"""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from .errors import EmptyResultWarning

logger = logging.getLogger(__name__)

NO_AOI_TEXT = "NaN"
_NO_AOI_TOKENS = {"", "NaN", "nan", "NA"}

LabelRow = List[Optional[str]]


@dataclass(frozen=True)
class TrialFixationRecord:
    trial_index: int
    labels: Tuple[Optional[str], ...]

    @property
    def length(self) -> int:
        return len(self.labels)

    def padded(self, capacity: int) -> LabelRow:
        """Labels followed by ``None`` up to ``capacity`` slots (never truncated)."""
        labels = list(self.labels)
        return labels + [None] * max(0, capacity - len(labels))


class FixationTable:
    """Records keyed by trial index; adding a trial again replaces its row."""

    def __init__(self, capacity: int = 20) -> None:
        self.capacity = capacity
        self._records: Dict[int, TrialFixationRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def add(self, record: TrialFixationRecord) -> None:
        self._records[record.trial_index] = record

    def extend(self, records: Iterable[TrialFixationRecord]) -> None:
        for record in records:
            self.add(record)

    @property
    def records(self) -> List[TrialFixationRecord]:
        return [self._records[k] for k in sorted(self._records)]

    @property
    def width(self) -> int:
        longest = max((r.length for r in self._records.values()), default=0)
        return max(self.capacity, longest)

    def label_rows(self) -> List[LabelRow]:
        """One padded row per trial index ``1..max``; missing trials are all ``None``."""
        if not self._records:
            return []
        width = self.width
        rows: List[LabelRow] = []
        for trial_index in range(1, max(self._records) + 1):
            record = self._records.get(trial_index)
            rows.append(record.padded(width) if record else [None] * width)
        return rows

    def to_frame(self) -> pd.DataFrame:
        """String table as written to disk."""
        if not self._records:
            return pd.DataFrame()
        width = self.width
        rows = []
        for trial_index in range(1, max(self._records) + 1):
            record = self._records.get(trial_index)
            if record is None:
                rows.append([""] * width)
            else:
                rows.append([NO_AOI_TEXT if lab is None else lab for lab in record.padded(width)])
        return pd.DataFrame(rows, index=pd.RangeIndex(1, len(rows) + 1, name="trial"))

    def write(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        if not self._records:
            warnings.warn(
                f"No fixations found. Creating empty file {path}.", EmptyResultWarning, stacklevel=2
            )
            logger.warning("No fixations found; writing empty placeholder %s", path)
            path.write_text("")
            return path

        self.to_frame().to_csv(path, header=False, index=False)
        logger.info("Wrote %d trial rows to %s", len(self._records), path)
        return path


def output_path_for(output_directory: str | Path, subject_code: object) -> Path:
    """``<output_directory>/function/<subject_code>.csv``"""
    return Path(output_directory) / "function" / f"{subject_code}.csv"


def read_fixation_table(path: str | Path) -> List[LabelRow]:
    """Read a table written by :meth:`FixationTable.write` back into label rows."""
    try:
        df = pd.read_csv(
            path, header=None, dtype=str, keep_default_na=False, skip_blank_lines=False
        )
    except pd.errors.EmptyDataError:
        return []
    return [
        [None if str(value).strip() in _NO_AOI_TOKENS else str(value).strip() for value in row]
        for row in df.itertuples(index=False, name=None)
    ]


__all__ = [
    "TrialFixationRecord",
    "FixationTable",
    "output_path_for",
    "read_fixation_table",
]
