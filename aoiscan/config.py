"""Configuration dataclasses for fixation and scan-index analysis."""
from dataclasses import dataclass

from .errors import ConfigurationError


@dataclass(frozen=True)
class FixationConfig:
    """Configuration for the dispersion-based fixation detector."""

    # Max |dx| and |dy| between sample z and sample z-2 (screen px)
    min_saccade: float = 10.0
    # Qualifying pairs a run needs (strictly more than) before it counts
    min_sample_run: int = 20
    # EyeLink writes this value for samples with no gaze
    missing_value: float = 1e8

    def __post_init__(self) -> None:
        if self.min_saccade <= 0:
            raise ConfigurationError(f"min_saccade must be positive, got {self.min_saccade}")
        if self.min_sample_run < 0:
            raise ConfigurationError(f"min_sample_run must be >= 0, got {self.min_sample_run}")


@dataclass(frozen=True)
class SessionConfig:
    """Configuration for segmenting and persisting one recorded session."""

    block_switch_trial: int = 8
    fixation_capacity: int = 20
    event_field: str = "edfStruct"
    eye_index: int = 0

    def __post_init__(self) -> None:
        if self.fixation_capacity <= 0:
            raise ConfigurationError(
                f"fixation_capacity must be positive, got {self.fixation_capacity}"
            )
        if self.eye_index not in (0, 1):
            raise ConfigurationError(f"eye_index must be 0 or 1, got {self.eye_index}")


@dataclass(frozen=True)
class ScanIndexConfig:
    """Configuration for the horizontal/vertical scan-index pass."""

    trials_per_block: int = 8
    number_of_blocks: int = 2

    def __post_init__(self) -> None:
        if self.trials_per_block <= 0:
            raise ConfigurationError(
                f"trials_per_block must be positive, got {self.trials_per_block}"
            )
        if self.number_of_blocks <= 0:
            raise ConfigurationError(
                f"number_of_blocks must be positive, got {self.number_of_blocks}"
            )
