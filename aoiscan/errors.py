"""Error and warning types raised by the analysis pipeline."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """Input or parameters are unusable; the whole run is aborted."""


class DataGapWarning(UserWarning):
    """An event timestamp had no matching sample and its trial was dropped."""


class EmptyResultWarning(UserWarning):
    """No fixation was recorded for a subject; a placeholder file was written."""
