"""Load EyeLink EDF exports (``.mat``) into an :class:`EyeLinkSession`."""
from __future__ import annotations

import logging
import os
from typing import Any, Mapping, Sequence

import numpy as np
import pandas as pd
from scipy.io import loadmat

from .config import SessionConfig
from .errors import ConfigurationError
from .session import EyeLinkSession

logger = logging.getLogger(__name__)


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, np.ndarray):
        if value.size == 0:
            return ""
        if value.dtype.kind in ("U", "S"):
            return "".join(str(v) for v in value.ravel())
    return ""


def _event_records(fevent: Any) -> Sequence[Mapping[str, Any]]:
    # loadmat collapses a 1x1 struct array to a plain dict
    if isinstance(fevent, Mapping):
        return [fevent]
    if isinstance(fevent, np.ndarray):
        return list(fevent.ravel())
    return list(fevent)


def _eye_row(values: Any, n_samples: int, eye_index: int, name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    if arr.ndim == 1:
        row = arr
    elif arr.ndim == 2 and arr.shape[1] == n_samples:
        row = arr[min(eye_index, arr.shape[0] - 1)]
    elif arr.ndim == 2 and arr.shape[0] == n_samples:
        row = arr[:, min(eye_index, arr.shape[1] - 1)]
    else:
        raise ConfigurationError(f"FSAMPLE.{name} has unexpected shape {arr.shape}")
    if len(row) != n_samples:
        raise ConfigurationError(
            f"FSAMPLE.{name} has {len(row)} values but FSAMPLE.time has {n_samples}"
        )
    return row


def session_from_edf_struct(edf: Mapping[str, Any], eye_index: int = 0) -> EyeLinkSession:
    """Build a session from the ``edfStruct`` layout (``FEVENT``/``FSAMPLE``)."""
    for key in ("FEVENT", "FSAMPLE"):
        if key not in edf:
            raise ConfigurationError(f"EDF structure does not contain '{key}'.")

    fsample = edf["FSAMPLE"]
    if not isinstance(fsample, Mapping):
        raise ConfigurationError("FSAMPLE must be a structure with time, gx and gy fields.")
    missing = {"time", "gx", "gy"} - set(fsample)
    if missing:
        raise ConfigurationError(f"FSAMPLE missing fields: {', '.join(sorted(missing))}")

    time = np.asarray(fsample["time"]).ravel().astype(np.int64)
    samples = pd.DataFrame(
        {
            "time": time,
            "gx": _eye_row(fsample["gx"], len(time), eye_index, "gx"),
            "gy": _eye_row(fsample["gy"], len(time), eye_index, "gy"),
        }
    )

    timestamps = []
    messages = []
    for record in _event_records(edf["FEVENT"]):
        timestamps.append(int(np.asarray(record.get("sttime", 0)).ravel()[0]))
        messages.append(_as_text(record.get("message", "")))
    events = pd.DataFrame({"timestamp": pd.Series(timestamps, dtype="int64"), "message": messages})

    logger.debug("Loaded %d events and %d samples", len(events), len(samples))
    return EyeLinkSession(events=events, samples=samples)


def load_session(source: Any, config: SessionConfig | None = None) -> EyeLinkSession:
    """Load a session from a ``.mat`` path, an in-memory structure or a session.

    A mapping may either hold the configured field (``edfStruct`` by default)
    or be the EDF structure itself.
    """
    cfg = config or SessionConfig()

    if isinstance(source, EyeLinkSession):
        return source

    if isinstance(source, (str, os.PathLike)):
        data = loadmat(os.fspath(source), simplify_cells=True)
        if cfg.event_field not in data:
            raise ConfigurationError(
                f'The loaded .mat file does not contain "{cfg.event_field}".'
            )
        return session_from_edf_struct(data[cfg.event_field], cfg.eye_index)

    if isinstance(source, Mapping):
        edf = source[cfg.event_field] if cfg.event_field in source else source
        if not isinstance(edf, Mapping):
            raise ConfigurationError(f"'{cfg.event_field}' must be a structure.")
        return session_from_edf_struct(edf, cfg.eye_index)

    raise ConfigurationError(
        f"Input must be a file path or a structure, got {type(source).__name__}."
    )


__all__ = ["load_session", "session_from_edf_struct"]
