import numpy as np
import pytest
from scipy.io import savemat

from aoiscan.config import SessionConfig
from aoiscan.errors import ConfigurationError
from aoiscan.extractor import load_session
from aoiscan.segmenter import segment_trials
from aoiscan.session import EventKind, EyeLinkSession

from conftest import MISSING, TrialSpec, fixation_path


def _two_trials(builder):
    builder.trial(TrialSpec(1, fixation_path("A1", "B1")))
    builder.trial(TrialSpec(2, fixation_path("A2"), response="TIMEOUT"))
    return builder


def _write_mat(path, builder, field="edfStruct"):
    fevent = np.zeros(len(builder.events), dtype=[("message", object), ("sttime", np.int64)])
    for i, (ts, msg) in enumerate(builder.events):
        fevent[i] = (msg, ts)
    edf = builder.edf_struct()
    edf["FEVENT"] = fevent
    savemat(str(path), {field: edf})
    return path


def test_in_memory_structure_with_field(builder):
    edf = _two_trials(builder).edf_struct()
    session = load_session({"edfStruct": edf})

    assert isinstance(session, EyeLinkSession)
    assert len(session.samples) == len(builder.times)
    assert session.samples["gx"].tolist() == builder.xs
    kinds = [m.kind for m in session.markers()]
    assert kinds.count(EventKind.TRIAL_START) == 2
    assert kinds.count(EventKind.RESPONSE_OR_TIMEOUT) == 2


def test_bare_structure_and_eye_selection(builder):
    edf = _two_trials(builder).edf_struct()

    session = load_session(edf, SessionConfig(eye_index=1))

    assert (session.samples["gx"] == MISSING).all()


def test_existing_session_is_returned_unchanged(builder):
    session = _two_trials(builder).build()
    assert load_session(session) is session


def test_mat_file(tmp_path, builder):
    path = _write_mat(tmp_path / "Subject_1_eyeData.mat", _two_trials(builder))

    session = load_session(path)

    assert session.events["message"].tolist()[:3] == [
        "TRIAL 1 SET 1 START",
        "Stimulus ON",
        "RESPONSE LEFT",
    ]
    windows = segment_trials(session).windows
    assert [w.trial_num for w in windows] == [1, 2]
    assert windows[0].end - windows[0].start + 1 == 60


def test_mat_file_without_field(tmp_path, builder):
    path = _write_mat(tmp_path / "other.mat", _two_trials(builder), field="somethingElse")

    with pytest.raises(ConfigurationError, match="edfStruct"):
        load_session(path)


def test_missing_sections(builder):
    edf = _two_trials(builder).edf_struct()
    del edf["FSAMPLE"]

    with pytest.raises(ConfigurationError, match="FSAMPLE"):
        load_session(edf)


def test_sample_length_mismatch(builder):
    edf = _two_trials(builder).edf_struct()
    edf["FSAMPLE"]["gy"] = edf["FSAMPLE"]["gy"][:, :-1]

    with pytest.raises(ConfigurationError):
        load_session(edf)


@pytest.mark.parametrize("source", [42, 3.5, ["edfStruct"]])
def test_rejects_other_inputs(source):
    with pytest.raises(ConfigurationError):
        load_session(source)
