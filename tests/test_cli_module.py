import numpy as np
from scipy.io import savemat

from aoiscan.cli import main

from conftest import BLOCK2_CENTRES, TrialSpec, fixation_path


def _session_mat(path, builder):
    for trial_num in range(1, 11):
        centres = {"A1": (960.0, 472.0), "B1": (1280.0, 472.0)} if trial_num <= 8 else BLOCK2_CENTRES
        builder.trial(TrialSpec(trial_num, fixation_path("A1", "B1", centres=centres)))
    fevent = np.zeros(len(builder.events), dtype=[("message", object), ("sttime", np.int64)])
    for i, (ts, msg) in enumerate(builder.events):
        fevent[i] = (msg, ts)
    edf = builder.edf_struct()
    edf["FEVENT"] = fevent
    savemat(str(path), {"edfStruct": edf})
    return path


def test_fixations_then_scan_index(tmp_path, builder, capsys):
    mat = _session_mat(tmp_path / "Subject_993_eyeData.mat", builder)

    main(["fixations", str(mat), "993", str(tmp_path / "out")])
    csv_path = tmp_path / "out" / "function" / "993.csv"
    assert csv_path.exists()
    assert "10 trials written" in capsys.readouterr().out

    saved = tmp_path / "scan.mat"
    main(["scan-index", str(csv_path), "--trials-per-block", "8", "--blocks", "2", "--save", str(saved)])
    out = capsys.readouterr().out
    assert "scan_index" in out
    assert saved.exists()
