import pandas as pd
import pytest

from aoiscan.classifier import AOIClassifier, classify_fixations
from aoiscan.fixations import Fixation
from aoiscan.layouts import BLOCK1, BLOCK2, AOIRect, Layout


def _fixation(x, y):
    return Fixation(x=x, y=y, se_x=0.0, se_y=0.0, start=0, end=0, n_pairs=21)


def test_layout_tables_are_index_aligned():
    assert len(BLOCK1) == 12
    assert len(BLOCK2) == 15
    assert BLOCK1.labels[:3] == ("F", "A", "B")
    assert BLOCK2.labels[-2:] == ("A4", "B4")
    assert BLOCK2[7] == AOIRect(800, 378, 1120, 486, "A1")


def test_from_table_rejects_mismatched_labels():
    with pytest.raises(ValueError):
        Layout.from_table("broken", [(0, 0, 1, 1)], ["X", "Y"])


@pytest.mark.parametrize(
    "point, expected",
    [
        ((640.0, 337.0), "F"),
        ((960.0, 300.0), "A"),
        ((640.0, 700.0), "AT3"),
        ((960.0, 472.0), "A1"),
        ((1280.0, 607.0), "B2"),
        ((960.0, 750.0), "A3"),
        ((100.0, 100.0), None),
    ],
)
def test_block1_hits(point, expected):
    assert AOIClassifier(BLOCK1).label_for(*point) == expected


def test_same_point_differs_between_layouts():
    assert AOIClassifier(BLOCK1).label_for(960.0, 750.0) == "A3"
    assert AOIClassifier(BLOCK2).label_for(960.0, 750.0) == "A4"


def test_points_on_edges_are_outside():
    classifier = AOIClassifier(BLOCK1)
    assert classifier.label_for(800.0, 472.0) is None
    assert classifier.label_for(960.0, 405.0) is None


def test_overlapping_rects_resolve_to_first_declared():
    layout = Layout(
        "overlap",
        (AOIRect(0, 0, 100, 100, "first"), AOIRect(50, 50, 150, 150, "second")),
    )
    classifier = AOIClassifier(layout)

    assert classifier.label_for(75.0, 75.0) == "first"
    assert classifier.label_for(125.0, 125.0) == "second"


def test_classify_fixations_keeps_order():
    fixations = [_fixation(1280.0, 472.0), _fixation(10.0, 10.0), _fixation(960.0, 472.0)]
    assert classify_fixations(fixations, BLOCK1) == ["B1", None, "A1"]


def test_classify_frame_adds_aoi_column():
    df = pd.DataFrame({"x": [960.0, 5.0], "y": [472.0, 5.0]})
    result = AOIClassifier(BLOCK1).classify_frame(df)

    assert result["aoi"].tolist() == ["A1", None]
    assert "aoi" not in df.columns


def test_classify_frame_requires_columns():
    with pytest.raises(ValueError):
        AOIClassifier(BLOCK1).classify_frame(pd.DataFrame({"x": [1.0]}))
