"""
Tests for SegmentLayout.
"""

import pytest

from models.errors import InvalidSegmentLayoutError
from models.segments import SegmentLayout


class TestSegmentLayout:

    def test_default_has_four_zones(self):
        layout = SegmentLayout()
        assert layout.count() == 4
        assert layout.ids == [0, 1, 2, 3]
        assert layout.center == 1.5

    def test_id_at_maps_index_to_zone(self):
        layout = SegmentLayout(["left", "center", "right"])
        assert layout.id_at(0) == "left"
        assert layout.id_at(2) == "right"
        assert layout.center == 1.0

    @pytest.mark.parametrize("index", [-1, 3])
    def test_id_at_out_of_range(self, index):
        with pytest.raises(IndexError):
            SegmentLayout([5, 6, 7]).id_at(index)

    def test_for_each_in_ascending_order(self):
        seen = []
        SegmentLayout([10, 20, 30]).for_each(lambda i, zid: seen.append((i, zid)))
        assert seen == [(0, 10), (1, 20), (2, 30)]

    def test_iterates_index_and_id(self):
        assert list(SegmentLayout([7, 8])) == [(0, 7), (1, 8)]
        assert len(SegmentLayout([7, 8])) == 2

    def test_empty_rejected(self):
        with pytest.raises(InvalidSegmentLayoutError) as exc:
            SegmentLayout([])
        assert exc.value.code == "INVALID_SEGMENT_LAYOUT"

    def test_duplicates_rejected(self):
        with pytest.raises(InvalidSegmentLayoutError):
            SegmentLayout([1, 2, 1])

    def test_single_segment(self):
        layout = SegmentLayout([42])
        assert layout.count() == 1
        assert layout.center == 0.0
