"""Tests for overlap ratios and threshold filtering."""

import numpy as np
import pytest
import geopandas as gpd
from shapely.geometry import Polygon, box

from gridfilter.grid import GridConfigurationError
from gridfilter.grid.overlap import RATIO_TOLERANCE, compute_overlap, filter_cells
from gridfilter.grid.raster import build_raster, raster_to_polygons

pytestmark = pytest.mark.unit


@pytest.fixture
def cells_2x2():
    return raster_to_polygons(build_raster((0, 0, 2, 2), 1))


def _region(geometry):
    return gpd.GeoSeries([geometry])


class TestComputeOverlap:

    def test_triangle_ratios(self, cells_2x2):
        """Lower-left triangle: diagonal cells half in, corner cells in or out."""
        region = _region(Polygon([(0, 0), (2, 0), (0, 2)]))
        table, pieces = compute_overlap(region, cells_2x2)

        assert table["cell_index"].tolist() == [1, 2, 3, 4]
        np.testing.assert_allclose(table["ratio"], [0.5, 0.0, 1.0, 0.5])
        np.testing.assert_allclose(table["cell_area"], 1.0)
        assert sorted(pieces.index) == [1, 3, 4]

    def test_ratio_keyed_by_index_not_position(self, cells_2x2):
        """Shuffled input rows produce the same per-index ratios."""
        region = _region(box(0, 0, 1.5, 2))
        expected, _ = compute_overlap(region, cells_2x2)
        shuffled, _ = compute_overlap(region, cells_2x2.iloc[[3, 1, 0, 2]])

        assert shuffled["cell_index"].tolist() == [1, 2, 3, 4]
        np.testing.assert_allclose(shuffled["ratio"], expected["ratio"])
        np.testing.assert_allclose(expected["ratio"], [1.0, 0.5, 1.0, 0.5])

    def test_touching_cell_has_zero_ratio(self, cells_2x2):
        """Sharing only an edge is not overlap."""
        region = _region(box(0, 0, 1, 2))
        table, pieces = compute_overlap(region, cells_2x2)

        np.testing.assert_allclose(table["ratio"], [1.0, 0.0, 1.0, 0.0])
        assert sorted(pieces.index) == [1, 3]

    def test_multipart_region_pieces_dissolved_per_cell(self, cells_2x2):
        """Two region parts inside one cell give one piece for that cell."""
        region = _region(box(0, 0, 0.25, 0.25).union(box(0.75, 0.75, 1, 1)))
        table, pieces = compute_overlap(region, cells_2x2)

        assert pieces.index.is_unique
        assert table.loc[table["cell_index"] == 3, "ratio"].item() == pytest.approx(0.125)

    def test_ratios_never_exceed_one(self, cells_2x2):
        region = _region(box(-5, -5, 5, 5))
        table, _ = compute_overlap(region, cells_2x2)
        assert (table["ratio"] <= 1.0).all()
        np.testing.assert_allclose(table["ratio"], 1.0)


class TestFilterCells:

    def _table(self, cells_2x2):
        region = _region(Polygon([(0, 0), (2, 0), (0, 2)]))
        return compute_overlap(region, cells_2x2)[0]

    def test_threshold_is_inclusive(self, cells_2x2):
        retained = filter_cells(self._table(cells_2x2), 0.5)
        assert retained["cell_index"].tolist() == [1, 3, 4]

    def test_full_threshold(self, cells_2x2):
        retained = filter_cells(self._table(cells_2x2), 1.0)
        assert retained["cell_index"].tolist() == [3]

    def test_ratio_just_below_one_still_full(self, cells_2x2):
        table = self._table(cells_2x2)
        table.loc[table["cell_index"] == 3, "ratio"] = 1.0 - RATIO_TOLERANCE / 10
        assert filter_cells(table, 1.0)["cell_index"].tolist() == [3]

    def test_nothing_retained_raises(self, cells_2x2):
        table = self._table(cells_2x2)
        table["ratio"] = 0.0
        with pytest.raises(GridConfigurationError, match="define a projection in meters"):
            filter_cells(table, 0.01)

    def test_result_sorted_by_index(self, cells_2x2):
        table = self._table(cells_2x2).iloc[::-1]
        retained = filter_cells(table, 0.5)
        assert retained["cell_index"].is_monotonic_increasing
        assert list(retained.index) == [0, 1, 2]
