"""Candidate stage contract.

Enforces the result invariants handed to downstream consumers: dense
1-based IDs and index-for-index alignment of points and cells.
"""

import numpy as np
import pandas as pd
import geopandas as gpd
from gridfilter.contracts.base import require


def assert_candidates(points: pd.DataFrame, cells: gpd.GeoDataFrame) -> None:
    """Enforce candidate output contract.

    Parameters
    ----------
    points : pd.DataFrame
        Candidate table with columns ID, X, Y

    cells : gpd.GeoDataFrame
        Retained cell geometry with an ID column

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        list(points.columns) == ["ID", "X", "Y"],
        f"Candidate contract violated: columns are {list(points.columns)}, expected ['ID', 'X', 'Y']"
    )
    require(
        len(points) == len(cells),
        f"Candidate contract violated: {len(points)} points but {len(cells)} cells"
    )
    require(len(points) > 0, "Candidate contract violated: empty candidate set")

    ids = points["ID"].to_numpy()
    require(
        np.array_equal(ids, np.arange(1, len(points) + 1)),
        "Candidate contract violated: IDs are not exactly 1..M in order"
    )
    require(
        np.array_equal(cells["ID"].to_numpy(), ids),
        "Candidate contract violated: cell IDs not aligned with point IDs"
    )
