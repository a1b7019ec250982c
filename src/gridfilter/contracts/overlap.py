"""Overlap stage contract.

Enforces that every cell carries a finite overlap ratio in [0, 1]
keyed by its stable index.
"""

import numpy as np
import pandas as pd
from gridfilter.contracts.base import require


def assert_overlap_ratios(table: pd.DataFrame) -> None:
    """Enforce overlap stage contract.

    Parameters
    ----------
    table : pd.DataFrame
        Per-cell table from overlap.compute_overlap()

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    for column in ("cell_index", "cell_area", "overlap_area", "ratio"):
        require(
            column in table.columns,
            f"Overlap contract violated: missing '{column}' column"
        )

    require(
        table["cell_index"].is_unique,
        "Overlap contract violated: 'cell_index' is not unique"
    )

    ratio = table["ratio"].to_numpy(dtype=float)
    require(
        bool(np.all(np.isfinite(ratio))),
        "Overlap contract violated: non-finite ratio"
    )
    require(
        bool(np.all((ratio >= 0.0) & (ratio <= 1.0))),
        "Overlap contract violated: ratio outside [0, 1]"
    )
