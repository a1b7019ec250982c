"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from gridfilter.contracts.failure import ContractViolation


def require(condition: bool, message: str) -> None:
    """Enforce a stage contract.

    Called at stage boundaries to verify the preceding stage produced
    the guaranteed invariants. Fail-fast: no recovery, no fallback.

    Parameters
    ----------
    condition : bool
        The invariant that must be true. If False, ContractViolation is raised.

    message : str
        Error message explaining the contract violation (for debugging).

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require("x" in ds.coords, "Raster contract: missing 'x' coordinate")
    >>> require(len(cells) > 0, "Polygon contract: at least one cell expected")
    """
    if not condition:
        raise ContractViolation(message)
