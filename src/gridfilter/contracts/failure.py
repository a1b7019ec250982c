"""Failure type for contract violations.

Contracts fail fast, loud, and once. All violations raise the same
exception type, allowing callers to handle stage bugs uniformly.
"""


class ContractViolation(RuntimeError):
    """Raised when a stage contract is violated.

    This indicates a bug in grid-building logic, not bad user input.
    It means a stage did not produce the invariants it promised.

    Key distinction:
    - ValueError: User/config error (Pydantic, argument checks)
    - GridConfigurationError: No cell meets the overlap threshold
    - ContractViolation: Stage bug (programmer error)
    """
    pass
