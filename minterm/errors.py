"""Exceptions raised by the minimization engine."""


class MintermError(Exception):
    """Base class for all minterm errors."""


class StructuralError(MintermError):
    """The truth table violates a structural invariant."""


class PatternNotFound(StructuralError):
    """An input pattern has no row in the truth table."""


class CoverageError(MintermError):
    """A selected cover does not reproduce the required minterm set."""


class InvariantViolation(MintermError):
    """A caller broke an internal contract (e.g. minterm from a don't-care row)."""


class ResourceExhausted(MintermError):
    """A configured ceiling was exceeded.

    `limit` and `observed` are keywords so the exception survives pickling
    across the process pool.
    """

    def __init__(self, message: str, limit: int = None, observed: int = None):
        super().__init__(message)
        self.limit = limit
        self.observed = observed
