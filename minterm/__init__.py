"""Truth table to minimal nest of conditionals, by Quine-McCluskey cube merging."""

from .cube import Bit, Cube, compute, covers, merge, mergeable, try_merge
from .truth_tables import Entry, TruthTable, gray_code
from .quine_mccluskey import prime_implicants
from .cover import CoverMode, essential_implicants, exact_cover, greedy_cover, select_cover
from .equation import Equation
from .sharing import SharedBlock, SharingPlan, SharingStrategy, share_terms
from .config import MinimizationConfig
from .solver import MintermSolver, MinimizationResult, CostBreakdown
from .verify import verify_result
from .errors import (
    MintermError,
    StructuralError,
    PatternNotFound,
    CoverageError,
    ResourceExhausted,
    InvariantViolation,
)

__all__ = [
    "Bit",
    "Cube",
    "compute",
    "covers",
    "merge",
    "mergeable",
    "try_merge",
    "Entry",
    "TruthTable",
    "gray_code",
    "prime_implicants",
    "CoverMode",
    "essential_implicants",
    "exact_cover",
    "greedy_cover",
    "select_cover",
    "Equation",
    "SharedBlock",
    "SharingPlan",
    "SharingStrategy",
    "share_terms",
    "MinimizationConfig",
    "MintermSolver",
    "MinimizationResult",
    "CostBreakdown",
    "verify_result",
    "MintermError",
    "StructuralError",
    "PatternNotFound",
    "CoverageError",
    "ResourceExhausted",
    "InvariantViolation",
]
__version__ = "0.1.0"
