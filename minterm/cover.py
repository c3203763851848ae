"""
Minimal cover selection over a set of prime implicants.

Essential implicants are taken first. The remaining minterms are covered
either greedily or exactly, by formulating the covering problem as weighted
MaxSAT (Petrick's method) and handing it to RC2.
"""

import logging
from enum import Enum
from typing import Iterable, Optional

from pysat.examples.rc2 import RC2
from pysat.formula import WCNF

from .cube import Cube
from .errors import CoverageError

log = logging.getLogger(__name__)


class CoverMode(str, Enum):
    GREEDY = "greedy"
    EXACT = "exact"


def coverage(primes: Iterable[Cube], required: set[int]) -> dict[Cube, frozenset[int]]:
    """Map each implicant to the required minterms it covers."""
    return {p: frozenset(m for m in required if p.covers(m)) for p in primes}


def essential_implicants(primes: list[Cube], required: set[int]) -> list[Cube]:
    """Implicants that are the sole cover of at least one required minterm."""
    covering: dict[int, list[Cube]] = {m: [] for m in required}
    for p in primes:
        for m in required:
            if p.covers(m):
                covering[m].append(p)

    essential = {}
    for m in sorted(required):
        if len(covering[m]) == 1:
            essential.setdefault(covering[m][0], None)
        elif not covering[m]:
            raise CoverageError(f"no implicant covers minterm {m}")
    return sorted(essential, key=Cube.sort_key)


def _remove_redundant(
    selected: list[Cube],
    keep: set[Cube],
    covered: dict[Cube, frozenset[int]],
    required: set[int],
) -> list[Cube]:
    """Drop terms (latest first) whose minterms the others already cover."""
    result = list(selected)
    for impl in reversed(selected):
        if impl in keep:
            continue
        rest = set()
        for other in result:
            if other != impl:
                rest |= covered[other]
        if rest >= required:
            result.remove(impl)
    return result


def greedy_cover(primes: list[Cube], required: set[int]) -> list[Cube]:
    """
    Greedy set cover after essential implicants.

    Picks the implicant covering the most uncovered minterms; ties go to the
    lexicographically smallest literal sequence.
    """
    covered = coverage(primes, required)
    essential = essential_implicants(primes, required)

    uncovered = set(required)
    for impl in essential:
        uncovered -= covered[impl]

    candidates = sorted((p for p in primes if p not in essential), key=Cube.sort_key)
    selected = list(essential)

    while uncovered:
        best_impl = None
        best_covers: frozenset[int] = frozenset()

        for impl in candidates:
            gain = covered[impl] & uncovered
            if len(gain) > len(best_covers):
                best_impl = impl
                best_covers = gain

        if best_impl is None:
            raise CoverageError(f"cannot cover: {sorted(uncovered)[:5]}...")

        selected.append(best_impl)
        candidates.remove(best_impl)
        uncovered -= best_covers

    return _remove_redundant(selected, set(essential), covered, required)


def exact_cover(
    primes: list[Cube],
    required: set[int],
    max_implicants: Optional[int] = None,
) -> Optional[list[Cube]]:
    """
    Minimum cover via MaxSAT.

    - Hard clauses: every uncovered minterm must be covered
    - Soft clauses: penalize each implicant, term count first, literals second

    Returns None when the cyclic core has more than `max_implicants`
    candidates.
    """
    covered = coverage(primes, required)
    essential = essential_implicants(primes, required)

    uncovered = set(required)
    for impl in essential:
        uncovered -= covered[impl]
    if not uncovered:
        return essential

    candidates = sorted(
        (p for p in primes if p not in essential and covered[p] & uncovered),
        key=Cube.sort_key,
    )
    if max_implicants is not None and len(candidates) > max_implicants:
        log.info("exact cover skipped: %d candidates above ceiling %d",
                 len(candidates), max_implicants)
        return None

    wcnf = WCNF()

    # Variable mapping: candidate index -> SAT variable (1-indexed)
    impl_vars = {impl: i + 1 for i, impl in enumerate(candidates)}

    for m in sorted(uncovered):
        wcnf.append([impl_vars[p] for p in candidates if p.covers(m)])

    # One extra term must outweigh any literal saving
    term_weight = sum(p.num_literals for p in candidates) + 1
    for impl in candidates:
        wcnf.append([-impl_vars[impl]], weight=term_weight + impl.num_literals)

    with RC2(wcnf) as solver:
        model = solver.compute()
        if model is None:
            raise CoverageError("MaxSAT solver found no cover")
        chosen = set(v for v in model if v > 0)

    selected = essential + [p for p in candidates if impl_vars[p] in chosen]
    return _remove_redundant(selected, set(essential), covered, required)


def select_cover(
    primes: list[Cube],
    required: set[int],
    mode: CoverMode = CoverMode.GREEDY,
    exact_max_implicants: Optional[int] = None,
) -> list[Cube]:
    """
    Choose a minimal subset of `primes` covering exactly `required`.

    The result is ordered by literal sequence and checked before returning.
    """
    if not required:
        return []

    selected = None
    if mode == CoverMode.EXACT:
        selected = exact_cover(primes, required, exact_max_implicants)
    if selected is None:
        selected = greedy_cover(primes, required)

    check_cover(selected, required)
    return sorted(selected, key=Cube.sort_key)


def check_cover(selected: list[Cube], required: set[int]):
    """Raise CoverageError unless `selected` covers exactly `required`."""
    got = set()
    for impl in selected:
        got.update(impl.minterms())
    if got != required:
        missing = sorted(required - got)
        extra = sorted(got - required)
        raise CoverageError(
            f"cover mismatch: missing {missing[:5]}, extra {extra[:5]}"
        )
