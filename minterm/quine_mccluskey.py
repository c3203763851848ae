"""
Prime implicant generation by level-synchronized cube merging.

Level 0 holds the minterms of one output. Every mergeable pair at level k
yields a cube for level k+1 and marks both operands absorbed. Cubes that are
never absorbed are the prime implicants. Each level has one fewer constrained
position than the last, so the loop ends after at most n_vars + 1 levels.
"""

import logging
from typing import Iterable, Optional, Union

from .cube import Cube, merge, mergeable
from .errors import ResourceExhausted

log = logging.getLogger(__name__)


def _ones(cube: Cube) -> int:
    return bin(cube.value).count('1')


def merge_level(
    level: list[Cube],
    steps_left: Optional[int] = None,
    created: int = 0,
    max_implicants: Optional[int] = None,
) -> tuple[list[Cube], set[Cube], int]:
    """
    Merge every adjacent pair within one level.

    Mergeable cubes share a mask and differ by one set bit, so only buckets
    keyed (mask, ones) and (mask, ones + 1) are compared. `created` counts
    cubes from earlier levels against `max_implicants`.

    Returns:
        Tuple of (next level sorted by literals, absorbed cubes, pairs compared)
    """
    buckets: dict[tuple[int, int], list[Cube]] = {}
    for cube in level:
        buckets.setdefault((cube.mask, _ones(cube)), []).append(cube)

    next_gen: dict[Cube, None] = {}
    absorbed: set[Cube] = set()
    steps = 0

    for (mask, ones), group in buckets.items():
        partners = buckets.get((mask, ones + 1), ())
        for c1 in group:
            for c2 in partners:
                steps += 1
                if steps_left is not None and steps > steps_left:
                    raise ResourceExhausted(
                        "merge step ceiling exceeded",
                        limit=steps_left, observed=steps,
                    )
                if mergeable(c1, c2):
                    cube = merge(c1, c2)
                    if cube not in next_gen:
                        next_gen[cube] = None
                        total = created + len(next_gen)
                        if max_implicants is not None and total > max_implicants:
                            raise ResourceExhausted(
                                "implicant ceiling exceeded",
                                limit=max_implicants, observed=total,
                            )
                    absorbed.add(c1)
                    absorbed.add(c2)

    return sorted(next_gen, key=Cube.sort_key), absorbed, steps


def prime_implicants(
    on_set: Iterable[Union[int, Cube]],
    n_vars: int,
    max_implicants: Optional[int] = None,
    max_merge_steps: Optional[int] = None,
) -> list[Cube]:
    """
    Run Quine-McCluskey merging to find all prime implicants.

    Args:
        on_set: Minterms where the function is 1 (integers or minterm cubes)
        n_vars: Number of input variables
        max_implicants: Ceiling on cubes created across all levels
        max_merge_steps: Ceiling on pair comparisons

    Returns:
        Prime implicants, grouped by level and sorted by literals within it
    """
    level = sorted(
        {m if isinstance(m, Cube) else Cube.from_minterm(m, n_vars) for m in on_set},
        key=Cube.sort_key,
    )

    primes: list[Cube] = []
    created = len(level)
    steps = 0
    depth = 0

    if max_implicants is not None and created > max_implicants:
        raise ResourceExhausted(
            "implicant ceiling exceeded by the minterms",
            limit=max_implicants, observed=created,
        )

    while level:
        steps_left = None if max_merge_steps is None else max_merge_steps - steps
        next_level, absorbed, used = merge_level(
            level, steps_left, created, max_implicants,
        )
        steps += used

        primes.extend(c for c in level if c not in absorbed)
        log.debug("level %d: %d cubes, %d merged, %d primes so far",
                  depth, len(level), len(next_level), len(primes))

        created += len(next_level)
        level = next_level
        depth += 1

    return primes
