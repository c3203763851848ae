"""
Cross-output term sharing.

Terms of different outputs often share literals. Take

    x = a'b'c + ac' + bc'
    y = ab' + c'

Every x term but the first, and y's c', lie inside c'. Hoisting c' as an
outer guard leaves residuals x: a + b and y: 1 inside it:

    if c':
        if a or b: x = 1
        y = 1

Whether to hoist the guard reaching the most outputs or the one saving the
most literals is a heuristic choice, so both are offered as strategies.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Sequence

from .cover import select_cover
from .cube import Bit, Cube
from .equation import Equation
from .quine_mccluskey import prime_implicants

log = logging.getLogger(__name__)


class SharingStrategy(str, Enum):
    NONE = "none"
    MAXIMIZE_SHARING = "maximize"
    MINIMIZE_LITERALS = "literals"


@dataclass
class SharedBlock:
    """A guard cube with per-output residual terms nested inside it."""

    guard: Cube
    residuals: dict[int, list[Cube]] = field(default_factory=dict)

    @property
    def outputs(self) -> list[int]:
        return sorted(self.residuals)

    @property
    def num_literals(self) -> int:
        return self.guard.num_literals + sum(
            r.num_literals for terms in self.residuals.values() for r in terms
        )

    def terms_for(self, output: int) -> list[Cube]:
        """Flattened guard AND residual terms for one output."""
        return [self.guard.conjoin(r) for r in self.residuals.get(output, [])]


@dataclass
class SharingPlan:
    """Equations rewritten into hoisted blocks plus unshared terms."""

    strategy: SharingStrategy
    blocks: list[SharedBlock] = field(default_factory=list)
    residual_terms: dict[int, list[Cube]] = field(default_factory=dict)

    @property
    def num_literals(self) -> int:
        return sum(b.num_literals for b in self.blocks) + sum(
            t.num_literals for terms in self.residual_terms.values() for t in terms
        )

    def terms_for(self, output: int) -> list[Cube]:
        terms = []
        for block in self.blocks:
            terms.extend(block.terms_for(output))
        terms.extend(self.residual_terms.get(output, []))
        return terms

    def evaluate(self, output: int, inputs: Sequence) -> bool:
        minterm = Cube.compute(b if isinstance(b, Bit) else Bit.new(b) for b in inputs)
        return any(t.covers(minterm) for t in self.terms_for(output))


def common_guard(a: Cube, b: Cube) -> Cube:
    """Literals present, with the same polarity, in both cubes."""
    mask = a.mask & b.mask & ~(a.value ^ b.value)
    return Cube(mask=mask, value=a.value & mask, n_vars=a.n_vars)


def default_minimize(on_set: set[int], n_vars: int) -> list[Cube]:
    return select_cover(prime_implicants(on_set, n_vars), on_set)


def _candidate_guards(remaining: dict[int, list[Cube]]) -> list[Cube]:
    guards = set()
    outputs = sorted(remaining)
    for i, o1 in enumerate(outputs):
        for o2 in outputs[i + 1:]:
            for t1 in remaining[o1]:
                for t2 in remaining[o2]:
                    g = common_guard(t1, t2)
                    if g.num_literals:
                        guards.add(g)
    return sorted(guards, key=Cube.sort_key)


def _build_block(
    guard: Cube,
    remaining: dict[int, list[Cube]],
    minimize: Callable[[set[int], int], list[Cube]],
) -> tuple[SharedBlock, dict[int, list[Cube]]]:
    """Hoist `guard`, re-minimizing each absorbed output inside it."""
    absorbed = {
        o: [t for t in terms if t.implies(guard)]
        for o, terms in remaining.items()
    }
    absorbed = {o: terms for o, terms in absorbed.items() if terms}

    block = SharedBlock(guard=guard)
    for o, terms in sorted(absorbed.items()):
        on_set = set()
        for t in terms:
            on_set.update(t.minterms())
        # every minterm agrees with the guard, so every prime lies inside it
        block.residuals[o] = [c.without(guard) for c in minimize(on_set, guard.n_vars)]
    return block, absorbed


def share_terms(
    equations: list[Equation],
    strategy: SharingStrategy = SharingStrategy.MAXIMIZE_SHARING,
    minimize: Optional[Callable[[set[int], int], list[Cube]]] = None,
) -> SharingPlan:
    """
    Hoist guards shared by two or more outputs.

    MAXIMIZE_SHARING takes the guard reaching the most outputs, then the
    most terms, then the most guard literals. MINIMIZE_LITERALS takes the
    guard with the largest literal saving and stops when none saves any.
    Remaining ties go to the smallest literal sequence.
    """
    minimize = minimize or default_minimize
    remaining = {eq.index: list(eq.terms) for eq in equations}
    plan = SharingPlan(strategy=strategy)

    if strategy == SharingStrategy.NONE:
        plan.residual_terms = remaining
        return plan

    while True:
        best = None
        best_score = None

        for guard in _candidate_guards(remaining):
            block, absorbed = _build_block(guard, remaining, minimize)
            if len(absorbed) < 2:
                continue

            n_terms = sum(len(terms) for terms in absorbed.values())
            saving = sum(
                t.num_literals for terms in absorbed.values() for t in terms
            ) - block.num_literals

            if strategy == SharingStrategy.MINIMIZE_LITERALS:
                if saving <= 0:
                    continue
                score = (saving, len(absorbed), n_terms)
            else:
                score = (len(absorbed), n_terms, guard.num_literals)

            if best_score is None or score > best_score:
                best = (block, absorbed)
                best_score = score

        if best is None:
            break

        block, absorbed = best
        log.debug("hoisting %s over outputs %s", block.guard, block.outputs)
        plan.blocks.append(block)
        for o, terms in absorbed.items():
            remaining[o] = [t for t in remaining[o] if t not in terms]

    plan.residual_terms = remaining
    return plan
