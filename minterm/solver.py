"""
Truth table minimizer.

This module turns a validated truth table into one minimized equation per
output bit: minterm extraction, prime implicant generation, cover selection
and an optional cross-output sharing pass.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .config import MinimizationConfig
from .cover import CoverMode, select_cover
from .cube import Cube
from .equation import Equation
from .errors import CoverageError, StructuralError
from .quine_mccluskey import prime_implicants
from .sharing import SharingPlan, SharingStrategy, share_terms
from .truth_tables import TruthTable
from .verify import verify_result

log = logging.getLogger(__name__)


@dataclass
class CostBreakdown:
    """Size of the emitted conditional nest."""

    num_terms: int         # Product terms summed over outputs
    num_literals: int      # Literals in those terms (shared guards once)
    num_conditionals: int  # if statements needed; identical conditions merge


@dataclass
class MinimizationResult:
    """Result of minimizing every output of a table."""

    equations: list[Equation]
    mode: CoverMode
    sharing: Optional[SharingPlan] = None
    prime_counts: dict[int, int] = field(default_factory=dict)
    cost_breakdown: CostBreakdown = None

    def equation(self, name: str) -> Equation:
        for eq in self.equations:
            if eq.name == name:
                return eq
        raise KeyError(name)


def minimize_output(
    table: TruthTable,
    index: int,
    name: str,
    config: MinimizationConfig,
) -> tuple[Equation, int]:
    """
    Minimize one output column. Run in a separate process when workers > 1.

    Returns:
        Tuple of (equation, number of prime implicants)
    """
    minterms = table.minterms(index)
    required = {m.value for m in minterms}

    primes = prime_implicants(
        minterms,
        table.n_inputs,
        max_implicants=config.max_implicants,
        max_merge_steps=config.max_merge_steps,
    )
    terms = select_cover(primes, required, config.mode, config.exact_max_implicants)
    return Equation(index=index, name=name, n_vars=table.n_inputs, terms=terms), len(primes)


def _count_conditionals(
    equations: list[Equation],
    plan: Optional[SharingPlan],
) -> int:
    def distinct(groups):
        return len({c for terms in groups for c in terms if c.num_literals})

    if plan is None:
        return distinct(eq.terms for eq in equations)

    count = distinct(plan.residual_terms.values())
    for block in plan.blocks:
        count += 1 + distinct(block.residuals.values())
    return count


class MintermSolver:
    """
    Multi-output truth table minimizer.

    Each output is minimized independently:
    1. Minterms of the output's true rows
    2. Prime implicants by level-synchronized merging
    3. Essential implicants plus greedy or exact (MaxSAT) cover
    then, once every output is done, terms may be hoisted across outputs.
    """

    def __init__(
        self,
        table: TruthTable,
        output_names: Optional[Sequence[str]] = None,
        config: Optional[MinimizationConfig] = None,
    ):
        self.table = table.validate()
        self.config = config or MinimizationConfig()

        if output_names is None:
            output_names = [f"out{i}" for i in range(table.n_outputs)]
        self.output_names = list(output_names)
        if len(self.output_names) != table.n_outputs:
            raise StructuralError(
                f"{len(self.output_names)} output names for "
                f"{table.n_outputs} output bits"
            )

        self.prime_implicants: dict[int, list[Cube]] = {}

    def generate_prime_implicants(self) -> dict[int, list[Cube]]:
        """Generate all prime implicants, keyed by output index."""
        for index in range(self.table.n_outputs):
            self.prime_implicants[index] = prime_implicants(
                self.table.minterms(index),
                self.table.n_inputs,
                max_implicants=self.config.max_implicants,
                max_merge_steps=self.config.max_merge_steps,
            )
        return self.prime_implicants

    def minimize_output(self, index: int) -> Equation:
        equation, _ = minimize_output(
            self.table, index, self.output_names[index], self.config
        )
        return equation

    def _minimize_on_set(self, on_set: set[int], n_vars: int) -> list[Cube]:
        primes = prime_implicants(
            on_set, n_vars,
            max_implicants=self.config.max_implicants,
            max_merge_steps=self.config.max_merge_steps,
        )
        return select_cover(primes, on_set, self.config.mode,
                            self.config.exact_max_implicants)

    def _minimize_all(self) -> list[tuple[Equation, int]]:
        indices = range(self.table.n_outputs)
        if self.config.workers <= 1 or self.table.n_outputs < 2:
            return [
                minimize_output(self.table, i, self.output_names[i], self.config)
                for i in indices
            ]

        with ProcessPoolExecutor(max_workers=self.config.workers) as pool:
            futures = [
                pool.submit(minimize_output, self.table, i,
                            self.output_names[i], self.config)
                for i in indices
            ]
            # every output must finish before the sharing pass
            return [f.result() for f in futures]

    def solve(self) -> MinimizationResult:
        """Minimize every output and apply the configured sharing strategy."""
        log.info("Minimizing %d outputs over %d inputs (%s cover)",
                 self.table.n_outputs, self.table.n_inputs, self.config.mode.value)

        equations = []
        prime_counts = {}
        for equation, n_primes in self._minimize_all():
            log.info("  %s: %d prime implicants, %d terms selected",
                     equation.name, n_primes, len(equation.terms))
            equations.append(equation)
            prime_counts[equation.index] = n_primes

        plan = None
        if self.config.sharing != SharingStrategy.NONE:
            plan = share_terms(equations, self.config.sharing, self._minimize_on_set)
            log.info("Sharing (%s): %d hoisted guards",
                     self.config.sharing.value, len(plan.blocks))

        if plan is None:
            num_terms = sum(len(eq.terms) for eq in equations)
            num_literals = sum(eq.num_literals for eq in equations)
        else:
            num_terms = sum(len(plan.terms_for(eq.index)) for eq in equations)
            num_literals = plan.num_literals

        result = MinimizationResult(
            equations=equations,
            mode=self.config.mode,
            sharing=plan,
            prime_counts=prime_counts,
            cost_breakdown=CostBreakdown(
                num_terms=num_terms,
                num_literals=num_literals,
                num_conditionals=_count_conditionals(equations, plan),
            ),
        )

        if self.config.verify:
            correct, errors = verify_result(self.table, result)
            if not correct:
                raise CoverageError("; ".join(errors[:5]))

        return result

    def print_result(self, result: MinimizationResult, input_names=None):
        """Pretty-print a minimization result."""
        print(f"{'=' * 60}")
        print(f"Minimization Result: {result.mode.value} cover")
        print(f"{'=' * 60}")

        cb = result.cost_breakdown
        print("Cost breakdown:")
        print(f"  Terms:        {cb.num_terms}")
        print(f"  Literals:     {cb.num_literals}")
        print(f"  Conditionals: {cb.num_conditionals}")

        if result.sharing is not None and result.sharing.blocks:
            print(f"\nShared guards ({len(result.sharing.blocks)}):")
            for block in result.sharing.blocks:
                outputs = [self.output_names[o] for o in block.outputs]
                print(f"  {block.guard.to_expr_str(input_names):12} -> {', '.join(outputs)}")

        print("\nEquations:")
        for eq in result.equations:
            print(f"  {eq.to_expr_str(input_names)}")
