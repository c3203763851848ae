"""
Verification of minimization results.

Ensures the equations (and any sharing plan) reproduce every table row.
"""

import sys
from typing import TYPE_CHECKING, Optional

from .equation import Equation
from .sharing import SharingPlan
from .truth_tables import TruthTable

if TYPE_CHECKING:
    from .solver import MinimizationResult


def verify_equations(
    table: TruthTable,
    equations: list[Equation],
    plan: Optional[SharingPlan] = None,
) -> tuple[bool, list[str]]:
    """
    Compare each equation's covered minterms with its on-set, then
    evaluate any sharing plan on every row.

    Returns:
        Tuple of (all_correct, list of error messages)
    """
    errors = []

    for eq in equations:
        covered = eq.covered_minterms()
        on_set = table.on_set(eq.index)
        for m in sorted(on_set - covered):
            errors.append(
                f"Output {eq.name}, input {m:0{eq.n_vars}b}: expected True, got False"
            )
        for m in sorted(covered - on_set):
            errors.append(
                f"Output {eq.name}, input {m:0{eq.n_vars}b}: expected False, got True"
            )

    if plan is not None:
        for ent in table:
            for eq in equations:
                expected = ent.output[eq.index]
                shared = plan.evaluate(eq.index, ent.input)
                if shared != expected:
                    errors.append(
                        f"Output {eq.name}, input {ent.pattern()} "
                        f"({plan.strategy.value} sharing): "
                        f"expected {expected}, got {shared}"
                    )

    return len(errors) == 0, errors


def verify_result(table: TruthTable, result: "MinimizationResult") -> tuple[bool, list[str]]:
    """Verify that a result produces correct outputs for all table rows."""
    return verify_equations(table, result.equations, result.sharing)


def print_truth_table_comparison(table: TruthTable, result: "MinimizationResult", file=None):
    """Print truth table comparing expected vs actual outputs."""
    out = file or sys.stdout
    width = max(table.n_inputs, 5)
    print(f"{'Input':>{width}} | Expected | Actual   | Match", file=out)
    print("-" * (width + 30), file=out)

    all_match = True
    for ent in table:
        expected = ""
        actual = ""
        match_str = ""
        for eq in result.equations:
            exp = "1" if ent.output[eq.index] else "0"
            act = "1" if eq.evaluate(ent.input) else "0"
            expected += exp
            actual += act
            match_str += "." if exp == act else "X"
            if exp != act:
                all_match = False
        print(f"{ent.pattern():>{width}} | {expected:>8} | {actual:>8} | {match_str}",
              file=out)

    print("-" * (width + 30), file=out)
    print(f"All correct: {all_match}", file=out)
    return all_match
