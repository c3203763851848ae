"""
Export minimization results as equations or as nested conditionals.
"""

import string
from typing import Optional, Sequence

from .cube import Cube
from .errors import ResourceExhausted
from .solver import MinimizationResult

DEFAULT_ALPHABET = string.ascii_lowercase


def default_input_names(count: int) -> list[str]:
    """Single-letter names a, b, c, ... for `count` inputs."""
    if count > len(DEFAULT_ALPHABET):
        raise ResourceExhausted(
            f"{count} inputs but only {len(DEFAULT_ALPHABET)} default names",
            limit=len(DEFAULT_ALPHABET), observed=count,
        )
    return list(DEFAULT_ALPHABET[:count])


def resolve_names(names, count: int) -> list[str]:
    """Flatten a sequence or index-keyed mapping of display names."""
    if names is None:
        return default_input_names(count)
    try:
        return [names[i] for i in range(count)]
    except (IndexError, KeyError):
        raise ResourceExhausted(
            f"{len(names)} input names for {count} inputs",
            limit=len(names), observed=count,
        ) from None


def _n_vars(result: MinimizationResult) -> int:
    return result.equations[0].n_vars if result.equations else 0


def to_equations(
    result: MinimizationResult,
    input_names: Optional[Sequence[str]] = None,
    dont_care: str = "x",
) -> str:
    """
    Export as Boolean equations, with the positional cube form underneath.

    Args:
        result: The minimization result
        input_names: index -> display name lookup (default a, b, c, ...)
        dont_care: Marker for eliminated positions in the cube form
    """
    names = resolve_names(input_names, _n_vars(result))
    cb = result.cost_breakdown

    lines = []
    lines.append(f"Cover: {result.mode.value}")
    if cb is not None:
        lines.append(f"Terms: {cb.num_terms}, literals: {cb.num_literals}, "
                     f"conditionals: {cb.num_conditionals}")
    lines.append("")

    for eq in result.equations:
        lines.append(eq.to_expr_str(names))

    lines.append("")
    for eq in result.equations:
        cubes = " + ".join(t.to_pattern(dont_care) for t in eq.terms)
        lines.append(f"{eq.name} = {cubes or '0'}")

    return "\n".join(lines)


def _group(pairs) -> dict[Cube, list[int]]:
    """Map each distinct cube to the outputs using it, in first-seen order."""
    groups: dict[Cube, list[int]] = {}
    for output, terms in pairs:
        for cube in terms:
            groups.setdefault(cube, []).append(output)
    return groups


def _leaves(groups: dict[Cube, list[int]]) -> list[tuple]:
    nodes = []
    for cube, outputs in groups.items():
        if cube.num_literals:
            nodes.append(("if", cube, [("set", outputs)]))
        else:
            nodes.append(("set", outputs))
    return nodes


def conditional_nest(result: MinimizationResult) -> list[tuple]:
    """
    The result as a tree of `("if", cube, children)` and `("set", outputs)`
    nodes. Identical conditions across outputs share one node.
    """
    plan = result.sharing
    if plan is None:
        return _leaves(_group((eq.index, eq.terms) for eq in result.equations))

    nodes = []
    for block in plan.blocks:
        inner = _leaves(_group(sorted(block.residuals.items())))
        nodes.append(("if", block.guard, inner))
    nodes.extend(_leaves(_group(sorted(plan.residual_terms.items()))))
    return nodes


def _python_condition(cube: Cube, names: Sequence[str]) -> str:
    return " and ".join(
        names[i] if polarity else f"not {names[i]}" for i, polarity in cube.literals
    )


def _c_condition(cube: Cube, names: Sequence[str]) -> str:
    return " && ".join(
        names[i] if polarity else f"!{names[i]}" for i, polarity in cube.literals
    )


def _render(nodes, depth, out_names, condition, open_if, close_if, assign, lines):
    pad = "    " * depth
    for node in nodes:
        if node[0] == "set":
            lines.append(pad + assign([out_names[o] for o in node[1]]))
        else:
            _, cube, children = node
            lines.append(pad + open_if(condition(cube)))
            _render(children, depth + 1, out_names, condition,
                    open_if, close_if, assign, lines)
            if close_if:
                lines.append(pad + close_if)


def to_conditionals(
    result: MinimizationResult,
    input_names: Optional[Sequence[str]] = None,
    func_name: str = "evaluate",
) -> str:
    """Export as a Python function built from a nest of if statements."""
    names = resolve_names(input_names, _n_vars(result))
    out_names = {eq.index: eq.name for eq in result.equations}
    inputs = ", ".join(names)

    lines = [f"def {func_name}({inputs}):"]
    if result.equations:
        lines.append("    " + " = ".join(out_names.values()) + " = 0")
    else:
        lines.append("    pass")

    _render(
        conditional_nest(result), 1, out_names,
        condition=lambda cube: _python_condition(cube, names),
        open_if=lambda cond: f"if {cond}:",
        close_if=None,
        assign=lambda outs: " = ".join(outs) + " = 1",
        lines=lines,
    )

    if result.equations:
        lines.append("    return " + ", ".join(out_names.values()))
    return "\n".join(lines)


def to_c_code(
    result: MinimizationResult,
    input_names: Optional[Sequence[str]] = None,
    func_name: str = "evaluate",
) -> str:
    """
    Export as C code.

    Inputs are read from `in[]` and outputs written to `out[]` in table
    column order.
    """
    names = resolve_names(input_names, _n_vars(result))
    out_names = {eq.index: eq.name for eq in result.equations}

    lines = []
    lines.append("#include <stdbool.h>")
    lines.append("")
    lines.append(f"void {func_name}(const bool *in, bool *out) {{")
    for i in range(_n_vars(result)):
        lines.append(f"    bool {names[i]} = in[{i}];")
    for name in out_names.values():
        lines.append(f"    bool {name} = false;")
    lines.append("")

    _render(
        conditional_nest(result), 1, out_names,
        condition=lambda cube: _c_condition(cube, names),
        open_if=lambda cond: f"if ({cond}) {{",
        close_if="}",
        assign=lambda outs: " = ".join(outs) + " = true;",
        lines=lines,
    )

    lines.append("")
    for index, name in out_names.items():
        lines.append(f"    out[{index}] = {name};")
    lines.append("}")

    return "\n".join(lines)
