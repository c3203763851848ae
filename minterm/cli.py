"""Command-line interface for truth table minimization."""

import argparse
import logging
import sys

from .config import MinimizationConfig
from .cover import CoverMode
from .errors import MintermError
from .export import to_c_code, to_conditionals, to_equations
from .ingest import load
from .sharing import SharingStrategy
from .solver import MintermSolver
from .truth_tables import print_truth_table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="minterm",
        description="Minimize the if statements mapping input bits to output bits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  minterm --table t.csv --ivar a --ivar b --ivar c --ovar x --ovar y
  minterm --table t.csv --ivar a --ivar b --ovar x --header-lines 0
  minterm ... --exact                Exact (MaxSAT) cover selection
  minterm ... --sharing maximize     Hoist guards shared across outputs
  minterm ... --format conditionals  Output as a nest of if statements
  minterm ... --truth-table --gray   Show the table in gray-code order
        """,
    )

    parser.add_argument(
        "--table",
        required=True,
        help="CSV truth table: inputs leftmost, outputs rightmost",
    )
    parser.add_argument(
        "--ivar",
        action="append",
        required=True,
        help="Input variable name, one per input column (repeat)",
    )
    parser.add_argument(
        "--ovar",
        action="append",
        required=True,
        help="Output variable name, one per output column (repeat)",
    )
    parser.add_argument(
        "--header-lines",
        type=int,
        default=2,
        help="Leading CSV rows to skip (default: 2)",
    )
    parser.add_argument(
        "--exact",
        action="store_true",
        help="Use exact MaxSAT cover selection (slower but minimum)",
    )
    parser.add_argument(
        "--sharing",
        choices=[s.value for s in SharingStrategy],
        default=SharingStrategy.NONE.value,
        help="Cross-output sharing strategy (default: none)",
    )
    parser.add_argument(
        "--format", "-f",
        choices=["text", "equations", "conditionals", "c"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--truth-table",
        action="store_true",
        help="Print the parsed truth table and exit",
    )
    parser.add_argument(
        "--gray",
        action="store_true",
        help="With --truth-table, list rows in gray-code order",
    )
    parser.add_argument(
        "--jobs", "-j",
        type=int,
        default=1,
        help="Processes used to minimize outputs (default: 1)",
    )
    parser.add_argument(
        "--max-implicants",
        type=int,
        default=MinimizationConfig.max_implicants,
        help="Abort when one output creates more cubes than this",
    )
    parser.add_argument(
        "--max-merge-steps",
        type=int,
        default=MinimizationConfig.max_merge_steps,
        help="Abort when one output compares more cube pairs than this",
    )
    parser.add_argument(
        "--exact-max-implicants",
        type=int,
        default=MinimizationConfig.exact_max_implicants,
        help="Fall back to greedy cover above this many candidates",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    config = MinimizationConfig(
        mode=CoverMode.EXACT if args.exact else CoverMode.GREEDY,
        sharing=SharingStrategy(args.sharing),
        max_implicants=args.max_implicants,
        max_merge_steps=args.max_merge_steps,
        exact_max_implicants=args.exact_max_implicants,
        workers=args.jobs,
    )

    try:
        table = load(args.table, args.header_lines, len(args.ivar), len(args.ovar))

        if args.truth_table:
            print_truth_table(table.validate(), gray=args.gray)
            return 0

        solver = MintermSolver(table, output_names=args.ovar, config=config)
        result = solver.solve()

        if args.format == "equations":
            print(to_equations(result, args.ivar))
        elif args.format == "conditionals":
            print(to_conditionals(result, args.ivar))
        elif args.format == "c":
            print(to_c_code(result, args.ivar))
        else:
            print(f"Parsed truth table with {table.n_inputs} input bits -> "
                  f"{table.n_outputs} output bits ({len(table)} rows)")
            print()
            solver.print_result(result, args.ivar)

        return 0

    except MintermError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
