#!/usr/bin/env python3
from __future__ import annotations
import argparse, sys
from pathlib import Path
from time import perf_counter

from brutalize.domains import anima, sausage, sticky
from brutalize.domains.parse_error import ParseError
from brutalize.search.best_first import solve
from brutalize.search.replay import replay

# name -> (parse, display)
DOMAINS = {
    "anima": (anima.parse, anima.display),
    "sausage": (sausage.parse, sausage.display),
    "sticky": (sticky.parse, sticky.display),
}


def solve_file(path: Path, domain: str, verbose: bool = False, quiet: bool = False) -> None:
    """Parse, solve and print one puzzle file. Raises OSError, UnicodeDecodeError or ParseError."""
    parse, display = DOMAINS[domain]

    t0 = perf_counter()
    initial_state, data = parse(path.read_text())
    parse_elapsed = perf_counter() - t0

    t0 = perf_counter()
    solution = solve(initial_state, data)
    solve_elapsed = perf_counter() - t0

    print(f"{path}:")
    print(f"Parse: {parse_elapsed:.9f}s")
    print(f"Solve: {solve_elapsed:.9f}s")

    if quiet:
        return
    if solution is None:
        print("No solution")
        return

    print(f"Found solution of length {len(solution)}:")
    if verbose:
        for state, action in zip(replay(initial_state, data, solution), solution):
            print(display(state, data))
            print(action)
    else:
        print(", ".join(str(a) for a in solution))


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="brutalize", description="Solve puzzle files with best-first search")
    ap.add_argument("domain", choices=sorted(DOMAINS), help="Puzzle type of the files")
    ap.add_argument("paths", nargs="*", type=Path, help="A list of paths to problem files")
    ap.add_argument("-v", "--verbose", action="store_true", help="Print states along with solutions")
    ap.add_argument("-q", "--quiet", action="store_true", help="Do not print solutions")
    args = ap.parse_intermixed_args(argv)

    if not args.paths:
        ap.print_usage()
        return 0

    failed = 0
    for path in args.paths:
        try:
            solve_file(path, args.domain, verbose=args.verbose, quiet=args.quiet)
        except (OSError, UnicodeDecodeError, ParseError) as e:
            failed += 1
            print(f"Error while solving '{path}':\n{e}", file=sys.stderr)
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
