"""Enumerate every placement of n non-attacking queens on an n x n board."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

EMPTY = "."
QUEEN = "Q"


def _render(placement: Sequence[int], n: int) -> list[str]:
    grid = [[EMPTY] * n for _ in range(n)]
    for col, row in enumerate(placement):
        grid[row][col] = QUEEN
    return ["".join(line) for line in grid]


def solve_queens(n: int) -> list[list[str]]:
    """Return all solutions as boards of strings, one string per row.

    Queens are placed column by column from the left and each column tries
    rows from the top, so solutions come out in that search order.
    """
    if n < 0:
        raise ValueError(f"board size must not be negative, got {n}")

    solutions: list[list[str]] = []
    placement: list[int] = []
    used_rows: set[int] = set()
    used_diagonals: set[int] = set()
    used_anti_diagonals: set[int] = set()

    def place(col: int) -> None:
        if col == n:
            solutions.append(_render(placement, n))
            return
        for row in range(n):
            if (
                row in used_rows
                or row - col in used_diagonals
                or row + col in used_anti_diagonals
            ):
                continue
            used_rows.add(row)
            used_diagonals.add(row - col)
            used_anti_diagonals.add(row + col)
            placement.append(row)
            place(col + 1)
            placement.pop()
            used_rows.discard(row)
            used_diagonals.discard(row - col)
            used_anti_diagonals.discard(row + col)

    place(0)
    return solutions


def main(argv: Sequence[str] | None = None) -> int:
    """Read the board size from standard input and print every solution."""
    parser = argparse.ArgumentParser(
        prog="nqueens",
        description="Read a board size from standard input and print all N-queens solutions.",
    )
    parser.parse_args(argv)

    tokens = sys.stdin.read().split()
    if not tokens:
        print("expected a board size on standard input", file=sys.stderr)
        return 1
    try:
        n = int(tokens[0])
        solutions = solve_queens(n)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    for board in solutions:
        for line in board:
            print(line)
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())