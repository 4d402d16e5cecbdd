"""Detect circular dependencies in a directed graph."""

from __future__ import annotations

import argparse
import sys
from enum import Enum
from typing import Iterable, Sequence


class _Mark(Enum):
    UNSEEN = 0
    ON_PATH = 1
    DONE = 2


def has_circular_dependency(n: int, edges: Iterable[Sequence[int]]) -> bool:
    """Return True if the graph on nodes 0..n-1 with the given edges has a cycle."""
    if n < 0:
        raise ValueError(f"node count must not be negative, got {n}")

    adjacency: list[list[int]] = [[] for _ in range(n)]
    for source, target in edges:
        for node in (source, target):
            if not 0 <= node < n:
                raise ValueError(f"node {node} is outside 0..{n - 1}")
        adjacency[source].append(target)

    marks = [_Mark.UNSEEN] * n
    for start in range(n):
        if marks[start] is not _Mark.UNSEEN:
            continue
        marks[start] = _Mark.ON_PATH
        stack = [(start, iter(adjacency[start]))]
        while stack:
            node, neighbours = stack[-1]
            for neighbour in neighbours:
                if marks[neighbour] is _Mark.ON_PATH:
                    return True
                if marks[neighbour] is _Mark.UNSEEN:
                    marks[neighbour] = _Mark.ON_PATH
                    stack.append((neighbour, iter(adjacency[neighbour])))
                    break
            else:
                marks[node] = _Mark.DONE
                stack.pop()
    return False


def _parse_graph(text: str) -> tuple[int, list[tuple[int, int]]]:
    tokens = [int(token) for token in text.split()]
    if len(tokens) < 2:
        raise ValueError("expected the node and edge counts")
    n, m = tokens[0], tokens[1]
    values = tokens[2:]
    if m < 0 or len(values) < 2 * m:
        raise ValueError(f"expected {m} edges")
    edges = list(zip(values[0 : 2 * m : 2], values[1 : 2 * m : 2]))
    return n, edges


def main(argv: Sequence[str] | None = None) -> int:
    """Read "n m" and m edges from standard input and print True or False."""
    parser = argparse.ArgumentParser(
        prog="cycles",
        description="Read a directed graph from standard input and report whether it has a cycle.",
    )
    parser.parse_args(argv)

    try:
        n, edges = _parse_graph(sys.stdin.read())
        result = has_circular_dependency(n, edges)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    print("True" if result else "False")
    return 0


if __name__ == "__main__":
    sys.exit(main())