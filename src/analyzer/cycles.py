"""Cycle detection over the import graph.

TIER 2: May import from core, lib.

Iterative three-colour DFS: nodes are addressed by index into a sorted node
list, and the recursion is replaced by an explicit stack plus a per-node
edge cursor, so deep import chains cannot exhaust the interpreter stack.
"""

from collections.abc import Mapping, Sequence
from enum import Enum


class Color(Enum):
    """DFS visit state."""

    WHITE = 0  # unvisited
    GRAY = 1  # on the current DFS path
    BLACK = 2  # finished


def normalize_cycle(cycle: Sequence[str]) -> tuple[str, ...]:
    """Rotate a cycle so its lexicographically smallest node comes first."""
    pivot = cycle.index(min(cycle))
    return tuple(cycle[pivot:]) + tuple(cycle[:pivot])


def find_cycles(graph: Mapping[str, Sequence[str]]) -> list[tuple[str, ...]]:
    """Find import cycles with a single O(V+E) traversal.

    Every back edge to a node on the current path yields the cycle formed by
    the DFS parent chain. Rotations of the same cycle are reported once.

    Args:
        graph: Adjacency mapping; edges to unknown nodes are ignored.

    Returns:
        Distinct cycles (each in import order), sorted.
    """
    nodes = sorted(graph)
    index = {node: i for i, node in enumerate(nodes)}
    adjacency = [sorted(index[t] for t in set(graph[node]) if t in index) for node in nodes]

    color = [Color.WHITE] * len(nodes)
    parent = [-1] * len(nodes)
    cursor = [0] * len(nodes)
    found: set[tuple[str, ...]] = set()

    for start in range(len(nodes)):
        if color[start] is not Color.WHITE:
            continue
        color[start] = Color.GRAY
        stack = [start]

        while stack:
            u = stack[-1]
            if cursor[u] < len(adjacency[u]):
                v = adjacency[u][cursor[u]]
                cursor[u] += 1
                if color[v] is Color.WHITE:
                    parent[v] = u
                    color[v] = Color.GRAY
                    stack.append(v)
                elif color[v] is Color.GRAY:
                    chain = [u]
                    while chain[-1] != v:
                        chain.append(parent[chain[-1]])
                    chain.reverse()
                    found.add(normalize_cycle([nodes[i] for i in chain]))
            else:
                color[u] = Color.BLACK
                stack.pop()

    return sorted(found)
