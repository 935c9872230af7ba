"""Nearest-neighbour construction of tours."""

from __future__ import annotations

from collections.abc import Sequence

Matrix = Sequence[Sequence[int]]


def greedy_tour(matrix: Matrix, start: int) -> tuple[list[int], int]:
    """Nearest-neighbour tour from ``start``; the path ends back at ``start``."""
    dimension = len(matrix)
    if not 0 <= start < dimension:
        raise ValueError(f"start vertex {start} outside 0..{dimension - 1}")
    path = [start]
    visited = {start}
    current = start
    cost = 0
    while True:
        candidates = [j for j in range(dimension) if j not in visited]
        if not candidates:
            cost += matrix[current][start]
            path.append(start)
            return path, cost
        nearest = min(candidates, key=lambda j: matrix[current][j])
        cost += matrix[current][nearest]
        path.append(nearest)
        visited.add(nearest)
        current = nearest


def all_greedy_tours(matrix: Matrix) -> list[tuple[list[int], int]]:
    """Greedy tours from every start vertex, in start order."""
    return [greedy_tour(matrix, start) for start in range(len(matrix))]


def best_greedy_tour(matrix: Matrix) -> tuple[list[int], int]:
    """The cheapest greedy tour; ties go to the lowest start vertex."""
    if not matrix:
        raise ValueError("cannot build a tour for an empty matrix")
    return min(all_greedy_tours(matrix), key=lambda tour: tour[1])


def greedy_population(matrix: Matrix) -> list[tuple[list[int], int]]:
    """Greedy tours from every start, as open permutations with their costs."""
    return [(path[:-1], cost) for path, cost in all_greedy_tours(matrix)]