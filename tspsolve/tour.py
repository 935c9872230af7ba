"""Tour cost and neighbourhood moves on vertex sequences."""

from __future__ import annotations

from collections.abc import Sequence


def tour_cost(solution: Sequence[int], matrix: Sequence[Sequence[int]]) -> int:
    """Cost of the cycle through the first ``len(matrix)`` vertices of ``solution``.

    A trailing return to the start vertex, if present, is ignored.
    """
    dimension = len(matrix)
    if dimension == 0:
        raise ValueError("cannot cost a tour on an empty matrix")
    if len(solution) < dimension:
        raise ValueError(f"solution has {len(solution)} vertices, expected {dimension}")
    cycle = list(solution[:dimension])
    return sum(matrix[a][b] for a, b in zip(cycle, cycle[1:] + cycle[:1]))


def move_vertex(solution: Sequence[int], index: int, new_place: int) -> list[int]:
    """Remove the vertex at ``index`` and insert it at ``new_place``."""
    result = list(solution)
    result.insert(new_place, result.pop(index))
    return result


def swap_vertices(solution: Sequence[int], first: int, second: int) -> list[int]:
    """Swap the vertices at two positions."""
    result = list(solution)
    result[first], result[second] = result[second], result[first]
    return result


def reverse_segment(solution: Sequence[int], first: int, second: int) -> list[int]:
    """Reverse the inclusive run of positions between ``first`` and ``second``."""
    low, high = sorted((first, second))
    result = list(solution)
    result[low:high + 1] = result[low:high + 1][::-1]
    return result