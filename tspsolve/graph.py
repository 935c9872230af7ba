"""Random instance generation and matrix rendering."""

from __future__ import annotations

import random
from collections.abc import Sequence
from itertools import combinations

MIN_WEIGHT = 1
MAX_WEIGHT = 50


def generate_graph(number_of_vertices: int, rng: random.Random | None = None) -> list[list[int]]:
    """Build a complete asymmetric graph with weights in 1..50 and -1 on the diagonal."""
    if number_of_vertices < 0:
        raise ValueError(f"negative number of vertices: {number_of_vertices}")
    rng = rng or random.Random()
    matrix = [
        [-1 if i == j else 0 for j in range(number_of_vertices)]
        for i in range(number_of_vertices)
    ]
    pairs = list(combinations(range(number_of_vertices), 2))
    rng.shuffle(pairs)
    for first, second in pairs:
        matrix[first][second] = rng.randint(MIN_WEIGHT, MAX_WEIGHT)
        matrix[second][first] = rng.randint(MIN_WEIGHT, MAX_WEIGHT)
    return matrix


def render_matrix(
    matrix: Sequence[Sequence[int]],
    row_labels: Sequence[object] | None = None,
    column_labels: Sequence[object] | None = None,
) -> str:
    """Render a matrix as a labelled text table."""
    size = len(matrix)
    rows = list(row_labels) if row_labels is not None else list(range(size))
    columns = list(column_labels) if column_labels is not None else list(range(size))
    lines = ["    " + "".join(f"{label:>4} " for label in columns[:size])]
    for label, row in zip(rows, matrix):
        cells = "".join(f"{value:>4} " for value in row[:size])
        lines.append(f"{label} | {cells} |")
    return "\n".join(lines) + "\n"