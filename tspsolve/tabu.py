"""Tabu search over insertion, swap and reversal neighbourhoods."""

from __future__ import annotations

import random
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from typing import Optional, Union

from .tour import move_vertex, reverse_segment, swap_vertices, tour_cost

PathArg = Union[str, "PathLike[str]"]
Matrix = Sequence[Sequence[int]]

DEFAULT_LOG_FILE = "TS_results.txt"
DEFAULT_TENURE = 10
ACCEPTANCE_THRESHOLD = 1.05


class Neighbourhood(Enum):
    """How a candidate solution is derived from the current one."""

    MOVE_VERTEX = "move"
    SWAP = "swap"
    REVERSE = "reverse"


_MOVES: dict[Neighbourhood, Callable[[Sequence[int], int, int], list[int]]] = {
    Neighbourhood.MOVE_VERTEX: move_vertex,
    Neighbourhood.SWAP: swap_vertices,
    Neighbourhood.REVERSE: reverse_segment,
}


@dataclass
class SearchResult:
    """Best tour found by a local search and when it was found."""

    path: list[int]
    cost: int
    time_found: int = 0
    iterations: int = 0
    initial_temperature: Optional[float] = None


def _check_dimension(matrix: Matrix) -> int:
    dimension = len(matrix)
    if dimension < 4:
        raise ValueError(f"local search needs at least 4 vertices, got {dimension}")
    return dimension


def _pick_positions(rng: random.Random, dimension: int) -> tuple[int, int]:
    """Two distinct inner positions; the start vertex and the last vertex stay put."""
    while True:
        first = rng.randint(1, dimension - 2)
        second = rng.randint(1, dimension - 2)
        if first != second:
            return first, second


def _write_record(
    log_file: Optional[PathArg], path: Sequence[int], cost: int, time_found: int, final: bool
) -> None:
    if log_file is None:
        return
    text = "".join(f"{vertex} " for vertex in path) + f"\n{cost}\n{time_found}\n"
    if final:
        text += "\n\n\n"
    with open(log_file, "a", encoding="utf-8") as handle:
        handle.write(text)


def tabu_search(
    matrix: Matrix,
    initial: Sequence[int],
    time_limit: float,
    neighbourhood: Neighbourhood = Neighbourhood.MOVE_VERTEX,
    tenure: int = DEFAULT_TENURE,
    log_file: Optional[PathArg] = None,
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """Run tabu search from ``initial`` for ``time_limit`` seconds.

    A candidate is accepted when its move is not tabu and it is less than 5%
    worse than the best tour, or whenever it beats the best tour. Every
    improvement, and the final best tour, is appended to ``log_file``.
    ``time_found`` is in milliseconds from the start of the search.
    """
    dimension = _check_dimension(matrix)
    rng = rng or random.Random()
    apply_move = _MOVES[Neighbourhood(neighbourhood)]

    start = time.monotonic()
    current = list(initial)
    best_path = list(current)
    best_cost = tour_cost(current, matrix)
    time_found = 0
    iterations = 0
    tabu: dict[tuple[int, int], int] = {}

    while True:
        move = _pick_positions(rng, dimension)
        candidate = apply_move(current, *move)
        if time.monotonic() - start >= time_limit:
            break

        cost = tour_cost(candidate, matrix)
        elapsed_ms = int((time.monotonic() - start) * 1000)
        iterations += 1

        free = tabu.get(move, 0) <= 0
        if (free and cost < best_cost * ACCEPTANCE_THRESHOLD) or cost < best_cost:
            current = candidate
            if cost < best_cost:
                best_path, best_cost, time_found = list(candidate), cost, elapsed_ms
                _write_record(log_file, best_path, best_cost, time_found, final=False)
            tabu[move] = tenure

        tabu = {key: left - 1 for key, left in tabu.items() if left > 1}

    _write_record(log_file, best_path, best_cost, time_found, final=True)
    return SearchResult(best_path, best_cost, time_found, iterations)