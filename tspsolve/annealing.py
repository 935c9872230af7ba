"""Simulated annealing with an insertion neighbourhood."""

from __future__ import annotations

import math
import random
import time
from collections.abc import Sequence
from os import PathLike
from typing import Optional, Union

from .tabu import SearchResult
from .tour import move_vertex, swap_vertices, tour_cost

PathArg = Union[str, "PathLike[str]"]
Matrix = Sequence[Sequence[int]]

DEFAULT_LOG_FILE = "SA_results.txt"
SAMPLE_SIZE = 50
INITIAL_ACCEPTANCE = 0.98
ACCEPTANCE_LEVEL = 0.9


def _check_dimension(matrix: Matrix) -> int:
    dimension = len(matrix)
    if dimension < 4:
        raise ValueError(f"simulated annealing needs at least 4 vertices, got {dimension}")
    return dimension


def _pick_positions(rng: random.Random, dimension: int) -> tuple[int, int]:
    while True:
        first = rng.randint(1, dimension - 2)
        second = rng.randint(1, dimension - 2)
        if first != second:
            return first, second


def _truncated_mean(total: int, count: int) -> int:
    quotient = abs(total) // count
    return quotient if total >= 0 else -quotient


def _boltzmann(delta: int, temperature: float) -> float:
    """exp(delta / temperature) with floating-point semantics at the edges."""
    if temperature == 0:
        if delta > 0:
            return math.inf
        return 0.0 if delta < 0 else math.nan
    try:
        return math.exp(delta / temperature)
    except OverflowError:
        return math.inf


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


def initial_temperature(
    matrix: Matrix, solution: Sequence[int], rng: Optional[random.Random] = None
) -> float:
    """Temperature at which the mean cost change of 50 random swaps is accepted with p=0.98."""
    dimension = _check_dimension(matrix)
    rng = rng or random.Random()
    base = tour_cost(solution, matrix)
    total = sum(
        tour_cost(swap_vertices(solution, *_pick_positions(rng, dimension)), matrix) - base
        for _ in range(SAMPLE_SIZE)
    )
    average = _truncated_mean(total, SAMPLE_SIZE)
    return -average / math.log(INITIAL_ACCEPTANCE)


def simulated_annealing(
    matrix: Matrix,
    initial: Sequence[int],
    time_limit: float,
    cooling: float,
    log_file: Optional[PathArg] = None,
    rng: Optional[random.Random] = None,
) -> SearchResult:
    """Run simulated annealing from ``initial`` for ``time_limit`` seconds.

    The temperature is multiplied by ``cooling`` after every candidate. A
    candidate is taken when it is cheaper than the initial tour and its
    acceptance factor exceeds 0.9. Improvements and the final best tour are
    appended to ``log_file``; ``time_found`` is in milliseconds.
    """
    dimension = _check_dimension(matrix)
    rng = rng or random.Random()

    start = time.monotonic()
    current = list(initial)
    reference_cost = tour_cost(current, matrix)
    best_path = list(current)
    best_cost = reference_cost
    temperature = initial_temperature(matrix, current, rng)
    starting_temperature = temperature
    time_found = 0
    iterations = 0

    while True:
        index, new_place = _pick_positions(rng, dimension)
        candidate = move_vertex(current, index, new_place)
        if time.monotonic() - start >= time_limit:
            break

        cost = tour_cost(candidate, matrix)
        elapsed_ms = int((time.monotonic() - start) * 1000)
        temperature *= cooling
        iterations += 1
        factor = _boltzmann(reference_cost - cost, temperature)
        # a NaN factor compares false and so does not block acceptance
        if cost >= reference_cost or factor <= ACCEPTANCE_LEVEL:
            continue

        if cost < best_cost:
            best_path, best_cost, time_found = list(candidate), cost, elapsed_ms
            _write_record(log_file, best_path, best_cost, time_found, final=False)
        current = candidate

    _write_record(log_file, best_path, best_cost, time_found, final=True)
    return SearchResult(best_path, best_cost, time_found, iterations, starting_temperature)