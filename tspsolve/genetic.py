"""Genetic algorithm with OX and edge-recombination crossover."""

from __future__ import annotations

import random
import time
from collections.abc import Sequence
from contextlib import ExitStack
from dataclasses import dataclass
from enum import Enum
from os import PathLike
from typing import Optional, TextIO, Union

from .greedy import greedy_population
from .tour import move_vertex, swap_vertices, tour_cost

PathArg = Union[str, "PathLike[str]"]
Matrix = Sequence[Sequence[int]]

DEFAULT_LOG_FILE = "GA_results.txt"
TOURNAMENT_SIZE = 20
ELITE_FRACTION = 0.1
REPORT_INTERVAL = 5
OPTIMAL_COST = 2755.0


class CrossoverType(Enum):
    """Crossover operator used to produce offspring."""

    OX = "OX"
    EX = "EX"


class MutationType(Enum):
    """Mutation operator applied to offspring."""

    SWAP = "swap"
    INSERT = "insert"
    NONE = "none"


@dataclass
class Individual:
    """A tour, as an open permutation of vertices, with its cost."""

    path: list[int]
    cost: int


def _evaluate(path: Sequence[int], matrix: Matrix) -> Individual:
    return Individual(list(path), tour_cost(path, matrix))


def random_individual(dimension: int, rng: Optional[random.Random] = None) -> list[int]:
    """A random permutation of the vertices ``0..dimension-1``."""
    if dimension < 0:
        raise ValueError(f"negative dimension: {dimension}")
    rng = rng or random.Random()
    individual = list(range(dimension))
    rng.shuffle(individual)
    return individual


def tournament_selection(
    population: Sequence[Individual],
    tournament_size: int = TOURNAMENT_SIZE,
    rng: Optional[random.Random] = None,
) -> list[int]:
    """Path of the cheapest of ``tournament_size`` individuals drawn with replacement."""
    if not population:
        raise ValueError("cannot select from an empty population")
    if tournament_size < 1:
        raise ValueError(f"tournament size must be positive, got {tournament_size}")
    rng = rng or random.Random()
    contestants = [rng.choice(population) for _ in range(tournament_size)]
    return list(min(contestants, key=lambda individual: individual.cost).path)


def _check_parents(parent1: Sequence[int], parent2: Sequence[int]) -> int:
    size = len(parent1)
    if size == 0:
        raise ValueError("parents must not be empty")
    if len(parent2) != size or set(parent1) != set(parent2) or len(set(parent1)) != size:
        raise ValueError("parents must be permutations of the same vertices")
    return size


def crossover_ox(
    parent1: Sequence[int], parent2: Sequence[int], rng: Optional[random.Random] = None
) -> tuple[list[int], list[int]]:
    """Order crossover: keep a random segment, fill the rest in the other parent's order."""
    size = _check_parents(parent1, parent2)
    rng = rng or random.Random()
    start, end = sorted((rng.randint(0, size - 1), rng.randint(0, size - 1)))

    def make_child(kept: Sequence[int], other: Sequence[int]) -> list[int]:
        child: list[Optional[int]] = [None] * size
        child[start:end + 1] = kept[start:end + 1]
        present = set(kept[start:end + 1])
        position = (end + 1) % size
        for gene in list(other[end + 1:]) + list(other[:end + 1]):
            if gene not in present:
                child[position] = gene
                present.add(gene)
                position = (position + 1) % size
        return [gene for gene in child if gene is not None]

    return make_child(parent1, parent2), make_child(parent2, parent1)


def crossover_ex(
    parent1: Sequence[int], parent2: Sequence[int], rng: Optional[random.Random] = None
) -> tuple[list[int], list[int]]:
    """Edge recombination: follow shared parental edges, preferring the least connected vertex."""
    size = _check_parents(parent1, parent2)
    rng = rng or random.Random()

    def build_adjacency() -> dict[int, set[int]]:
        adjacency: dict[int, set[int]] = {gene: set() for gene in parent1}
        for parent in (parent1, parent2):
            for index, gene in enumerate(parent):
                adjacency[gene].add(parent[index - 1])
                adjacency[gene].add(parent[(index + 1) % size])
        return adjacency

    def make_child() -> list[int]:
        adjacency = build_adjacency()
        used: set[int] = set()
        child: list[int] = []
        current = rng.choice(list(parent1))
        while True:
            child.append(current)
            used.add(current)
            neighbours = adjacency.pop(current, set())
            for neighbour in neighbours:
                adjacency.get(neighbour, set()).discard(current)
            if len(child) == size:
                return child
            candidates = sorted(n for n in neighbours if n not in used and n in adjacency)
            if candidates:
                fewest = min(len(adjacency[n]) for n in candidates)
                current = rng.choice([n for n in candidates if len(adjacency[n]) == fewest])
            else:
                current = next(gene for gene in parent1 if gene not in used)

    first = make_child()
    second = make_child()
    return first, second


def _two_positions(length: int, rng: random.Random) -> tuple[int, int]:
    if length < 2:
        raise ValueError("mutation needs at least two vertices")
    while True:
        first = rng.randint(0, length - 1)
        second = rng.randint(0, length - 1)
        if first != second:
            return first, second


def mutation_swap(individual: Sequence[int], rng: Optional[random.Random] = None) -> list[int]:
    """Swap two distinct random positions."""
    rng = rng or random.Random()
    return swap_vertices(individual, *_two_positions(len(individual), rng))


def mutation_insert(individual: Sequence[int], rng: Optional[random.Random] = None) -> list[int]:
    """Move one random vertex to another random position."""
    rng = rng or random.Random()
    return move_vertex(individual, *_two_positions(len(individual), rng))


def succession(
    population: Sequence[Individual],
    offspring: Sequence[Individual],
    population_size: int,
    elite_size: int,
) -> list[Individual]:
    """The ``elite_size`` best of the old population plus the best offspring."""
    needed = population_size - elite_size
    if elite_size < 0 or needed < 0:
        raise ValueError("elite size must lie between 0 and the population size")
    if len(offspring) < needed:
        raise ValueError(f"need {needed} offspring, got {len(offspring)}")
    elite = sorted(population, key=lambda individual: individual.cost)[:elite_size]
    best_offspring = sorted(offspring, key=lambda individual: individual.cost)[:needed]
    return elite + best_offspring


def _average_cost(population: Sequence[Individual]) -> float:
    return sum(individual.cost for individual in population) / len(population)


def genetic_algorithm(
    matrix: Matrix,
    population_size: int,
    crossover: Union[CrossoverType, str] = CrossoverType.OX,
    mutation: Union[MutationType, str] = MutationType.SWAP,
    crossover_prob: float = 0.8,
    mutation_prob: float = 0.01,
    time_limit: float = 0,
    log_file: Optional[PathArg] = None,
    rng: Optional[random.Random] = None,
) -> Individual:
    """Evolve a population seeded with greedy tours for ``time_limit`` seconds.

    Every five seconds the best and average costs are appended to
    ``log_file``; the final best tour, its error relative to the reference
    optimum and the average cost are appended when the search ends.
    """
    if not matrix:
        raise ValueError("cannot run on an empty matrix")
    if population_size < 1:
        raise ValueError(f"population size must be positive, got {population_size}")
    crossover = CrossoverType(crossover)
    mutation = MutationType(mutation)
    rng = rng or random.Random()
    cross = crossover_ox if crossover is CrossoverType.OX else crossover_ex
    mutate = {MutationType.SWAP: mutation_swap, MutationType.INSERT: mutation_insert}.get(mutation)

    def maybe_mutate(path: list[int]) -> list[int]:
        if mutate is not None and rng.random() < mutation_prob:
            return mutate(path, rng)
        return path

    with ExitStack() as stack:
        log: Optional[TextIO] = None
        if log_file is not None:
            log = stack.enter_context(open(log_file, "a", encoding="utf-8"))

        start = time.monotonic()

        def elapsed() -> int:
            return int(time.monotonic() - start)

        dimension = len(matrix)
        elite_size = int(ELITE_FRACTION * population_size)
        pairs_needed = population_size - elite_size

        population = [Individual(path, cost) for path, cost in greedy_population(matrix)]
        population.extend(
            _evaluate(random_individual(dimension, rng), matrix)
            for _ in range(population_size - len(population))
        )

        next_report = REPORT_INTERVAL
        while elapsed() < time_limit:
            offspring: list[Individual] = []
            for _ in range(pairs_needed):
                parent1 = tournament_selection(population, TOURNAMENT_SIZE, rng)
                parent2 = tournament_selection(population, TOURNAMENT_SIZE, rng)
                if rng.random() < crossover_prob:
                    child1, child2 = cross(parent1, parent2, rng)
                    child1 = maybe_mutate(child1)
                    child2 = maybe_mutate(child2)
                else:
                    child1, child2 = parent1, parent2
                offspring.append(_evaluate(child1, matrix))
                offspring.append(_evaluate(child2, matrix))
            population = succession(population, offspring, population_size, elite_size)

            if next_report <= elapsed():
                if log is not None:
                    best = min(population, key=lambda individual: individual.cost)
                    log.write(
                        f"\nAfter {elapsed()}s\n"
                        f"Best cost: \n{best.cost}\n"
                        f"Average cost: \n{_average_cost(population):g}\n"
                    )
                    log.flush()
                next_report += REPORT_INTERVAL

        best = min(population, key=lambda individual: individual.cost)
        if log is not None:
            relative_error = (best.cost - OPTIMAL_COST) / OPTIMAL_COST * 100
            log.write(
                f"Best solution found: \n{best.cost}"
                f"\nRelative error: \n{relative_error:g}%\n"
                f"Average population cost: \n{_average_cost(population):g}\n"
                "Path: \n" + "".join(f"{city} " for city in best.path)
            )
        return Individual(list(best.path), best.cost)