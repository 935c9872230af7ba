import random

import pytest

from tspsolve.genetic import (
    CrossoverType,
    Individual,
    MutationType,
    crossover_ex,
    crossover_ox,
    genetic_algorithm,
    mutation_insert,
    mutation_swap,
    random_individual,
    succession,
    tournament_selection,
)
from tspsolve.greedy import best_greedy_tour
from tspsolve.tour import tour_cost

MATRIX = [
    [-1, 12, 5, 30, 7, 19],
    [9, -1, 14, 3, 22, 8],
    [17, 6, -1, 11, 4, 25],
    [2, 28, 13, -1, 16, 10],
    [21, 15, 9, 18, -1, 5],
    [6, 24, 20, 7, 12, -1],
]


def test_random_individual_is_permutation():
    individual = random_individual(10, random.Random(1))
    assert sorted(individual) == list(range(10))


def test_random_individual_reproducible_with_seed():
    first = random_individual(8, random.Random(5))
    second = random_individual(8, random.Random(5))
    assert sorted(first) == list(range(8))
    assert first == second


def test_random_individual_negative_dimension():
    with pytest.raises(ValueError):
        random_individual(-1, random.Random(0))


def test_tournament_single_individual():
    population = [Individual([2, 0, 1], 7)]
    assert tournament_selection(population, 3, random.Random(0)) == [2, 0, 1]


def test_tournament_result_comes_from_population():
    rng = random.Random(3)
    population = [Individual(random_individual(5, rng), cost) for cost in range(10)]
    chosen = tournament_selection(population, 4, rng)
    assert chosen in [individual.path for individual in population]


def test_tournament_large_size_finds_minimum():
    population = [Individual([0, 1, 2], 50), Individual([1, 0, 2], 3), Individual([2, 1, 0], 9)]
    assert tournament_selection(population, 200, random.Random(2)) == [1, 0, 2]


def test_tournament_empty_population():
    with pytest.raises(ValueError):
        tournament_selection([], 5, random.Random(0))


def test_tournament_invalid_size():
    with pytest.raises(ValueError):
        tournament_selection([Individual([0], 0)], 0, random.Random(0))


@pytest.mark.parametrize("seed", range(20))
def test_crossover_ox_children_are_permutations(seed):
    rng = random.Random(seed)
    parent1 = random_individual(9, rng)
    parent2 = random_individual(9, rng)
    child1, child2 = crossover_ox(parent1, parent2, rng)
    assert sorted(child1) == list(range(9))
    assert sorted(child2) == list(range(9))


def test_crossover_ox_identical_parents():
    parent = [3, 1, 4, 0, 2]
    assert crossover_ox(parent, parent, random.Random(4)) == (parent, parent)


@pytest.mark.parametrize("seed", range(20))
def test_crossover_ex_children_are_permutations(seed):
    rng = random.Random(seed)
    parent1 = random_individual(9, rng)
    parent2 = random_individual(9, rng)
    child1, child2 = crossover_ex(parent1, parent2, rng)
    assert sorted(child1) == list(range(9))
    assert sorted(child2) == list(range(9))


def test_crossover_ex_identical_parents_keeps_cycle_edges():
    parent = [0, 1, 2, 3, 4, 5]
    child, _ = crossover_ex(parent, parent, random.Random(8))
    edges = {frozenset((parent[i], parent[(i + 1) % 6])) for i in range(6)}
    child_edges = [frozenset((child[i], child[i + 1])) for i in range(5)]
    assert all(edge in edges for edge in child_edges)


@pytest.mark.parametrize("operator", [crossover_ox, crossover_ex])
def test_crossover_rejects_mismatched_parents(operator):
    with pytest.raises(ValueError):
        operator([0, 1, 2], [0, 1, 3], random.Random(0))


def test_mutation_swap_changes_two_positions():
    original = [0, 1, 2, 3, 4, 5]
    mutated = mutation_swap(original, random.Random(6))
    assert sorted(mutated) == original
    assert sum(a != b for a, b in zip(original, mutated)) == 2


def test_mutation_swap_too_short():
    with pytest.raises(ValueError):
        mutation_swap([0], random.Random(0))


def test_mutation_insert_changes_order():
    original = [0, 1, 2, 3, 4, 5]
    mutated = mutation_insert(original, random.Random(9))
    assert sorted(mutated) == original
    assert mutated != original
    assert original == [0, 1, 2, 3, 4, 5]


def test_succession_keeps_elite_and_best_offspring():
    population = [Individual([0], cost) for cost in (40, 10, 30, 20)]
    offspring = [Individual([1], cost) for cost in (25, 5, 35, 15, 45)]
    result = succession(population, offspring, 4, 1)
    assert [individual.cost for individual in result] == [10, 5, 15, 25]
    assert result[0].path == [0]


def test_succession_too_few_offspring():
    with pytest.raises(ValueError):
        succession([Individual([0], 1)], [Individual([0], 2)], 4, 1)


def test_genetic_zero_time_returns_initial_best(tmp_path):
    log = tmp_path / "ga.txt"
    best = genetic_algorithm(MATRIX, 10, "OX", "swap", 0.8, 0.01, 0, log, random.Random(1))
    assert sorted(best.path) == list(range(6))
    assert best.cost == tour_cost(best.path, MATRIX)
    assert best.cost <= best_greedy_tour(MATRIX)[1]
    text = log.read_text()
    assert f"Best solution found: \n{best.cost}\n" in text
    assert text.endswith("".join(f"{city} " for city in best.path))


def test_genetic_log_average_on_uniform_matrix(tmp_path):
    matrix = [[1] * 4 for _ in range(4)]
    log = tmp_path / "ga.txt"
    best = genetic_algorithm(matrix, 6, CrossoverType.EX, MutationType.INSERT, 0.8, 0.5, 0, log)
    assert best.cost == 4
    assert "Average population cost: \n4\n" in log.read_text()


@pytest.mark.parametrize(
    "crossover, mutation",
    [(CrossoverType.OX, MutationType.SWAP), (CrossoverType.EX, MutationType.INSERT)],
)
def test_genetic_short_run_not_worse_than_greedy(crossover, mutation):
    best = genetic_algorithm(MATRIX, 12, crossover, mutation, 0.9, 0.2, 1, None, random.Random(7))
    assert sorted(best.path) == list(range(6))
    assert best.cost == tour_cost(best.path, MATRIX)
    assert best.cost <= best_greedy_tour(MATRIX)[1]


def test_genetic_unknown_crossover():
    with pytest.raises(ValueError):
        genetic_algorithm(MATRIX, 10, "PMX", "swap", 0.8, 0.01, 0)


def test_genetic_invalid_population_size():
    with pytest.raises(ValueError):
        genetic_algorithm(MATRIX, 0, "OX", "swap", 0.8, 0.01, 0)