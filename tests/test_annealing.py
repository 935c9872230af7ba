import random

import pytest

from tspsolve.annealing import initial_temperature, simulated_annealing
from tspsolve.tour import tour_cost


def ring_matrix(n):
    return [[0 if i == j else (1 if j == (i + 1) % n else 100) for j in range(n)] for i in range(n)]


def uniform_matrix(n, weight):
    return [[0 if i == j else weight for j in range(n)] for i in range(n)]


BAD_INITIAL = [0, 2, 1, 3, 4, 5, 0]
RING_OPTIMUM = [0, 1, 2, 3, 4, 5, 0]


def test_uniform_weights_give_zero_temperature():
    matrix = uniform_matrix(6, 7)
    assert initial_temperature(matrix, RING_OPTIMUM, random.Random(1)) == 0


def test_temperature_positive_from_optimal_tour():
    matrix = ring_matrix(6)
    assert initial_temperature(matrix, RING_OPTIMUM, random.Random(2)) > 0


def test_temperature_reproducible_with_seed():
    matrix = ring_matrix(7)
    initial = list(range(7)) + [0]
    first = initial_temperature(matrix, initial, random.Random(3))
    second = initial_temperature(matrix, initial, random.Random(3))
    assert first == second


def test_temperature_needs_four_vertices():
    with pytest.raises(ValueError):
        initial_temperature(ring_matrix(3), [0, 1, 2, 0], random.Random(4))


def test_zero_time_returns_initial_tour():
    matrix = ring_matrix(6)
    result = simulated_annealing(matrix, BAD_INITIAL, 0, 0.98, None, random.Random(5))
    assert result.path == BAD_INITIAL
    assert result.cost == tour_cost(BAD_INITIAL, matrix)
    assert result.iterations == 0
    assert result.initial_temperature == initial_temperature(matrix, BAD_INITIAL, random.Random(5))


def test_zero_time_log_holds_final_block(tmp_path):
    matrix = ring_matrix(6)
    log = tmp_path / "sa.txt"
    simulated_annealing(matrix, BAD_INITIAL, 0, 0.95, log, random.Random(6))
    expected = "".join(f"{v} " for v in BAD_INITIAL) + f"\n{tour_cost(BAD_INITIAL, matrix)}\n0\n\n\n\n"
    assert log.read_text(encoding="utf-8") == expected


@pytest.mark.parametrize("cooling", [0.95, 0.98, 0.99])
def test_annealing_improves_bad_tour(cooling):
    matrix = ring_matrix(6)
    result = simulated_annealing(matrix, BAD_INITIAL, 0.1, cooling, None, random.Random(7))
    assert result.cost < tour_cost(BAD_INITIAL, matrix)
    assert result.cost == tour_cost(result.path, matrix)
    assert sorted(result.path[:-1]) == list(range(6))
    assert result.path[0] == 0 and result.path[-1] == 0
    assert result.iterations > 0


def test_result_never_worse_than_initial():
    rng = random.Random(8)
    matrix = [[0 if i == j else rng.randint(1, 50) for j in range(9)] for i in range(9)]
    initial = list(range(9)) + [0]
    result = simulated_annealing(matrix, initial, 0.05, 0.99, None, random.Random(9))
    assert result.cost <= tour_cost(initial, matrix)
    assert result.cost == tour_cost(result.path, matrix)


def test_log_records_improvements(tmp_path):
    matrix = ring_matrix(6)
    log = tmp_path / "sa.txt"
    result = simulated_annealing(matrix, BAD_INITIAL, 0.1, 0.98, log, random.Random(10))
    text = log.read_text(encoding="utf-8")
    lines = text.split("\n")
    first_path = [int(token) for token in lines[0].split()]
    assert int(lines[1]) == tour_cost(first_path, matrix)
    assert text.endswith(f"{result.cost}\n{result.time_found}\n\n\n\n")


def test_annealing_needs_four_vertices():
    with pytest.raises(ValueError):
        simulated_annealing(ring_matrix(3), [0, 1, 2, 0], 0, 0.98, None, random.Random(11))