# tspsolve

Heuristic solvers for the (asymmetric) travelling salesman problem, working
on integer cost matrices loaded from TSPLIB-style files, plain matrix files
or TSPLIB XML instances. There are no third-party dependencies.

## Modules

- `tspsolve.fileservice`: `load_tsplib_matrix` (a `DIMENSION` line and a
  full `EDGE_WEIGHT_SECTION`), `load_matrix` (vertex count followed by the
  rows), `load_xml_matrix` (edge costs truncated to integers), and
  `save_path` / `read_path` for solution files (default
  `solution_path.txt`). Malformed input raises `ValueError`.
- `tspsolve.graph`: `generate_graph` builds a random complete asymmetric
  graph with weights 1..50 and `-1` on the diagonal; `render_matrix` formats
  a matrix as a labelled text table.
- `tspsolve.tour`: `tour_cost` and the moves `move_vertex`,
  `swap_vertices` and `reverse_segment`.
- `tspsolve.greedy`: nearest-neighbour tours. `greedy_tour`,
  `all_greedy_tours` and `best_greedy_tour` return `(path, cost)` with the
  path closed back at its start vertex; `greedy_population` returns open
  permutations.
- `tspsolve.tabu`: `tabu_search` with a `Neighbourhood` of `MOVE_VERTEX`,
  `SWAP` or `REVERSE`, returning a `SearchResult` (`path`, `cost`,
  `time_found` in milliseconds, `iterations`).
- `tspsolve.annealing`: `simulated_annealing` with geometric cooling and a
  starting temperature estimated by `initial_temperature` from 50 random
  swaps.
- `tspsolve.genetic`: `genetic_algorithm` with tournament selection,
  `CrossoverType.OX` or `CrossoverType.EX` (edge recombination),
  `MutationType.SWAP`, `INSERT` or `NONE`, and elitist `succession`;
  it returns the best `Individual`.

Every solver takes an optional `rng` (`random.Random`) for reproducible
runs and an optional `log_file` to which progress is appended. The local
searches need at least four vertices and keep the first position of the
path fixed.

## Installation

```
pip install .
```

## Interactive use

```
tspsolve [--directory DIR]
```

starts a numbered menu read from standard input. Load a matrix (option 1
for TSPLIB files, option 10 for XML instances; after an XML load the menu
asks for the population size straight away), set a time limit in seconds
(option 2), choose parameters and run a solver: greedy (3), tabu search
(4, 5), simulated annealing (6, 7) or the genetic algorithm (11 to 16).
Option 8 saves the last path to `solution_path.txt` and option 9 reads it
back and prints its cost on the loaded matrix.

Result logs are appended in `--directory` (default: the current
directory): `TS_results.txt`, `SA_results.txt`, `GA_results.txt`, and a
summary of each tabu search and annealing run in `overall_results.txt`.

## Library use

```python
import random

from tspsolve.fileservice import load_tsplib_matrix
from tspsolve.greedy import best_greedy_tour
from tspsolve.tabu import Neighbourhood, tabu_search

matrix = load_tsplib_matrix("instance.atsp")
start, start_cost = best_greedy_tour(matrix)

result = tabu_search(
    matrix,
    start,
    time_limit=5,
    neighbourhood=Neighbourhood.SWAP,
    tenure=10,
    log_file="TS_results.txt",
    rng=random.Random(1),
)
print(result.cost, result.path)
```

## Limitations

- The menu has no quit option; it ends when its input runs out.
- The plain matrix format read by `load_matrix` is available from the
  library only, not from the menu.
- The relative error written to the genetic algorithm's log is measured
  against a fixed reference optimum of 2755, not against the loaded
  instance.

## Tests

```
pip install .[test]
pytest
```