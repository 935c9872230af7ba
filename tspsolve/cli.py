"""Interactive menu for loading instances and running the solvers."""

from __future__ import annotations

import argparse
import random
import sys
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TextIO

from .annealing import DEFAULT_LOG_FILE as ANNEALING_LOG
from .annealing import simulated_annealing
from .fileservice import (
    DEFAULT_SOLUTION_FILE,
    load_tsplib_matrix,
    load_xml_matrix,
    read_path,
    save_path,
)
from .genetic import DEFAULT_LOG_FILE as GENETIC_LOG
from .genetic import genetic_algorithm
from .greedy import best_greedy_tour
from .tabu import DEFAULT_LOG_FILE as TABU_LOG
from .tabu import DEFAULT_TENURE, Neighbourhood, SearchResult, tabu_search
from .tour import tour_cost

OVERALL_RESULTS = "overall_results.txt"

MENU = (
    "\n\nChoose option: \n"
    "1. Load data from file\n"
    "2. Introduce the stop criterium (number of seconds)\n"
    "3. Calculate the result by greedy method\n"
    "4. Choose neighbourhood for Tabu Search\n"
    "5. Run the Tabu Search algorithm for the data loaded and the parameters set\n"
    "6. Set up the cooling factor for the Simulated Annealing algorithm\n"
    "7. Run the Simulated Annealing algorithm for the data loaded and the parameters set\n"
    "8. Save the solution path to the file\n"
    "9. Load a solution path from the file and calculate the path from the loaded cost table\n"
    "10. Load XML file\n"
    "11. Set initial population size\n"
    "12. Set the mutation factor\n"
    "13. Set the crossover rate\n"
    "14. Choose crossover method\n"
    "15. Choose mutation method\n"
    "16. Run genetic algorithm\n"
)

NEIGHBOURHOOD_CHOICES = {
    1: Neighbourhood.MOVE_VERTEX,
    2: Neighbourhood.SWAP,
    3: Neighbourhood.REVERSE,
}

NEIGHBOURHOOD_LABELS = {
    Neighbourhood.MOVE_VERTEX: "Change one vertex",
    Neighbourhood.SWAP: "Swap places",
    Neighbourhood.REVERSE: "Reverse Order",
}

COOLING_CHOICES = {1: 0.95, 2: 0.98, 3: 0.99}


@dataclass
class Session:
    """State kept between menu choices."""

    graph: list[list[int]] = field(default_factory=list)
    stop: float = 0.0
    neighbourhood: Optional[Neighbourhood] = None
    cooling: Optional[float] = None
    path: list[int] = field(default_factory=list)
    population_size: int = 0
    mutation_factor: float = 0.0
    crossover_factor: float = 0.0
    crossover_type: str = ""
    mutation_type: str = ""
    directory: Path = field(default_factory=lambda: Path("."))
    rng: random.Random = field(default_factory=random.Random)


class _EndOfInput(Exception):
    """Raised when the input runs out in the middle of a prompt."""


def _tokens(stream: Iterable[str]) -> Iterator[str]:
    for line in stream:
        yield from line.split()


class _Console:
    def __init__(self, tokens: Iterator[str], out: TextIO) -> None:
        self._tokens = tokens
        self._out = out

    def say(self, text: str = "") -> None:
        self._out.write(f"{text}\n")

    def next_token(self) -> Optional[str]:
        return next(self._tokens, None)

    def ask(self, prompt: str) -> str:
        self.say(prompt)
        token = self.next_token()
        if token is None:
            raise _EndOfInput
        return token

    def ask_int(self, prompt: str) -> int:
        token = self.ask(prompt)
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"not an integer: {token!r}") from None

    def ask_float(self, prompt: str) -> float:
        token = self.ask(prompt)
        try:
            return float(token)
        except ValueError:
            raise ValueError(f"not a number: {token!r}") from None


def _format_path(path: Iterable[int]) -> str:
    return " ".join(str(vertex) for vertex in path)


def _append_overall(session: Session, label: str, cost: int) -> None:
    with open(session.directory / OVERALL_RESULTS, "a", encoding="utf-8") as handle:
        handle.write(f"{label}\n{cost}\n")


def _greedy(session: Session, console: _Console) -> list[int]:
    path, cost = best_greedy_tour(session.graph)
    console.say(f"Best path by greedy method: {_format_path(path)}")
    console.say(f"Best cost by greedy method: {cost}")
    return path


def _report(
    session: Session, console: _Console, header: str, label: str, result: SearchResult
) -> None:
    session.path = list(result.path)
    console.say(header)
    console.say(f"Best path: {_format_path(result.path)}")
    console.say(f"Cost: {result.cost}")
    _append_overall(session, label, result.cost)


def _load_file(session: Session, console: _Console) -> None:
    filename = console.ask("Provide file name: ")
    session.graph = load_tsplib_matrix(filename)
    console.say(f"dimension: {len(session.graph)}")
    with open(filename, encoding="utf-8") as handle:
        console.say(handle.read().rstrip("\n"))


def _set_stop(session: Session, console: _Console) -> None:
    session.stop = console.ask_float("Provide number of seconds: ")


def _run_greedy(session: Session, console: _Console) -> None:
    session.path = _greedy(session, console)


def _choose_neighbourhood(session: Session, console: _Console) -> None:
    console.say("1. Moving one vertex to another location")
    console.say("2. Swap two vertices")
    choice = console.ask_int(
        "3. Reversal of the order of vertices on a certain route subsection"
    )
    session.neighbourhood = NEIGHBOURHOOD_CHOICES.get(choice)


def _run_tabu(session: Session, console: _Console) -> None:
    start_path = _greedy(session, console)
    if session.neighbourhood is None:
        console.say("Neighbourhood for Tabu Search not chosen")
        return
    result = tabu_search(
        session.graph,
        start_path,
        session.stop,
        session.neighbourhood,
        DEFAULT_TENURE,
        session.directory / TABU_LOG,
        session.rng,
    )
    console.say(f"Iterations: {result.iterations}")
    _report(
        session,
        console,
        "================================",
        NEIGHBOURHOOD_LABELS[session.neighbourhood],
        result,
    )


def _choose_cooling(session: Session, console: _Console) -> None:
    console.say("Choose value of an 'a' factor: ")
    console.say("1. 0.95")
    console.say("2. 0.98")
    choice = console.ask_int("3. 0.99")
    session.cooling = COOLING_CHOICES.get(choice)


def _run_annealing(session: Session, console: _Console) -> None:
    start_path = _greedy(session, console)
    if session.cooling is None:
        console.say("Cooling factor not chosen")
        return
    result = simulated_annealing(
        session.graph,
        start_path,
        session.stop,
        session.cooling,
        session.directory / ANNEALING_LOG,
        session.rng,
    )
    console.say(f"Calculated initial temperature is {result.initial_temperature:g}")
    console.say(f"Iterations: {result.iterations}")
    console.say(f"Time to find the best solution: {result.time_found}ms")
    _report(
        session,
        console,
        "=============SIMULATED ANNEALING===================",
        "Simulated annealing",
        result,
    )


def _save_path(session: Session, console: _Console) -> None:
    save_path(session.path, session.directory / DEFAULT_SOLUTION_FILE)


def _check_saved_path(session: Session, console: _Console) -> None:
    path = read_path(session.directory / DEFAULT_SOLUTION_FILE)
    if not session.graph:
        console.say("Cost table wasn't loaded")
        return
    console.say(f"Cost of the path read from a file: {tour_cost(path, session.graph)}")


def _set_population(session: Session, console: _Console) -> None:
    session.population_size = console.ask_int(
        " Provide the size of the initial population:"
    )


def _load_xml(session: Session, console: _Console) -> None:
    try:
        filename = console.ask("Provide file name: ")
        session.graph = load_xml_matrix(filename)
        for row in session.graph:
            console.say("".join(f"{cost} " for cost in row))
    except (OSError, ValueError) as error:
        console.say(f"Error: {error}")
    # loading an XML instance goes straight on to the population size prompt
    _set_population(session, console)


def _set_mutation_factor(session: Session, console: _Console) -> None:
    session.mutation_factor = console.ask_float(" Provide mutation factor:")


def _set_crossover_factor(session: Session, console: _Console) -> None:
    session.crossover_factor = console.ask_float(" Provide crossover rate:")


def _choose_crossover(session: Session, console: _Console) -> None:
    session.crossover_type = console.ask("\nOX or EX")


def _choose_mutation(session: Session, console: _Console) -> None:
    session.mutation_type = console.ask("\nswap or insert")


def _run_genetic(session: Session, console: _Console) -> None:
    best = genetic_algorithm(
        session.graph,
        session.population_size,
        session.crossover_type,
        session.mutation_type or "none",
        session.crossover_factor,
        session.mutation_factor,
        int(session.stop),
        session.directory / GENETIC_LOG,
        session.rng,
    )
    console.say(f"Best solution found: {best.cost}")
    console.say("Path: " + "".join(f"{city} " for city in best.path))


_ACTIONS: dict[str, Callable[[Session, _Console], None]] = {
    "1": _load_file,
    "2": _set_stop,
    "3": _run_greedy,
    "4": _choose_neighbourhood,
    "5": _run_tabu,
    "6": _choose_cooling,
    "7": _run_annealing,
    "8": _save_path,
    "9": _check_saved_path,
    "10": _load_xml,
    "11": _set_population,
    "12": _set_mutation_factor,
    "13": _set_crossover_factor,
    "14": _choose_crossover,
    "15": _choose_mutation,
    "16": _run_genetic,
}


def run_menu(
    input_stream: Optional[Iterable[str]] = None,
    output_stream: Optional[TextIO] = None,
    session: Optional[Session] = None,
) -> Session:
    """Serve menu choices read from ``input_stream`` until it runs out."""
    input_stream = sys.stdin if input_stream is None else input_stream
    output_stream = sys.stdout if output_stream is None else output_stream
    session = Session() if session is None else session
    console = _Console(_tokens(input_stream), output_stream)

    while True:
        output_stream.write(MENU)
        choice = console.next_token()
        if choice is None:
            return session
        action = _ACTIONS.get(choice)
        if action is None:
            console.say(f"Unknown option: {choice}")
            continue
        try:
            action(session, console)
        except _EndOfInput:
            return session
        except (OSError, ValueError) as error:
            console.say(f"Error: {error}")


def main(argv: Optional[list[str]] = None) -> int:
    """Start the interactive menu on standard input and output."""
    parser = argparse.ArgumentParser(
        prog="tspsolve", description="Solve travelling salesman instances interactively."
    )
    parser.add_argument(
        "--directory", default=".", help="directory for result and solution files"
    )
    args = parser.parse_args(argv)
    run_menu(sys.stdin, sys.stdout, Session(directory=Path(args.directory)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())