"""Greedy, tabu search, simulated annealing and genetic solvers for the travelling salesman problem."""

__version__ = "0.1.0"
__all__ = ["__version__"]