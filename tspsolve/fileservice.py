"""Reading and writing cost matrices and solution paths."""

from __future__ import annotations

import io
import re
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Iterator, Sequence
from itertools import islice
from os import PathLike
from typing import Union

PathArg = Union[str, "PathLike[str]"]

DEFAULT_SOLUTION_FILE = "solution_path.txt"

_INT = re.compile(r"\s*([+-]?\d+)")


def _int_tokens(text: str) -> Iterator[int]:
    """Yield whitespace-separated integers until the first token that is not one."""
    pos = 0
    while (match := _INT.match(text, pos)) is not None:
        yield int(match.group(1))
        pos = match.end()


def _leading_int(text: str) -> int:
    match = _INT.match(text)
    if match is None:
        raise ValueError(f"no integer value in {text.strip()!r}")
    return int(match.group(1))


def _fill_matrix(dimension: int, values: Iterable[int]) -> list[list[int]]:
    """Build a square matrix row by row; cells without a value stay zero."""
    if dimension < 0:
        raise ValueError(f"negative dimension: {dimension}")
    flat = list(islice(values, dimension * dimension))
    flat.extend([0] * (dimension * dimension - len(flat)))
    return [flat[row * dimension:(row + 1) * dimension] for row in range(dimension)]


def load_tsplib_matrix(filename: PathArg) -> list[list[int]]:
    """Load a full-matrix TSPLIB instance (DIMENSION plus EDGE_WEIGHT_SECTION)."""
    with open(filename, encoding="utf-8") as handle:
        stream = io.StringIO(handle.read())

    dimension = None
    for line in stream:
        if "DIMENSION" in line:
            _, colon, value = line.partition(":")
            if not colon:
                raise ValueError(f"Colon not found on line: {line.rstrip()}")
            dimension = _leading_int(value)
            break
    if dimension is None:
        raise ValueError("DIMENSION not found in file")

    for line in stream:
        if "EDGE_WEIGHT_SECTION" in line:
            return _fill_matrix(dimension, _int_tokens(stream.read()))
    return _fill_matrix(dimension, ())


def load_matrix(filename: PathArg) -> list[list[int]]:
    """Load a plain matrix file: the vertex count followed by the rows."""
    with open(filename, encoding="utf-8") as handle:
        tokens = _int_tokens(handle.read())
    count = next(tokens, None)
    if count is None:
        raise ValueError("missing number of vertices")
    return _fill_matrix(count, tokens)


def _as_double(value: str | None) -> float:
    if value is None:
        return 0.0
    try:
        return float(value.strip())
    except ValueError:
        return 0.0


def load_xml_matrix(filename: PathArg) -> list[list[int]]:
    """Load a TSPLIB XML instance; edge costs are truncated to integers."""
    try:
        root = ET.parse(filename).getroot()
    except ET.ParseError as error:
        raise ValueError(f"Could not load XML file: {error}") from error

    graph = root.find("graph") if root.tag == "travellingSalesmanProblemInstance" else None
    if graph is None:
        raise ValueError("XML file does not contain a valid 'graph' node.")

    vertices = graph.findall("vertex")
    count = len(vertices)
    matrix = [[0] * count for _ in range(count)]
    for row, vertex in zip(matrix, vertices):
        edges = vertex.findall("edge")
        if len(edges) > count:
            raise ValueError("vertex has more edges than there are vertices")
        for column, edge in enumerate(edges):
            row[column] = int(_as_double(edge.get("cost")))
    return matrix


def save_path(path: Sequence[int], filename: PathArg = DEFAULT_SOLUTION_FILE) -> None:
    """Write a closed path: its vertex count, then one vertex per line."""
    if not path:
        raise ValueError("cannot save an empty path")
    with open(filename, "w", encoding="utf-8") as handle:
        handle.write(f"{len(path) - 1}\n")
        handle.writelines(f"{vertex}\n" for vertex in path)


def read_path(filename: PathArg = DEFAULT_SOLUTION_FILE) -> list[int]:
    """Read a path written by :func:`save_path`."""
    with open(filename, encoding="utf-8") as handle:
        tokens = _int_tokens(handle.read())
    dimension = next(tokens, None)
    if dimension is None or dimension <= 0:
        raise ValueError("Incorrect number of vertices in file.")
    path = list(islice(tokens, dimension + 1))
    if len(path) < dimension + 1:
        raise ValueError("Unexpected end of file or format error while loading vertices.")
    return path