from typing import Iterator, List, Tuple

from .graph import ColoringGraph

FORMATS = ("auto", "edges", "dimacs")


class GraphFormatError(ValueError):
    pass


def _tokens(text: str) -> Iterator[Tuple[int, str]]:
    for lineno, line in enumerate(text.splitlines(), start=1):
        for token in line.split():
            yield lineno, token


def _to_int(token: str, lineno: int, source: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise GraphFormatError(f"{source}:{lineno}: expected an integer, got {token!r}") from None


def _check_vertex(v: int, n: int, lineno: int, source: str) -> int:
    if not 1 <= v <= n:
        raise GraphFormatError(f"{source}:{lineno}: vertex {v} outside 1..{n}")
    return v - 1


def detect_format(text: str) -> str:
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        return "dimacs" if stripped[0] in ("c", "p") else "edges"
    return "edges"


def parse_edge_pairs(text: str, source: str = "<string>") -> Tuple[int, List[Tuple[int, int]]]:
    """Vertex count followed by 1-based endpoint pairs until end of input."""
    tokens = _tokens(text)
    try:
        lineno, token = next(tokens)
    except StopIteration:
        raise GraphFormatError(f"{source}: missing vertex count") from None
    n = _to_int(token, lineno, source)
    if n < 0:
        raise GraphFormatError(f"{source}:{lineno}: negative vertex count {n}")

    edges = []
    pending = None
    for lineno, token in tokens:
        v = _check_vertex(_to_int(token, lineno, source), n, lineno, source)
        if pending is None:
            pending = v
        else:
            edges.append((pending, v))
            pending = None
    if pending is not None:
        raise GraphFormatError(f"{source}: dangling endpoint {pending + 1} without a partner")
    return n, edges


def parse_dimacs(text: str, source: str = "<string>") -> Tuple[int, List[Tuple[int, int]]]:
    n = None
    edges = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        parts = line.split()
        if not parts or parts[0] == "c":
            continue
        if parts[0] == "p":
            if len(parts) < 3 or n is not None:
                raise GraphFormatError(f"{source}:{lineno}: bad problem line {line.strip()!r}")
            n = _to_int(parts[2], lineno, source)
            if n < 0:
                raise GraphFormatError(f"{source}:{lineno}: negative vertex count {n}")
        elif parts[0] == "e":
            if n is None:
                raise GraphFormatError(f"{source}:{lineno}: edge before problem line")
            if len(parts) != 3:
                raise GraphFormatError(f"{source}:{lineno}: bad edge line {line.strip()!r}")
            u = _check_vertex(_to_int(parts[1], lineno, source), n, lineno, source)
            v = _check_vertex(_to_int(parts[2], lineno, source), n, lineno, source)
            edges.append((u, v))
        else:
            raise GraphFormatError(f"{source}:{lineno}: unknown line type {parts[0]!r}")
    if n is None:
        raise GraphFormatError(f"{source}: missing problem line")
    return n, edges


def parse_graph(text: str, fmt: str = "auto", source: str = "<string>") -> ColoringGraph:
    if fmt not in FORMATS:
        raise ValueError(f"unknown graph format {fmt!r}, expected one of {FORMATS}")
    if fmt == "auto":
        fmt = detect_format(text)
    if fmt == "dimacs":
        n, edges = parse_dimacs(text, source)
    else:
        n, edges = parse_edge_pairs(text, source)
    return ColoringGraph.from_edges(n, edges)


def read_graph_from_file(filename: str, fmt: str = "auto") -> ColoringGraph:
    with open(filename, "r", encoding="utf-8") as f:
        text = f.read()
    return parse_graph(text, fmt=fmt, source=str(filename))
