"""Reading mesh scheme files and command-line run options."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

SETTING_NAMES: Dict[str, str] = {
    "Tau": "tau",
    "KBT": "kbt",
    "Linear_Const": "linear_const",
    "Area_Const": "area_const",
    "Bend_Const": "bend_const",
    "LJ_Eps": "lj_eps",
    "LJ_Rmin": "lj_rmin",
    "LJ_Rmax": "lj_rmax",
    "LJ_Const": "lj_const",
    "LJ_X": "lj_x",
    "LJ_Y": "lj_y",
    "LJ_Z": "lj_z",
}

DEFAULT_TIMESTEP = 0.001
DEFAULT_SOLVE_TIME = 10000

_LEADING_FLOAT = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


class SchemeError(ValueError):
    """A scheme file could not be read or holds malformed data."""


@dataclass
class MeshScheme:
    """Mesh and settings read from a scheme file; indices are zero-based."""

    nodes: List[Tuple[float, float, float]] = field(default_factory=list)
    edges: List[Tuple[int, int]] = field(default_factory=list)
    elements: List[Tuple[int, int, int]] = field(default_factory=list)
    element_edges: List[Tuple[int, int, int]] = field(default_factory=list)
    edge_elements: List[Tuple[int, int]] = field(default_factory=list)
    settings: Dict[str, float] = field(default_factory=dict)


@dataclass
class RunOptions:
    """Options of a simulation run taken from the command line."""

    scheme_file: str
    timestep: float = DEFAULT_TIMESTEP
    solve_time: int = DEFAULT_SOLVE_TIME
    time_found: bool = False


def _leading_float(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    return float(match.group(0)) if match else 0.0


def _floats(text: str, count: int, what: str) -> Tuple[float, ...]:
    tokens = (text or "").split()
    try:
        values = tuple(float(t) for t in tokens[:count])
    except ValueError as exc:
        raise SchemeError(f"parse {what} error") from exc
    if len(values) != count:
        raise SchemeError(f"parse {what} error")
    return values


def _indices(text: str, count: int, what: str) -> Tuple[int, ...]:
    tokens = (text or "").split()
    try:
        values = tuple(int(t) for t in tokens[:count])
    except ValueError as exc:
        raise SchemeError(f"parse {what} error") from exc
    if len(values) != count or any(v < 1 for v in values):
        raise SchemeError(f"parse {what} error")
    return tuple(v - 1 for v in values)


def _children(root: ET.Element, section: str, item: str):
    container = root.find(section)
    return [] if container is None else container.findall(item)


def parse_scheme(text: str) -> MeshScheme:
    """Parse the XML text of a scheme; raises SchemeError on malformed input."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise SchemeError(f"parse error: {exc}") from exc
    scheme = MeshScheme()
    if root.tag != "data":
        return scheme

    settings = root.find("settings")
    if settings is not None:
        for tag, name in SETTING_NAMES.items():
            node = settings.find(tag)
            if node is not None:
                scheme.settings[name] = _leading_float(node.text or "")

    scheme.nodes = [_floats(n.text, 3, "node") for n in _children(root, "nodes", "node")]  # type: ignore[misc]
    scheme.edges = [_indices(n.text, 2, "link") for n in _children(root, "edgeinfos", "edgeinfo")]  # type: ignore[misc]
    scheme.elements = [_indices(n.text, 3, "elem") for n in _children(root, "elems", "elem")]  # type: ignore[misc]
    scheme.element_edges = [  # type: ignore[misc]
        _indices(n.text, 3, "elem2edge") for n in _children(root, "elem2edges", "elem2edge")
    ]
    scheme.edge_elements = [  # type: ignore[misc]
        _indices(n.text, 2, "edge2elem") for n in _children(root, "edge2elems", "edge2elem")
    ]
    return scheme


def load_scheme(path) -> MeshScheme:
    """Read and parse a scheme file."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise SchemeError(f"cannot read scheme file {path}: {exc}") from exc
    return parse_scheme(text)


def output_file_name(input_name: str, now: Optional[datetime] = None) -> str:
    """``input_name`` followed by the UTC time as ``_YYYY.MM.DD_HH-MM-SS``."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)
    return input_name + now.strftime("_%Y.%m.%d_%H-%M-%S")


def parse_run_args(args: Sequence[str]) -> RunOptions:
    """Read ``-dt=`` and ``-solve_time=`` options; the last argument is the scheme file."""
    if not args:
        raise ValueError("a scheme file argument is required")
    options = RunOptions(scheme_file=args[-1])
    for arg in args[:-1]:
        key, sep, value = arg.partition("=")
        if not sep:
            value = arg
        if key == "-dt":
            options.time_found = True
            options.timestep = _leading_float(value)
        elif key == "-solve_time":
            solve_time = int(_leading_float(value))
            if solve_time < 0:
                raise ValueError("solve time must not be negative")
            options.solve_time = solve_time
    return options


def format_elapsed(seconds: float) -> str:
    """Elapsed run time as hours, minutes and seconds."""
    total = int(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = (total % 3600) % 60
    return f"Total time hh: {hours} mm:{minutes} ss:{secs}"