# pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from math import inf
from typing import List, Tuple, Optional, Dict, Any, Iterator

Cell = Tuple[int, int]  # (row, col)

# up, down, left, right
DIR4: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class GridError(ValueError):
    """A grid edit or search was requested with an invalid coordinate."""


class OutOfBoundsError(GridError):
    pass


class BlockedCellError(GridError):
    pass


@dataclass(frozen=True)
class Node:
    row: int
    col: int
    is_start: bool = False
    is_finish: bool = False
    is_wall: bool = False
    distance: float = inf
    is_visited: bool = False
    previous_node: Optional[Cell] = None   # index into the grid, not a link

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)


@dataclass(frozen=True)
class Grid:
    nodes: Tuple[Tuple[Node, ...], ...]   # [row][col]
    start: Cell
    finish: Cell

    @property
    def rows(self) -> int:
        return len(self.nodes)

    @property
    def cols(self) -> int:
        return len(self.nodes[0]) if self.nodes else 0

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def node(self, c: Cell) -> Node:
        if not self.in_bounds(c):
            raise OutOfBoundsError(f"cell {c} outside {self.rows}x{self.cols} grid")
        r, col = c
        return self.nodes[r][col]

    def is_wall(self, c: Cell) -> bool:
        return self.node(c).is_wall

    def iter_nodes(self) -> Iterator[Node]:
        for row in self.nodes:
            yield from row

    def neighbors4(self, c: Cell) -> List[Cell]:
        r, col = c
        out: List[Cell] = []
        for dr, dc in DIR4:
            n = (r + dr, col + dc)
            if self.in_bounds(n) and not self.is_wall(n):
                out.append(n)
        return out


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchResult:
    visited_order: Tuple[Node, ...]
    path_order: Tuple[Node, ...]
    grid: Grid                    # solved snapshot with scratch fields filled in
    finish: Cell

    @property
    def found(self) -> bool:
        return bool(self.path_order)

    @property
    def finish_distance(self) -> float:
        return self.grid.node(self.finish).distance
