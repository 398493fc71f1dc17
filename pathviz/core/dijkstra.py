# pathviz/core/dijkstra.py
#!/usr/bin/env python3

import heapq
import logging
from dataclasses import dataclass, field, replace
from math import inf
from typing import Dict, Tuple, List, Optional

from pathviz.core.types import (Cell, Grid, Node, StepResult, SearchResult,
                                 GridError, BlockedCellError)

logger = logging.getLogger(__name__)


@dataclass
class DijkstraAlgo:
    """
    Dijkstra over the 4-connected grid with unit step cost.

    Driven one finalized node per step() so a host can single-step it, or to
    completion with run(). Scratch state lives on the algorithm object; the
    grid it was given is never modified.
    """
    name: str = "Dijkstra"

    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    finish: Optional[Cell] = None
    open_pq: List[Tuple[float, Cell]] = field(default_factory=list)   # (g, cell); ties pop row-major
    open_set: set = field(default_factory=set)
    closed_set: set = field(default_factory=set)
    closed_order: List[Cell] = field(default_factory=list)
    g: Dict[Cell, float] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False

    def init(self, grid: Grid, start: Optional[Cell] = None, finish: Optional[Cell] = None) -> None:
        start = tuple(start) if start is not None else grid.start
        finish = tuple(finish) if finish is not None else grid.finish
        for label, c in (("start", start), ("finish", finish)):
            # node() raises OutOfBoundsError for us
            if grid.node(c).is_wall:
                raise BlockedCellError(f"{label} {c} is a wall")
        self.grid = grid
        self.start = start
        self.finish = finish
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.open_pq.clear()
        self.open_set.clear()
        self.closed_set.clear()
        self.closed_order.clear()
        self.g.clear()
        self.parent.clear()
        self.popped_count = 0
        self.done = False
        self.no_path = False

        s = self.start
        self.g[s] = 0
        heapq.heappush(self.open_pq, (0, s))
        self.open_set.add(s)

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        path: List[Cell] = []
        cur = end
        while True:
            path.append(cur)
            if cur == self.start:
                break
            cur = self.parent[cur]
        path.reverse()
        return path

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            path = self._reconstruct_path(self.finish)
            return StepResult(status="done", path=path,
                              metrics=self._metrics(path_len=len(path)))

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        # frontier exhausted: every remaining node sits at infinity
        if not self.open_pq:
            self.no_path = True
            return StepResult(status="no_path", metrics=self._metrics())

        g_u, u = heapq.heappop(self.open_pq)
        if u in self.closed_set or g_u != self.g.get(u, inf):
            return StepResult(status="running", current=u, metrics=self._metrics())

        self.popped_count += 1
        self.open_set.discard(u)
        self.closed_set.add(u)
        self.closed_order.append(u)

        if u == self.finish:
            self.done = True
            path = self._reconstruct_path(u)
            return StepResult(status="done", closed=[u], current=u, path=path,
                              metrics=self._metrics(path_len=len(path)))

        opened_now: List[Cell] = []
        for v in self.grid.neighbors4(u):
            if v in self.closed_set:
                continue
            alt = self.g[u] + 1
            if alt < self.g.get(v, inf):
                self.g[v] = alt
                self.parent[v] = u
                heapq.heappush(self.open_pq, (alt, v))
                if v not in self.open_set:
                    self.open_set.add(v)
                    opened_now.append(v)

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    def run(self) -> SearchResult:
        if self.grid is None:
            raise RuntimeError("DijkstraAlgo.run() called before init()")
        res = self.step()
        while res.status == "running":
            res = self.step()
        return self.result()

    def result(self) -> SearchResult:
        """Snapshot of the current search state as a solved grid."""
        solved = self._solved_grid()
        visited = tuple(solved.node(c) for c in self.closed_order)
        path = tuple(nodes_in_shortest_path_order(solved, self.finish))
        logger.debug("%s: visited %d nodes, path length %d (%s -> %s)",
                     self.name, len(visited), len(path), self.start, self.finish)
        return SearchResult(visited_order=visited, path_order=path,
                            grid=solved, finish=self.finish)

    def _solved_grid(self) -> Grid:
        # markers follow the searched endpoints, which may differ from the input grid's
        rows = []
        for row in self.grid.nodes:
            rows.append(tuple(
                replace(n,
                        is_start=n.cell == self.start,
                        is_finish=n.cell == self.finish,
                        distance=self.g.get(n.cell, inf),
                        is_visited=n.cell in self.closed_set,
                        previous_node=self.parent.get(n.cell))
                for n in row
            ))
        return replace(self.grid, nodes=tuple(rows), start=self.start, finish=self.finish)

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "open_size": len(self.open_set),
            "closed_count": len(self.closed_set),
            "path_len": path_len,
        }


def search(grid: Grid, start: Cell, finish: Cell) -> SearchResult:
    algo = DijkstraAlgo()
    algo.init(grid, start, finish)
    return algo.run()


def nodes_in_shortest_path_order(grid: Grid, finish: Cell) -> List[Node]:
    node = grid.node(finish)
    if not node.is_visited:
        return []
    path: List[Node] = []
    # a chain longer than the grid means a corrupted snapshot
    limit = grid.rows * grid.cols
    while node is not None:
        path.append(node)
        if len(path) > limit:
            raise GridError(f"previous_node chain from {finish} does not terminate")
        node = grid.node(node.previous_node) if node.previous_node is not None else None
    path.reverse()
    return path
