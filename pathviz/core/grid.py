# pathviz/core/grid.py
#!/usr/bin/env python3
"""
Grid model edits. Every operation returns a new Grid; only the row holding
the touched node is rebuilt, all other row tuples are shared with the input.
"""

import logging
from dataclasses import replace
from typing import Tuple

from pathviz.core.types import Grid, Node, Cell, GridError, OutOfBoundsError, BlockedCellError

logger = logging.getLogger(__name__)


def create_grid(rows: int, cols: int, start: Cell, finish: Cell) -> Grid:
    if rows <= 0 or cols <= 0:
        raise OutOfBoundsError(f"grid dimensions must be positive, got {rows}x{cols}")
    for label, (r, c) in (("start", start), ("finish", finish)):
        if not (0 <= r < rows and 0 <= c < cols):
            raise OutOfBoundsError(f"{label} {(r, c)} outside {rows}x{cols} grid")

    nodes = tuple(
        tuple(
            Node(row=r, col=c,
                 is_start=(r, c) == tuple(start),
                 is_finish=(r, c) == tuple(finish))
            for c in range(cols)
        )
        for r in range(rows)
    )
    logger.debug("created %dx%d grid, start=%s finish=%s", rows, cols, start, finish)
    return Grid(nodes=nodes, start=tuple(start), finish=tuple(finish))


def _with_node(grid: Grid, node: Node, **changes) -> Tuple[Tuple[Node, ...], ...]:
    rows = list(grid.nodes)
    row = list(rows[node.row])
    row[node.col] = replace(node, **changes)
    rows[node.row] = tuple(row)
    return tuple(rows)


def toggle_wall(grid: Grid, row: int, col: int) -> Grid:
    node = grid.node((row, col))
    if node.is_start or node.is_finish:
        raise BlockedCellError(f"cannot place a wall on the start/finish node at {(row, col)}")
    return replace(grid, nodes=_with_node(grid, node, is_wall=not node.is_wall))


def clear_walls(grid: Grid) -> Grid:
    rows = []
    for row in grid.nodes:
        if any(n.is_wall for n in row):
            row = tuple(replace(n, is_wall=False) if n.is_wall else n for n in row)
        rows.append(row)
    return replace(grid, nodes=tuple(rows))


def _move_marker(grid: Grid, flag: str, old: Cell, new: Cell) -> Grid:
    old, new = tuple(old), tuple(new)
    current = grid.start if flag == "is_start" else grid.finish
    if old != current:
        raise GridError(f"{old} does not hold the {flag[3:]} marker (it is at {current})")
    target = grid.node(new)
    if target.is_wall:
        raise BlockedCellError(f"cannot move {flag[3:]} onto the wall at {new}")

    tmp = replace(grid, nodes=_with_node(grid, grid.node(old), **{flag: False}))
    nodes = _with_node(tmp, tmp.node(new), **{flag: True})
    if flag == "is_start":
        return replace(grid, nodes=nodes, start=new)
    return replace(grid, nodes=nodes, finish=new)


def move_start(grid: Grid, old: Cell, new: Cell) -> Grid:
    return _move_marker(grid, "is_start", old, new)


def move_finish(grid: Grid, old: Cell, new: Cell) -> Grid:
    return _move_marker(grid, "is_finish", old, new)
