# pathviz/app/replay.py
#!/usr/bin/env python3
"""
Timed replay of a finished search.

The search has already run to completion; this only decides when each
visited node and each path node gets painted. Visited nodes go out one every
`visited_delay_ms`, then the path follows one node every `path_delay_ms`.
"""

from dataclasses import dataclass
from typing import List

from pathviz.core.types import Cell, SearchResult

VISITED = "visited"
PATH = "path"


@dataclass(frozen=True)
class ReplayEvent:
    at_ms: int
    cell: Cell
    state: str          # VISITED | PATH


def build_timeline(result: SearchResult, visited_delay_ms: int = 10,
                   path_delay_ms: int = 50) -> List[ReplayEvent]:
    events: List[ReplayEvent] = []
    for i, node in enumerate(result.visited_order):
        events.append(ReplayEvent(i * visited_delay_ms, node.cell, VISITED))

    path_t0 = len(result.visited_order) * visited_delay_ms
    for j, node in enumerate(result.path_order):
        events.append(ReplayEvent(path_t0 + j * path_delay_ms, node.cell, PATH))
    return events


@dataclass
class Replayer:
    timeline: List[ReplayEvent]
    cursor: int = 0
    elapsed_ms: float = 0.0

    @property
    def finished(self) -> bool:
        return self.cursor >= len(self.timeline)

    @property
    def duration_ms(self) -> int:
        return self.timeline[-1].at_ms if self.timeline else 0

    def advance(self, dt_ms: float) -> List[ReplayEvent]:
        """Move the clock forward and return the events that became due."""
        self.elapsed_ms += dt_ms
        due: List[ReplayEvent] = []
        while not self.finished and self.timeline[self.cursor].at_ms <= self.elapsed_ms:
            due.append(self.timeline[self.cursor])
            self.cursor += 1
        return due

    def skip(self) -> List[ReplayEvent]:
        """Emit everything that is left."""
        rest = self.timeline[self.cursor:]
        self.cursor = len(self.timeline)
        self.elapsed_ms = max(self.elapsed_ms, self.duration_ms)
        return rest
