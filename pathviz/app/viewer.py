# pathviz/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Visualizer, pygame host

- Mouse:
    click / drag on grid   -> toggle walls
    [Select Start]/[S]     -> next click moves the start marker
    [Select Finish]/[F]    -> next click moves the finish marker
- Keyboard:
    [SPACE]      -> visualize Dijkstra
    [ENTER]      -> skip to the end of the running animation
    [C]          -> clear walls
    [R]          -> reset grid
    [Q]/[ESC]    -> quit

Config: see pathviz.app.config (PATHVIZ_* env vars, --rows= / --cols= / ...).
"""

import logging
import sys
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Set

import pygame

from pathviz.app.config import Settings, ConfigError, resolve_settings
from pathviz.app.replay import Replayer, ReplayEvent, build_timeline, VISITED, PATH
from pathviz.core.dijkstra import search
from pathviz.core.grid import create_grid, toggle_wall, move_start, move_finish, clear_walls
from pathviz.core.types import Cell, Grid, GridError, SearchResult

logger = logging.getLogger(__name__)

PANEL_W = 280            # right band: metrics + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
GRID_LINE   = (175,216,248)
WALL        = ( 12, 53, 71)
START_GREEN = ( 46,139, 87)
FINISH_RED  = (220, 50, 47)
VISITED_A   = ( 64,206,227,200)
PATH_YELLOW = (255,254,106)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Application state ----------
@dataclass
class AppState:
    grid: Grid
    visited: Set[Cell] = field(default_factory=set)
    path: List[Cell] = field(default_factory=list)
    placing: Optional[str] = None          # "start" | "finish" | None
    mouse_down: bool = False
    last_painted: Optional[Cell] = None
    replayer: Optional[Replayer] = None
    result: Optional[SearchResult] = None
    status: str = "Idle"

    @property
    def animating(self) -> bool:
        return self.replayer is not None and not self.replayer.finished

    def clear_overlays(self):
        self.visited.clear()
        self.path = []
        self.replayer = None
        self.result = None
        self.status = "Idle"


# ---------- Viewer ----------
class Viewer:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.app = AppState(grid=self._fresh_grid())

        pygame.init()
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        cs = settings.cell_size
        win_w = GRID_MARGIN*2 + settings.cols * cs + PANEL_W
        win_h = max(GRID_MARGIN*2 + settings.rows * cs, 420)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding Visualizer - Dijkstra")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)
        self.clock = pygame.time.Clock()

    def _fresh_grid(self) -> Grid:
        s = self.settings
        return create_grid(s.rows, s.cols, s.start, s.finish)

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        g = self.app.grid
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(4, min(avail_w // g.cols, avail_h // g.rows)))

        grid_plate_w = g.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = g.rows * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - grid_plate_h) // 2)
        self.canvas_rect = pygame.Rect(0, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)

        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        cell = ((y - oy) // self.cell_size, (x - ox) // self.cell_size)
        return cell if self.app.grid.in_bounds(cell) else None

    def run(self):
        while True:
            dt = self.clock.tick(60)
            self._handle_events()
            self._tick_replay(dt)
            self._draw()

    # ---------- edits ----------
    def _apply_edit(self, edit, *args, quiet: bool = False) -> bool:
        try:
            new_grid = edit(self.app.grid, *args)
        except GridError as ex:
            if quiet:
                logger.debug("edit skipped: %s", ex)
            else:
                logger.warning("edit rejected: %s", ex)
            return False
        if self.app.result is not None:
            self.app.clear_overlays()
        self.app.grid = new_grid
        return True

    def _on_grid_press(self, cell: Cell):
        app = self.app
        if app.placing == "start":
            self._apply_edit(move_start, app.grid.start, cell)
            app.placing = None
        elif app.placing == "finish":
            self._apply_edit(move_finish, app.grid.finish, cell)
            app.placing = None
        else:
            self._apply_edit(toggle_wall, *cell)
            app.mouse_down = True
            app.last_painted = cell
        self._refresh_active_states()

    def _on_grid_drag(self, cell: Cell):
        app = self.app
        if not app.mouse_down or cell == app.last_painted:
            return
        app.last_painted = cell
        self._apply_edit(toggle_wall, *cell, quiet=True)

    def _arm_placement(self, which: str):
        if self.app.animating:
            return
        self.app.placing = None if self.app.placing == which else which
        self._refresh_active_states()

    def _clear_walls(self):
        if self.app.animating:
            return
        self.app.clear_overlays()
        self.app.grid = clear_walls(self.app.grid)

    def _reset(self):
        self.app = AppState(grid=self._fresh_grid())
        logger.info("grid reset to %dx%d", self.app.grid.rows, self.app.grid.cols)
        self._refresh_active_states()

    # ---------- search + replay ----------
    def _visualize(self):
        app = self.app
        if app.animating:
            return
        app.clear_overlays()
        app.placing = None
        g = app.grid
        try:
            result = search(g, g.start, g.finish)
        except GridError as ex:
            logger.warning("search refused: %s", ex)
            return
        app.result = result
        timeline = build_timeline(result, self.settings.visited_delay_ms,
                                  self.settings.path_delay_ms)
        app.replayer = Replayer(timeline)
        app.status = "Running"
        logger.info("visualizing: %d visited, path length %d",
                    len(result.visited_order), len(result.path_order))
        self._refresh_active_states()

    def _tick_replay(self, dt_ms: float):
        if self.app.replayer is None or self.app.replayer.finished:
            return
        self._apply_events(self.app.replayer.advance(dt_ms))

    def _skip_replay(self):
        if self.app.animating:
            self._apply_events(self.app.replayer.skip())

    def _apply_events(self, events: List[ReplayEvent]):
        app = self.app
        for ev in events:
            if ev.state == VISITED:
                app.visited.add(ev.cell)
            elif ev.state == PATH:
                app.path.append(ev.cell)
        if app.replayer.finished:
            app.status = "Done" if app.result.found else "No path"
            self._refresh_active_states()

    # ---------- events ----------
    def _apply_resize(self, req_w: int, req_h: int):
        self.screen = pygame.display.set_mode((max(480, req_w), max(360, req_h)),
                                              pygame.RESIZABLE)
        self._layout(*self.screen.get_size())

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._visualize()
                elif e.key == pygame.K_RETURN:
                    self._skip_replay()
                elif e.key == pygame.K_s:
                    self._arm_placement("start")
                elif e.key == pygame.K_f:
                    self._arm_placement("finish")
                elif e.key == pygame.K_c:
                    self._clear_walls()
                elif e.key == pygame.K_r:
                    self._reset()
            elif e.type == pygame.VIDEORESIZE:
                self._apply_resize(e.w, e.h)
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self.app.mouse_down = False
                self.app.last_painted = None
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                if self.app.animating:
                    continue
                cell = self.cell_at(e.pos)
                if cell is None:
                    continue
                if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    self._on_grid_press(cell)
                elif e.type == pygame.MOUSEMOTION:
                    self._on_grid_drag(cell)

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        grid = self.app.grid
        visited_tile = pygame.Surface((cs, cs), pygame.SRCALPHA)
        visited_tile.fill(VISITED_A)
        path_cells = set(self.app.path)

        for node in grid.iter_nodes():
            rect = pygame.Rect(ox + node.col*cs, oy + node.row*cs, cs, cs)
            if node.is_wall:
                pygame.draw.rect(self.screen, WALL, rect)
            else:
                pygame.draw.rect(self.screen, WHITE, rect)
                if node.cell in path_cells:
                    pygame.draw.rect(self.screen, PATH_YELLOW, rect)
                elif node.cell in self.app.visited:
                    self.screen.blit(visited_tile, rect.topleft)
            pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

        self._draw_badge(grid.start, START_GREEN, "S")
        self._draw_badge(grid.finish, FINISH_RED, "F")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], letter: str):
        cs = self.cell_size
        ox, oy = self._grid_origin
        row, col = cell
        cx = ox + col*cs + cs//2
        cy = oy + row*cs + cs//2
        pygame.draw.circle(self.screen, color, (cx,cy), max(3, cs//2 - 2))
        if cs >= 14:
            txt = self.font_small.render(letter, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=(cx,cy)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 180  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 38
        gap = 10

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            nonlocal y
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)
            y += h + gap

        add("Select Start Node", lambda: self._arm_placement("start"), togglable=True, store_as="btn_start")
        add("Select Finish Node", lambda: self._arm_placement("finish"), togglable=True, store_as="btn_finish")
        add("Visualize Dijkstra", self._visualize, togglable=True, store_as="btn_run")
        add("Clear Walls", self._clear_walls)
        add("Reset Grid", self._reset)

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_start"):
            self.btn_start.set_active(self.app.placing == "start")
        if hasattr(self, "btn_finish"):
            self.btn_finish.set_active(self.app.placing == "finish")
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.app.animating)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 160
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        app = self.app
        line("Dijkstra", big=True, color=ACCENT_GOLD)
        line(f"State: {app.status}")
        line(f"Visited: {len(app.visited)}")
        line(f"Path Len: {len(app.path)}")
        if app.placing:
            line(f"Click a cell to place {app.placing}")
        else:
            line(f"Grid: {app.grid.rows} x {app.grid.cols}")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main(argv: Optional[List[str]] = None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    try:
        settings = resolve_settings(argv)
        if settings.verbose:
            logging.getLogger().setLevel(logging.DEBUG)
        viewer = Viewer(settings)
    except (ConfigError, GridError) as ex:
        print(f"Failed to start viewer: {ex}")
        sys.exit(1)
    viewer.run()


if __name__ == "__main__":
    main()
