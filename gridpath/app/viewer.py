#!/usr/bin/env python3
"""
Pathfinding Visualizer — grid editor + stepwise search + metrics

- Mouse:
    drag Start/End badges to move them, click/drag elsewhere to paint walls
- Keyboard:
    [SPACE]      -> visualize selected algorithm
    [A]/[D]/[B]  -> select algorithm (A* / Dijkstra / BFS)
    [C]          -> clear path
    [R]          -> reset grid
    [W]          -> random walls
    [X]          -> clear walls
    [+]/[-]      -> speed
    [T]          -> toggle dark/light theme
    [Q]/[ESC]    -> quit

Config:
- ENV: GRIDPATH_ALGO, GRIDPATH_SPEED, GRIDPATH_LOG_LEVEL
- CLI: --algo=astar|dijkstra|bfs --speed=N --log-level=LEVEL
"""

import sys, time
from typing import List, Optional, Tuple

import pygame

from gridpath.app import theme_skin as THEME
from gridpath.core.algorithms import LABELS
from gridpath.core.editor import GridEditor
from gridpath.core.errors import InvalidGridState
from gridpath.core.grid import Grid
from gridpath.core.settings import Settings, clamp_speed, resolve_settings
from gridpath.core.stepper import RunController, RunHandle
from gridpath.core.types import Cell
from gridpath.utils.logger import get_logger, set_level

log = get_logger("gridpath.viewer")

# ---------- Layout ----------
PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 30
FONT_NAME = None  # default pygame font
NO_PATH_NOTICE = "No path found! Try removing some walls."


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

    def draw(self, screen: pygame.Surface, font: pygame.font.Font, pal):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = pal["btn_active"]
        elif self.hover:
            bg = pal["btn_hover"]
        else:
            bg = pal["btn_idle"]
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, pal["btn_border"], self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, pal["text"][:3])
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, controller: RunController, editor: GridEditor, settings: Settings):
        pygame.init()

        self.controller = controller
        self.editor = editor
        self.settings = settings
        self.grid: Grid = controller.grid
        self.cell_size = CELL_SIZE_DEFAULT
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 26)

        win_w = GRID_MARGIN*2 + self.grid.cols * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + self.grid.rows * self.cell_size, 640)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding Visualizer")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()
        self.theme = "dark"
        self.state = "Idle"
        self.notice = ""
        self._handle: Optional[RunHandle] = None
        self._last_drag_cell: Optional[Tuple[int, int]] = None

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and place the grid on the left."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(8, min(avail_w // self.grid.cols, avail_h // self.grid.rows)))

        grid_plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(0, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        ox, oy = self._grid_origin
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        if self.grid.in_bounds(row, col):
            return row, col
        return None

    def current_cell(self) -> Optional[Cell]:
        stepper = self.controller.stepper
        return stepper.engine.current if stepper is not None else None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self.controller.tick(time.perf_counter())
            self._draw()
            self.clock.tick(60)

    def _visualize(self):
        try:
            handle = self.controller.start_run()
        except InvalidGridState as ex:
            log.error("Cannot start run: %s", ex)
            self.notice = str(ex)
            return
        if handle is None:
            return
        self._handle = handle
        self.state = "Running"
        self.notice = ""
        handle.add_done_callback(self._on_run_done)
        self._refresh_active_states()

    def _on_run_done(self, handle: RunHandle):
        if handle.cancelled:
            self.state = "Idle"
        elif handle.result.found:
            self.state = "Done"
        else:
            self.state = "No path"
            self.notice = NO_PATH_NOTICE
        self._handle = None
        self._refresh_active_states()

    def _quit(self):
        self.controller.cancel()
        pygame.quit(); sys.exit(0)

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(640, e.w), max(480, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                cell = self.cell_at(e.pos)
                self._last_drag_cell = cell
                if cell is not None and self.editor.press(*cell):
                    self._after_edit()
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                cell = self.cell_at(e.pos)
                if cell is not None and cell != self._last_drag_cell:
                    self._last_drag_cell = cell
                    if self.editor.drag(*cell):
                        self._after_edit()
            elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
                self.editor.release()
                self._last_drag_cell = None

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif key == pygame.K_SPACE:
            self._visualize()
        elif key == pygame.K_a:
            self._switch_algo("astar")
        elif key == pygame.K_d:
            self._switch_algo("dijkstra")
        elif key == pygame.K_b:
            self._switch_algo("bfs")
        elif key == pygame.K_c:
            self._edit(self.editor.clear_path)
        elif key == pygame.K_r:
            self._edit(self.editor.reset_grid)
        elif key == pygame.K_w:
            self._edit(self.editor.add_random_walls)
        elif key == pygame.K_x:
            self._edit(self.editor.clear_walls)
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
            self._bump_speed(-1)
        elif key == pygame.K_t:
            self._toggle_theme()

    def _edit(self, action):
        if action():
            self._after_edit()

    def _after_edit(self):
        if self.state != "Idle":
            self.state = "Idle"
            self.notice = ""

    def _switch_algo(self, key: str):
        if self.controller.select_algorithm(key):
            self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.controller.set_speed(clamp_speed(self.controller.speed + dv, self.settings))

    def _toggle_theme(self):
        self.theme = "light" if self.theme == "dark" else "dark"

    # ---------- buttons ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            rect = pygame.Rect(x, y, w, h)
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Visualize", self._visualize, togglable=True, store_as="btn_run"); y += h + gap

        for key in LABELS:
            add(f"Algo: {LABELS[key]}", lambda k=key: self._switch_algo(k),
                togglable=True, store_as=f"btn_algo_{key}")
            y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Clear Path", pygame.Rect(x, y, half, h),
                                      lambda: self._edit(self.editor.clear_path)))
        self._buttons.append(UIButton("Reset Grid", pygame.Rect(x + half + 8, y, half, h),
                                      lambda: self._edit(self.editor.reset_grid)))
        y += h + gap
        self._buttons.append(UIButton("Random Walls", pygame.Rect(x, y, half, h),
                                      lambda: self._edit(self.editor.add_random_walls)))
        self._buttons.append(UIButton("Clear Walls", pygame.Rect(x + half + 8, y, half, h),
                                      lambda: self._edit(self.editor.clear_walls)))
        y += h + gap
        self._buttons.append(UIButton("Speed −", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap
        add("Toggle Theme", self._toggle_theme)

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.controller.run_in_progress)
        for key in LABELS:
            btn = getattr(self, f"btn_algo_{key}", None)
            if btn is not None:
                btn.set_active(self.controller.algorithm == key)

    # ---------- drawing ----------
    def _draw(self):
        THEME.draw(self, self.screen)
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        pal = THEME.palette(self.theme)

        card_h = 226
        card = pygame.Surface((rb.width - 32, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, pal["card"], card.get_rect(), border_radius=14)
        self.screen.blit(card, (rb.x + 16, rb.y + 16))

        x0 = rb.x + 28
        y0 = rb.y + 24

        def line(text, big=False, color=None):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, (color or pal["text"])[:3])
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Stats", big=True, color=pal["accent"])
        result = self.controller.last_result
        stepper = self.controller.stepper
        if stepper is not None:
            m = stepper.engine.metrics()
            line(f"Algorithm: {m['algo']}")
            line(f"Steps: {stepper.search_steps}")
            line(f"Frontier: {m['open_size']}")
        elif result is not None:
            stats = result.as_stats()
            line(f"Algorithm: {stats['algorithm']}")
            line(f"Time: {stats['elapsed_ms']} ms")
            line(f"Path Length: {stats['path_length']}")
            line(f"Visited Nodes: {stats['visited_count']}")
        else:
            line(f"Algorithm: {LABELS[self.controller.algorithm]}")
            line("Time: 0 ms")
            line("Path Length: 0")
            line("Visited Nodes: 0")

        line("-" * 26)
        line(f"State: {self.state}")
        line(f"Speed: {self.controller.speed:g}x")
        if self.notice:
            notice = self.font_small.render(self.notice, True, pal["notice"][:3])
            self.screen.blit(notice, (x0, rb.y + card_h + 20))

        for b in self._buttons:
            b.draw(self.screen, self.font, pal)


# ---------- main ----------
def main(argv: Optional[List[str]] = None):
    try:
        settings = resolve_settings(argv)
    except ValueError as ex:
        log.error("Bad configuration: %s", ex)
        sys.exit(2)
    set_level(settings.LOG_LEVEL)

    grid = Grid(settings.ROWS, settings.COLS, settings.START, settings.END)
    controller = RunController(grid, settings=settings)
    editor = GridEditor(grid, controller, settings)
    editor.add_random_walls()
    Viewer(controller, editor, settings).run()

if __name__ == "__main__":
    main()
