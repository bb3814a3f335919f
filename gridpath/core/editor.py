#!/usr/bin/env python3
"""
Grid editing between runs: walls, Start/End dragging, presets.

Every mutation is refused (returns False) while the controller has a run in
progress. Start and End never move onto a wall or onto each other, and walls
are never painted on Start or End; refusals are silent.
"""

from __future__ import annotations
import random
from typing import Optional

from gridpath.core.grid import Grid, reset_transient
from gridpath.core.settings import SETTINGS, Settings
from gridpath.core.stepper import RunController
from gridpath.core.types import Role


class GridEditor:
    def __init__(self, grid: Grid, controller: RunController, settings: Settings = SETTINGS):
        self.grid = grid
        self.controller = controller
        self.settings = settings
        self.dragging: Optional[Role] = None
        self.mouse_down = False

    @property
    def locked(self) -> bool:
        return self.controller.run_in_progress

    # -------------------- mouse gesture --------------------

    def press(self, row: int, col: int) -> bool:
        if self.locked or not self.grid.in_bounds(row, col):
            return False
        self.mouse_down = True
        cell = self.grid.cell(row, col)
        if cell.role is not Role.NORMAL:
            self.dragging = cell.role
            return True
        return self.toggle_wall(row, col)

    def drag(self, row: int, col: int) -> bool:
        if not self.mouse_down or self.locked or not self.grid.in_bounds(row, col):
            return False
        if self.dragging is Role.START:
            return self.move_start(row, col)
        if self.dragging is Role.END:
            return self.move_end(row, col)
        return self.toggle_wall(row, col)

    def release(self) -> None:
        self.mouse_down = False
        self.dragging = None

    # -------------------- single edits --------------------

    def toggle_wall(self, row: int, col: int) -> bool:
        if self.locked:
            return False
        cell = self.grid.cell(row, col)
        if cell.role is not Role.NORMAL:
            return False
        cell.is_wall = not cell.is_wall
        return True

    def _move(self, role: Role, row: int, col: int) -> bool:
        if self.locked:
            return False
        target = self.grid.cell(row, col)
        if target.role is not Role.NORMAL or target.is_wall:
            return False
        current = self.grid.start if role is Role.START else self.grid.end
        current.role = Role.NORMAL
        target.role = role
        return True

    def move_start(self, row: int, col: int) -> bool:
        return self._move(Role.START, row, col)

    def move_end(self, row: int, col: int) -> bool:
        return self._move(Role.END, row, col)

    # -------------------- whole-grid edits --------------------

    def clear_walls(self) -> bool:
        if self.locked:
            return False
        for c in self.grid:
            c.is_wall = False
        return True

    def add_random_walls(self, density: Optional[float] = None,
                         rng: Optional[random.Random] = None) -> bool:
        """Replace the current walls with a random layout."""
        if self.locked:
            return False
        density = self.settings.WALL_DENSITY if density is None else density
        if not 0.0 <= density <= 1.0:
            raise ValueError(f"wall density must be within [0, 1], got {density}")
        rng = rng or random.Random()
        for c in self.grid:
            c.is_wall = c.role is Role.NORMAL and rng.random() < density
        return True

    def clear_path(self) -> bool:
        if self.locked:
            return False
        reset_transient(self.grid)
        self.controller.clear_result()
        return True

    def reset_grid(self) -> bool:
        """Back to the default Start/End with no walls."""
        if self.locked:
            return False
        for c in self.grid:
            c.role = Role.NORMAL
            c.is_wall = False
            c.reset_transient()
        self.grid.at(self.settings.START).role = Role.START
        self.grid.at(self.settings.END).role = Role.END
        self.controller.clear_result()
        return True
