# gridpath/app/theme_skin.py
"""
Dark / light skins (visuals only; no logic)
- Backdrop: vertical gradient per palette
- Grid: flat tiles with borders, visited + path overlays, pulsing path once done
- Start/End: round badges with S / E
- Right panel: frosted underlay only (viewer draws buttons/metrics on top)

The viewer stays the source of truth for interactivity; this module only
reads from it.
"""

from __future__ import annotations
import math, time
from typing import Dict, Tuple
import pygame

RGB = Tuple[int, ...]

DARK: Dict[str, RGB] = {
    "bg_top":      (24, 26, 32),
    "bg_bottom":   (36, 40, 48),
    "tile":        (44, 48, 58),
    "border":      (18, 20, 26),
    "wall":        (8, 9, 12),
    "visited":     (0, 150, 255, 110),
    "path":        (0, 255, 200),
    "start":       (70, 130, 180),
    "end":         (220, 50, 47),
    "panel":       (18, 20, 28, 190),
    "shadow":      (0, 0, 0, 140),
    "card":        (24, 28, 36, 220),
    "text":        (230, 235, 240),
    "accent":      (255, 210, 0),
    "notice":      (255, 120, 110),
    "btn_idle":    (36, 40, 48, 220),
    "btn_hover":   (46, 50, 60, 230),
    "btn_active":  (58, 86, 160, 235),
    "btn_border":  (120, 170, 255, 255),
}

LIGHT: Dict[str, RGB] = {
    "bg_top":      (236, 239, 244),
    "bg_bottom":   (214, 219, 228),
    "tile":        (250, 250, 252),
    "border":      (190, 196, 206),
    "wall":        (52, 58, 70),
    "visited":     (120, 190, 255, 140),
    "path":        (255, 196, 0),
    "start":       (46, 110, 200),
    "end":         (210, 60, 60),
    "panel":       (255, 255, 255, 200),
    "shadow":      (0, 0, 0, 60),
    "card":        (245, 247, 250, 235),
    "text":        (30, 34, 42),
    "accent":      (180, 110, 0),
    "notice":      (200, 40, 40),
    "btn_idle":    (225, 229, 236, 235),
    "btn_hover":   (210, 216, 226, 240),
    "btn_active":  (120, 160, 230, 245),
    "btn_border":  (40, 90, 200, 255),
}

PALETTES = {"dark": DARK, "light": LIGHT}


def palette(name: str) -> Dict[str, RGB]:
    return PALETTES.get(name, DARK)

# ---------- helpers ----------
def _rounded_rect(surface: pygame.Surface, rect: pygame.Rect, color, radius=16, width=0):
    pygame.draw.rect(surface, color, rect, width=width, border_radius=radius)

def _glass_panel(screen: pygame.Surface, rect: pygame.Rect, pal: Dict[str, RGB]):
    if rect.width <= 0 or rect.height <= 0:
        return
    shadow = pygame.Surface((rect.width + 18, rect.height + 18), pygame.SRCALPHA)
    _rounded_rect(shadow, pygame.Rect(9, 9, rect.width, rect.height), pal["shadow"], radius=20)
    screen.blit(shadow, (rect.x - 9, rect.y - 9))
    card = pygame.Surface(rect.size, pygame.SRCALPHA)
    _rounded_rect(card, pygame.Rect(0, 0, rect.width, rect.height), pal["panel"], radius=20)
    # subtle top sheen
    hi = pygame.Surface((rect.width, max(18, rect.height // 12)), pygame.SRCALPHA)
    pygame.draw.rect(hi, (255,255,255,18), hi.get_rect(), border_radius=18)
    card.blit(hi, (0,0))
    screen.blit(card, rect.topleft)

def _draw_backdrop(screen: pygame.Surface, pal: Dict[str, RGB]):
    w, h = screen.get_size()
    top, bot = pal["bg_top"], pal["bg_bottom"]
    for y in range(h):
        t = y / max(1, h-1)
        c = (
            int(top[0] + (bot[0]-top[0]) * t),
            int(top[1] + (bot[1]-top[1]) * t),
            int(top[2] + (bot[2]-top[2]) * t),
        )
        pygame.draw.line(screen, c, (0, y), (w, y))

def _pulse(base: RGB, t: float) -> RGB:
    k = 0.5 * (1.0 + math.sin(t * 6.0))
    return tuple(int(v * (0.75 + 0.25 * k)) for v in base[:3])

def _draw_grid(v, screen: pygame.Surface, pal: Dict[str, RGB]):
    """Tiles, walls, visited overlay, path, then Start/End badges on top."""
    cs = v.cell_size
    ox, oy = v._grid_origin
    grid = v.grid

    overlay = pygame.Surface((cs, cs), pygame.SRCALPHA)
    overlay.fill(pal["visited"])
    path_color = _pulse(pal["path"], time.time()) if v.state == "Done" else pal["path"][:3]

    for cell in grid:
        rect = pygame.Rect(ox + cell.col*cs, oy + cell.row*cs, cs, cs)
        if cell.is_wall:
            pygame.draw.rect(screen, pal["wall"], rect)
        else:
            pygame.draw.rect(screen, pal["tile"], rect)
            if cell.on_path:
                pygame.draw.rect(screen, path_color, rect.inflate(-2, -2), border_radius=4)
            elif cell.visited:
                screen.blit(overlay, rect.topleft)
        pygame.draw.rect(screen, pal["border"], rect, 1)

    # highlight the cell the engine just processed
    cur = v.current_cell()
    if cur is not None and not cur.is_start and not cur.is_end:
        rect = pygame.Rect(ox + cur.col*cs, oy + cur.row*cs, cs, cs)
        pygame.draw.rect(screen, pal["accent"][:3], rect, 2)

    _draw_badge(v, screen, grid.start, pal["start"], "S")
    _draw_badge(v, screen, grid.end, pal["end"], "E")

def _draw_badge(v, screen: pygame.Surface, cell, color: RGB, label: str):
    cs = v.cell_size
    ox, oy = v._grid_origin
    cx = ox + cell.col*cs + cs//2
    cy = oy + cell.row*cs + cs//2
    pygame.draw.circle(screen, color, (cx, cy), max(6, cs//2 - 2))
    txt = v.font_small.render(label, True, (255, 255, 255))
    screen.blit(txt, txt.get_rect(center=(cx, cy)))

def draw(viewer, screen: pygame.Surface) -> None:
    """
    Draw order:
      1) backdrop
      2) grid with overlays
      3) frosted right panel underlay
      (viewer draws text/buttons afterwards)
    """
    pal = palette(viewer.theme)
    _draw_backdrop(screen, pal)
    _draw_grid(viewer, screen, pal)

    rb = getattr(viewer, "_right_band", None)
    if isinstance(rb, pygame.Rect):
        _glass_panel(screen, rb.inflate(-12, -12), pal)
