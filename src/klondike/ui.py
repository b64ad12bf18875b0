# ui.py - draws the board as a grid of character cells
from typing import Optional, Tuple

import pygame

from klondike import common as C

# --- Cell sizes (pixels per grid cell) ---
CELL_SIZES = {
    "Small": (10, 20),
    "Medium": (12, 24),
    "Large": (16, 32),
}
CELL_W, CELL_H = CELL_SIZES["Medium"]

# Default window, in cells: board plus the debug overlay strip
GRID_COLS = C.DEBUG_X + 34
GRID_ROWS = 40

# Colors
TABLE_BG = (2, 100, 40)
BORDER = (235, 235, 235)
EMPTY_BORDER = (170, 200, 170)
BACK_BLUE = (34, 96, 200)
WHITE = (245, 245, 245)
BLACK = (20, 20, 20)
RED = (210, 30, 30)
DEBUG_TEXT = (255, 255, 180)

CARD_RADIUS = 4

# Fonts are initialized via setup_fonts() AFTER pygame.init() in __main__
FONT_CELL = None
MONO_FONTS = ("DejaVu Sans Mono", "Consolas", "Menlo", "Courier New", "monospace")


def apply_cell_size(size_name: Optional[str]):
    global CELL_W, CELL_H
    size_name = (size_name or "Medium").capitalize()
    CELL_W, CELL_H = CELL_SIZES.get(size_name, CELL_SIZES["Medium"])


def window_size(cols: int = GRID_COLS, rows: int = GRID_ROWS) -> Tuple[int, int]:
    return cols * CELL_W, rows * CELL_H


def setup_fonts():
    global FONT_CELL
    size = max(8, CELL_H - 4)
    # Suit glyphs need a Unicode-capable monospace font
    font = None
    for name in MONO_FONTS:
        # SysFont never fails on a missing name, so look the file up first
        path = pygame.font.match_font(name)
        if not path:
            continue
        try:
            font = pygame.font.Font(path, size)
        except (OSError, pygame.error):
            continue
        break
    if font is None:
        font = pygame.font.Font(None, size)
    FONT_CELL = font


def pixel_to_cell(pos: Tuple[int, int]) -> Tuple[int, int]:
    px, py = pos
    return int(px) // CELL_W, int(py) // CELL_H


def cell_rect(x: int, y: int, w: int, h: int) -> pygame.Rect:
    return pygame.Rect(x * CELL_W, y * CELL_H, w * CELL_W, h * CELL_H)


def draw_text(screen, text: str, x: int, y: int, color=WHITE):
    if not text:
        return
    surf = FONT_CELL.render(text, True, color)
    screen.blit(surf, (x * CELL_W, y * CELL_H))


def draw_card(screen, card: C.Card, x: int, y: int):
    r = cell_rect(x, y, C.CARD_W, C.CARD_H)
    if not card.face_up:
        fill = BACK_BLUE
    elif card.highlighted:
        fill = WHITE
    else:
        fill = TABLE_BG
    pygame.draw.rect(screen, fill, r, border_radius=CARD_RADIUS)
    pygame.draw.rect(screen, BORDER, r, width=1, border_radius=CARD_RADIUS)
    if card.face_up:
        if C.is_red(card.suit):
            color = RED
        else:
            color = BLACK if card.highlighted else WHITE
        draw_text(screen, card.label(), x + 1, y + 1, color)


def draw_empty(screen, x: int, y: int):
    r = cell_rect(x, y, C.CARD_W, C.CARD_H)
    pygame.draw.rect(screen, EMPTY_BORDER, r, width=1, border_radius=CARD_RADIUS)
    pygame.draw.rect(screen, EMPTY_BORDER, r.inflate(-4, -4), width=1, border_radius=CARD_RADIUS)


def draw_column(screen, column: C.Column, x: int, y: int = 0):
    # Later cards overlap earlier ones, leaving CARD_PITCH rows of each visible
    for i, card in enumerate(column):
        draw_card(screen, card, x, y + i * C.CARD_PITCH)


def draw_pile(screen, pile: C.Pile, x: int, y: int):
    top = pile.peek()
    if top is None:
        draw_empty(screen, x, y)
        return
    draw_card(screen, top, x, y)


def draw_board(screen, game, show_debug: bool = False):
    screen.fill(TABLE_BG)
    cols = screen.get_width() // CELL_W
    if cols < C.DEBUG_X:
        draw_text(screen, "Too small", 0, 0)
        return

    for i, column in enumerate(game.columns):
        draw_column(screen, column, i * C.CARD_W)

    draw_pile(screen, game.stock, C.SIDE_X, C.STOCK_Y)
    draw_pile(screen, game.discard, C.SIDE_X, C.DISCARD_Y)
    for i, f in enumerate(game.foundations):
        draw_pile(screen, f, C.SIDE_X, C.FOUNDATION_Y + i * C.CARD_H)

    if show_debug:
        draw_text(screen, game.debug, C.DEBUG_X + 1, 0, DEBUG_TEXT)
        draw_text(screen, f"stock {len(game.stock)}", C.DEBUG_X + 1, 1, DEBUG_TEXT)
    else:
        hints = ["Esc: quit", "C: clear", "D: draw"]
        for i, h in enumerate(hints):
            draw_text(screen, h, C.DEBUG_X + 1, i, WHITE)
