# mechanics.py - board addressing: selection variants and the click resolver
# locate() maps a grid cell to a board location without touching the piles;
# resolve() adds the stock draw a stock click performs.
from dataclasses import dataclass
from typing import List, Union

from klondike import common as C


@dataclass(frozen=True)
class NoSelection:
    def __str__(self) -> str:
        return "None"


@dataclass(frozen=True)
class DiscardPos:
    def __str__(self) -> str:
        return "Discard"


@dataclass(frozen=True)
class SuitPilePos:
    index: int

    def __str__(self) -> str:
        return f"SuitPile({self.index})"


@dataclass(frozen=True)
class ColumnPos:
    index: int
    card_index: int

    def __str__(self) -> str:
        return f"Column({self.index}, {self.card_index})"


@dataclass(frozen=True)
class StockPos:
    """Stock band hit. Only :func:`locate` returns this; it is never selected."""

    def __str__(self) -> str:
        return "Stock"


SelectedPos = Union[NoSelection, DiscardPos, SuitPilePos, ColumnPos]
Target = Union[SelectedPos, StockPos]

NONE = NoSelection()
DISCARD = DiscardPos()
STOCK = StockPos()


def _locate_in_column(column: C.Column, col_index: int, y: int) -> ColumnPos:
    cards = column.cards
    if not cards:
        return ColumnPos(col_index, 0)
    row = y // C.CARD_PITCH
    if row >= len(cards):
        return ColumnPos(col_index, len(cards) - 1)
    if not cards[row].face_up:
        # hidden cards are only reachable through the bottom of the column
        return ColumnPos(col_index, 0)
    return ColumnPos(col_index, row)


def locate(x: int, y: int, columns: List[C.Column], discard: C.Discard) -> Target:
    """Map a grid cell onto a board location. Never mutates the piles."""
    if x < 0 or y < 0:
        return NONE
    if x < C.COLUMNS_W:
        col_index = x // C.CARD_W
        return _locate_in_column(columns[col_index], col_index, y)
    if C.SIDE_X <= x < C.SIDE_X + C.SIDE_W:
        if C.STOCK_Y <= y < C.DISCARD_Y:
            return STOCK
        if C.DISCARD_Y <= y < C.FOUNDATION_Y:
            return DISCARD if discard else NONE
        if C.FOUNDATION_Y <= y < C.BOARD_H:
            return SuitPilePos((y - C.FOUNDATION_Y) // C.CARD_H)
    return NONE


def resolve(x: int, y: int, game) -> SelectedPos:
    """Locate a click and apply the stock draw if the stock was hit.

    Clicking the stock draws a card and selects the discard pile in one step,
    or selects nothing when the stock is empty.
    """
    target = locate(x, y, game.columns, game.discard)
    if isinstance(target, StockPos):
        if game.draw_from_stock():
            return DISCARD
        return NONE
    return target
