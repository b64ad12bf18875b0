# game.py - Klondike board state and the click-driven move engine
import logging
import random
from typing import Iterator, List, Optional

from klondike import common as C
from klondike import mechanics as M

logger = logging.getLogger(__name__)


class KlondikeGame:
    """Eight tableau columns, four foundations, a stock and a discard pile.

    Moves are made by clicking a source and then a destination. Every click
    resolves to a position which is attempted as the destination of a move
    from the previous click, then becomes the pending source itself. Illegal
    moves leave the board untouched.
    """

    def __init__(self, rng: Optional[random.Random] = None, deal: bool = True):
        self.columns: List[C.Column] = [C.Column() for _ in range(C.COLUMN_COUNT)]
        self.stock = C.Stock()
        self.discard = C.Discard()
        self.foundations: List[C.Foundation] = [C.Foundation() for _ in range(C.FOUNDATION_COUNT)]
        self.selected_pos: M.SelectedPos = M.NONE
        self.exit = False
        self.debug = ""
        if deal:
            self.deal_new(rng)

    def deal_new(self, rng: Optional[random.Random] = None):
        deck = C.make_deck()
        self.columns, self.stock = C.shuffle_and_deal(deck, C.COLUMN_COUNT, rng)
        self.discard = C.Discard()
        self.foundations = [C.Foundation() for _ in range(C.FOUNDATION_COUNT)]
        self.selected_pos = M.NONE
        self.debug = ""

    def all_cards(self) -> Iterator[C.Card]:
        yield from self.stock
        yield from self.discard
        for f in self.foundations:
            yield from f
        for col in self.columns:
            yield from col

    # ---------- Input ----------
    def press_key(self, key: str):
        if key == "escape":
            self.exit = True
        elif key == "c":
            self.clear_selection()
        elif key == "d":
            self.draw_from_stock()
            self._refresh_highlight()

    def click(self, x: int, y: int) -> M.SelectedPos:
        """Handle a left-button release on grid cell (x, y)."""
        new_pos = M.resolve(x, y, self)
        self.attempt_move(self.selected_pos, new_pos)
        self.selected_pos = new_pos
        self._refresh_highlight()
        return new_pos

    def clear_selection(self):
        self.selected_pos = M.NONE
        self._refresh_highlight()

    def draw_from_stock(self) -> bool:
        card = self.stock.draw()
        if card is None:
            return False
        self.discard.push(card)
        logger.debug("Drew %r, %d left in stock", card, len(self.stock))
        return True

    # ---------- Rules ----------
    def validate_suit(self, pile_n: int, card: C.Card) -> bool:
        # Same-suit continuation only; rank order is not checked.
        top = self.foundations[pile_n].peek()
        if top is None:
            return True
        return top.suit == card.suit

    def validate_col(self, col_n: int, card: C.Card) -> bool:
        top = self.columns[col_n].peek()
        if top is None:
            return card.rank == C.KING
        return top.color() != card.color() and top.rank == card.rank + 1

    # ---------- Moves ----------
    def attempt_move(self, src: M.SelectedPos, dest: M.SelectedPos) -> bool:
        """Move card(s) from src to dest if the rules allow it.

        Returns True when the board changed. Rejected moves are no-ops.
        """
        self.debug = f"{src} -> {dest}"
        logger.debug("Attempting %s", self.debug)

        if isinstance(dest, (M.NoSelection, M.DiscardPos)):
            return False
        if isinstance(dest, M.SuitPilePos):
            moved = self._move_to_foundation(src, dest.index)
        elif isinstance(dest, M.ColumnPos):
            moved = self._move_to_column(src, dest.index)
        else:
            moved = False
        if not moved:
            logger.debug("Rejected %s", self.debug)
        return moved

    def _move_to_foundation(self, src: M.SelectedPos, n: int) -> bool:
        if not 0 <= n < len(self.foundations):
            return False
        if isinstance(src, M.DiscardPos):
            card = self.discard.peek()
            if card is None or not self.validate_suit(n, card):
                return False
            self.foundations[n].push(self.discard.pop())
            return True
        if isinstance(src, M.ColumnPos):
            if not 0 <= src.index < len(self.columns):
                return False
            col = self.columns[src.index]
            # only the single top card may go up
            if not col or src.card_index != len(col) - 1:
                return False
            card = col.peek()
            if not card.face_up or not self.validate_suit(n, card):
                return False
            self.foundations[n].push(col.pop())
            return True
        return False

    def _move_to_column(self, src: M.SelectedPos, x: int) -> bool:
        if not 0 <= x < len(self.columns):
            return False
        if isinstance(src, M.DiscardPos):
            card = self.discard.peek()
            if card is None or not self.validate_col(x, card):
                return False
            self.columns[x].push(self.discard.pop())
            return True
        if isinstance(src, M.SuitPilePos):
            if not 0 <= src.index < len(self.foundations):
                return False
            card = self.foundations[src.index].peek()
            if card is None or not self.validate_col(x, card):
                return False
            self.columns[x].push(self.foundations[src.index].pop())
            return True
        if isinstance(src, M.ColumnPos):
            if src.index == x or not 0 <= src.index < len(self.columns):
                return False
            col = self.columns[src.index]
            if not col.movable_from(src.card_index):
                return False
            if not self.validate_col(x, col.cards[src.card_index]):
                return False
            self.columns[x].extend(col.drain_from(src.card_index))
            return True
        return False

    # ---------- Selection feedback ----------
    def _refresh_highlight(self):
        for card in self.all_cards():
            card.highlighted = False
        pos = self.selected_pos
        if isinstance(pos, M.DiscardPos):
            top = self.discard.peek()
            if top is not None:
                top.highlighted = True
        elif isinstance(pos, M.SuitPilePos):
            top = self.foundations[pos.index].peek()
            if top is not None:
                top.highlighted = True
        elif isinstance(pos, M.ColumnPos):
            # face-down cards never move, so they are never highlighted
            for card in self.columns[pos.index].cards[pos.card_index:]:
                if card.face_up:
                    card.highlighted = True
