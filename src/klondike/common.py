# common.py - cards, deck and piles shared by the engine and the board view
import logging
import random
from typing import Iterator, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# ---------- Board geometry (in grid cells) ----------
COLUMN_COUNT = 8
FOUNDATION_COUNT = 4

CARD_W = 5          # every card box is 5 cells wide
CARD_H = 5          # a fully visible card is 5 rows tall
CARD_PITCH = 2      # overlapped tableau cards show 2 rows each

COLUMNS_W = COLUMN_COUNT * CARD_W          # x 0..39
SIDE_X = COLUMNS_W + 1                     # one cell gap, then stock/discard/foundations
SIDE_W = CARD_W
STOCK_Y = 0
DISCARD_Y = STOCK_Y + CARD_H
FOUNDATION_Y = DISCARD_Y + CARD_H
BOARD_H = FOUNDATION_Y + FOUNDATION_COUNT * CARD_H
DEBUG_X = SIDE_X + SIDE_W

SUITS = ["♠", "♥", "♣", "♦"]  # 0..3
SUIT_NAMES = ["Spades", "Hearts", "Clubs", "Diamonds"]
RANK_TO_TEXT = {1: "A", 11: "J", 12: "Q", 13: "K"}
for _r in range(2, 11):
    RANK_TO_TEXT[_r] = str(_r)

KING = 13


def is_red(suit):
    return suit in (1, 3)  # hearts, diamonds


# ---------- Cards ----------
class Card:
    __slots__ = ("suit", "rank", "face_up", "highlighted")

    def __init__(self, suit, rank, face_up=False, highlighted=False):
        self.suit = suit   # 0..3
        self.rank = rank   # 1..13
        self.face_up = face_up
        self.highlighted = highlighted

    @property
    def identity(self) -> Tuple[int, int]:
        return (self.suit, self.rank)

    def color(self):
        return "red" if is_red(self.suit) else "black"

    def label(self) -> str:
        """Rank and suit glyph, or an empty string for a face-down card."""
        if not self.face_up:
            return ""
        return f"{RANK_TO_TEXT[self.rank]}{SUITS[self.suit]}"

    def __repr__(self):
        return f"{RANK_TO_TEXT[self.rank]}{SUITS[self.suit]}{'↑' if self.face_up else '↓'}"


def make_deck(shuffle=False, rng: Optional[random.Random] = None) -> List[Card]:
    d = [Card(suit, rank, False) for rank in range(1, 14) for suit in range(4)]
    if shuffle:
        (rng or random).shuffle(d)
    return d


# ---------- Piles ----------
class Pile:
    """Ordered stack of cards; the top is the last element."""

    def __init__(self, cards: Optional[Sequence[Card]] = None):
        self.cards: List[Card] = list(cards or [])

    def __len__(self):
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __bool__(self):
        return bool(self.cards)

    def __repr__(self):
        return f"{type(self).__name__}({self.cards!r})"

    def push(self, card: Card):
        self.cards.append(card)

    def extend(self, cards: Sequence[Card]):
        self.cards.extend(cards)

    def pop(self) -> Optional[Card]:
        if not self.cards:
            return None
        return self.cards.pop()

    def peek(self) -> Optional[Card]:
        if not self.cards:
            return None
        return self.cards[-1]


class Stock(Pile):
    def draw(self) -> Optional[Card]:
        """Take the top card and turn it face up."""
        card = self.pop()
        if card is not None:
            card.face_up = True
        return card


class Discard(Pile):
    pass


class Foundation(Pile):
    pass


class Column(Pile):
    """Tableau pile. Removing cards always reveals the new top card."""

    def reveal_top(self):
        if self.cards:
            self.cards[-1].face_up = True

    def pop(self) -> Optional[Card]:
        card = super().pop()
        self.reveal_top()
        return card

    def drain_from(self, index: int) -> List[Card]:
        if index < 0 or index >= len(self.cards):
            return []
        run = self.cards[index:]
        del self.cards[index:]
        self.reveal_top()
        return run

    def movable_from(self, index: int) -> bool:
        """True when index..top is a face-up run that can be picked up."""
        if index < 0 or index >= len(self.cards):
            return False
        return all(c.face_up for c in self.cards[index:])


def shuffle_and_deal(
    deck: List[Card],
    column_count: int = COLUMN_COUNT,
    rng: Optional[random.Random] = None,
) -> Tuple[List[Column], Stock]:
    # Column i gets i+1 cards with only the last one face up; the rest is stock.
    cards = list(deck)
    (rng or random).shuffle(cards)
    for c in cards:
        c.face_up = False
        c.highlighted = False

    columns = []
    pos = 0
    for col in range(column_count):
        dealt = cards[pos:pos + col + 1]
        pos += col + 1
        if dealt:
            dealt[-1].face_up = True
        columns.append(Column(dealt))

    stock = Stock(cards[pos:])
    logger.info("Dealt %d columns, %d cards left in stock", column_count, len(stock))
    return columns, stock
