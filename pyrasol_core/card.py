from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

RawCard = int  # 0..51, rank + 13 * copy slot
Card = int  # rank 1..13

KING = 13
RANKS = 13


class MatchType(IntEnum):
    """Move categories, in priority order."""
    BOARD = 0
    BOARD_STACK = 1
    STACK = 2


def card_from_raw(raw: RawCard) -> Card:
    """Turns a raw value into its rank: 0/13/26/39 are all Aces (1)."""
    return raw % 13 + 1


def match_card(card: Card) -> Card:
    """The rank that pairs with this one. Kings pair with Kings."""
    if card == KING:
        return KING
    return 13 - card


def cards_match(a: RawCard, b: RawCard) -> bool:
    """Checks if two raw cards form a matching pair."""
    if a == b:
        return False
    return match_card(card_from_raw(a)) == card_from_raw(b)


def is_king(raw: RawCard) -> bool:
    return card_from_raw(raw) == KING


@dataclass(frozen=True)
class Move:
    """A single removal: draw `draws` cards first, then take `left` (and `right`)."""
    match_type: MatchType
    draws: int
    left: RawCard
    right: Optional[RawCard] = None

    @property
    def cards(self) -> Tuple[RawCard, Optional[RawCard]]:
        return self.left, self.right

    def sort_key(self) -> Tuple[int, int, int, int, int]:
        # Singles sort before pairs sharing the same left card.
        if self.right is None:
            return (self.draws, int(self.match_type), self.left, 0, -1)
        return (self.draws, int(self.match_type), self.left, 1, self.right)

    def to_json(self) -> dict:
        return {
            "type": self.match_type.name,
            "draws": self.draws,
            "cards": [self.left] if self.right is None else [self.left, self.right],
        }
