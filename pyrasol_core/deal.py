from __future__ import annotations

import random
from typing import List, Optional, Tuple

from .blocks import DEFAULT_ROWS, triangle_size
from .card import RawCard
from .parse import encode_cards, parse_board


def deal_pyramid(seed: Optional[int] = None, rows: int = DEFAULT_ROWS) -> Tuple[List[RawCard], List[RawCard]]:
    """Shuffles a standard 52-card deck into the pyramid and the draw pile."""
    rng = random.Random(seed)
    deck: List[RawCard] = list(range(52))
    rng.shuffle(deck)
    size = triangle_size(rows)
    if size > len(deck):
        raise ValueError(f'Invalid deal: {rows} rows need {size} cards')
    return deck[:size], deck[size:]


def deal_strings(seed: Optional[int] = None) -> Tuple[str, str]:
    """A random deal in the textual form accepted by parse_board."""
    cards, stack = deal_pyramid(seed)
    return encode_cards(cards), encode_cards(stack)


def deal_parsed(seed: Optional[int] = None) -> Tuple[List[RawCard], List[RawCard]]:
    """A random deal with copy slots assigned the way parse_board assigns them."""
    cards_str, stack_str = deal_strings(seed)
    return parse_board(cards_str, stack_str)
