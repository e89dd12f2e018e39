from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .card import RANKS, RawCard, card_from_raw

_LETTERS: Dict[str, int] = {
    'a': 1,
    'j': 11,
    'q': 12,
    'd': 12,  # common typo for queen
    'k': 13,
    '0': 10,
}


def char_rank(char: str) -> int:
    """Rank of a single card character: 2-9 as digits, 0 for 10, a/1, j, q, k."""
    lowered = char.lower()
    if lowered in _LETTERS:
        return _LETTERS[lowered]
    if lowered in '123456789':
        return int(lowered)
    raise ValueError(
        f"Unknown value ({char}) - Use a for Ace, j for Jack, q for Queen, k for King and 0 for 10"
    )


def parse_board(cards_str: str, stack_str: str) -> Tuple[List[RawCard], List[RawCard]]:
    """Parses the pyramid and stack strings into raw cards.

    Repeated ranks get successive copy slots (offset by 13), counted over the
    pyramid first and then the stack, so "76jkj" gives 6, 5, 10, 12, 23.
    """
    counts: Dict[int, int] = {}

    def _parse(text: str) -> List[RawCard]:
        out: List[RawCard] = []
        for char in text.strip():
            val = char_rank(char) - 1
            count = counts.get(val, 0)
            out.append(val + count * 13)
            counts[val] = count + 1
        return out

    cards = _parse(cards_str)
    stack = _parse(stack_str)
    return cards, stack


def validate_board(board_cards: Sequence[RawCard], stack_cards: Sequence[RawCard]) -> None:
    """Raises ValueError unless every rank appears exactly four times."""
    card_counts = [0] * RANKS
    for card in list(board_cards) + list(stack_cards):
        card_counts[card_from_raw(card) - 1] += 1

    for rank, count in enumerate(card_counts, start=1):
        if count != 4:
            raise ValueError(f"Invalid board: card {rank} appears {count} times")


def encode_cards(cards: Sequence[RawCard]) -> str:
    """Inverse of parse_board for one sequence (copy slots are dropped)."""
    out: List[str] = []
    for raw in cards:
        rank = card_from_raw(raw)
        out.append({1: 'a', 10: '0', 11: 'j', 12: 'q', 13: 'k'}.get(rank, str(rank)))
    return ''.join(out)
