from __future__ import annotations

from typing import Tuple

from .board import Board


def _state_components(board: Board) -> Tuple[int, Tuple[int, ...], Tuple[int, ...], int]:
    """(moves, sorted leaf cells, sorted pile cards, cursor)."""
    return (
        board.moves,
        tuple(sorted(board.leaf_idxs)),
        tuple(sorted(board.stack)),
        board.stack_idx,
    )


def state_key(board: Board) -> str:
    """Canonical signature of a position for deduplication during search.

    Pile order is fixed by the deal, so the set of remaining pile cards plus the
    cursor identifies the pile state.
    """
    moves, leaves, pile, cursor = _state_components(board)
    card_state = ':'.join(str(idx) for idx in leaves)
    stack_state = ':'.join(str(card) for card in pile)
    return f"{moves}|{card_state}|{stack_state}|{cursor}"
