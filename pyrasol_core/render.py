from __future__ import annotations

from collections import Counter
from typing import List

from .blocks import cell_coord
from .board import Board
from .card import Move, RawCard, card_from_raw

_ORDINALS = {1: '1st', 2: '2nd', 3: '3rd'}


def card_label(card: RawCard, full_width: bool = False) -> str:
    """Single character per card unless `full_width`, where 10 is spelled out."""
    rank = card_from_raw(card)
    if rank == 1:
        return 'A'
    if rank == 10:
        return '10' if full_width else '0'
    if rank == 11:
        return 'J'
    if rank == 12:
        return 'Q'
    if rank == 13:
        return 'K'
    return str(rank)


def pretty_board(board: Board) -> str:
    """Pyramid with exposed cards in brackets, then the stack with the visible pair bracketed."""
    lines: List[str] = []
    idx = 0
    for row in range(board.rows):
        cells: List[str] = []
        for _ in range(row + 1):
            if idx in board.removed_idxs:
                cells.append(' · ')
            elif idx in board.leaf_idxs:
                cells.append(f"[{card_label(board.board_cards[idx])}]")
            else:
                cells.append(f" {card_label(board.board_cards[idx])} ")
            idx += 1
        lines.append('  ' * (board.rows - 1 - row) + ' '.join(cells).rstrip())

    lines.append('')
    stack: List[str] = []
    for pos, card in enumerate(board.stack):
        if pos in (board.stack_idx - 1, board.stack_idx):
            stack.append(f"[{card_label(card)}]")
        else:
            stack.append(card_label(card))
    lines.append('Stack: ' + ' '.join(stack))
    lines.append(f"Moves: {board.moves}")
    return '\n'.join(lines)


def _ordinal(n: int) -> str:
    return _ORDINALS.get(n, f"{n}th")


def card_location(board: Board, card: RawCard) -> str:
    """Where a card sits, precise enough for a human to find it."""
    if card not in board.board_cards:
        return 'on the stack'
    same_rank = Counter(card_from_raw(leaf) for leaf in board.leaves())
    if same_rank[card_from_raw(card)] == 1:
        return 'on the board'
    row, col = cell_coord(board.board_cards.index(card))
    return f"on board {_ordinal(row + 1)} row, card {col + 1}"


def _move_text(board: Board, move: Move) -> str:
    if move.right is None:
        return f"Remove {card_label(move.left, True)} {card_location(board, move.left)}"
    return (
        f"Match {card_label(move.right, True)} {card_location(board, move.right)}"
        f" and {card_label(move.left, True)} {card_location(board, move.left)}"
    )


def describe_move(board: Board, move: Move) -> str:
    """Plain description of a move as seen from `board` (the position before it)."""
    text = _move_text(board, move)
    if move.draws > 0:
        return f"Draw {move.draws} cards and {text[0].lower()}{text[1:]}"
    return text


def describe_steps(board: Board, move_number: int, move: Move) -> List[str]:
    """Numbered lines for one solution step, splitting the draws onto their own line."""
    lines: List[str] = []
    if move.draws > 0:
        lines.append(f"[{move_number}] Draw {move.draws} cards")
    lines.append(f"[{move_number + max(move.draws, 0)}] {_move_text(board, move)}")
    return lines
