from __future__ import annotations

from typing import List, Set

from .board import Board
from .card import KING, Card, MatchType, Move, card_from_raw, cards_match, is_king, match_card


def stack_draws(board: Board, card: Card) -> List[int]:
    """Draw counts after which a card of rank `card` is reachable in the pile.

    -1 is the already flipped card left of the cursor (no draw needed); offsets
    past the end of the pile include the extra step for turning it over.
    """
    draws: List[int] = []
    stack = board.stack
    idx = board.stack_idx

    if idx > 0 and card_from_raw(stack[idx - 1]) == card:
        draws.append(-1)
    for offset, raw in enumerate(stack[idx:]):
        if card_from_raw(raw) == card:
            draws.append(offset)
    for pos, raw in enumerate(stack[:max(idx - 1, 0)]):
        if card_from_raw(raw) == card:
            draws.append(pos + len(stack) - idx + 1)
    return draws


def stack_moves(board: Board) -> Set[Move]:
    """Matches made entirely inside the pile, keyed by draws needed to expose them."""
    moves: Set[Move] = set()
    stack = board.stack
    idx = board.stack_idx

    if idx > 0:
        left = stack[idx - 1]
        if idx < len(stack) and cards_match(left, stack[idx]):
            moves.add(Move(MatchType.STACK, 0, left, stack[idx]))
        if is_king(left):
            moves.add(Move(MatchType.STACK, -1, left))

    if idx < len(stack) and is_king(stack[idx]):
        moves.add(Move(MatchType.STACK, 0, stack[idx]))

    # Walking forward: after k + 1 draws the visible pair is (stack[idx + k], stack[idx + k + 1]).
    for k, (left, right) in enumerate(zip(stack[idx:], stack[idx + 1:])):
        if is_king(right):
            moves.add(Move(MatchType.STACK, k + 1, right))
        elif cards_match(left, right):
            moves.add(Move(MatchType.STACK, k + 1, left, right))

    # After turning the pile over, cursor j is reached with j + len + 1 - idx draws.
    # A King at idx - 1 is already offered with -1 draws.
    for j in range(idx):
        draws = j + len(stack) + 1 - idx
        if is_king(stack[j]):
            if j < idx - 1:
                moves.add(Move(MatchType.STACK, draws, stack[j]))
        elif j > 0 and cards_match(stack[j - 1], stack[j]):
            moves.add(Move(MatchType.STACK, draws, stack[j - 1], stack[j]))

    return moves


def legal_moves(board: Board) -> List[Move]:
    """All moves worth making from this position, in a stable order.

    Forced moves (a King on the board, the last card of a rank) are returned alone.
    """
    leaves = board.leaves()

    for raw in leaves:
        if card_from_raw(raw) == KING:
            return [Move(MatchType.BOARD, 0, raw)]

    moves: List[Move] = []

    # Pairs on the pyramid itself
    moves_on_table = False
    already_matched: Set[int] = set()
    for leaf in leaves:
        for other in leaves:
            if not cards_match(leaf, other) or other in already_matched:
                continue
            already_matched.add(other)
            already_matched.add(leaf)
            if board.is_solo(leaf) or board.is_solo(other):
                return [Move(MatchType.BOARD, 0, leaf, other)]
            moves.append(Move(MatchType.BOARD, 0, leaf, other))
            moves_on_table = True

    # Pyramid cards against the pile
    for leaf in leaves:
        wanted = match_card(card_from_raw(leaf))
        if board.stack_counts[wanted - 1] == 0:
            continue
        for draw in stack_draws(board, wanted):
            stack_card_idx = board.stack_idx + draw
            if stack_card_idx > len(board.stack):
                stack_card_idx -= len(board.stack) + 1
            move = Move(MatchType.BOARD_STACK, max(draw, 0), leaf, board.stack[stack_card_idx])
            if board.is_solo(leaf) and draw <= 0:
                return [move]
            moves.append(move)

    pile = sorted(stack_moves(board), key=Move.sort_key)
    if not moves_on_table:
        for move in pile:
            if move.draws == 0 and (is_king(move.left) or board.is_solo(move.left)):
                return [move]
    moves.extend(pile)

    moves.sort(key=Move.sort_key)
    return moves


def apply_move(board: Board, move: Move) -> Board:
    """Returns a copy of the board with the move played."""
    next_board = board.clone()
    next_board.play_move(move)
    return next_board
