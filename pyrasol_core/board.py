from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .blocks import (
    DEFAULT_ROWS,
    bottom_row,
    card_blocked_by,
    card_blocks,
    card_directly_blocks,
    triangle_rows,
)
from .card import RANKS, MatchType, Move, RawCard

MAX_STACK = 24


def _rank_counts(cards: Iterable[RawCard]) -> List[int]:
    counts = [0] * RANKS
    for raw in cards:
        counts[raw % 13] += 1
    return counts


@dataclass
class Board:
    """Mutable state of one deal: the pyramid, the draw pile and bookkeeping.

    Search branches work on clones (see clone()); nothing is shared between copies.
    """
    board_cards: Tuple[RawCard, ...]  # row-major, apex first, never reordered
    stack: List[RawCard]
    leaf_idxs: Set[int]
    clear_all: bool = False
    rows: int = DEFAULT_ROWS
    stack_idx: int = 0  # cards left of the cursor have been flipped
    card_counts: List[int] = field(default_factory=list)  # remaining anywhere, by rank - 1
    stack_counts: List[int] = field(default_factory=list)  # remaining in the pile, by rank - 1
    removed_idxs: Set[int] = field(default_factory=set)
    moves: int = 0
    completed: bool = False

    @classmethod
    def new(
        cls,
        cards: Sequence[RawCard],
        stack: Sequence[RawCard],
        leaf_idxs: Optional[Iterable[int]] = None,
        clear_all: bool = False,
    ) -> 'Board':
        """Builds a fresh deal; leaves default to the bottom row of the pyramid."""
        rows = triangle_rows(len(cards))
        if len(stack) > MAX_STACK:
            raise ValueError(f'Invalid board: stack has {len(stack)} cards, at most {MAX_STACK} allowed')
        leaves = set(bottom_row(rows) if leaf_idxs is None else leaf_idxs)
        bad = [idx for idx in leaves if not 0 <= idx < len(cards)]
        if bad:
            raise ValueError(f'Invalid leaf index: {bad[0]}')
        return cls(
            board_cards=tuple(cards),
            stack=list(stack),
            leaf_idxs=leaves,
            clear_all=clear_all,
            rows=rows,
            card_counts=_rank_counts(list(cards) + list(stack)),
            stack_counts=_rank_counts(stack),
        )

    def clone(self) -> 'Board':
        return Board(
            board_cards=self.board_cards,
            stack=list(self.stack),
            leaf_idxs=set(self.leaf_idxs),
            clear_all=self.clear_all,
            rows=self.rows,
            stack_idx=self.stack_idx,
            card_counts=list(self.card_counts),
            stack_counts=list(self.stack_counts),
            removed_idxs=set(self.removed_idxs),
            moves=self.moves,
            completed=self.completed,
        )

    def leaves(self) -> List[RawCard]:
        """Exposed pyramid cards, ascending by raw value."""
        return sorted(self.board_cards[idx] for idx in self.leaf_idxs)

    def is_solo(self, raw: RawCard) -> bool:
        """True when `raw` is the last card of its rank still in play."""
        return self.card_counts[raw % 13] == 1

    def _card_index(self, card: RawCard) -> int:
        try:
            idx = self.board_cards.index(card)
        except ValueError:
            raise RuntimeError(f'Card {card} is not on the board') from None
        if idx in self.removed_idxs:
            raise RuntimeError(f'Card {card} was already removed from the board')
        return idx

    def remove_cards(self, left: RawCard, right: Optional[RawCard] = None) -> None:
        """Takes one or two cards off the pyramid and exposes what they uncover."""
        card_idxs = [self._card_index(left)]
        if right is not None:
            card_idxs.append(self._card_index(right))

        leaf_candidates: Set[int] = set()
        for card_idx in card_idxs:
            self.leaf_idxs.discard(card_idx)
            self.removed_idxs.add(card_idx)
            if card_idx == 0:
                if not self.clear_all or not self.stack:
                    self.completed = True
                leaf_candidates.clear()
                break
            blocked_card, count = card_directly_blocks(card_idx, self.rows)
            leaf_candidates.update(range(blocked_card, blocked_card + count))

        # A candidate covered by another candidate stays covered.
        candidate_blockers: Set[int] = set()
        for candidate in leaf_candidates:
            candidate_blockers.update(card_blocks(candidate, self.rows))

        for candidate in leaf_candidates - candidate_blockers:
            if card_blocked_by(candidate, self.rows).isdisjoint(self.leaf_idxs):
                self.leaf_idxs.add(candidate)

        self.card_counts[left % 13] -= 1
        if right is not None:
            self.card_counts[right % 13] -= 1

    def remove_stack_cards(self, left: RawCard, right: Optional[RawCard] = None) -> None:
        """Takes one or two cards out of the draw pile by value."""
        for card in (left, right):
            if card is None:
                continue
            if card not in self.stack:
                raise RuntimeError(f'Card {card} is not in the stack {self.stack}')
            if self.stack_idx > 0 and self.stack[self.stack_idx - 1] == card:
                # Later cards shift down into the gap.
                self.stack_idx -= 1
            self.stack.remove(card)
            self.stack_counts[card % 13] -= 1

        if self.clear_all and not self.stack and not self.leaf_idxs:
            self.completed = True

    def stack_draw(self, draws: int) -> None:
        """Advances the pile cursor; one past the end means the pile was turned over."""
        if draws == 0:
            return
        self.stack_idx = (self.stack_idx + draws) % (len(self.stack) + 1)
        self.moves += draws

    def play_move(self, move: Move) -> None:
        """Applies a generated move. Malformed moves mean the generator is out of sync."""
        self.stack_draw(move.draws)

        if move.match_type == MatchType.BOARD:
            self.remove_cards(move.left, move.right)
        elif move.match_type == MatchType.BOARD_STACK and move.right is not None:
            board_card, stack_card = move.left, move.right
            self.remove_stack_cards(stack_card)
            self.card_counts[stack_card % 13] -= 1
            self.remove_cards(board_card)
        elif move.match_type == MatchType.STACK:
            if move.left == move.right:
                raise RuntimeError(f'Illegal move {move} for stack {self.stack}')
            self.remove_stack_cards(move.left, move.right)
            self.card_counts[move.left % 13] -= 1
            if move.right is not None:
                self.card_counts[move.right % 13] -= 1
        else:
            raise RuntimeError(f'Illegal move {move}')

        self.moves += 1
