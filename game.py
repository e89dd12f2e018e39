from __future__ import annotations

# Facade module that re-exports the Pyrasol core API.
# Used by the Flask app and tests; single-responsibility modules live under pyrasol_core/*.

from pyrasol_core.card import (  # noqa: F401
    KING,
    Card,
    MatchType,
    Move,
    RawCard,
    card_from_raw,
    cards_match,
    is_king,
    match_card,
)
from pyrasol_core.blocks import (  # noqa: F401
    bottom_row,
    build_tables,
    card_blocked_by,
    card_blocks,
    card_directly_blocks,
    cell_coord,
    triangle_rows,
    triangle_size,
)
from pyrasol_core.board import Board  # noqa: F401
from pyrasol_core.moves import apply_move, legal_moves, stack_draws, stack_moves  # noqa: F401
from pyrasol_core.hashkey import state_key  # noqa: F401
from pyrasol_core.solver import SearchConfig, SolveResult, replay_solution, simulate_games  # noqa: F401
from pyrasol_core.parse import char_rank, encode_cards, parse_board, validate_board  # noqa: F401
from pyrasol_core.deal import deal_parsed, deal_pyramid, deal_strings  # noqa: F401
from pyrasol_core.render import card_label, card_location, describe_move, pretty_board  # noqa: F401


def load_board(cards_str: str, stack_str: str, clear_all: bool = False) -> Board:
    """Parses, validates and builds a fresh board. Raises ValueError on bad input."""
    cards, stack = parse_board(cards_str, stack_str)
    validate_board(cards, stack)
    return Board.new(cards, stack, clear_all=clear_all)


def main() -> None:
    # CLI driver delegated to pyrasol_core.cli
    from pyrasol_core.cli import main as _main
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
