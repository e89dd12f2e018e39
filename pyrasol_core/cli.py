from __future__ import annotations

import argparse
from typing import List, Optional

from .board import Board
from .config import debug_enabled, default_max_depth, default_workers
from .deal import deal_strings
from .moves import legal_moves
from .parse import parse_board, validate_board
from .render import describe_move, describe_steps, pretty_board
from .solver import SearchConfig, replay_solution, simulate_games

BOARD_HELP = (
    'The pyramid, one character per card read left to right, top to bottom. '
    '2-9 are digits; 0, j, q, k and a (or 1) are 10, Jack, Queen, King and Ace. '
    'Example: 875qa4j7a6q3aq7620559k2042j3'
)
STACK_HELP = 'The draw pile in the same notation, read left to right. Example: 68j68kk80q342ja709943k95'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Pyramid Solitaire solver')
    parser.add_argument('board', nargs='?', default=None, help=BOARD_HELP)
    parser.add_argument('stack', nargs='?', default=None, help=STACK_HELP)
    parser.add_argument('-c', '--clear-all', action='store_true', help='Clear all the cards, including the stack')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show every position and the moves available')
    parser.add_argument('-m', '--max-depth', type=int, default=None, help='Max number of moves to search')
    parser.add_argument(
        '-i', '--increased-options', action='store_true',
        help='Try more drawing moves per position; slower but finds more solutions',
    )
    parser.add_argument('-w', '--workers', type=int, default=None, help='Worker threads for the search')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for a random deal when no board is given')
    return parser


def describe_solution(board: Board, solution: List[int], verbose: bool = False) -> List[str]:
    """Human readable walk-through of a solution."""
    final_board, steps = replay_solution(board, solution)
    lines: List[str] = []
    moves_made = 0
    for before, move in steps:
        if verbose:
            lines.append(pretty_board(before))
            lines.append('Available moves:')
            for idx, option in enumerate(legal_moves(before), start=1):
                marker = '> ' if option == move else '  '
                lines.append(f"{marker}[{idx}] {describe_move(before, option)}")
        lines.extend(describe_steps(before, moves_made, move))
        moves_made += 1 + move.draws
    lines.append(f"[{final_board.moves}] All done!")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.board is None or args.stack is None:
        board_str, stack_str = deal_strings(args.seed)
        print(f"Dealt: {board_str} {stack_str}")
    else:
        board_str, stack_str = args.board, args.stack

    try:
        cards, stack = parse_board(board_str, stack_str)
        validate_board(cards, stack)
        board = Board.new(cards, stack, clear_all=args.clear_all)
    except ValueError as e:
        print(f"error: {e}")
        return 1

    print(pretty_board(board))

    max_depth = args.max_depth if args.max_depth is not None else default_max_depth()
    workers = args.workers if args.workers is not None else default_workers()
    try:
        if args.increased_options:
            config = SearchConfig.increased(max_depth=max_depth, workers=workers)
        else:
            config = SearchConfig(max_depth=max_depth, workers=workers)
    except ValueError as e:
        print(f"error: {e}")
        return 1

    res = simulate_games(board, config, verbose=args.verbose or debug_enabled())
    if not res.solved:
        print(f"No solution found with a max depth of {max_depth}")
        return 0

    print(f"Solution found with {res.plies} moves made")
    for line in describe_solution(board, res.solution, verbose=args.verbose):
        print(line)
    return 0
