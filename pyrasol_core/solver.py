from __future__ import annotations

import threading
import time
from concurrent.futures import Executor, ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from .board import Board
from .card import Move
from .config import DEFAULT_MAX_DEPTH, debug_enabled
from .hashkey import state_key
from .moves import apply_move, legal_moves

Entry = Tuple[Board, List[int]]


@dataclass(frozen=True)
class SearchConfig:
    """Search horizon and how many drawing moves to branch into per position.

    Moves that need no draw are always explored; `top_moves` (or `first_top_moves`
    while the board has made at most `first_games` moves) caps the rest.
    """
    max_depth: int = DEFAULT_MAX_DEPTH
    top_moves: int = 2
    first_top_moves: int = 3
    first_games: int = 5
    workers: int = 1

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f'max depth must be at least 1, got {self.max_depth}')

    @classmethod
    def increased(cls, max_depth: int = DEFAULT_MAX_DEPTH, workers: int = 1) -> 'SearchConfig':
        """Wider search: more options per position, slower overall."""
        return cls(max_depth=max_depth, top_moves=3, first_top_moves=5, first_games=10, workers=workers)

    def move_cap(self, moves_made: int) -> int:
        return self.first_top_moves if moves_made <= self.first_games else self.top_moves


@dataclass
class SolveResult:
    """Outcome of a search. `solution` holds 1-based indices into each legal_moves() list."""
    solved: bool
    solution: List[int] = field(default_factory=list)
    plies: Optional[int] = None
    states_seen: int = 0
    elapsed_ms: float = 0.0


class _Search:
    def __init__(self, config: SearchConfig, verbose: bool) -> None:
        self.config = config
        self.verbose = verbose
        self.lock = threading.Lock()
        self.seen: Set[str] = set()
        self.queues: List[List[Entry]] = [[] for _ in range(config.max_depth)]
        self.found = threading.Event()

    def expand(self, entry: Entry) -> Optional[Entry]:
        """Explores one position; returns it if it is solved."""
        board, moves_made = entry
        if self.found.is_set():
            return None
        if board.completed:
            self.found.set()
            return entry

        moves = legal_moves(board)
        if not moves:
            return None

        max_moves = self.config.move_cap(board.moves)
        for moves_played, move in enumerate(moves):
            if move.draws > 0 and moves_played > max_moves:
                break
            if move.draws + board.moves + 1 >= self.config.max_depth:
                break

            new_board = apply_move(board, move)
            key = state_key(new_board)
            with self.lock:
                if key in self.seen:
                    continue
                self.seen.add(key)
                self.queues[new_board.moves].append((new_board, moves_made + [moves_played + 1]))
        return None

    def _take(self, queue_num: int) -> List[Entry]:
        with self.lock:
            queue = self.queues[queue_num]
            self.queues[queue_num] = []
        return queue

    def _drain(self, queue: List[Entry], executor: Optional[Executor]) -> Optional[Entry]:
        if executor is None:
            for entry in queue:
                hit = self.expand(entry)
                if hit is not None:
                    return hit
            return None

        futures = [executor.submit(self.expand, entry) for entry in queue]
        for fut in as_completed(futures):
            hit = fut.result()
            if hit is not None:
                for other in futures:
                    other.cancel()
                return hit
        return None

    def run(self, board: Board, executor: Optional[Executor]) -> Optional[Entry]:
        self.queues[0].append((board.clone(), []))
        for queue_num in range(self.config.max_depth):
            # Moves that draw -1 land back in the current queue, so drain until empty.
            while True:
                queue = self._take(queue_num)
                if not queue:
                    break
                if self.verbose:
                    print(f"[solver] queue {queue_num} size: {len(queue)}")
                hit = self._drain(queue, executor)
                if hit is not None:
                    return hit
        return None


def simulate_games(board: Board, config: Optional[SearchConfig] = None, verbose: bool = False) -> SolveResult:
    """Breadth-first search over move counts for a sequence that completes the board."""
    config = config or SearchConfig()
    verbose = verbose or debug_enabled()
    search = _Search(config, verbose)
    started = time.perf_counter()

    if config.workers > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as executor:
            hit = search.run(board, executor)
    else:
        hit = search.run(board, None)

    elapsed = (time.perf_counter() - started) * 1000.0
    if hit is None:
        if verbose:
            print(f"[solver] no solution found with a max depth of {config.max_depth}")
        return SolveResult(solved=False, states_seen=len(search.seen), elapsed_ms=elapsed)

    solved_board, moves_made = hit
    if verbose:
        print(f"[solver] solution found with {solved_board.moves} moves made ({elapsed:.1f} ms)")
    return SolveResult(
        solved=True,
        solution=list(moves_made),
        plies=solved_board.moves,
        states_seen=len(search.seen),
        elapsed_ms=elapsed,
    )


def replay_solution(board: Board, solution: Sequence[int]) -> Tuple[Board, List[Tuple[Board, Move]]]:
    """Plays a solution on a copy of `board`.

    Returns the final board and, per step, the position before the move and the move.
    """
    current = board.clone()
    steps: List[Tuple[Board, Move]] = []
    for move_num in solution:
        moves = legal_moves(current)
        if not moves:
            raise RuntimeError('No moves left?')
        if not 1 <= move_num <= len(moves):
            raise RuntimeError(f'Move {move_num} not found in moves: {moves}')
        move = moves[move_num - 1]
        steps.append((current.clone(), move))
        current.play_move(move)
    return current, steps
