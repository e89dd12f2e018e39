from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, List, Tuple

Cell = int

DEFAULT_ROWS = 7


@dataclass(frozen=True)
class BlockTables:
    """Static blocking relations for a triangle with `rows` rows.

    A cell sits on top of (covers) the one or two cells diagonally above it in the
    previous row; those cells cannot be played until every cell covering them,
    directly or transitively, has been removed.
    """
    rows: int
    directly: Tuple[Tuple[Cell, int], ...]
    blocks: Tuple[FrozenSet[Cell], ...]
    blocked_by: Tuple[FrozenSet[Cell], ...]


def triangle_size(rows: int) -> int:
    return rows * (rows + 1) // 2


def triangle_rows(size: int) -> int:
    """Inverse of triangle_size; raises ValueError for a non-triangular count."""
    rows = 0
    while triangle_size(rows) < size:
        rows += 1
    if triangle_size(rows) != size or rows == 0:
        raise ValueError(f'Invalid board: {size} cards do not form a triangle')
    return rows


def cell_index(row: int, col: int) -> Cell:
    return triangle_size(row) + col


def cell_coord(cell: Cell) -> Tuple[int, int]:
    """Returns (row, col) of a cell index."""
    row = 0
    while triangle_size(row + 1) <= cell:
        row += 1
    return row, cell - triangle_size(row)


def bottom_row(rows: int = DEFAULT_ROWS) -> List[Cell]:
    """The cells exposed at the start of a deal."""
    return list(range(triangle_size(rows - 1), triangle_size(rows)))


@lru_cache(maxsize=None)
def build_tables(rows: int = DEFAULT_ROWS) -> BlockTables:
    size = triangle_size(rows)
    coords = [cell_coord(cell) for cell in range(size)]

    directly: List[Tuple[Cell, int]] = []
    for r, c in coords:
        above = [cell_index(r - 1, cc) for cc in (c - 1, c) if r > 0 and 0 <= cc <= r - 1]
        directly.append((above[0], len(above)) if above else (0, 0))

    # Ancestors, filled top-down so each parent is already complete.
    blocks: List[FrozenSet[Cell]] = []
    for cell in range(size):
        first, count = directly[cell]
        ancestors = set()
        for parent in range(first, first + count):
            ancestors.add(parent)
            ancestors.update(blocks[parent])
        blocks.append(frozenset(ancestors))

    blocked_by: List[FrozenSet[Cell]] = []
    for r, c in coords:
        blocked_by.append(frozenset(
            cell_index(rr, cc)
            for rr in range(r + 1, rows)
            for cc in range(c, c + (rr - r) + 1)
        ))

    return BlockTables(rows=rows, directly=tuple(directly), blocks=tuple(blocks), blocked_by=tuple(blocked_by))


def card_directly_blocks(cell: Cell, rows: int = DEFAULT_ROWS) -> Tuple[Cell, int]:
    """Lowest cell directly covered by `cell` and how many are covered (0, 1 or 2).

    (3, 1) means only cell 3 is covered while (3, 2) means cells 3 and 4 are.
    """
    tables = build_tables(rows)
    if 0 <= cell < len(tables.directly):
        return tables.directly[cell]
    return (0, 0)


def card_blocks(cell: Cell, rows: int = DEFAULT_ROWS) -> FrozenSet[Cell]:
    """All cells that stay covered while `cell` is on the board."""
    tables = build_tables(rows)
    if 0 <= cell < len(tables.blocks):
        return tables.blocks[cell]
    return frozenset()


def card_blocked_by(cell: Cell, rows: int = DEFAULT_ROWS) -> FrozenSet[Cell]:
    """All cells that must be gone before `cell` is exposed."""
    tables = build_tables(rows)
    if 0 <= cell < len(tables.blocked_by):
        return tables.blocked_by[cell]
    return frozenset()
