from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from oust.core import Cell, GameState, PlayerColor, apply_move, enumerate_legal_moves


@dataclass(frozen=True)
class Turn:
    """A complete turn: the first placement followed by any forced continuations.

    An empty turn is a pass.
    """

    cells: Tuple[Cell, ...] = ()

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    @property
    def is_pass(self) -> bool:
        return not self.cells

    @property
    def first(self) -> Optional[Cell]:
        return self.cells[0] if self.cells else None

    def to_list(self) -> list:
        return [list(cell) for cell in self.cells]


def continues_turn(after: GameState, mover: PlayerColor) -> bool:
    """True when ``mover`` captured with its last placement and must place again."""
    return (
        not after.is_terminal
        and after.current_player == mover
        and after.last_move is not None
        and after.last_move.captured
    )


def iter_turns(state: GameState, moves: Optional[Sequence[Cell]] = None) -> Iterator[Tuple[Turn, GameState]]:
    """Yield every complete turn available to the side to move, depth first.

    First placements follow ``moves`` (or the rules' enumeration order) and
    each capturing placement is expanded over all of its continuations before
    the next first placement is tried. Each yielded state is an independent
    copy.
    """
    mover = state.current_player
    if moves is None:
        moves = enumerate_legal_moves(state)
    for cell in moves:
        yield from _expand(state, cell, mover, ())


def _expand(
    state: GameState,
    cell: Cell,
    mover: PlayerColor,
    prefix: Tuple[Cell, ...],
) -> Iterator[Tuple[Turn, GameState]]:
    after = apply_move(state, cell)
    path = prefix + (cell,)
    if continues_turn(after, mover):
        for follow_up in enumerate_legal_moves(after):
            yield from _expand(after, follow_up, mover, path)
        return
    yield Turn(path), after
