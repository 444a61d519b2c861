from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterable, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

BoardArray = NDArray[np.int8]

# (row, col) on the (2n-1) x (2n-1) square that embeds the hexagon
Cell = Tuple[int, int]


class PlayerColor(IntEnum):
    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> "PlayerColor":
        return PlayerColor.WHITE if self == PlayerColor.BLACK else PlayerColor.BLACK


class GameResult(Enum):
    ONGOING = "ongoing"
    BLACK_WIN = "black_win"
    WHITE_WIN = "white_win"
    DRAW = "draw"

    @staticmethod
    def win_for(color: PlayerColor) -> "GameResult":
        return GameResult.BLACK_WIN if color == PlayerColor.BLACK else GameResult.WHITE_WIN


@dataclass(frozen=True)
class MoveRecord:
    cell: Cell
    captured_cells: Tuple[Cell, ...] = field(default_factory=tuple)
    captured: bool = False
    resulted_in: GameResult = GameResult.ONGOING


@dataclass
class GameState:
    board: BoardArray  # shape (2n-1, 2n-1), dtype=np.int8, 0 empty or 1..2 player colour
    side: int
    current_player: PlayerColor
    ply_count: int = 0
    max_ply: int = 1000
    result: GameResult = GameResult.ONGOING
    last_move: Optional[MoveRecord] = None

    def copy(self) -> "GameState":
        return GameState(
            board=self.board.copy(),
            side=self.side,
            current_player=self.current_player,
            ply_count=self.ply_count,
            max_ply=self.max_ply,
            result=self.result,
            last_move=self.last_move,
        )

    @property
    def is_terminal(self) -> bool:
        return self.result != GameResult.ONGOING

    @property
    def winner(self) -> Optional[PlayerColor]:
        if self.result == GameResult.BLACK_WIN:
            return PlayerColor.BLACK
        if self.result == GameResult.WHITE_WIN:
            return PlayerColor.WHITE
        return None

    def occupied_cells(self, color: PlayerColor) -> Iterable[Cell]:
        positions = np.argwhere(self.board == int(color))
        for r, c in positions:
            yield int(r), int(c)

    def stone_count(self, color: PlayerColor) -> int:
        return int(np.count_nonzero(self.board == int(color)))

    def __repr__(self) -> str:
        board_str = "\n".join(" ".join(str(cell) for cell in row) for row in self.board)
        return (
            f"GameState(current={self.current_player.name}, result={self.result}, ply={self.ply_count})\n"
            f"{board_str}"
        )
