from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import Dict, List, Optional, Set, Tuple

import numpy as np
from numpy.typing import NDArray

from .state import Cell, GameResult, GameState, MoveRecord, PlayerColor

DEFAULT_SIDE = 7
DEFAULT_MAX_PLY = 1000
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (0, -1), (-1, 0), (-1, -1))


class IllegalMoveError(ValueError):
    pass


class Placement(Enum):
    QUIET = "quiet"
    CAPTURE = "capture"
    ILLEGAL = "illegal"


@dataclass(frozen=True, eq=False)
class HexGrid:
    """Regular hexagon of ``side`` cells per edge embedded in a square array.

    A square position ``(row, col)`` belongs to the hexagon when
    ``|row - col| <= side - 1``; with the six offsets in ``DIRECTIONS`` this
    gives every interior cell exactly six neighbours.
    """

    side: int
    size: int
    cells: Tuple[Cell, ...]
    mask: NDArray[np.bool_]
    neighbours: Dict[Cell, Tuple[Cell, ...]]

    def contains(self, cell: Cell) -> bool:
        row, col = cell
        return 0 <= row < self.size and 0 <= col < self.size and abs(row - col) < self.side

    @property
    def action_size(self) -> int:
        return self.size * self.size


@lru_cache(maxsize=None)
def hex_grid(side: int) -> HexGrid:
    if side < 2:
        raise ValueError("Board side must be at least 2.")
    size = 2 * side - 1
    mask = np.zeros((size, size), dtype=bool)
    cells: List[Cell] = []
    for row in range(size):
        for col in range(size):
            if abs(row - col) < side:
                mask[row, col] = True
                cells.append((row, col))

    neighbours: Dict[Cell, Tuple[Cell, ...]] = {}
    for row, col in cells:
        adjacent = []
        for dr, dc in DIRECTIONS:
            nr, nc = row + dr, col + dc
            if 0 <= nr < size and 0 <= nc < size and mask[nr, nc]:
                adjacent.append((nr, nc))
        neighbours[(row, col)] = tuple(adjacent)
    mask.setflags(write=False)
    return HexGrid(side=side, size=size, cells=tuple(cells), mask=mask, neighbours=neighbours)


@dataclass
class GroupMap:
    labels: NDArray[np.int32]  # group index per cell, -1 where empty
    sizes: List[int] = field(default_factory=list)
    owners: List[PlayerColor] = field(default_factory=list)
    cells: List[List[Cell]] = field(default_factory=list)
    adjacent: List[Set[int]] = field(default_factory=list)  # enemy groups touching each group

    def groups_of(self, color: PlayerColor) -> List[int]:
        return [index for index, owner in enumerate(self.owners) if owner == color]


def encode_cell(cell: Cell, side: int = DEFAULT_SIDE) -> int:
    grid = hex_grid(side)
    if not grid.contains(cell):
        raise ValueError(f"Cell {cell} is off the board.")
    return cell[0] * grid.size + cell[1]


def decode_cell(index: int, side: int = DEFAULT_SIDE) -> Cell:
    grid = hex_grid(side)
    if not 0 <= index < grid.action_size:
        raise ValueError("Action index out of range.")
    cell = (index // grid.size, index % grid.size)
    if not grid.contains(cell):
        raise ValueError(f"Action index {index} does not map to a board cell.")
    return cell


def initialize_game_state(side: int = DEFAULT_SIDE, max_ply: int = DEFAULT_MAX_PLY) -> GameState:
    grid = hex_grid(side)
    board = np.zeros((grid.size, grid.size), dtype=np.int8)
    return GameState(
        board=board,
        side=side,
        current_player=PlayerColor.BLACK,
        ply_count=0,
        max_ply=max_ply,
        result=GameResult.ONGOING,
    )


def label_groups(state: GameState) -> GroupMap:
    grid = hex_grid(state.side)
    board = state.board
    groups = GroupMap(labels=np.full(board.shape, -1, dtype=np.int32))

    for cell in grid.cells:
        value = int(board[cell])
        if value == 0 or groups.labels[cell] >= 0:
            continue
        label = len(groups.sizes)
        members = _flood_fill(board, grid, cell, value, groups.labels, label)
        groups.sizes.append(len(members))
        groups.owners.append(PlayerColor(value))
        groups.cells.append(members)

    for label, members in enumerate(groups.cells):
        owner = groups.owners[label]
        touching: Set[int] = set()
        for cell in members:
            for neighbour in grid.neighbours[cell]:
                other = int(groups.labels[neighbour])
                if other >= 0 and groups.owners[other] != owner:
                    touching.add(other)
        groups.adjacent.append(touching)
    return groups


def classify_placement(
    state: GameState,
    cell: Cell,
    player: PlayerColor,
    groups: Optional[GroupMap] = None,
) -> Placement:
    grid = hex_grid(state.side)
    if not grid.contains(cell) or state.board[cell] != 0:
        return Placement.ILLEGAL
    if groups is None:
        groups = label_groups(state)

    friendly: Set[int] = set()
    enemy: Set[int] = set()
    for neighbour in grid.neighbours[cell]:
        label = int(groups.labels[neighbour])
        if label < 0:
            continue
        if groups.owners[label] == player:
            friendly.add(label)
        else:
            enemy.add(label)

    if not friendly:
        return Placement.QUIET

    merged_size = 1 + sum(groups.sizes[label] for label in friendly)
    for label in friendly:
        enemy |= groups.adjacent[label]
    if enemy and all(groups.sizes[label] < merged_size for label in enemy):
        return Placement.CAPTURE
    return Placement.ILLEGAL


def enumerate_legal_moves(state: GameState, player: Optional[PlayerColor] = None) -> List[Cell]:
    if state.is_terminal:
        return []
    if player is None:
        player = state.current_player

    grid = hex_grid(state.side)
    groups = label_groups(state)
    legal: List[Cell] = []
    for cell in grid.cells:
        if state.board[cell] != 0:
            continue
        if classify_placement(state, cell, player, groups) is not Placement.ILLEGAL:
            legal.append(cell)
    return legal


def apply_move(state: GameState, cell: Cell, *, in_place: bool = False) -> GameState:
    target = state if in_place else state.copy()
    if target.is_terminal:
        raise IllegalMoveError("Cannot place a stone in a terminal state.")

    grid = hex_grid(target.side)
    cell = (int(cell[0]), int(cell[1]))
    if not grid.contains(cell):
        raise IllegalMoveError(f"Cell {cell} is off the board.")
    if target.board[cell] != 0:
        raise IllegalMoveError(f"Cell {cell} is already occupied.")

    mover = target.current_player
    placement = classify_placement(target, cell, mover)
    if placement is Placement.ILLEGAL:
        raise IllegalMoveError(f"Placing at {cell} is not legal for {mover.name}.")

    target.board[cell] = int(mover)

    captured_cells: List[Cell] = []
    if placement is Placement.CAPTURE:
        captured_cells = _remove_captured_groups(target, cell)

    result = GameResult.ONGOING
    if captured_cells and target.stone_count(mover.opponent) == 0:
        result = GameResult.win_for(mover)

    target.ply_count += 1
    if result == GameResult.ONGOING and target.ply_count >= target.max_ply:
        result = GameResult.DRAW
    target.result = result

    if target.result == GameResult.ONGOING:
        # a capture obliges the mover to place again
        preferred = mover if captured_cells else mover.opponent
        next_player = _select_next_player(target, preferred)
        if next_player is None:
            target.result = GameResult.DRAW
        else:
            target.current_player = next_player

    target.last_move = MoveRecord(
        cell=cell,
        captured_cells=tuple(captured_cells),
        captured=bool(captured_cells),
        resulted_in=target.result,
    )
    return target


def pass_turn(state: GameState) -> GameState:
    passed = state.copy()
    passed.current_player = state.current_player.opponent
    return passed


def _select_next_player(state: GameState, preferred: PlayerColor) -> Optional[PlayerColor]:
    for candidate in (preferred, preferred.opponent):
        if enumerate_legal_moves(state, candidate):
            return candidate
    return None


def _remove_captured_groups(state: GameState, cell: Cell) -> List[Cell]:
    groups = label_groups(state)
    new_group = int(groups.labels[cell])
    captured: List[Cell] = []
    for label in groups.adjacent[new_group]:
        for position in groups.cells[label]:
            state.board[position] = 0
            captured.append(position)
    return sorted(captured)


def _flood_fill(
    board: np.ndarray,
    grid: HexGrid,
    start: Cell,
    value: int,
    labels: np.ndarray,
    label: int,
) -> List[Cell]:
    stack = [start]
    members: List[Cell] = []
    labels[start] = label
    while stack:
        position = stack.pop()
        members.append(position)
        for neighbour in grid.neighbours[position]:
            if labels[neighbour] < 0 and board[neighbour] == value:
                labels[neighbour] = label
                stack.append(neighbour)
    return members
