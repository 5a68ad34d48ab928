from __future__ import annotations

import operator
from enum import Enum, auto
from typing import Iterable, List, NamedTuple, Tuple

AgentId = int


class Position(NamedTuple):
    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


class TileKind(Enum):
    FLOOR = auto()
    WALL = auto()
    GEM = auto()
    START = auto()
    EXIT = auto()
    VOID = auto()
    LASER_SOURCE = auto()


class Direction(Enum):
    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @classmethod
    def from_char(cls, char: str) -> "Direction":
        return cls(char)


def _as_positions(positions: Iterable[Tuple[int, int]]) -> List[Position]:
    return [Position(operator.index(row), operator.index(col)) for row, col in positions]


class WorldState:
    """Snapshot of one simulation instant.

    ``agents_positions[i]`` is the cell of agent ``i`` and ``gems_collected[j]``
    tells whether gem ``j`` has been picked up. Both lists are owned by the
    instance: the constructor, getters and setters all copy, so two states never
    share a list. No validation happens here; levels are validated when parsed.
    """

    __slots__ = ("_agents_positions", "_gems_collected")

    def __init__(self, agents_positions: Iterable[Tuple[int, int]], gems_collected: Iterable[bool]):
        self._agents_positions = _as_positions(agents_positions)
        self._gems_collected = [bool(g) for g in gems_collected]

    @property
    def agents_positions(self) -> List[Position]:
        return list(self._agents_positions)

    @agents_positions.setter
    def agents_positions(self, positions: Iterable[Tuple[int, int]]) -> None:
        self._agents_positions = _as_positions(positions)

    @property
    def gems_collected(self) -> List[bool]:
        return list(self._gems_collected)

    @gems_collected.setter
    def gems_collected(self, collected: Iterable[bool]) -> None:
        self._gems_collected = [bool(g) for g in collected]

    @property
    def n_agents(self) -> int:
        return len(self._agents_positions)

    @property
    def n_gems(self) -> int:
        return len(self._gems_collected)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorldState):
            return NotImplemented
        return (
            self._agents_positions == other._agents_positions
            and self._gems_collected == other._gems_collected
        )

    def __hash__(self) -> int:
        return hash((tuple(self._agents_positions), tuple(self._gems_collected)))

    def __copy__(self) -> "WorldState":
        return WorldState(self._agents_positions, self._gems_collected)

    def __deepcopy__(self, memo: dict) -> "WorldState":
        # Positions and bools are immutable, a fresh pair of lists is a full copy.
        return self.__copy__()

    def __str__(self) -> str:
        positions = [tuple(p) for p in self._agents_positions]
        return f"WorldState(agent_positions={positions}, gems_collected={self._gems_collected})"

    def __repr__(self) -> str:
        return self.__str__()
