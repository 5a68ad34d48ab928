"""Errors raised while turning level text into a :class:`~gemgrid.parsing.Level`.

Every variant keeps the data needed to explain the failure as attributes, so a
caller can build its own message without scanning the level again. Only the
first problem found is reported.
"""

from __future__ import annotations

from typing import Any, Tuple

from .world import AgentId, Position


class ParseError(ValueError):
    """Base class of all level parsing errors."""

    def _payload(self) -> Tuple[Any, ...]:
        return ()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._payload() == other._payload()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._payload()))


class EmptyWorld(ParseError):
    def __init__(self) -> None:
        super().__init__("The level contains no rows")


class NoAgents(ParseError):
    def __init__(self) -> None:
        super().__init__("The level has no start tile, there must be at least one agent")


class InvalidTile(ParseError):
    def __init__(self, tile_str: str, line: int, col: int):
        self.tile_str = tile_str
        self.line = line
        self.col = col
        super().__init__(f"Invalid tile {tile_str!r} at line {line}, column {col}")

    def _payload(self) -> Tuple[Any, ...]:
        return (self.tile_str, self.line, self.col)


class InvalidFileName(ParseError):
    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(
            f"Invalid level file name {file_name!r}: expected a name made of letters, digits, '_' or '-', "
            "optionally with a '.txt' extension"
        )

    def _payload(self) -> Tuple[Any, ...]:
        return (self.file_name,)


class NotEnoughExitTiles(ParseError):
    def __init__(self, n_starts: int, n_exits: int):
        self.n_starts = n_starts
        self.n_exits = n_exits
        super().__init__(f"Not enough exit tiles: {n_starts} agents but only {n_exits} exits")

    def _payload(self) -> Tuple[Any, ...]:
        return (self.n_starts, self.n_exits)


class DuplicateStartTile(ParseError):
    def __init__(self, agent_id: AgentId, start1: Position, start2: Position):
        self.agent_id = agent_id
        self.start1 = start1
        self.start2 = start2
        super().__init__(f"Agent {agent_id} has two start tiles: {start1} and {start2}")

    def _payload(self) -> Tuple[Any, ...]:
        return (self.agent_id, self.start1, self.start2)


class InconsistentDimensions(ParseError):
    def __init__(self, expected_n_cols: int, actual_n_cols: int, row: int):
        self.expected_n_cols = expected_n_cols
        self.actual_n_cols = actual_n_cols
        self.row = row
        super().__init__(
            f"Inconsistent number of columns in row {row}: expected {expected_n_cols}, got {actual_n_cols}"
        )

    def _payload(self) -> Tuple[Any, ...]:
        return (self.expected_n_cols, self.actual_n_cols, self.row)
