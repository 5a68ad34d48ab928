from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Dict, List, Optional, Tuple

import numpy as np

from .errors import (
    DuplicateStartTile,
    EmptyWorld,
    InconsistentDimensions,
    InvalidFileName,
    InvalidTile,
    NoAgents,
    NotEnoughExitTiles,
)
from .world import AgentId, Direction, Position, TileKind, WorldState

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "<string>"

_FILE_NAME_RE = re.compile(r"^[A-Za-z0-9_\-]+(\.txt)?$")
_START_RE = re.compile(r"^S(\d+)$")
_LASER_RE = re.compile(r"^L(\d+)([NESW])$")

_SIMPLE_TILES: Dict[str, TileKind] = {
    ".": TileKind.FLOOR,
    "@": TileKind.WALL,
    "G": TileKind.GEM,
    "X": TileKind.EXIT,
    "V": TileKind.VOID,
}


@dataclass(frozen=True)
class LaserSource:
    agent_id: AgentId
    direction: Direction


@dataclass(frozen=True)
class Token:
    """One grid cell after tokenization."""

    kind: TileKind
    agent_id: Optional[AgentId] = None
    direction: Optional[Direction] = None


@dataclass
class Level:
    """A validated level: the static tile layout and where every entity starts.

    ``start_positions`` is indexed by agent id. Exits, gems, walls and voids are
    listed in row-major order, and gem ``j`` of ``gem_positions`` is gem ``j`` of
    every :class:`WorldState` built from this level.
    """

    name: str
    height: int
    width: int
    tiles: np.ndarray
    start_positions: List[Position]
    exit_positions: List[Position] = field(default_factory=list)
    gem_positions: List[Position] = field(default_factory=list)
    wall_positions: List[Position] = field(default_factory=list)
    void_positions: List[Position] = field(default_factory=list)
    laser_sources: Dict[Position, LaserSource] = field(default_factory=dict)

    @property
    def n_agents(self) -> int:
        return len(self.start_positions)

    @property
    def n_gems(self) -> int:
        return len(self.gem_positions)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.height, self.width)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def tile_at(self, pos: Tuple[int, int]) -> TileKind:
        row, col = pos
        if not self.in_bounds(row, col):
            raise IndexError(f"Position {(row, col)} is outside of the {self.height}x{self.width} level")
        return self.tiles[row, col]

    def initial_state(self) -> WorldState:
        return WorldState(self.start_positions, [False] * self.n_gems)


def validate_file_name(file_name: str) -> None:
    """Raise :class:`InvalidFileName` unless ``file_name`` is a usable level identifier."""
    if file_name == DEFAULT_FILE_NAME:
        return
    if not isinstance(file_name, str) or not file_name.strip():
        raise InvalidFileName(str(file_name))
    if file_name.endswith(("/", "\\")):
        raise InvalidFileName(file_name)
    if _FILE_NAME_RE.match(PurePath(file_name).name) is None:
        raise InvalidFileName(file_name)


def level_name(file_name: str) -> str:
    if file_name == DEFAULT_FILE_NAME:
        return file_name
    return PurePath(file_name).stem


def tokenize(tile_str: str, line: int, col: int) -> Token:
    kind = _SIMPLE_TILES.get(tile_str)
    if kind is not None:
        return Token(kind=kind)
    match = _START_RE.match(tile_str)
    if match is not None:
        return Token(kind=TileKind.START, agent_id=int(match.group(1)))
    match = _LASER_RE.match(tile_str)
    if match is not None:
        return Token(
            kind=TileKind.LASER_SOURCE,
            agent_id=int(match.group(1)),
            direction=Direction.from_char(match.group(2)),
        )
    raise InvalidTile(tile_str, line, col)


def _split_rows(text: str) -> List[List[str]]:
    return [line.split() for line in text.splitlines() if line.strip()]


def _check_dimensions(rows: List[List[str]]) -> int:
    expected_n_cols = len(rows[0])
    for i, row in enumerate(rows[1:], start=1):
        if len(row) != expected_n_cols:
            raise InconsistentDimensions(expected_n_cols=expected_n_cols, actual_n_cols=len(row), row=i)
    return expected_n_cols


def _collect_starts(tokens: List[List[Token]]) -> Dict[AgentId, Position]:
    starts: Dict[AgentId, Position] = {}
    for i, row in enumerate(tokens):
        for j, token in enumerate(row):
            if token.kind != TileKind.START:
                continue
            pos = Position(i, j)
            if token.agent_id in starts:
                raise DuplicateStartTile(agent_id=token.agent_id, start1=starts[token.agent_id], start2=pos)
            starts[token.agent_id] = pos
    return starts


def parse_level(text: str, file_name: str = DEFAULT_FILE_NAME) -> Level:
    """Parse and validate level text.

    Rows are the non-blank lines of ``text`` and cells are whitespace separated
    tokens. Rows, columns and positions are 0-based. The checks run in a fixed
    order and the first failing one raises its :class:`~gemgrid.errors.ParseError`.
    """
    rows = _split_rows(text)
    if not rows:
        raise EmptyWorld()
    validate_file_name(file_name)
    width = _check_dimensions(rows)
    height = len(rows)

    tokens = [[tokenize(tile_str, i, j) for j, tile_str in enumerate(row)] for i, row in enumerate(rows)]

    starts = _collect_starts(tokens)
    n_starts = len(starts)
    if n_starts == 0:
        raise NoAgents()
    # Start ids must cover 0..n_starts-1 without gaps and lasers belong to one of those agents.
    for i, row in enumerate(tokens):
        for j, token in enumerate(row):
            if token.agent_id is not None and token.agent_id >= n_starts:
                raise InvalidTile(rows[i][j], i, j)

    tiles = np.full((height, width), TileKind.FLOOR, dtype=object)
    level = Level(
        name=level_name(file_name),
        height=height,
        width=width,
        tiles=tiles,
        start_positions=[starts[agent_id] for agent_id in range(n_starts)],
    )
    for i, row in enumerate(tokens):
        for j, token in enumerate(row):
            pos = Position(i, j)
            tiles[i, j] = token.kind
            if token.kind == TileKind.EXIT:
                level.exit_positions.append(pos)
            elif token.kind == TileKind.GEM:
                level.gem_positions.append(pos)
            elif token.kind == TileKind.WALL:
                level.wall_positions.append(pos)
            elif token.kind == TileKind.VOID:
                level.void_positions.append(pos)
            elif token.kind == TileKind.LASER_SOURCE:
                level.laser_sources[pos] = LaserSource(agent_id=token.agent_id, direction=token.direction)

    n_exits = len(level.exit_positions)
    if n_exits < n_starts:
        raise NotEnoughExitTiles(n_starts=n_starts, n_exits=n_exits)

    logger.debug(
        "Parsed level %s: %dx%d, %d agents, %d gems, %d exits",
        level.name,
        height,
        width,
        level.n_agents,
        level.n_gems,
        n_exits,
    )
    return level
