"""Deterministic core of a multi-agent gem collection grid world: levels, world states and team rewards."""

from .errors import (  # noqa: F401
    DuplicateStartTile,
    EmptyWorld,
    InconsistentDimensions,
    InvalidFileName,
    InvalidTile,
    NoAgents,
    NotEnoughExitTiles,
    ParseError,
)
from .levels import LevelSpec, level_presets  # noqa: F401
from .parsing import LaserSource, Level, parse_level  # noqa: F401
from .reward import AgentDied, AgentExit, GemCollected, RewardConfig, RewardEvent, TeamReward  # noqa: F401
from .world import AgentId, Direction, Position, TileKind, WorldState  # noqa: F401
