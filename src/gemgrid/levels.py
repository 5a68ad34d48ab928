from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .parsing import Level, parse_level


@dataclass
class LevelSpec:
    name: str
    description: str
    text: str

    def parse(self) -> Level:
        return parse_level(self.text, file_name=self.name)


def level_presets() -> Dict[str, LevelSpec]:
    """Return the built-in levels, from a single agent corridor to a laser-guarded team level."""
    return {
        "lvl1": LevelSpec(
            name="lvl1",
            description="Single agent, one gem on the way to the exit.",
            text="""
                S0 . . G . X
            """,
        ),
        "lvl2": LevelSpec(
            name="lvl2",
            description="Two agents in a walled room; both must exit for the end-of-game bonus.",
            text="""
                @  @  @  @  @  @
                @  S0 .  G  X  @
                @  S1 .  .  X  @
                @  @  @  @  @  @
            """,
        ),
        "lvl3": LevelSpec(
            name="lvl3",
            description="Three agents, scattered gems and a void pit to avoid.",
            text="""
                S0 .  .  G  .  .  X
                .  @  @  .  @  @  .
                S1 .  V  .  G  .  X
                .  @  @  .  @  @  .
                S2 .  .  G  .  .  X
            """,
        ),
        "lvl4": LevelSpec(
            name="lvl4",
            description="Two agents below a south-facing laser source of agent 1.",
            text="""
                @   @  @  @  @
                L1S .  G  .  @
                S0  .  .  .  X
                S1  .  .  .  X
                @   @  @  @  @
            """,
        ),
    }
