from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

from .world import AgentId

logger = logging.getLogger(__name__)


@dataclass
class RewardConfig:
    gem_collected: int = 1
    agent_arrived: int = 1
    end_game: int = 1  # bonus on top of agent_arrived when the last agent exits
    agent_died: int = -1


@dataclass(frozen=True)
class AgentExit:
    agent_id: AgentId


@dataclass(frozen=True)
class GemCollected:
    agent_id: AgentId


@dataclass(frozen=True)
class AgentDied:
    agent_id: AgentId


RewardEvent = Union[AgentExit, GemCollected, AgentDied]


@dataclass
class TeamReward:
    """Shared team reward, aggregated over the events of one step.

    Events must be delivered in the order they happened. Once an agent dies in
    a step, later events of that step are dropped and the step reward becomes a
    penalty for each death. The episode counters survive
    :meth:`consume_step_reward` and are only cleared by :meth:`reset`.
    """

    n_agents: int
    config: RewardConfig = field(default_factory=RewardConfig)
    step_reward: int = field(default=0, init=False)
    n_dead: int = field(default=0, init=False)
    _episode_gems_collected: int = field(default=0, init=False, repr=False)
    _episode_agents_arrived: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.n_agents < 0:
            raise ValueError(f"n_agents must be non-negative, got {self.n_agents}")

    @property
    def episode_gems_collected(self) -> int:
        return self._episode_gems_collected

    @property
    def episode_agents_arrived(self) -> int:
        return self._episode_agents_arrived

    def notify(self, event: RewardEvent) -> None:
        logger.debug("Received event %s", event)
        if not isinstance(event, (AgentExit, GemCollected, AgentDied)):
            raise TypeError(f"Unknown reward event: {event!r}")
        if isinstance(event, AgentDied):
            self.n_dead += 1
            # Any positive reward of this step is voided by the death.
            self.step_reward = min(self.step_reward, 0) + self.config.agent_died
            return

        # No positive reward once an agent has died during this step.
        if self.n_dead > 0:
            return

        if isinstance(event, GemCollected):
            self._episode_gems_collected += 1
            self.step_reward += self.config.gem_collected
        else:
            self._episode_agents_arrived += 1
            if self._episode_agents_arrived == self.n_agents:
                self.step_reward += self.config.agent_arrived + self.config.end_game
            else:
                self.step_reward += self.config.agent_arrived

    update = notify

    def notify_all(self, events: Iterable[RewardEvent]) -> None:
        for event in events:
            self.notify(event)

    def consume_step_reward(self) -> int:
        """Return the reward of the current step and start a new step.

        A step with deaths is worth minus the number of deaths, whatever the
        configured death penalty.
        """
        n_dead = self.n_dead
        reward = self.step_reward
        self.n_dead = 0
        self.step_reward = 0
        if n_dead > 0:
            return -n_dead
        return reward

    def reset(self) -> None:
        logger.debug("Resetting team reward for %d agents", self.n_agents)
        self.step_reward = 0
        self.n_dead = 0
        self._episode_gems_collected = 0
        self._episode_agents_arrived = 0

    def clone(self) -> "TeamReward":
        return copy.deepcopy(self)
