# Host scheduler
# Drives an agent through episodes against stub collaborators

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from ..agent.kart import KartAgent
from ..analysis.metrics import reward_breakdown
from ..core.interfaces import AgentHooks
from ..core.types import RewardContribution
from .stubs import StubCamera, StubCourse, StubKart, WorldEvent

logger = logging.getLogger(__name__)

Policy = Callable[[np.ndarray], Sequence[float]]


@dataclass
class StepResult:
    """Outcome of one tick."""
    reward: float
    contributions: List[RewardContribution]
    events: List[WorldEvent]
    terminated: bool
    truncated: bool


@dataclass
class EpisodeStats:
    """Summary of one finished episode."""
    episode_return: float = 0.0
    length: int = 0
    checkpoints: int = 0
    laps: int = 0
    terminated: bool = False
    truncated: bool = False
    termination: Optional[str] = None
    breakdown: Dict[str, float] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, float]:
        record = {
            "return": self.episode_return,
            "length": self.length,
            "checkpoints": self.checkpoints,
            "laps": self.laps,
            "terminated": self.terminated,
            "truncated": self.truncated,
            "termination": self.termination or "",
        }
        for kind, total in self.breakdown.items():
            record[f"reward_{kind}"] = total
        return record


def deliver_events(hooks: AgentHooks, events: Sequence[WorldEvent]) -> None:
    """Hand world events to the agent's hooks in the order they occurred."""
    for event in events:
        if event.kind == "zone":
            hooks.on_zone_entered(event.zone_id)
        elif event.kind == "collision":
            hooks.on_collision()


class EpisodeRunner:
    """Single-threaded host loop.

    Each tick: hand the action to the agent, advance the kart, deliver
    world events, then drain the agent's reward log. The runner keeps the
    episode return; the agent never reports it.
    """

    def __init__(
        self,
        agent: KartAgent,
        kart: StubKart,
        course: StubCourse,
        camera: Optional[StubCamera] = None,
        max_steps: int = 1000,
    ):
        if max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {max_steps}")
        self.agent = agent
        self.kart = kart
        self.course = course
        self.camera = camera
        self.max_steps = max_steps
        self.stats = EpisodeStats()
        self.episodes = 0

    def observe(self) -> np.ndarray:
        """Current camera frame (blank frame when no camera is attached)."""
        rig = self.agent.sensors
        if self.camera is not None and rig.attached:
            return self.camera.capture(rig.handle)
        return np.zeros(rig.observation_shape, dtype=np.uint8)

    def reset(self) -> np.ndarray:
        self.agent.on_episode_start()
        self.stats = EpisodeStats()
        self.episodes += 1
        return self.observe()

    def tick(self, action: Sequence[float]) -> StepResult:
        """Run one simulation tick.

        Args:
            action: (steer, throttle) action vector

        Returns:
            StepResult for this tick
        """
        previous = self.kart.position
        self.agent.step(action)
        self.kart.advance()

        events = self.course.detect(previous, self.kart.position)
        deliver_events(self.agent, events)

        contributions = self.agent.reward_log.drain()
        reward = float(sum(c.magnitude for c in contributions))

        stats = self.stats
        stats.length += 1
        stats.episode_return += reward
        for kind, total in reward_breakdown(contributions).items():
            stats.breakdown[kind] = stats.breakdown.get(kind, 0.0) + total
        stats.checkpoints = self.agent.checkpoints.passed
        stats.laps = self.agent.checkpoints.laps
        stats.terminated = self.agent.terminated
        stats.truncated = not stats.terminated and stats.length >= self.max_steps
        if self.agent.termination is not None:
            stats.termination = self.agent.termination.value

        return StepResult(
            reward=reward,
            contributions=contributions,
            events=events,
            terminated=stats.terminated,
            truncated=stats.truncated,
        )

    def run_episode(self, policy: Policy) -> EpisodeStats:
        """Reset, then tick until termination or the step limit."""
        obs = self.reset()
        while True:
            result = self.tick(policy(obs))
            if result.terminated or result.truncated:
                break
            obs = self.observe()

        logger.info(
            f"Episode {self.episodes}: return={self.stats.episode_return:.3f}, "
            f"length={self.stats.length}, checkpoints={self.stats.checkpoints}, "
            f"laps={self.stats.laps}, end={self.stats.termination or 'truncated'}"
        )
        return self.stats
