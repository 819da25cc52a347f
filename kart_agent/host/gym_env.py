# Gymnasium adapter
# Exposes the agent + stub collaborators through the Gymnasium API

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from ..agent.kart import KartAgent
from ..analysis.metrics import reward_breakdown
from ..core.config import AgentConfig
from .runner import EpisodeRunner
from .stubs import StubCamera, StubCourse, StubKart


class KartEnv(gym.Env):
    """Gymnasium wrapper around one kart agent on a stub course.

    Action: [steer, throttle] in [-1, 1].
    Observation: camera frame, uint8, (height, width, channels).
    """
    metadata = {"render_modes": []}

    def __init__(
        self,
        config: Optional[AgentConfig] = None,
        course: Optional[StubCourse] = None,
        kart: Optional[StubKart] = None,
        max_steps: int = 1000,
    ):
        super().__init__()
        self.config = config if config is not None else AgentConfig()
        self.course = course if course is not None else StubCourse()
        self.kart = kart if kart is not None else StubKart()
        self.camera = StubCamera()

        self.agent = KartAgent(
            transform=self.kart,
            vehicle=self.kart,
            zones=self.course.zones,
            config=self.config,
            sensors=self.camera,
        )
        self.runner = EpisodeRunner(
            self.agent, self.kart, self.course, self.camera, max_steps=max_steps,
        )

        self.action_space = spaces.Box(
            low=np.array([-1.0, -1.0], dtype=np.float32),
            high=np.array([1.0, 1.0], dtype=np.float32),
            dtype=np.float32,
        )
        self.observation_space = spaces.Box(
            low=0,
            high=255,
            shape=self.agent.sensors.observation_shape,
            dtype=np.uint8,
        )

    def _info(self) -> Dict[str, Any]:
        stats = self.runner.stats
        return {
            "checkpoint_index": self.agent.checkpoint_index,
            "controls": self.agent.control.to_array(),
            "checkpoints": stats.checkpoints,
            "laps": stats.laps,
            "speed": self.kart.normalized_speed(),
            "episode_return": stats.episode_return,
            "termination": stats.termination,
        }

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        obs = self.runner.reset()
        return obs, self._info()

    def step(self, action) -> Tuple[np.ndarray, float, bool, bool, Dict[str, Any]]:
        result = self.runner.tick(action)
        info = self._info()
        info["reward_terms"] = reward_breakdown(result.contributions)
        return self.runner.observe(), result.reward, result.terminated, result.truncated, info

    def close(self) -> None:
        self.agent.close()


def make_env(config: Dict[str, Any]) -> KartEnv:
    """Create environment from a full config dict.

    Args:
        config: Configuration with `agent`, `camera`, `course`,
            `vehicle` and `runner` sections

    Returns:
        KartEnv instance
    """
    agent_config = AgentConfig.from_dict(config.get("agent"), config.get("camera"))
    course = StubCourse.from_dict(config.get("course"))
    kart = StubKart.from_dict(config.get("vehicle"))
    max_steps = (config.get("runner") or {}).get("max_steps", 1000)
    return KartEnv(config=agent_config, course=course, kart=kart, max_steps=max_steps)
