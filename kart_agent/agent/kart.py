# Episodic control agent
# FORBIDDEN: gymnasium, host.*, analysis.*

import logging
from typing import Hashable, Iterable, Optional, Sequence, Union

import numpy as np

from ..core.config import AgentConfig
from ..core.interfaces import SensorService, Transform, VehicleService
from ..core.types import (
    ControlState,
    InitMode,
    Pose,
    TerminalKind,
    VehicleCommand,
)
from ..sensors.camera import SensorRig
from .action import interpret, split_action
from .checkpoints import CheckpointTracker
from .lifecycle import EpisodeLifecycle
from .rewards import RewardLog, RewardShaper

logger = logging.getLogger(__name__)


class KartAgent:
    """Control loop of one learning-driven kart.

    The host scheduler calls `on_episode_start`, then `step` once per tick,
    and forwards world events (`on_zone_entered`, `on_collision`) as they
    happen. Rewards are appended to `reward_log`, which the host drains
    every tick. Callbacks arriving while no episode is running are ignored.

    Args:
        transform: Mutable placement of the agent body
        vehicle: Vehicle service; if None, steps are skipped
        zones: Checkpoint zone ids in course order, zone 0 at the start
        config: Reward and episode configuration
        sensors: Sensor service the observation camera is attached to
        mode: Init mode; defaults to config.mode
    """

    def __init__(
        self,
        transform: Transform,
        vehicle: Optional[VehicleService] = None,
        zones: Iterable[Hashable] = (),
        config: Optional[AgentConfig] = None,
        sensors: Optional[SensorService] = None,
        mode: Optional[Union[InitMode, str]] = None,
    ):
        self.config = config if config is not None else AgentConfig()
        self.mode = InitMode(mode) if mode is not None else self.config.mode

        self.vehicle = vehicle
        if vehicle is None:
            logger.error("KartAgent: vehicle service not found, steps will be skipped")

        self.control = ControlState.neutral()
        self.reward_log = RewardLog()
        self.rewards = RewardShaper(self.config, self.reward_log)
        self.checkpoints = CheckpointTracker(zones, reward=self.config.checkpoint_reward)
        self.lifecycle = EpisodeLifecycle(transform, vehicle)

        self.sensors = SensorRig(sensors, self.config.camera)
        self.sensors.setup(self.mode)

    # State accessors

    @property
    def steering(self) -> float:
        return self.control.steering

    @property
    def accelerate(self) -> bool:
        return self.control.accelerate

    @property
    def brake(self) -> bool:
        return self.control.brake

    @property
    def checkpoint_index(self) -> int:
        return self.checkpoints.index

    @property
    def spawn(self) -> Optional[Pose]:
        return self.lifecycle.spawn

    @property
    def episode_active(self) -> bool:
        return self.lifecycle.active

    @property
    def termination(self) -> Optional[TerminalKind]:
        return self.lifecycle.termination

    @property
    def terminated(self) -> bool:
        return self.lifecycle.termination is not None

    # Host callbacks

    def activate(self) -> Pose:
        """First activation: snapshot the spawn pose."""
        return self.lifecycle.activate()

    def on_episode_start(self) -> None:
        self.lifecycle.start()
        self.checkpoints.reset()
        self.control = ControlState.neutral()
        self.reward_log.clear()

    def step(self, action: Sequence[float]) -> None:
        """Apply one tick of policy output.

        Args:
            action: (steer, throttle) vector, each nominally in [-1, 1]
        """
        if not self.lifecycle.active:
            logger.debug("Step outside a running episode ignored")
            return
        if self.vehicle is None:
            logger.warning("Vehicle service unavailable, skipping step")
            return

        steer, throttle = split_action(action)
        self.control = interpret(steer, throttle, self.config.dead_zone)
        self.vehicle.apply_input(self.generate_input())

        # Speed is read after the input was handed over.
        speed = self.vehicle.normalized_speed()
        if not np.isfinite(speed):
            logger.warning(f"Vehicle reported non-finite speed {speed!r}, reading it as 0")
            speed = 0.0
        self.rewards.add_step(speed)

    def on_zone_entered(self, zone_id: Hashable) -> None:
        if not self.lifecycle.active:
            return

        event = self.checkpoints.on_zone_entered(zone_id)
        if event is None:
            logger.debug(
                f"Zone {zone_id!r} ignored, expecting {self.checkpoints.expected_zone!r}"
            )
            return
        self.rewards.record(event)
        logger.debug(
            f"Checkpoint {self.checkpoints.index}/{len(self.checkpoints)} passed "
            f"(zone {zone_id!r})"
        )

        if self.checkpoints.lap_just_completed:
            if self.config.lap_complete_reward != 0.0:
                self.rewards.add_lap_complete()
            if self.config.terminate_on_lap_complete:
                self.on_terminal_event(TerminalKind.LAP_COMPLETE)

    def on_collision(self) -> None:
        self.on_terminal_event(TerminalKind.COLLISION)

    def on_terminal_event(self, kind: Union[TerminalKind, str]) -> None:
        """Apply the terminal reward for `kind` and end the episode."""
        try:
            kind = TerminalKind(kind)
        except ValueError:
            logger.debug(f"Unknown terminal event {kind!r} ignored")
            return
        if not self.lifecycle.active:
            return

        if kind is TerminalKind.COLLISION:
            self.rewards.add_collision()
        self.lifecycle.terminate(kind)

    # Vehicle / policy facing

    def generate_input(self) -> VehicleCommand:
        return VehicleCommand.from_control(self.control)

    def collect_observations(self) -> np.ndarray:
        # Observations are camera frames delivered by the sensor service.
        return np.zeros(0, dtype=np.float32)

    @staticmethod
    def heuristic(horizontal: float, vertical: float) -> np.ndarray:
        """Manual override: raw control axes as an action vector."""
        return np.array([horizontal, vertical], dtype=np.float32)

    def close(self) -> None:
        self.sensors.teardown()
