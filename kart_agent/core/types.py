# Core type definitions
# FORBIDDEN: gymnasium, logging, any I/O

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

Vector3 = Tuple[float, float, float]
Quaternion = Tuple[float, float, float, float]

IDENTITY_ROTATION: Quaternion = (0.0, 0.0, 0.0, 1.0)


class InitMode(str, Enum):
    """How the agent is brought up by its host.

    INTERACTIVE and TRAINING both attach the camera sensor; only
    INTERACTIVE renders it to screen. HEADLESS skips sensor setup.
    """
    INTERACTIVE = "interactive"
    TRAINING = "training"
    HEADLESS = "headless"

    @property
    def configures_sensor(self) -> bool:
        return self is not InitMode.HEADLESS


class RewardKind(str, Enum):
    TIME = "time"
    SPEED = "speed"
    CHECKPOINT = "checkpoint"
    COLLISION = "collision"
    LAP = "lap"


class TerminalKind(str, Enum):
    COLLISION = "collision"
    LAP_COMPLETE = "lap_complete"


@dataclass(frozen=True)
class Pose:
    """Immutable position + rotation snapshot (rotation as x, y, z, w)."""
    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Quaternion = IDENTITY_ROTATION

    @classmethod
    def of(cls, position, rotation) -> "Pose":
        """Build a pose from any sequence-like position/rotation."""
        return cls(
            position=tuple(float(v) for v in position),
            rotation=tuple(float(v) for v in rotation),
        )


@dataclass(frozen=True)
class ControlState:
    """Interpreted control: steering in [-1, 1], accelerate/brake exclusive."""
    steering: float = 0.0
    accelerate: bool = False
    brake: bool = False

    @classmethod
    def neutral(cls) -> "ControlState":
        return cls()

    def to_array(self) -> np.ndarray:
        return np.array(
            [self.steering, float(self.accelerate), float(self.brake)],
            dtype=np.float32,
        )


@dataclass(frozen=True)
class VehicleCommand:
    """Input the vehicle service consumes each tick."""
    accelerate: bool = False
    brake: bool = False
    turn_input: float = 0.0

    @classmethod
    def from_control(cls, control: ControlState) -> "VehicleCommand":
        return cls(
            accelerate=control.accelerate,
            brake=control.brake,
            turn_input=control.steering,
        )


@dataclass(frozen=True)
class RewardContribution:
    """One typed entry in the reward log."""
    kind: RewardKind
    magnitude: float
