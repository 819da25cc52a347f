# Agent configuration
# FORBIDDEN: gymnasium, logging, any I/O
# Immutable once built; nothing mutates these while an episode runs.

import math
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

from .types import InitMode, Vector3


def _vector3(value, name: str) -> Vector3:
    values = tuple(float(v) for v in value)
    if len(values) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(values)}")
    return values


def _known_keys(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(data) - names
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return dict(data)


@dataclass(frozen=True)
class CameraConfig:
    """Observation camera geometry, relative to the agent body."""
    offset: Vector3 = (0.0, 1.5, 2.0)
    rotation: Vector3 = (0.0, 0.0, 0.0)  # euler degrees
    width: int = 84
    height: int = 84
    fov: float = 60.0
    near_clip: float = 0.1
    far_clip: float = 200.0
    grayscale: bool = False
    sensor_name: str = "Vision"

    def __post_init__(self):
        object.__setattr__(self, "offset", _vector3(self.offset, "camera.offset"))
        object.__setattr__(self, "rotation", _vector3(self.rotation, "camera.rotation"))
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Camera resolution must be positive, got {self.width}x{self.height}"
            )
        if not 0.0 < self.fov < 180.0:
            raise ValueError(f"Camera fov must be in (0, 180), got {self.fov}")
        if not 0.0 < self.near_clip < self.far_clip:
            raise ValueError(
                f"Camera clip planes must satisfy 0 < near < far, "
                f"got near={self.near_clip}, far={self.far_clip}"
            )

    @property
    def channels(self) -> int:
        return 1 if self.grayscale else 3

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CameraConfig":
        return cls(**_known_keys(cls, data or {}))


@dataclass(frozen=True)
class AgentConfig:
    """Reward magnitudes, control thresholds and episode rules.

    Defaults reproduce the tuned values used for the vision kart:
    a small per-step time penalty, a speed bonus kept small enough that
    the agent does not learn to chase speed alone, and a large
    checkpoint reward.
    """
    checkpoint_reward: float = 10.0
    hit_penalty: float = -1.0
    time_penalty: float = -0.001
    speed_reward: float = 0.001
    dead_zone: float = 0.1
    terminate_on_lap_complete: bool = False
    lap_complete_reward: float = 0.0
    mode: InitMode = InitMode.TRAINING
    camera: CameraConfig = field(default_factory=CameraConfig)

    def __post_init__(self):
        for name in ("checkpoint_reward", "hit_penalty", "time_penalty",
                     "speed_reward", "lap_complete_reward"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")
        if not 0.0 <= self.dead_zone < 1.0:
            raise ValueError(f"dead_zone must be in [0, 1), got {self.dead_zone}")
        try:
            object.__setattr__(self, "mode", InitMode(self.mode))
        except ValueError:
            modes = [m.value for m in InitMode]
            raise ValueError(f"mode must be one of {modes}, got {self.mode!r}") from None
        if isinstance(self.camera, dict):
            object.__setattr__(self, "camera", CameraConfig.from_dict(self.camera))

    @classmethod
    def from_dict(
        cls,
        data: Optional[Dict[str, Any]],
        camera: Optional[Dict[str, Any]] = None,
    ) -> "AgentConfig":
        """Build from the `agent` (and optional `camera`) config sections."""
        values = _known_keys(cls, data or {})
        if camera is not None:
            values["camera"] = CameraConfig.from_dict(camera)
        return cls(**values)
