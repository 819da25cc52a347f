# Stub collaborators for headless runs and tests
# Stand-ins for the simulator's vehicle, world and camera services.
# These are deliberately crude: no tire model, no chassis, no rendering.

from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Sequence

import numpy as np

from ..core.math_utils import crossed
from ..core.types import IDENTITY_ROTATION, Quaternion, Vector3, VehicleCommand


class StubKart:
    """Vehicle service and transform in one object.

    Position x is the lateral offset from the course centerline and z is
    the cumulative distance driven. Speed responds to the last command
    as soon as it is applied; `advance` then moves the body.
    """

    def __init__(
        self,
        position: Sequence[float] = (0.0, 0.0, 0.0),
        rotation: Sequence[float] = IDENTITY_ROTATION,
        max_speed: float = 20.0,
        acceleration: float = 8.0,
        braking: float = 16.0,
        drag: float = 2.0,
        steer_rate: float = 0.5,
        dt: float = 0.02,
    ):
        self.position: Vector3 = tuple(float(v) for v in position)
        self.rotation: Quaternion = tuple(float(v) for v in rotation)
        self.max_speed = max_speed
        self.acceleration = acceleration
        self.braking = braking
        self.drag = drag
        self.steer_rate = steer_rate
        self.dt = dt

        self.speed = 0.0
        self.lateral_velocity = 0.0
        self.command = VehicleCommand()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "StubKart":
        return cls(**(data or {}))

    def normalized_speed(self) -> float:
        return self.speed / self.max_speed

    def reset_velocities(self) -> None:
        self.speed = 0.0
        self.lateral_velocity = 0.0

    def apply_input(self, command: VehicleCommand) -> None:
        self.command = command
        if command.accelerate:
            self.speed += self.acceleration * self.dt
        elif command.brake:
            self.speed -= self.braking * self.dt
        else:
            self.speed -= self.drag * self.dt
        self.speed = float(np.clip(self.speed, 0.0, self.max_speed))
        self.lateral_velocity = command.turn_input * self.steer_rate * self.speed

    def advance(self) -> Vector3:
        x, y, z = self.position
        self.position = (
            x + self.lateral_velocity * self.dt,
            y,
            z + self.speed * self.dt,
        )
        return self.position


@dataclass(frozen=True)
class WorldEvent:
    kind: str  # "zone" or "collision"
    zone_id: Optional[Hashable] = None


class StubCourse:
    """Looped course with checkpoint gates at fixed distances.

    Driving past a gate raises a zone event; leaving the track width
    raises a collision. Gate 0 is expected at the start line.
    """

    def __init__(
        self,
        length: float = 200.0,
        half_width: float = 6.0,
        checkpoints: Sequence[float] = (0.0, 50.0, 100.0, 150.0),
    ):
        if length <= 0:
            raise ValueError(f"Course length must be positive, got {length}")
        if half_width <= 0:
            raise ValueError(f"Course half_width must be positive, got {half_width}")
        marks = [float(m) for m in checkpoints]
        for mark in marks:
            if not 0.0 <= mark < length:
                raise ValueError(f"Checkpoint {mark} outside course [0, {length})")
        if marks != sorted(marks) or len(set(marks)) != len(marks):
            raise ValueError(f"Checkpoints must be strictly increasing, got {marks}")

        self.length = float(length)
        self.half_width = float(half_width)
        self.marks = tuple(marks)
        self.zones = tuple(f"checkpoint_{i}" for i in range(len(marks)))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "StubCourse":
        data = dict(data or {})
        name = data.pop("name", "loop")
        if name != "loop":
            raise ValueError(f"Unknown course: {name}")
        return cls(**data)

    def detect(self, previous: Vector3, current: Vector3) -> List[WorldEvent]:
        """Events raised by moving from `previous` to `current`, in order."""
        start, end = previous[2], current[2]
        passed = [
            (mark, zone)
            for mark, zone in zip(self.marks, self.zones)
            if crossed(start, end, mark, self.length)
        ]
        passed.sort(key=lambda item: (item[0] - start) % self.length)
        events = [WorldEvent("zone", zone) for _, zone in passed]

        if abs(current[0]) > self.half_width:
            events.append(WorldEvent("collision"))
        return events


class StubCamera:
    """Sensor service that hands out blank frames."""

    def __init__(self):
        self.sensors: Dict[int, Any] = {}
        self._next_handle = 0

    def attach(self, descriptor) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.sensors[handle] = descriptor
        return handle

    def detach(self, handle: int) -> None:
        self.sensors.pop(handle, None)

    def capture(self, handle: int) -> np.ndarray:
        descriptor = self.sensors[handle]
        channels = 1 if descriptor.color_mode == "grayscale" else 3
        return np.zeros((descriptor.height, descriptor.width, channels), dtype=np.uint8)
