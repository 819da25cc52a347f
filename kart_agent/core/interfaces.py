# Boundary contracts with the host and external services
# FORBIDDEN: gymnasium, logging, any I/O

from typing import Any, Hashable, Protocol, Sequence, runtime_checkable

from .types import Quaternion, Vector3, VehicleCommand


class VehicleService(Protocol):
    """Chassis simulation owned by the host."""

    def normalized_speed(self) -> float:
        ...

    def reset_velocities(self) -> None:
        """Zero linear and angular velocity."""
        ...

    def apply_input(self, command: VehicleCommand) -> None:
        ...


class Transform(Protocol):
    """Mutable world placement of the agent body."""
    position: Vector3
    rotation: Quaternion


class SensorService(Protocol):
    """Image sensor owner. Capture and delivery are not the agent's concern."""

    def attach(self, descriptor: Any) -> Hashable:
        ...

    def detach(self, handle: Hashable) -> None:
        ...


@runtime_checkable
class AgentHooks(Protocol):
    """Callbacks the host scheduler invokes, one at a time."""

    def step(self, action: Sequence[float]) -> None:
        ...

    def on_episode_start(self) -> None:
        ...

    def on_zone_entered(self, zone_id: Hashable) -> None:
        ...

    def on_collision(self) -> None:
        ...
