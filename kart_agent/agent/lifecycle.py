# Episode lifecycle
# FORBIDDEN: gymnasium, host.*, analysis.*

import logging
from typing import Optional

from ..core.interfaces import Transform, VehicleService
from ..core.types import Pose, TerminalKind

logger = logging.getLogger(__name__)


class EpisodeLifecycle:
    """Spawn snapshot, respawn and termination for one agent body.
    
    The spawn pose is read from the transform on first activation and
    never replaced afterwards; every episode restarts from it, not from
    wherever the previous episode ended.
    """
    
    def __init__(self, transform: Transform, vehicle: Optional[VehicleService] = None):
        self.transform = transform
        self.vehicle = vehicle
        self._spawn: Optional[Pose] = None
        self.active = False
        self.termination: Optional[TerminalKind] = None
    
    @property
    def spawn(self) -> Optional[Pose]:
        return self._spawn
    
    def activate(self) -> Pose:
        """Capture the spawn pose if this is the first activation."""
        if self._spawn is None:
            self._spawn = Pose.of(self.transform.position, self.transform.rotation)
            logger.debug(f"Spawn pose captured: {self._spawn}")
        return self._spawn
    
    def start(self) -> None:
        """Put the body back at spawn, at rest, with the episode running."""
        spawn = self.activate()
        self.transform.position = spawn.position
        self.transform.rotation = spawn.rotation
        
        if self.vehicle is not None:
            self.vehicle.reset_velocities()
        
        self.active = True
        self.termination = None
    
    def terminate(self, kind: TerminalKind) -> bool:
        """End the running episode.
        
        Returns:
            False if no episode was running
        """
        if not self.active:
            return False
        self.active = False
        self.termination = TerminalKind(kind)
        logger.info(f"Episode terminated: {self.termination.value}")
        return True
