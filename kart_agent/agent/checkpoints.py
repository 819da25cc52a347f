# Checkpoint progression
# FORBIDDEN: gymnasium, host.*, analysis.*

from typing import Hashable, Iterable, Optional, Tuple

from ..core.types import RewardContribution, RewardKind


class CheckpointTracker:
    """Ordered progress through a cyclic sequence of checkpoint zones.
    
    Index 0 is the zone the vehicle starts in. A zone entry counts only
    when it is the zone right after the current index, so re-entering the
    current zone or jumping ahead is ignored. Advancing from the last zone
    back to zone 0 completes a lap. With no zones the tracker never fires.
    """
    
    def __init__(self, zones: Iterable[Hashable] = (), reward: float = 10.0):
        self.zones: Tuple[Hashable, ...] = tuple(zones)
        if len(set(self.zones)) != len(self.zones):
            raise ValueError(f"Checkpoint zones must be unique, got {self.zones}")
        self.reward = reward
        self.index = 0
        self.passed = 0
        self.laps = 0
        self.lap_just_completed = False
    
    def __len__(self) -> int:
        return len(self.zones)
    
    @property
    def expected_index(self) -> Optional[int]:
        if not self.zones:
            return None
        return (self.index + 1) % len(self.zones)
    
    @property
    def expected_zone(self) -> Optional[Hashable]:
        expected = self.expected_index
        return None if expected is None else self.zones[expected]
    
    def reset(self) -> None:
        self.index = 0
        self.passed = 0
        self.laps = 0
        self.lap_just_completed = False
    
    def on_zone_entered(self, zone_id: Hashable) -> Optional[RewardContribution]:
        """Advance if zone_id is the next checkpoint.
        
        Args:
            zone_id: Identifier of the entered zone
            
        Returns:
            Checkpoint reward contribution, or None if nothing changed
        """
        self.lap_just_completed = False
        expected = self.expected_index
        if expected is None or zone_id != self.zones[expected]:
            return None
        
        self.index = expected
        self.passed += 1
        if expected == 0:
            self.laps += 1
            self.lap_just_completed = True
        return RewardContribution(RewardKind.CHECKPOINT, self.reward)
