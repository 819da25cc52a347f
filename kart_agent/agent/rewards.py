# Reward shaping
# FORBIDDEN: gymnasium, host.*, analysis.*

from typing import List, Tuple

from ..core.config import AgentConfig
from ..core.types import RewardContribution, RewardKind


class RewardLog:
    """Append-only log of typed reward contributions.
    
    Every callback site appends here; the host drains it once per tick
    and keeps the running episode return itself.
    """
    
    def __init__(self):
        self._entries: List[RewardContribution] = []
    
    def __len__(self) -> int:
        return len(self._entries)
    
    @property
    def entries(self) -> Tuple[RewardContribution, ...]:
        return tuple(self._entries)
    
    def add(self, kind: RewardKind, magnitude: float) -> RewardContribution:
        contribution = RewardContribution(RewardKind(kind), float(magnitude))
        self._entries.append(contribution)
        return contribution
    
    def drain(self) -> List[RewardContribution]:
        """Return and forget everything logged since the last drain."""
        drained, self._entries = self._entries, []
        return drained
    
    def clear(self) -> None:
        self._entries = []


class RewardShaper:
    """Turns agent events into reward contributions."""
    
    def __init__(self, config: AgentConfig, log: RewardLog):
        self.config = config
        self.log = log
    
    def add_step(self, speed: float) -> Tuple[RewardContribution, RewardContribution]:
        """Per-tick time penalty plus speed bonus.
        
        Args:
            speed: Normalized vehicle speed, read after this tick's input
            
        Returns:
            (time contribution, speed contribution)
        """
        time_part = self.log.add(RewardKind.TIME, self.config.time_penalty)
        speed_part = self.log.add(RewardKind.SPEED, speed * self.config.speed_reward)
        return time_part, speed_part
    
    def record(self, contribution: RewardContribution) -> RewardContribution:
        """Log a contribution produced elsewhere (e.g. a checkpoint event)."""
        return self.log.add(contribution.kind, contribution.magnitude)
    
    def add_collision(self) -> RewardContribution:
        return self.log.add(RewardKind.COLLISION, self.config.hit_penalty)
    
    def add_lap_complete(self) -> RewardContribution:
        return self.log.add(RewardKind.LAP, self.config.lap_complete_reward)
