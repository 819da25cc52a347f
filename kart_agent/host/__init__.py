# Host module - Scheduler, stub collaborators, Gymnasium adapter
# This module may import from all other kart_agent modules

from .stubs import StubKart, StubCourse, StubCamera, WorldEvent
from .runner import EpisodeRunner, EpisodeStats, StepResult, deliver_events
from .gym_env import KartEnv, make_env
