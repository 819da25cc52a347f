# Agent module - Decision logic and episode state machines
# FORBIDDEN: gymnasium, host.*, analysis.*

from .action import interpret, DEAD_ZONE
from .checkpoints import CheckpointTracker
from .rewards import RewardLog, RewardShaper
from .lifecycle import EpisodeLifecycle
from .kart import KartAgent
