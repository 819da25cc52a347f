# Core module - Pure types and helpers, no side effects
# FORBIDDEN: gymnasium, logging, pathlib, any I/O

from .types import (
    Pose,
    ControlState,
    VehicleCommand,
    RewardContribution,
    RewardKind,
    TerminalKind,
    InitMode,
)
from .config import AgentConfig, CameraConfig
from .math_utils import clamp, sanitize_axis
