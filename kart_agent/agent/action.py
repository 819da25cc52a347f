# Action interpretation
# FORBIDDEN: gymnasium, host.*, analysis.*

from typing import Sequence, Tuple

import numpy as np

from ..core.math_utils import sanitize_axis
from ..core.types import ControlState

DEAD_ZONE = 0.1


def interpret(
    steer_axis: float,
    throttle_axis: float,
    dead_zone: float = DEAD_ZONE,
) -> ControlState:
    """Map a continuous (steer, throttle) pair to vehicle controls.
    
    Throttle inside [-dead_zone, dead_zone] coasts; above it accelerates,
    below it brakes. Accelerate and brake are never both set.
    
    Args:
        steer_axis: Steering axis, any float (NaN treated as 0)
        throttle_axis: Throttle/brake axis, any float (NaN treated as 0)
        dead_zone: Coasting half-width on the throttle axis
        
    Returns:
        Interpreted ControlState
    """
    steering = sanitize_axis(steer_axis)
    v = sanitize_axis(throttle_axis)
    
    if v > dead_zone:
        return ControlState(steering=steering, accelerate=True, brake=False)
    if v < -dead_zone:
        return ControlState(steering=steering, accelerate=False, brake=True)
    return ControlState(steering=steering, accelerate=False, brake=False)


def split_action(action: Sequence[float]) -> Tuple[float, float]:
    """Pull (steer, throttle) out of an action vector.
    
    Missing components read as 0 and extra ones are ignored. Components
    that are not numbers (strings, nested lists) read as 0. Only numpy
    arrays are flattened, so a (1, 2) batch still reads as one action.
    """
    if action is None:
        return 0.0, 0.0
    if isinstance(action, np.ndarray):
        components = action.ravel()
    else:
        try:
            components = list(action)
        except TypeError:
            components = [action]
    steer = sanitize_axis(components[0]) if len(components) > 0 else 0.0
    throttle = sanitize_axis(components[1]) if len(components) > 1 else 0.0
    return steer, throttle
