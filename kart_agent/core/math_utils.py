# Mathematical utilities
# FORBIDDEN: gymnasium, logging, any I/O

import numpy as np


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range.
    
    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value
        
    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def sanitize_axis(value) -> float:
    """Map a raw control axis into [-1, 1].
    
    NaN becomes 0 before clamping; +/-inf saturate to +/-1.
    
    Args:
        value: Raw axis value (anything float() accepts)
        
    Returns:
        Finite axis value in [-1, 1]
    """
    try:
        value = float(value)
    except (TypeError, ValueError):
        return 0.0
    value = float(np.nan_to_num(value, nan=0.0))
    return clamp(value, -1.0, 1.0)


def crossed(previous: float, current: float, mark: float, period: float) -> bool:
    """Check whether a cumulative distance moved past a periodic mark.
    
    The mark repeats every `period` (mark, mark + period, ...). Only
    forward motion crosses; landing exactly on a mark counts.
    
    Args:
        previous: Cumulative distance before the move
        current: Cumulative distance after the move
        mark: Mark position in [0, period)
        period: Loop length
        
    Returns:
        True if some repetition of mark lies in (previous, current]
    """
    if current <= previous:
        return False
    laps = np.floor((current - mark) / period)
    if laps < 0:
        return False
    return mark + laps * period > previous
