# Metrics computation

import numpy as np
from typing import Dict, Iterable, List

from ..core.types import RewardContribution, RewardKind


def compute_metrics(
    episode_returns: List[float],
    episode_lengths: List[int],
    laps: List[int] = None,
    checkpoints: List[int] = None,
) -> Dict[str, float]:
    """Compute summary metrics from episodes.

    Args:
        episode_returns: List of episode returns
        episode_lengths: List of episode lengths
        laps: Optional laps completed per episode
        checkpoints: Optional checkpoints passed per episode

    Returns:
        Dict of computed metrics
    """
    metrics = {}

    if episode_returns:
        metrics["mean_return"] = float(np.mean(episode_returns))
        metrics["std_return"] = float(np.std(episode_returns))
        metrics["min_return"] = float(np.min(episode_returns))
        metrics["max_return"] = float(np.max(episode_returns))

    if episode_lengths:
        metrics["mean_length"] = float(np.mean(episode_lengths))
        metrics["std_length"] = float(np.std(episode_lengths))

    if checkpoints:
        metrics["mean_checkpoints"] = float(np.mean(checkpoints))
        metrics["max_checkpoints"] = float(np.max(checkpoints))

    if laps:
        metrics["mean_laps"] = float(np.mean(laps))
        metrics["lap_completion_rate"] = float(np.mean(np.asarray(laps) > 0))

    return metrics


def reward_breakdown(contributions: Iterable[RewardContribution]) -> Dict[str, float]:
    """Sum contribution magnitudes per reward kind.

    Args:
        contributions: Reward contributions

    Returns:
        Dict mapping kind name to summed magnitude
    """
    totals: Dict[str, float] = {}
    for c in contributions:
        key = RewardKind(c.kind).value
        totals[key] = totals.get(key, 0.0) + c.magnitude
    return totals


def check_reward_balance(breakdown: Dict[str, float]) -> List[str]:
    """Check for reward terms that drown out progress.

    Args:
        breakdown: Summed reward per kind (see reward_breakdown)

    Returns:
        List of warnings (empty if balanced)
    """
    warnings = []

    progress = breakdown.get("checkpoint", 0.0) + breakdown.get("lap", 0.0)
    speed = breakdown.get("speed", 0.0)
    time_cost = abs(breakdown.get("time", 0.0))

    # Speed bonus outweighing checkpoints teaches driving fast, not forward
    if speed > 0 and speed > progress:
        warnings.append(
            f"SPEED DOMINATES: speed={speed:.3f} > progress={progress:.3f}"
        )

    if time_cost > 0 and progress == 0.0:
        warnings.append(f"NO PROGRESS: time penalty {time_cost:.3f} with no checkpoints")

    collision = abs(breakdown.get("collision", 0.0))
    if collision > 0 and collision > progress:
        warnings.append(
            f"COLLISIONS DOMINATE: collision={collision:.3f} > progress={progress:.3f}"
        )

    return warnings
