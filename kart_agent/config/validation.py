# Configuration validation

import math
from typing import Any, Dict, List

from ..core.types import InitMode

REQUIRED_SECTIONS = ["experiment", "agent", "camera", "course", "runner"]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """Validate configuration.
    
    Args:
        config: Configuration dictionary
        
    Returns:
        List of validation errors (empty if valid)
    """
    errors = []
    
    if not isinstance(config, dict):
        return ["Configuration must be a mapping"]
    
    # Required sections
    for section in REQUIRED_SECTIONS:
        if section not in config:
            errors.append(f"Missing required section: {section}")
    
    # Validate experiment
    if "experiment" in config:
        if "seed" not in (config["experiment"] or {}):
            errors.append("experiment.seed is required")
    
    # Validate agent
    if "agent" in config:
        agent = config["agent"] or {}
        for key in ("checkpoint_reward", "hit_penalty", "time_penalty",
                    "speed_reward", "lap_complete_reward"):
            if key in agent:
                value = agent[key]
                if not _is_number(value) or not math.isfinite(value):
                    errors.append(f"agent.{key} must be a finite number, got {value!r}")
        
        dead_zone = agent.get("dead_zone", 0.1)
        if not _is_number(dead_zone) or not 0.0 <= dead_zone < 1.0:
            errors.append(f"agent.dead_zone must be in [0, 1), got {dead_zone!r}")
        
        mode = agent.get("mode", InitMode.TRAINING.value)
        modes = [m.value for m in InitMode]
        if mode not in modes:
            errors.append(f"agent.mode must be one of {modes}, got '{mode}'")
        
        lap_rule = agent.get("terminate_on_lap_complete", False)
        if not isinstance(lap_rule, bool):
            errors.append(f"agent.terminate_on_lap_complete must be a bool, got {lap_rule!r}")
    
    # Validate camera
    if "camera" in config:
        camera = config["camera"] or {}
        for key in ("width", "height"):
            value = camera.get(key, 84)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(f"camera.{key} must be a positive integer, got {value!r}")
        
        fov = camera.get("fov", 60.0)
        if not _is_number(fov) or not 0.0 < fov < 180.0:
            errors.append(f"camera.fov must be in (0, 180), got {fov!r}")
        
        for key in ("offset", "rotation"):
            if key in camera:
                value = camera[key]
                if not isinstance(value, (list, tuple)) or len(value) != 3:
                    errors.append(f"camera.{key} must be a list of 3 numbers, got {value!r}")
    
    # Validate course
    if "course" in config:
        course = config["course"] or {}
        name = course.get("name", "loop")
        if name != "loop":
            errors.append(f"course.name must be 'loop', got '{name}'")
        
        length = course.get("length", 200.0)
        if not _is_number(length) or length <= 0:
            errors.append(f"course.length must be positive, got {length!r}")
        
        checkpoints = course.get("checkpoints", [])
        if not isinstance(checkpoints, list):
            errors.append(f"course.checkpoints must be a list, got {checkpoints!r}")
        elif _is_number(length) and length > 0:
            for mark in checkpoints:
                if not _is_number(mark) or not 0.0 <= mark < length:
                    errors.append(f"course.checkpoints entry {mark!r} outside [0, {length})")
            numeric = [m for m in checkpoints if _is_number(m)]
            if any(b <= a for a, b in zip(numeric, numeric[1:])):
                errors.append(f"course.checkpoints must be strictly increasing, got {checkpoints}")
    
    # Validate runner
    if "runner" in config:
        runner = config["runner"] or {}
        episodes = runner.get("episodes", 1)
        if not isinstance(episodes, int) or episodes <= 0:
            errors.append(f"runner.episodes must be positive, got {episodes!r}")
        
        max_steps = runner.get("max_steps", 0)
        if not isinstance(max_steps, int) or max_steps <= 0:
            errors.append(f"runner.max_steps must be positive, got {max_steps!r}")
    
    return errors
