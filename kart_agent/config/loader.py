# Configuration loading

import copy
from pathlib import Path
from typing import Any, Dict, List

import yaml

from ..core.config import AgentConfig


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load configuration from YAML file.
    
    Args:
        config_path: Path to config file
        
    Returns:
        Configuration dictionary
    """
    with open(config_path) as f:
        config = yaml.safe_load(f)
    return config or {}


def _parse_value(value: str) -> Any:
    # int, then float, then bool, else keep the string
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        pass
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def apply_overrides(config: Dict[str, Any], overrides: List[str]) -> Dict[str, Any]:
    """Apply command-line overrides to config.
    
    Args:
        config: Base configuration (left untouched)
        overrides: List of "key.subkey=value" strings
        
    Returns:
        New configuration with overrides applied
    """
    config = copy.deepcopy(config)
    for override in overrides:
        if "=" not in override:
            raise ValueError(f"Invalid override format: {override}. Expected key=value")
        
        key, value = override.split("=", 1)
        keys = key.split(".")
        
        # Navigate to nested key
        d = config
        for k in keys[:-1]:
            if k not in d:
                d[k] = {}
            d = d[k]
        
        d[keys[-1]] = _parse_value(value)
    
    return config


def build_agent_config(config: Dict[str, Any]) -> AgentConfig:
    """Build the immutable AgentConfig from a full config dict."""
    return AgentConfig.from_dict(config.get("agent"), config.get("camera"))
