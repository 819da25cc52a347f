# Config module - YAML loading, overrides and validation
# IMPURE - Reads files

from .loader import load_config, apply_overrides, build_agent_config
from .validation import validate_config
