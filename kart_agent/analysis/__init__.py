# Analysis module - Logging and metrics
# IMPURE - Has side effects (file I/O, logging)

from .logger import setup_logging, MetricsLogger, RunLogger
from .metrics import compute_metrics, reward_breakdown, check_reward_balance
