# Logging utilities

import logging
import json
import csv
from pathlib import Path
from typing import Dict, List, Any, Optional
from datetime import datetime

LOGGER_NAME = "kart_agent"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Setup logging for the kart_agent logger hierarchy.

    Calling this again replaces previously installed handlers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file path for logging

    Returns:
        Configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, level.upper()))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))
    console_format = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


class MetricsLogger:
    """Per-episode metrics written to CSV, with a JSON summary on demand."""

    def __init__(self, log_dir: Path):
        """Initialize metrics logger.

        Args:
            log_dir: Directory for log files
        """
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.csv_path = self.log_dir / "episodes.csv"
        self.json_path = self.log_dir / "episodes.json"

        self._metrics_history: List[Dict[str, Any]] = []
        self._csv_initialized = False
        self._fieldnames: List[str] = []

    def log(self, episode: int, metrics: Dict[str, Any]) -> None:
        """Log metrics for one episode.

        Args:
            episode: Episode number
            metrics: Dict of metric values
        """
        record = {
            "episode": episode,
            "timestamp": datetime.now().isoformat(),
            **metrics,
        }
        self._metrics_history.append(record)

        # Initialize CSV with fieldnames from first record
        if not self._csv_initialized:
            self._fieldnames = list(record.keys())
            with open(self.csv_path, "w", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=self._fieldnames)
                writer.writeheader()
            self._csv_initialized = True

        # Append to CSV
        with open(self.csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=self._fieldnames, extrasaction="ignore")
            writer.writerow(record)

    def save_summary(self) -> None:
        """Save complete metrics history as JSON."""
        with open(self.json_path, "w") as f:
            json.dump(self._metrics_history, f, indent=2)


class RunLogger:
    """Output directory, log file and metrics for one driving run."""

    def __init__(
        self,
        run_name: str,
        base_dir: Path = Path("runs"),
        level: str = "INFO",
    ):
        """Initialize run logger.

        Args:
            run_name: Name of the run
            base_dir: Base directory for runs
            level: Console logging level
        """
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        self.run_dir = Path(base_dir) / f"{timestamp}_{run_name}"
        self.run_dir.mkdir(parents=True, exist_ok=True)

        self.logs_dir = self.run_dir / "logs"
        self.logs_dir.mkdir(exist_ok=True)

        self.logger = setup_logging(
            level=level,
            log_file=self.logs_dir / "run.log",
        )
        self.metrics = MetricsLogger(self.logs_dir)

    def save_config(self, config: Dict[str, Any]) -> None:
        """Save the run configuration next to its logs."""
        import yaml

        config_path = self.run_dir / "config.yaml"
        with open(config_path, "w") as f:
            yaml.dump(config, f, default_flow_style=False)

    def log_episode(self, episode: int, metrics: Dict[str, Any]) -> None:
        self.metrics.log(episode, metrics)

    def close(self) -> None:
        self.metrics.save_summary()
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
