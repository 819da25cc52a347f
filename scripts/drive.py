#!/usr/bin/env python3
"""Drive the kart agent around the stub course and record episode stats.

Runs episodes with a random policy or with fixed manual control axes
(the manual override path), logging per-episode return, checkpoints and
laps.

Usage:
    # Random policy (baseline behavior)
    python scripts/drive.py --config configs/base.yaml --episodes 3

    # Manual override: full throttle, straight ahead
    python scripts/drive.py --policy manual --steer 0 --throttle 1

    # Save run logs and metrics under runs/
    python scripts/drive.py --output-dir runs --override agent.terminate_on_lap_complete=true
"""

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent))

from kart_agent.agent import KartAgent
from kart_agent.analysis import (
    RunLogger,
    check_reward_balance,
    compute_metrics,
    setup_logging,
)
from kart_agent.config import apply_overrides, load_config, validate_config
from kart_agent.host import make_env


def make_policy(name: str, rng: np.random.Generator, steer: float, throttle: float):
    if name == "random":
        return lambda obs: rng.uniform(-1.0, 1.0, size=2).astype(np.float32)
    if name == "manual":
        action = KartAgent.heuristic(steer, throttle)
        return lambda obs: action
    raise ValueError(f"Unknown policy: {name}")


def main():
    parser = argparse.ArgumentParser(description="Drive the kart agent on the stub course")
    parser.add_argument("--config", type=Path, default=Path("configs/base.yaml"))
    parser.add_argument("--episodes", type=int, default=None, help="Episodes to run (overrides config)")
    parser.add_argument("--policy", choices=["random", "manual"], default="random")
    parser.add_argument("--steer", type=float, default=0.0, help="Manual steering axis")
    parser.add_argument("--throttle", type=float, default=1.0, help="Manual throttle axis")
    parser.add_argument(
        "--override",
        action="append",
        default=[],
        help="Config overrides in format key.subkey=value",
    )
    parser.add_argument("--output-dir", type=Path, default=None, help="Write logs and metrics here")
    parser.add_argument("--seed", type=int, default=None)

    args = parser.parse_args()

    config = load_config(args.config)
    if args.override:
        config = apply_overrides(config, args.override)
    if args.episodes:
        config["runner"] = {**(config.get("runner") or {}), "episodes": args.episodes}

    errors = validate_config(config)
    if errors:
        print("Configuration validation failed:")
        for error in errors:
            print(f"  - {error}")
        sys.exit(1)

    level = (config.get("logging") or {}).get("level", "INFO")
    run_logger = None
    if args.output_dir is not None:
        run_name = (config.get("experiment") or {}).get("name", "drive")
        run_logger = RunLogger(run_name, base_dir=args.output_dir, level=level)
        run_logger.save_config(config)
    else:
        setup_logging(level=level)
    logger = logging.getLogger("kart_agent")

    seed = args.seed if args.seed is not None else (config.get("experiment") or {}).get("seed", 42)
    rng = np.random.default_rng(seed)
    policy = make_policy(args.policy, rng, args.steer, args.throttle)

    episodes = (config.get("runner") or {}).get("episodes", 1)
    env = make_env(config)
    logger.info(f"Driving {episodes} episodes with {args.policy} policy, seed={seed}")

    returns, lengths, laps, checkpoints = [], [], [], []
    breakdown = {}
    try:
        for episode in range(1, episodes + 1):
            stats = env.runner.run_episode(policy)
            returns.append(stats.episode_return)
            lengths.append(stats.length)
            laps.append(stats.laps)
            checkpoints.append(stats.checkpoints)
            for kind, total in stats.breakdown.items():
                breakdown[kind] = breakdown.get(kind, 0.0) + total
            if run_logger is not None:
                run_logger.log_episode(episode, stats.to_dict())
    except KeyboardInterrupt:
        logger.info("Run interrupted by user")
    finally:
        env.close()

    metrics = compute_metrics(returns, lengths, laps=laps, checkpoints=checkpoints)
    logger.info(f"Summary: {metrics}")
    for warning in check_reward_balance(breakdown):
        logger.warning(warning)

    if run_logger is not None:
        logger.info(f"Logs written to {run_logger.run_dir}")
        run_logger.close()


if __name__ == "__main__":
    main()
