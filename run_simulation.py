#!/usr/bin/env python3
"""CLI entrypoint for the trading agent playground.

Usage::

    python run_simulation.py --config config/example.yaml
    python run_simulation.py --config config/example.yaml --dataset EUR-USD --episodes 3
    python run_simulation.py --config config/example.yaml --realtime

The run loads a YAML configuration file, builds the simulation controller and
runs the configured number of episodes. Headless runs tick as fast as
possible; ``--realtime`` drives ticks from the scheduler at the configured
interval. The run summary is logged at the end.
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading

from models.config import SimulationConfig
from models.episode import SimulationSnapshot
from simulation.controller import SimulationController
from simulation.summary import summarize

logger = logging.getLogger(__name__)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the rule-based trading agent over synthetic market data.",
    )
    parser.add_argument(
        "--config",
        required=True,
        type=str,
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--dataset",
        default=None,
        type=str,
        help="Override the dataset from the config (e.g. BTC-USD, S&P500, EUR-USD).",
    )
    parser.add_argument(
        "--episodes",
        default=None,
        type=int,
        help="Override the number of episodes from the config.",
    )
    parser.add_argument(
        "--realtime",
        action="store_true",
        help="Drive ticks from the scheduler at the configured interval.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO).",
    )
    return parser.parse_args()


def _setup_logging(level: str) -> None:
    """Configure root logger with a clean format."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def _run_realtime(controller: SimulationController) -> None:
    """Start the scheduler and block until the episode completes."""
    done = threading.Event()

    def _on_change(snapshot: SimulationSnapshot) -> None:
        if not snapshot.is_running:
            done.set()

    unsubscribe = controller.subscribe(_on_change)
    try:
        controller.start()
        done.wait()
    finally:
        unsubscribe()
        controller.pause()


def main() -> None:
    args = _parse_args()
    _setup_logging(args.log_level)

    logger.info("Loading config from '%s'...", args.config)
    config = SimulationConfig.from_yaml(args.config)
    updates = {}
    if args.dataset is not None:
        updates["dataset"] = args.dataset
    if args.episodes is not None:
        updates["num_episodes"] = args.episodes
    if updates:
        config = SimulationConfig.model_validate({**config.model_dump(), **updates})
    logger.info(
        "Config loaded: dataset='%s', persona='%s', reward='%s'",
        config.dataset,
        config.agent.persona,
        config.agent.reward_strategy,
    )

    controller = SimulationController.from_config(config, realtime=args.realtime)

    for ep_idx in range(config.num_episodes):
        if ep_idx > 0:
            controller.restart_episode()
        if args.realtime:
            _run_realtime(controller)
        else:
            controller.run_episode()

    summary = summarize(controller)
    logger.info(
        "Run complete: %d episode(s), value $%.2f (%+.2f%%), level %d (%s)",
        summary.episode_count,
        summary.performance.total_value,
        summary.performance.change_pct,
        summary.performance.level,
        summary.performance.skill,
    )
    logger.info(
        "Rewards: total %.2f, average %.4f, %.1f%% positive",
        summary.rewards.total,
        summary.rewards.average,
        summary.rewards.positive_rate,
    )
    logger.info(
        "Trades: %d buy, %d sell, %d hold (avg confidence %.2f)",
        summary.trades.buys,
        summary.trades.sells,
        summary.trades.holds,
        summary.trades.average_confidence,
    )
    for thought in summary.latest_thoughts:
        logger.info("%s: %s", summary.persona, thought)


if __name__ == "__main__":
    main()
