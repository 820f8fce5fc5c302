#!/usr/bin/env python3
"""
Portfolio Forecast - Main Entry Point

- Load simulation settings (command line, YAML config, defaults)
- Run the Monte Carlo simulation
- Report expected value and best/worst cases
"""

import argparse
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import yaml
from loguru import logger

from .monte_carlo import PortfolioSimulator, SimulationConfig, SimulationError, SimulationResult

# Configure logging
logger.remove()
logger.add(
    sys.stderr,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level="INFO"
)

DEFAULT_INVESTMENT = 100000
DEFAULT_YEARS = 20
DEFAULT_MEAN = 9.4324
DEFAULT_STANDARD_DEVIATION = 15.6785


def load_config(config_path: str = None) -> dict:
    """Load configuration from YAML file"""
    if config_path is None:
        config_path = Path(__file__).parent.parent / "config" / "config.yaml"

    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path}, using defaults")
        return {}

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f) or {}

    logger.info(f"Loaded configuration from {config_path}")
    return config


def _pick(cli_value, section: dict, key: str, default):
    if cli_value is not None:
        return cli_value
    return section.get(key, default)


def run_forecast(
    investment: Optional[float] = None,
    years: Optional[int] = None,
    mean: Optional[float] = None,
    standard_deviation: Optional[float] = None,
    simulation_count: Optional[int] = None,
    inflation_rate_percent: Optional[float] = None,
    random_seed: Optional[int] = None,
    config_path: str = None
) -> SimulationResult:
    """
    Run a portfolio forecast

    Explicit arguments win over the YAML config, which wins over defaults.

    Args:
        investment: Amount invested today
        years: Years into the future
        mean: Expected annual return (%)
        standard_deviation: Annual volatility (%)
        simulation_count: Number of Monte Carlo trials
        inflation_rate_percent: Annual inflation rate (%)
        random_seed: Seed for reproducible runs
        config_path: Path to configuration file

    Returns:
        SimulationResult of the run
    """
    config = load_config(config_path)
    sim_config = config.get("simulation") or {}
    portfolio_config = config.get("portfolio") or {}

    defaults = SimulationConfig()
    investment = _pick(investment, portfolio_config, "investment", DEFAULT_INVESTMENT)
    years = _pick(years, portfolio_config, "years", DEFAULT_YEARS)

    simulator = PortfolioSimulator(
        mean=_pick(mean, sim_config, "mean", DEFAULT_MEAN),
        standard_deviation=_pick(
            standard_deviation, sim_config, "standard_deviation", DEFAULT_STANDARD_DEVIATION
        ),
        config=SimulationConfig(
            simulation_count=_pick(
                simulation_count, sim_config, "simulation_count", defaults.simulation_count
            ),
            inflation_rate_percent=_pick(
                inflation_rate_percent, sim_config, "inflation_rate_percent",
                defaults.inflation_rate_percent
            ),
            random_seed=_pick(random_seed, sim_config, "random_seed", None)
        )
    )

    logger.info("=" * 60)
    logger.info("  Portfolio Forecast")
    logger.info("=" * 60)
    logger.info(f"  Run Time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.info(f"  Investment: ${investment:,.2f} over {years} years")
    logger.info(f"  Return Model: mean {simulator.mean}%, sd {simulator.standard_deviation}%")
    logger.info(
        f"  Monte Carlo: {simulator.simulation_count:,} trials, "
        f"inflation {simulator.inflation_rate_percent}%"
    )
    logger.info("=" * 60)

    simulator.run_simulation(investment, years)
    result = simulator.get_result()

    logger.info(f"  Expected Future Value: ${result.expected_future_value:,.2f}")
    logger.info(f"  Best Case (P90): ${result.best_case:,.2f}")
    logger.info(f"  Worst Case (P10): ${result.worst_case:,.2f}")
    if result.statistics is not None:
        logger.info(f"  Prob of Loss: {result.statistics.probability_loss * 100:.1f}%")
    logger.info("=" * 60)

    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Portfolio Forecast - Monte Carlo future value estimate"
    )

    parser.add_argument(
        "--investment", "-i",
        type=float,
        default=None,
        help=f"Amount invested today (default: {DEFAULT_INVESTMENT})"
    )

    parser.add_argument(
        "--years", "-y",
        type=int,
        default=None,
        help=f"Years into the future (default: {DEFAULT_YEARS})"
    )

    parser.add_argument(
        "--mean", "-m",
        type=float,
        default=None,
        help=f"Expected annual return in percent (default: {DEFAULT_MEAN})"
    )

    parser.add_argument(
        "--std", "-s",
        type=float,
        default=None,
        help=f"Annual volatility in percent (default: {DEFAULT_STANDARD_DEVIATION})"
    )

    parser.add_argument(
        "--simulations", "-n",
        type=int,
        default=None,
        help="Number of Monte Carlo trials (default: 10000)"
    )

    parser.add_argument(
        "--inflation",
        type=float,
        default=None,
        help="Annual inflation rate in percent (default: 3.5)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible runs"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to configuration file (default: config/config.yaml)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result summary as JSON on stdout"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")

    try:
        result = run_forecast(
            investment=args.investment,
            years=args.years,
            mean=args.mean,
            standard_deviation=args.std,
            simulation_count=args.simulations,
            inflation_rate_percent=args.inflation,
            random_seed=args.seed,
            config_path=args.config
        )

        if args.json:
            print(result.model_dump_json(exclude={"trial_results"}, indent=2))

        return 0

    except SimulationError as e:
        logger.error(f"Simulation failed: {e}")
        return 1

    except KeyboardInterrupt:
        logger.info("\nForecast cancelled by user")
        return 1

    except Exception as e:
        logger.exception(f"Forecast failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
