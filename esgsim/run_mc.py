#!/usr/bin/env python3
"""
Savings Monte Carlo Simulator.

Simulates a dividend savings plan under random market sentiment and dividend
realisation, and reports fair-value percentiles per reporting period.

Usage:
    # Default configuration
    esgsim-mc

    # JSON configuration, 500 trajectories, quarterly reporting over 20 years
    esgsim-mc --config configs/savings.json --sims 500 --years 20 --frequency quarterly
"""

import sys
import argparse
import logging
from dataclasses import replace
from pathlib import Path

import pandas as pd

from .config import load_simulation_config
from .engine import PeriodManager, savings_trajectory
from .montecarlo.lifecycle import run_trajectories, summarize
from .strategies import get_strategy


def run_simulation(config) -> pd.DataFrame:
    """
    Run the Monte Carlo described by ``config``.

    Returns:
    --------
    pd.DataFrame: long table with one row per (seed, period)
    """
    market = config.get_market_params()
    trajectory = savings_trajectory(
        config.initial_portfolio_value,
        market,
        config.get_investment_params(),
        config.get_dividend_params(),
        config.get_savings_params(),
        strategy=get_strategy(config.strategy, config.invest_savings),
        sentiment_params=config.get_sentiment_params(),
        weights=config.allocation
    )
    period_manager = PeriodManager(config.get_display_months())
    return run_trajectories(
        trajectory.investment_result,
        config.get_seeds(),
        config.get_num_periods(),
        period_manager,
        market,
        config.adjust_for_inflation
    )


def main(argv=None):
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    parser = argparse.ArgumentParser(
        description='Savings Monte Carlo Simulator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  esgsim-mc --config configs/savings.json
  esgsim-mc --sims 1000 --seed 7 --years 40 --frequency annual --output output/mc
        """
    )
    parser.add_argument('--config', '-c', default=None,
                        help='Path to JSON config file (default: built-in configuration)')
    parser.add_argument('--sims', '-n', type=int, default=None,
                        help='Number of MC simulations (overrides config)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed of the first trajectory (overrides config)')
    parser.add_argument('--years', type=int, default=None,
                        help='Simulation horizon in years (overrides config)')
    parser.add_argument('--frequency', choices=['monthly', 'quarterly', 'semi-annual', 'annual'], default=None,
                        help='Reporting frequency (overrides config)')
    parser.add_argument('--output', '-o', type=str, default=None,
                        help='Output directory for CSV results (default: print only)')

    args = parser.parse_args(argv)

    config = load_simulation_config(args.config)
    overrides = {
        'num_mc_simulations': args.sims,
        'seed': args.seed,
        'simulation_horizon_years': args.years,
        'display_frequency': args.frequency,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})

    # Banner
    print("=" * 80)
    print("SAVINGS MONTE CARLO SIMULATOR")
    print("=" * 80)
    print(f"\nConfig: {args.config or '<default>'}")
    print(f"  Initial value: ${config.initial_portfolio_value:,.0f}")
    print(f"  Monthly savings: ${config.monthly_investment:,.0f}")
    print(f"  Instruments: {', '.join(config.instruments)}")
    print(f"  Strategy: {config.strategy}")
    print(f"  Horizon: {config.simulation_horizon_years} years ({config.display_frequency} reporting)")
    print(f"  Simulations: {config.num_mc_simulations}")

    results = run_simulation(config)
    summary = summarize(results, 'fv')

    print("\nFair value percentiles ($):")
    print(summary.to_string(float_format=lambda v: f"{v:,.0f}"))

    if args.output:
        output_dir = Path(args.output)
        output_dir.mkdir(parents=True, exist_ok=True)
        results.to_csv(output_dir / 'trajectories.csv', index=False)
        summary.to_csv(output_dir / 'fv_percentiles.csv')
        logging.info(f"Results saved to {output_dir}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
