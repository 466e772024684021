#!/usr/bin/env python3
"""
Monte Carlo over savings trajectories.

Runs one trajectory per seed, resamples it into reporting periods and collects
the results in a long DataFrame for percentile summaries.
"""

import logging
from typing import Iterable, List, Sequence

import numpy as np
import pandas as pd

DEFAULT_PERCENTILES = [5, 25, 50, 75, 95]


def run_trajectories(trajectory_factory,
                     seeds: Iterable[int],
                     num_periods: int,
                     period_manager,
                     market,
                     adjust_for_inflation: bool = False) -> pd.DataFrame:
    """
    Simulate and tabulate one trajectory per seed.

    Parameters:
    -----------
    trajectory_factory : Random[Trajectory]
        investment_result of a savings trajectory
    seeds : Iterable[int]
        Seeds to pick; each gives an independent trajectory
    num_periods : int
        Reporting periods per trajectory
    period_manager : PeriodManager
        Defines the reporting frequency
    market : MarketParams
        Market parameters (inflation for the price level)
    adjust_for_inflation : bool
        Report dollar columns in dollars of month 0

    Returns:
    --------
    pd.DataFrame: one row per (seed, period)
    """
    frames: List[pd.DataFrame] = []
    for seed in seeds:
        trajectory = trajectory_factory.pick(seed)
        display = period_manager.investment_process(trajectory.investments, trajectory.sentiment, market)
        frame = period_manager.to_frame(display, num_periods, adjust_for_inflation)
        frame.insert(0, 'seed', seed)
        frames.append(frame)

    if not frames:
        raise ValueError("need at least one seed to run trajectories")

    results = pd.concat(frames).reset_index()
    logging.info(f"Monte Carlo: {len(frames)} trajectories x {num_periods} periods "
                 f"({period_manager.frequency} months each)")
    return results


def calculate_percentiles(values: np.ndarray,
                          percentiles: list = DEFAULT_PERCENTILES) -> dict:
    """
    Calculate percentiles across simulations at each time period.

    Parameters:
    -----------
    values : np.ndarray
        Shape (num_simulations, num_periods)
    percentiles : list
        Percentiles to calculate

    Returns:
    --------
    dict: Mapping percentile name to array of values
    """
    return {
        f'{p}th': np.percentile(values, p, axis=0)
        for p in percentiles
    }


def summarize(results: pd.DataFrame,
              column: str = 'fv',
              percentiles: Sequence[int] = DEFAULT_PERCENTILES) -> pd.DataFrame:
    """
    Percentile bands of ``column`` per reporting period.

    Returns:
    --------
    pd.DataFrame indexed by period with the month and one column per percentile
    """
    if column not in results.columns:
        raise ValueError(f"Unknown column: '{column}'. Available: {list(results.columns)}")

    values = results.pivot(index='seed', columns='period', values=column).to_numpy()
    bands = calculate_percentiles(values, list(percentiles))

    months = results.groupby('period')['month'].first()
    summary = pd.DataFrame(bands, index=months.index)
    summary.insert(0, 'month', months.to_numpy())
    return summary
