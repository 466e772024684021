#!/usr/bin/env python3
"""
Tests for the Monte Carlo driver and the command line entry point.
"""

import numpy as np
import pandas as pd
import pytest

from esgsim.config import SimulationConfig
from esgsim.engine import PeriodManager, savings_trajectory
from esgsim.engine.model import DividendParams, InvestmentParams, MarketParams, SavingsParams
from esgsim.montecarlo.lifecycle import calculate_percentiles, run_trajectories, summarize
from esgsim.run_mc import main, run_simulation

MARKET = MarketParams(inflation=0.02)


@pytest.fixture
def trajectory():
    return savings_trajectory(
        10000,
        MARKET,
        {'equity': InvestmentParams(0.04, 0.003)},
        DividendParams(0.05),
        SavingsParams(100)
    )


def test_run_trajectories_shape(trajectory):
    results = run_trajectories(trajectory.investment_result, [3, 4, 5], 4, PeriodManager('quarterly'), MARKET)

    assert len(results) == 12
    assert results['seed'].tolist() == [3] * 4 + [4] * 4 + [5] * 4
    assert results['period'].tolist() == [0, 1, 2, 3] * 3
    assert results.loc[results['seed'] == 3, 'month'].tolist() == [2, 5, 8, 11]
    assert (results['external_cashflow'] > 300).all()


def test_run_trajectories_reproducible(trajectory):
    manager = PeriodManager('annual')
    a = run_trajectories(trajectory.investment_result, [7], 3, manager, MARKET)
    b = run_trajectories(trajectory.investment_result, [7], 3, manager, MARKET)
    pd.testing.assert_frame_equal(a, b)


def test_run_trajectories_needs_seeds(trajectory):
    with pytest.raises(ValueError, match="at least one seed"):
        run_trajectories(trajectory.investment_result, [], 3, PeriodManager(), MARKET)


def test_run_trajectories_in_real_terms(trajectory):
    manager = PeriodManager('annual')
    nominal = run_trajectories(trajectory.investment_result, [1], 2, manager, MARKET)
    real = run_trajectories(trajectory.investment_result, [1], 2, manager, MARKET, adjust_for_inflation=True)
    assert (real['fv'] < nominal['fv']).all()


def test_calculate_percentiles():
    values = np.array([[1.0, 10.0], [2.0, 20.0], [3.0, 30.0]])
    bands = calculate_percentiles(values, [0, 50, 100])
    assert list(bands) == ['0th', '50th', '100th']
    assert bands['50th'].tolist() == [2.0, 20.0]
    assert bands['100th'].tolist() == [3.0, 30.0]


def test_summarize():
    results = pd.DataFrame({
        'seed': [0, 0, 1, 1, 2, 2],
        'period': [0, 1, 0, 1, 0, 1],
        'month': [11, 23, 11, 23, 11, 23],
        'fv': [100.0, 200.0, 300.0, 400.0, 200.0, 300.0],
    })
    summary = summarize(results, 'fv', percentiles=[50])
    assert summary['month'].tolist() == [11, 23]
    assert summary['50th'].tolist() == [200.0, 300.0]


def test_summarize_unknown_column():
    results = pd.DataFrame({'seed': [0], 'period': [0], 'month': [11], 'fv': [1.0]})
    with pytest.raises(ValueError, match="Unknown column: 'irr'"):
        summarize(results, 'irr')


def test_run_simulation():
    config = SimulationConfig(num_mc_simulations=3, simulation_horizon_years=2, display_frequency='semi-annual')
    results = run_simulation(config)
    assert len(results) == 3 * 4
    assert sorted(results['seed'].unique()) == [0, 1, 2]


def test_run_simulation_with_heterogeneous_growth():
    config = SimulationConfig(
        instruments={
            'growth': {'current_dividend_yield': 0.01, 'real_dividend_growth': 0.05},
            'income': {'current_dividend_yield': 0.04, 'real_dividend_growth': 0.0},
        },
        num_mc_simulations=2,
        simulation_horizon_years=1
    )
    results = run_simulation(config)
    assert len(results) == 2
    assert np.isfinite(results['fv']).all()
    assert (results['discount_rate'] > 0.07).all()


def test_main_writes_results(tmp_path, capsys):
    output = tmp_path / 'mc'
    assert main(['--sims', '2', '--years', '2', '--seed', '4', '--output', str(output)]) == 0

    assert 'Fair value percentiles' in capsys.readouterr().out
    trajectories = pd.read_csv(output / 'trajectories.csv')
    assert sorted(trajectories['seed'].unique()) == [4, 5]
    assert len(trajectories) == 4
    assert (output / 'fv_percentiles.csv').exists()
