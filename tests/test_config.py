#!/usr/bin/env python3
"""
Tests for SimulationConfig.
"""

import json

import pytest

from esgsim.config import DEFAULT_SIMULATION_CONFIG, SimulationConfig, load_simulation_config
from esgsim.engine.model import InvestmentParams, MarketParams


def test_defaults():
    config = SimulationConfig()
    assert config.strategy == 'full_rebalancing'
    assert config.get_display_months() == 12
    assert config.get_num_periods() == 30
    assert list(config.get_seeds()) == list(range(100))


def test_load_default_config():
    assert load_simulation_config() is DEFAULT_SIMULATION_CONFIG


@pytest.mark.parametrize("overrides,message", [
    ({'inflation': 0.9}, "inflation must be between"),
    ({'realized_dividend_annual_std': -0.1}, "cannot be negative"),
    ({'dividend_correlation': 1.5}, "dividend_correlation must be between"),
    ({'sentiment_log_excess_std': -1}, "sentiment_log_excess_std cannot be negative"),
    ({'instruments': {}}, "at least one instrument"),
    ({'instruments': {'equity': {'current_dividend_yield': 0.04}}}, "missing \\['real_dividend_growth'\\]"),
    ({'instruments': {'equity': {'current_dividend_yield': 0, 'real_dividend_growth': 0}}},
     "positive current_dividend_yield"),
    ({'allocation': {'bond': 1.0}}, "allocation keys"),
    ({'allocation': {'equity': 0.9}}, "must sum to 1"),
    ({'monthly_investment': -5}, "monthly_investment cannot be negative"),
    ({'strategy': 'buy_low'}, "strategy must be one of"),
    ({'num_mc_simulations': 0}, "at least 1"),
    ({'simulation_horizon_years': 0}, "must be positive"),
    ({'display_frequency': 'weekly'}, "display_frequency must be one of"),
    ({'long_run_discount_rate': 0.02}, "long_run_discount_rate must be above"),
    ({'long_run_discount_rate': 0.06,
      'instruments': {'growth': {'current_dividend_yield': 0.01, 'real_dividend_growth': 0.05},
                      'income': {'current_dividend_yield': 0.04, 'real_dividend_growth': 0.0}}},
     "long_run_discount_rate must be above"),
])
def test_validation(overrides, message):
    with pytest.raises(ValueError, match=message):
        SimulationConfig(**overrides)


def test_json_round_trip(tmp_path):
    config = SimulationConfig(
        instruments={
            'equity': {'current_dividend_yield': 0.03, 'real_dividend_growth': 0.01},
            'reit': {'current_dividend_yield': 0.05, 'real_dividend_growth': 0.0},
        },
        allocation={'equity': 0.6, 'reit': 0.4},
        display_frequency='quarterly',
        seed=11
    )
    path = tmp_path / 'config.json'
    config.to_json(str(path))
    assert SimulationConfig.from_json(str(path)) == config


def test_from_json_ignores_comment_keys(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({
        '_comment': 'two years of quarterly reports',
        'simulation_horizon_years': 2,
        'display_frequency': 'quarterly',
        'num_mc_simulations': 3,
    }))
    config = load_simulation_config(str(path))
    assert config.get_num_periods() == 8
    assert config.num_mc_simulations == 3
    assert config.inflation == 0.02


def test_parameter_getters():
    config = SimulationConfig(inflation=0.03, dividend_correlation=0.2, long_run_discount_rate=0.07,
                              monthly_investment=250, seed=5, num_mc_simulations=2)
    assert config.get_market_params() == MarketParams(inflation=0.03)
    assert config.get_investment_params() == {'equity': InvestmentParams(0.04, 0.003)}
    assert config.get_dividend_params().correlation == 0.2
    assert config.get_savings_params().monthly_investment == 250
    assert config.get_sentiment_params().long_run_discount_rate == 0.07
    assert list(config.get_seeds()) == [5, 6]
