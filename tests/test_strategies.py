#!/usr/bin/env python3
"""
Tests for investment strategies and the strategy registry.
"""

import pytest

from esgsim.engine.model import Allocation, Bought, Dividend, SavingsParams, Security, Sold
from esgsim.engine.portfolio import calculate_statistics, consolidate_investment, price_positions
from esgsim.strategies import (
    full_rebalancing,
    full_reinvestment,
    get_strategy,
    invest_cashflow,
    list_strategies,
    no_reinvestment,
)

from conftest import pricing_of


def test_no_reinvestment_pays_dividends(equity, holding, savings):
    decision = no_reinvestment(1000, holding, pricing_of(equity, 190), pricing_of(equity, 200), savings)
    assert decision.time == 1000
    assert decision.transactions == (Dividend(5, id='equity'),)
    assert decision.target_value is None
    assert consolidate_investment(holding, decision) == holding


def test_full_reinvestment_buys_with_dividends(equity, holding, savings):
    future_pricing = pricing_of(equity, 200)
    decision = full_reinvestment(1000, holding, pricing_of(equity, 190), future_pricing, savings)

    assert decision.time == 1000
    assert decision.transactions == (Bought(0.025, 5, id='equity'), Dividend(5, id='equity'))

    invested = consolidate_investment(holding, decision)
    assert invested['equity'].number_of_shares == pytest.approx(3.025)

    statistics = calculate_statistics(future_pricing, invested, decision, savings)
    assert statistics.fv == pytest.approx(605)
    assert statistics.total_dividends == 5
    assert statistics.total_bought_dollar == 5
    assert statistics.total_sold_dollar == 0
    assert statistics.external_cashflow == 1000


def two_asset_setup():
    a = Security(current_annual_dividends=12, real_dividend_growth=0.01)
    b = Security(current_annual_dividends=6, real_dividend_growth=0.0)
    portfolio = {'a': Allocation(10), 'b': Allocation(30)}
    pricing = {**pricing_of(a, 100, key='a'), **pricing_of(b, 50, key='b')}
    future_pricing = {**pricing_of(a, 110, time=1, key='a'), **pricing_of(b, 45, time=1, key='b')}
    return portfolio, pricing, future_pricing


def test_full_rebalancing_conserves_target_value(no_savings):
    portfolio, pricing, future_pricing = two_asset_setup()
    decision = full_rebalancing(0, portfolio, pricing, future_pricing, no_savings)

    # dividends 10 * 12 / 12 + 30 * 6 / 12 = 25; holdings at next prices 1100 + 1350
    assert decision.target_value == pytest.approx(25 + 1100 + 1350)

    rebalanced = consolidate_investment(portfolio, decision)
    fv = sum(price_positions(rebalanced, future_pricing).values())
    assert fv == pytest.approx(decision.target_value, rel=1e-9)


def test_full_rebalancing_keeps_current_value_weights(no_savings):
    portfolio, pricing, future_pricing = two_asset_setup()
    decision = full_rebalancing(0, portfolio, pricing, future_pricing, no_savings)
    rebalanced = consolidate_investment(portfolio, decision)

    values = price_positions(rebalanced, future_pricing)
    # current values: a 1000, b 1500
    assert values['a'] / sum(values.values()) == pytest.approx(0.4)
    assert values['b'] / sum(values.values()) == pytest.approx(0.6)

    assert any(isinstance(t, Sold) for t in decision.transactions)
    dividends = [t for t in decision.transactions if isinstance(t, Dividend)]
    assert sum(d.dividend for d in dividends) == pytest.approx(25)


def test_full_rebalancing_reports_no_shortfall(no_savings):
    portfolio, pricing, future_pricing = two_asset_setup()
    decision = full_rebalancing(0, portfolio, pricing, future_pricing, no_savings)
    rebalanced = consolidate_investment(portfolio, decision)
    statistics = calculate_statistics(future_pricing, rebalanced, decision, no_savings)
    assert statistics.shortfall == pytest.approx(0, abs=1e-9)


def test_full_rebalancing_of_empty_portfolio_splits_equally():
    _, pricing, future_pricing = two_asset_setup()
    empty = {'a': Allocation(0), 'b': Allocation(0)}
    strategy = invest_cashflow(full_rebalancing)
    savings = SavingsParams(monthly_investment=1000)
    decision = strategy(0, empty, pricing, future_pricing, savings)

    invested = consolidate_investment(empty, decision)
    values = price_positions(invested, future_pricing)
    assert values['a'] == pytest.approx(500)
    assert values['b'] == pytest.approx(500)
    assert decision.target_value == pytest.approx(1000)


def test_invest_cashflow_adds_savings(equity, holding, savings):
    future_pricing = pricing_of(equity, 200)
    decision = invest_cashflow(full_reinvestment)(0, holding, pricing_of(equity, 200), future_pricing, savings)

    assert decision.transactions[:2] == (Bought(0.025, 5, id='equity'), Dividend(5, id='equity'))
    assert decision.transactions[2] == Bought(5, 1000, id='equity')
    assert decision.target_value is None


def test_invest_cashflow_without_savings_is_transparent(equity, holding, no_savings):
    args = (0, holding, pricing_of(equity, 200), pricing_of(equity, 200), no_savings)
    assert invest_cashflow(no_reinvestment)(*args) == no_reinvestment(*args)


def test_invest_cashflow_grows_target_value(savings):
    portfolio, pricing, future_pricing = two_asset_setup()
    plain = full_rebalancing(0, portfolio, pricing, future_pricing, savings)
    decision = invest_cashflow(full_rebalancing)(0, portfolio, pricing, future_pricing, savings)
    assert decision.target_value == pytest.approx(plain.target_value + 1000)

    invested = consolidate_investment(portfolio, decision)
    statistics = calculate_statistics(future_pricing, invested, decision, savings)
    assert statistics.shortfall == pytest.approx(0, abs=1e-9)


def test_registry_lists_strategies():
    assert list_strategies() == ['no_reinvestment', 'full_reinvestment', 'full_rebalancing']


def test_get_strategy_without_savings():
    assert get_strategy('no_reinvestment', invest_savings=False) is no_reinvestment


def test_get_strategy_with_savings(equity, holding, savings):
    strategy = get_strategy('full_reinvestment')
    decision = strategy(0, holding, pricing_of(equity, 200), pricing_of(equity, 200), savings)
    assert decision.transactions[-1] == Bought(5, 1000, id='equity')


def test_get_strategy_unknown_name():
    with pytest.raises(ValueError, match="Unknown strategy: 'buy_low'"):
        get_strategy('buy_low')
