#!/usr/bin/env python3
"""
Investment strategies.

- no_reinvestment: dividends are paid out
- full_reinvestment: dividends buy more shares of the paying instrument
- full_rebalancing: dividends and holdings are redistributed so that each
  position keeps its current share of portfolio value
- invest_cashflow: wraps a strategy and invests the month's savings on top
"""

from dataclasses import replace
from typing import List

from ..engine.model import (
    Allocation,
    Bought,
    Dividend,
    InvestmentDecision,
    Portfolio,
    Pricing,
    SavingsParams,
    Transaction,
)
from ..engine.portfolio import consolidate_investment, diff, price_positions, to_trades
from .base import Strategy, accrued_dividends, value_weights


def no_reinvestment(time: int,
                    portfolio: Portfolio,
                    pricing: Pricing,
                    future_pricing: Pricing,
                    savings: SavingsParams) -> InvestmentDecision:
    dividends = accrued_dividends(portfolio, pricing)
    return InvestmentDecision(
        time=time,
        transactions=tuple(Dividend(dividend=d, id=key) for key, d in dividends.items())
    )


def full_reinvestment(time: int,
                      portfolio: Portfolio,
                      pricing: Pricing,
                      future_pricing: Pricing,
                      savings: SavingsParams) -> InvestmentDecision:
    """Buy shares of every instrument with its own dividends at next month's price."""
    transactions: List[Transaction] = []
    for key, d in accrued_dividends(portfolio, pricing).items():
        transactions.append(Bought(bought=d / future_pricing[key].price, cost=d, id=key))
        transactions.append(Dividend(dividend=d, id=key))
    return InvestmentDecision(time=time, transactions=tuple(transactions))


def full_rebalancing(time: int,
                     portfolio: Portfolio,
                     pricing: Pricing,
                     future_pricing: Pricing,
                     savings: SavingsParams) -> InvestmentDecision:
    """
    Rebalance to current-month value weights.

    The target future value is the month's dividends plus the holdings valued at
    next month's prices. Each position receives the fraction of that value it
    holds of the portfolio at current prices, converted to shares at next
    month's prices; the decision records the target as ``target_value``.
    """
    dividends = accrued_dividends(portfolio, pricing)
    target_fv = sum(dividends.values()) + sum(price_positions(portfolio, future_pricing).values())
    weights = value_weights(price_positions(portfolio, pricing))

    target = {
        key: Allocation(number_of_shares=w * target_fv / future_pricing[key].price)
        for key, w in weights.items()
    }
    trades = to_trades(diff(portfolio, target), future_pricing)
    payouts = [Dividend(dividend=d, id=key) for key, d in dividends.items()]

    return InvestmentDecision(
        time=time,
        transactions=tuple(trades + payouts),
        target_value=target_fv
    )


def invest_cashflow(strategy: Strategy) -> Strategy:
    """
    Add the month's savings to the decisions of ``strategy``.

    The savings buy every instrument in proportion to its value after the
    wrapped strategy's trades, at next month's prices. A target value, if set,
    grows by the invested cash.
    """
    def strategy_with_cashflow(time: int,
                               portfolio: Portfolio,
                               pricing: Pricing,
                               future_pricing: Pricing,
                               savings: SavingsParams) -> InvestmentDecision:
        decision = strategy(time, portfolio, pricing, future_pricing, savings)
        cash = savings.monthly_investment
        if cash == 0:
            return decision

        invested = consolidate_investment(portfolio, decision)
        weights = value_weights(price_positions(invested, future_pricing))
        purchases = tuple(
            Bought(bought=cash * w / future_pricing[key].price, cost=cash * w, id=key)
            for key, w in weights.items()
            if w > 0
        )
        target_value = None if decision.target_value is None else decision.target_value + cash
        return replace(
            decision,
            transactions=decision.transactions + purchases,
            target_value=target_value
        )

    return strategy_with_cashflow
