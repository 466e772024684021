#!/usr/bin/env python3
"""
Investment simulation over time.

``invest_over_time`` folds a strategy over aligned pricing and savings
processes; ``savings_trajectory`` wires sentiment, dividend realisation and
pricing of several instruments into one reproducible Monte Carlo trajectory.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional

from ..montecarlo.random_processes import Random
from ..processes import Process, fmap, stateful_fold
from ..strategies.allocation import full_rebalancing, invest_cashflow
from ..strategies.base import Strategy
from .model import (
    Allocation,
    DividendParams,
    InvestmentOutcome,
    InvestmentParams,
    MarketParams,
    MarketSentiment,
    Outcome,
    Portfolio,
    Pricing,
    SavingsParams,
    Security,
    SecurityAtTime,
    SentimentParams,
)
from .portfolio import calculate_statistics, consolidate_investment
from .valuation import (
    correlated_dividend_ratios,
    evaluate_security,
    implied_sentiment,
    inflation_adjusted_savings,
    nominal_dividend_growth,
    reverting_sentiment,
)

INITIAL_PRICE = 100.0


def pricing_process(securities: Dict[str, Process[SecurityAtTime]]) -> Process[Pricing]:
    """Combine per-instrument processes into a process of Pricing."""
    ids = list(securities)
    return fmap(lambda *values: dict(zip(ids, values)))(*(securities[key] for key in ids))


def compute_investment_at_time(time: int,
                               pricing: Pricing,
                               future_pricing: Pricing,
                               portfolio: Portfolio,
                               savings: SavingsParams,
                               strategy: Strategy) -> InvestmentOutcome:
    """Decide, consolidate and measure one month of investing."""
    decision = strategy(time, portfolio, pricing, future_pricing, savings)
    future_portfolio = consolidate_investment(portfolio, decision)
    return InvestmentOutcome(
        time=time,
        outcome=Outcome(investment=future_portfolio, decision=decision),
        statistics=calculate_statistics(future_pricing, future_portfolio, decision, savings),
        evolved_pricing=future_pricing
    )


class _InvestmentState(NamedTuple):
    time: int
    portfolio: Portfolio
    outcome: Optional[InvestmentOutcome]


def invest_over_time(start_time: int,
                     security_process: Process[Pricing],
                     initial_portfolio: Portfolio,
                     savings_process: Process[SavingsParams],
                     strategy: Strategy) -> Process[InvestmentOutcome]:
    """
    Lazily apply ``strategy`` month after month.

    Parameters:
    -----------
    start_time : int
        Month of the first decision
    security_process : Process[Pricing]
        Prices per month, starting at ``start_time``; trades of a month execute
        at the prices of the following month
    initial_portfolio : Portfolio
        Holdings before the first decision
    savings_process : Process[SavingsParams]
        External cash per month, aligned with ``security_process``
    strategy : Strategy
        Decision function applied every month

    Returns:
    --------
    Process[InvestmentOutcome]: one outcome per month, starting at ``start_time``
    """
    def step(state: _InvestmentState,
             pricing: Pricing,
             savings: SavingsParams,
             future_pricing: Pricing) -> _InvestmentState:
        outcome = compute_investment_at_time(
            state.time, pricing, future_pricing, state.portfolio, savings, strategy
        )
        return _InvestmentState(state.time + 1, outcome.outcome.investment, outcome)

    states = stateful_fold(step)(
        _InvestmentState(start_time, initial_portfolio, None),
        security_process,
        savings_process,
        security_process.evolve
    )
    return fmap(lambda state: state.outcome)(states.evolve)


@dataclass(frozen=True)
class Trajectory:
    """Aligned monthly sentiment and investment outcomes of one seed."""
    sentiment: Process[MarketSentiment]
    investments: Process[InvestmentOutcome]


@dataclass(frozen=True)
class SavingsTrajectory:
    initial_securities: Dict[str, Security]
    investment_result: Random[Trajectory]


def savings_trajectory(starting_pv: float,
                       market: MarketParams,
                       investments: Dict[str, InvestmentParams],
                       dividend_params: DividendParams,
                       savings: SavingsParams,
                       strategy: Optional[Strategy] = None,
                       sentiment_params: Optional[SentimentParams] = None,
                       weights: Optional[Dict[str, float]] = None,
                       sentiment_seed_offset: int = 0,
                       dividend_seed_offset: int = 5123) -> SavingsTrajectory:
    """
    Build the Monte Carlo trajectory of a savings plan.

    Every instrument starts at a price of 100 with annual dividends of
    100 * current dividend yield. The starting value is split by ``weights``
    (equal weights by default). Sentiment mean-reverts above the largest nominal
    dividend growth of the instruments. The initial discount rate is the
    value-weighted implied discount rate, raised where needed to the implied
    rate of the fastest-growing instrument so that it starts above that floor.

    Parameters:
    -----------
    starting_pv : float
        Initial portfolio value ($)
    market : MarketParams
        Market parameters (inflation)
    investments : Dict[str, InvestmentParams]
        Instruments keyed by id
    dividend_params : DividendParams
        Dividend realisation uncertainty and correlation
    savings : SavingsParams
        Monthly savings in today's dollars (grown with inflation)
    strategy : Strategy, optional
        Decision function (default: invest_cashflow(full_rebalancing))
    sentiment_params : SentimentParams, optional
        Sentiment mean reversion (default: SentimentParams())
    weights : Dict[str, float], optional
        Initial allocation per instrument, summing to 1
    sentiment_seed_offset, dividend_seed_offset : int
        Offsets added to the picked seed for each random source

    Returns:
    --------
    SavingsTrajectory
    """
    if not investments:
        raise ValueError("savings trajectory needs at least one instrument")

    ids = list(investments)
    if weights is None:
        weights = {key: 1.0 / len(ids) for key in ids}
    if set(weights) != set(ids):
        raise ValueError(f"weights {sorted(weights)} must cover exactly the instruments {sorted(ids)}")
    if not math.isclose(sum(weights.values()), 1.0, abs_tol=1e-9):
        raise ValueError(f"weights must sum to 1, got {sum(weights.values())}")

    for key, params in investments.items():
        if params.current_dividend_yield <= 0:
            raise ValueError(f"instrument '{key}' needs a positive current_dividend_yield, "
                             f"got {params.current_dividend_yield}")

    strategy = strategy or invest_cashflow(full_rebalancing)

    initial_securities = {
        key: Security(
            current_annual_dividends=INITIAL_PRICE * params.current_dividend_yield,
            real_dividend_growth=params.real_dividend_growth
        )
        for key, params in investments.items()
    }
    initial_portfolio = {
        key: Allocation(number_of_shares=starting_pv * weights[key] / INITIAL_PRICE)
        for key in ids
    }

    implied_rates = {
        key: implied_sentiment(initial_securities[key], INITIAL_PRICE, market).discount_rate
        for key in ids
    }
    fastest = max(ids, key=lambda key: nominal_dividend_growth(initial_securities[key], market))
    floor_growth = nominal_dividend_growth(initial_securities[fastest], market)

    # the fastest grower's implied rate exceeds the floor by its dividend yield
    initial_sentiment = MarketSentiment(discount_rate=max(
        sum(weights[key] * implied_rates[key] for key in ids),
        implied_rates[fastest]
    ))

    sentiment = reverting_sentiment(market, floor_growth, initial_sentiment, sentiment_params)
    dividend_ratios = correlated_dividend_ratios(ids, dividend_params)
    savings_over_time = inflation_adjusted_savings(market, savings)

    logging.info(f"Savings trajectory: {len(ids)} instruments {ids}, starting PV ${starting_pv:,.0f}, "
                 f"initial discount rate {initial_sentiment.discount_rate:.4f}")

    def pick(seed: int) -> Trajectory:
        sentiment_over_time = sentiment.pick(seed + sentiment_seed_offset)
        ratios = dividend_ratios.pick(seed + dividend_seed_offset)
        pricing = pricing_process({
            key: evaluate_security(market, initial_securities[key], sentiment_over_time, ratios[key], 0)
            for key in ids
        })
        outcomes = invest_over_time(0, pricing, initial_portfolio, savings_over_time, strategy)
        return Trajectory(sentiment=sentiment_over_time, investments=outcomes)

    return SavingsTrajectory(initial_securities=initial_securities, investment_result=Random(pick))
