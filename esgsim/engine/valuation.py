#!/usr/bin/env python3
"""
Security valuation and evolution.

Prices come from the Gordon growth (dividend-discount) model with the nominal
dividend growth of the security; market sentiment is expressed as the discount
rate. Dividends and sentiment evolve month by month as random processes.

Reference: https://www.investopedia.com/terms/g/gordongrowthmodel.asp
"""

import logging
import math
from typing import Dict, List, Optional

from ..montecarlo.mvrandom import mvnsims
from ..montecarlo.random_processes import Random, random_mean_reverting, rmap, white_noise
from ..processes import Process, constant, count, fmap, stateful_fold
from .model import (
    DividendParams,
    MarketParams,
    MarketSentiment,
    SavingsParams,
    Security,
    SecurityAtTime,
    SentimentParams,
)


def price_via_gordon_equation(annual_dividends: float,
                              discount_rate: float,
                              growth_rate: float) -> float:
    """
    Present value of a growing perpetuity of dividends.

    Returns +inf when the discount rate does not exceed the growth rate; the
    valuation is unbounded there rather than an error.
    """
    if discount_rate <= growth_rate:
        return math.inf
    return annual_dividends / (discount_rate - growth_rate)


def nominal_dividend_growth(security: Security, economy: MarketParams) -> float:
    return security.real_dividend_growth + economy.inflation


def price_ddm(security: Security,
              economy: MarketParams,
              sentiment: MarketSentiment) -> float:
    return price_via_gordon_equation(
        security.current_annual_dividends,
        sentiment.discount_rate,
        nominal_dividend_growth(security, economy)
    )


def current_yield(security: Security, price: float) -> float:
    return security.current_annual_dividends / price


def implied_sentiment(security: Security,
                      price: float,
                      economy: MarketParams) -> MarketSentiment:
    """Discount rate at which the Gordon price of ``security`` equals ``price``."""
    return MarketSentiment(
        discount_rate=current_yield(security, price) + nominal_dividend_growth(security, economy)
    )


def evolve_security(economy: MarketParams,
                    security: Security,
                    realized_dividend_ratio: float = 1.0) -> Security:
    """
    Security one month later.

    Dividends grow by the nominal annual growth compounded monthly, scaled by
    the realised dividend ratio.
    """
    growth = 1 + nominal_dividend_growth(security, economy) / 12
    return Security(
        current_annual_dividends=realized_dividend_ratio * security.current_annual_dividends * growth,
        real_dividend_growth=security.real_dividend_growth
    )


def evaluate_security(economy: MarketParams,
                      initial_security: Security,
                      sentiment: Process[MarketSentiment],
                      realized_dividend_ratio: Optional[Process[float]] = None,
                      start_time: int = 0) -> Process[SecurityAtTime]:
    """
    Price a security over time.

    Parameters:
    -----------
    economy : MarketParams
        Market parameters (inflation)
    initial_security : Security
        Security at ``start_time``
    sentiment : Process[MarketSentiment]
        Discount rate per month, aligned with ``start_time``
    realized_dividend_ratio : Process[float], optional
        Dividend realisation per month (default: always 1)
    start_time : int
        Month of the first node

    Returns:
    --------
    Process[SecurityAtTime]
    """
    if realized_dividend_ratio is None:
        realized_dividend_ratio = constant(1.0)

    states = stateful_fold(
        lambda state, ratio: (state[0] + 1, evolve_security(economy, state[1], ratio))
    )((start_time, initial_security), realized_dividend_ratio)

    return fmap(
        lambda state, s: SecurityAtTime(
            time=state[0],
            security=state[1],
            price=price_ddm(state[1], economy, s)
        )
    )(states, sentiment)


def reverting_sentiment(economy: MarketParams,
                        floor_growth: float,
                        initial_sentiment: MarketSentiment,
                        params: Optional[SentimentParams] = None) -> Random[Process[MarketSentiment]]:
    """
    Mean-reverting market sentiment bounded below by ``floor_growth``.

    The excess of the discount rate over the floor follows a mean-reverting
    process in log space, so the discount rate always stays above the floor and
    Gordon prices of securities growing no faster than the floor stay finite.
    The first value is ``initial_sentiment``.

    Raises:
    -------
    ValueError
        If the initial or long-run discount rate is not above the floor
    """
    params = params or SentimentParams()
    long_run = params.long_run_discount_rate
    if long_run is None:
        long_run = initial_sentiment.discount_rate

    for label, rate in (('initial', initial_sentiment.discount_rate), ('long-run', long_run)):
        if not rate > floor_growth:
            raise ValueError(
                f"{label} discount rate {rate} must be above the dividend growth floor {floor_growth}"
            )

    excess = random_mean_reverting(
        math.log(initial_sentiment.discount_rate - floor_growth),
        math.log(long_run - floor_growth),
        params.reversion_strength,
        params.log_excess_std
    )
    to_sentiment = fmap(lambda x: MarketSentiment(discount_rate=floor_growth + math.exp(x)))

    logging.debug(f"Reverting sentiment: floor={floor_growth:.4f}, "
                  f"initial={initial_sentiment.discount_rate:.4f}, long run={long_run:.4f}")

    def pick(seed: int) -> Process[MarketSentiment]:
        evolution = excess.pick(seed)
        return Process(initial_sentiment, lambda: to_sentiment(evolution))

    return Random(pick)


def realized_dividend_ratio(params: DividendParams) -> Random[Process[float]]:
    """Log-normal monthly dividend realisation around 1."""
    log_ratio = white_noise(0, params.realized_dividend_annual_std / math.sqrt(12))
    return rmap(fmap(math.exp))(log_ratio)


def correlated_dividend_ratios(ids: List[str],
                               params: DividendParams) -> Random[Dict[str, Process[float]]]:
    """
    Log-normal dividend realisations of several instruments.

    Log ratios have monthly standard deviation ``annual_std / sqrt(12)`` and
    pairwise correlation ``params.correlation``.
    """
    variance = params.realized_dividend_annual_std ** 2 / 12
    cov = {
        a: {b: variance if a == b else variance * params.correlation for b in ids}
        for a in ids
    }
    log_ratios = mvnsims(cov)

    def exponentiate(processes: Dict[str, Process[float]]) -> Dict[str, Process[float]]:
        return {key: fmap(math.exp)(p) for key, p in processes.items()}

    return rmap(exponentiate)(log_ratios)


def inflation_adjusted_savings(economy: MarketParams,
                               savings: SavingsParams) -> Process[SavingsParams]:
    """Monthly savings growing with inflation, compounded monthly from month 0."""
    return fmap(
        lambda t: SavingsParams(
            monthly_investment=savings.monthly_investment * (1 + economy.inflation / 12) ** t
        )
    )(count(0))
