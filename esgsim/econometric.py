#!/usr/bin/env python3
"""
Deterministic reference curves for a $100 investment.

These are the expected paths the Monte Carlo trajectories are compared with:
dividends growing at a constant rate and the value of a fully rebalanced
investment earning the expected market return.
"""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .engine.model import InvestmentParams, MarketParams, Security
from .engine.valuation import current_yield, price_via_gordon_equation


@dataclass(frozen=True)
class EconomicParams:
    current_dividend_yield: float
    real_dividend_growth: float
    inflation: float
    discount_rate: float

    @property
    def nominal_dividend_growth(self) -> float:
        return self.real_dividend_growth + self.inflation

    def get_investment_params(self) -> InvestmentParams:
        return InvestmentParams(self.current_dividend_yield, self.real_dividend_growth)

    def get_market_params(self) -> MarketParams:
        return MarketParams(self.inflation)


def _monthly_growth(months_idx: Sequence[int], params: EconomicParams, annual_rate: float) -> np.ndarray:
    months = np.asarray(months_idx, dtype=float)
    return 100 * params.current_dividend_yield * (1 + annual_rate / 12) ** months


def nominal_dividends(months_idx: Sequence[int], params: EconomicParams) -> np.ndarray:
    """Annual dividends of $100 invested at month 0, in nominal dollars."""
    return _monthly_growth(months_idx, params, params.nominal_dividend_growth)


def real_dividends(months_idx: Sequence[int], params: EconomicParams) -> np.ndarray:
    """Annual dividends of $100 invested at month 0, in dollars of month 0."""
    return _monthly_growth(months_idx, params, params.real_dividend_growth)


def discounted_dividends(months_idx: Sequence[int], params: EconomicParams) -> np.ndarray:
    """Nominal dividends discounted back to month 0 at the discount rate."""
    return _monthly_growth(months_idx, params, params.nominal_dividend_growth - params.discount_rate)


def market_price_of_100_dollar_investment(params: EconomicParams) -> float:
    """Gordon price today of the dividends that $100 bought at the current yield."""
    return price_via_gordon_equation(
        100 * params.current_dividend_yield,
        params.discount_rate,
        params.nominal_dividend_growth
    )


def theoretic_investment_value(initial_value: float,
                               economy: MarketParams,
                               security: Security,
                               initial_price: float,
                               months_idx: Sequence[int]) -> np.ndarray:
    """
    Value of a fully rebalanced investment earning the expected market return.

    The expected return is the current yield plus the nominal dividend growth,
    compounded monthly; entry i is the value at the end of month i.
    """
    expected_return = (current_yield(security, initial_price)
                       + security.real_dividend_growth + economy.inflation)
    months = np.asarray(months_idx, dtype=float)
    return initial_value * (1 + expected_return / 12) ** (months + 1)
