#!/usr/bin/env python3
"""
Immutable records of the valuation and portfolio engine.

Rates are annual fractions (0.02 == 2%), dividends are annual dollar amounts
per share, and time is counted in months.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class MarketParams:
    inflation: float


@dataclass(frozen=True)
class InvestmentParams:
    """Inputs describing a $100 investment in a security."""
    current_dividend_yield: float
    real_dividend_growth: float


@dataclass(frozen=True)
class Security:
    current_annual_dividends: float
    real_dividend_growth: float


@dataclass(frozen=True)
class MarketSentiment:
    discount_rate: float


@dataclass(frozen=True)
class Allocation:
    number_of_shares: float


Portfolio = Dict[str, Allocation]


@dataclass(frozen=True)
class DividendParams:
    """
    Dividend realisation uncertainty.

    realized_dividend_annual_std is a fraction of the current dividend level;
    correlation applies between the realisations of different instruments.
    """
    realized_dividend_annual_std: float
    correlation: float = 0.0


@dataclass(frozen=True)
class SavingsParams:
    monthly_investment: float


@dataclass(frozen=True)
class SentimentParams:
    """
    Mean reversion of the discount rate's excess over its floor (log space).

    long_run_discount_rate defaults to the initial discount rate.
    """
    reversion_strength: float = 0.1
    log_excess_std: float = 0.04
    long_run_discount_rate: Optional[float] = None


# ============================================================================
# Transactions
# ============================================================================

@dataclass(frozen=True)
class Bought:
    bought: float
    cost: float
    id: Optional[str] = None


@dataclass(frozen=True)
class Sold:
    sold: float
    proceeds: float
    id: Optional[str] = None


@dataclass(frozen=True)
class Dividend:
    dividend: float
    id: Optional[str] = None


Transaction = Union[Bought, Sold, Dividend]


@dataclass(frozen=True)
class InvestmentDecision:
    """
    Trades of one period.

    target_value is the portfolio value the strategy aimed for, when it had one.
    """
    time: int
    transactions: Tuple[Transaction, ...] = ()
    target_value: Optional[float] = None


# ============================================================================
# Pricing and outcomes
# ============================================================================

@dataclass(frozen=True)
class SecurityAtTime:
    time: int
    security: Security
    price: float


Pricing = Dict[str, SecurityAtTime]


@dataclass(frozen=True)
class Statistics:
    """Per-period figures of a portfolio; dollar totals are gross amounts."""
    number_of_shares: Dict[str, float]
    fv: float
    total_dividends: float
    total_bought_dollar: float
    total_sold_dollar: float
    total_bought_num_shares: float
    total_sold_num_shares: float
    external_cashflow: float
    shortfall: Optional[float] = None

    @property
    def net_bought_dollar(self) -> float:
        return self.total_bought_dollar - self.total_sold_dollar

    @property
    def net_bought_num_shares(self) -> float:
        return self.total_bought_num_shares - self.total_sold_num_shares


@dataclass(frozen=True)
class Outcome:
    investment: Portfolio
    decision: InvestmentDecision


@dataclass(frozen=True)
class InvestmentOutcome:
    time: int
    outcome: Outcome
    statistics: Statistics
    evolved_pricing: Pricing = field(default_factory=dict)
