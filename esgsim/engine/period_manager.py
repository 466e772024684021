#!/usr/bin/env python3
"""
Reporting periods for monthly simulations.

Monthly outcomes are downsampled into reporting periods (quarters, years, ...).
Flows over a period (dividends, purchases, sales, external cash) are summed;
snapshots (fair value, holdings, prices, shortfall) keep their value at the end
of the period.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from ..processes import Process, aggregate, count, fmap, sample, take
from .model import (
    InvestmentDecision,
    InvestmentOutcome,
    MarketParams,
    MarketSentiment,
    Outcome,
    Statistics,
)

FREQUENCY_MONTHS = {
    'monthly': 1,
    'quarterly': 3,
    'semi-annual': 6,
    'annual': 12,
}

DOLLAR_COLUMNS = ['fv', 'total_dividends', 'total_bought_dollar', 'total_sold_dollar',
                  'net_bought_dollar', 'external_cashflow', 'shortfall']


def aggregate_investment_outcomes(*outcomes: InvestmentOutcome) -> InvestmentOutcome:
    """Combine consecutive monthly outcomes into the outcome of their period."""
    last = outcomes[-1]
    statistics = [o.statistics for o in outcomes]

    decision = InvestmentDecision(
        time=last.outcome.decision.time,
        transactions=tuple(t for o in outcomes for t in o.outcome.decision.transactions),
        target_value=last.outcome.decision.target_value
    )
    return InvestmentOutcome(
        time=last.time,
        outcome=Outcome(investment=last.outcome.investment, decision=decision),
        statistics=Statistics(
            number_of_shares=last.statistics.number_of_shares,
            fv=last.statistics.fv,
            total_dividends=sum(s.total_dividends for s in statistics),
            total_bought_dollar=sum(s.total_bought_dollar for s in statistics),
            total_sold_dollar=sum(s.total_sold_dollar for s in statistics),
            total_bought_num_shares=sum(s.total_bought_num_shares for s in statistics),
            total_sold_num_shares=sum(s.total_sold_num_shares for s in statistics),
            external_cashflow=sum(s.external_cashflow for s in statistics),
            shortfall=last.statistics.shortfall
        ),
        evolved_pricing=last.evolved_pricing
    )


def deflate(values: Sequence[float], cpi: Sequence[float]) -> np.ndarray:
    """
    Express nominal values in dollars of month 0.

    Raises:
    -------
    ValueError
        If values and cpi differ in length
    """
    if len(values) != len(cpi):
        raise ValueError(f"cannot deflate {len(values)} values with {len(cpi)} price levels")
    return np.asarray(values, dtype=float) / np.asarray(cpi, dtype=float)


@dataclass(frozen=True)
class DisplayProcesses:
    """Processes of one trajectory, one node per reporting period."""
    months_idx: Process[int]
    evolution: Process[InvestmentOutcome]
    sentiment_over_time: Process[MarketSentiment]
    cpi: Process[float]


class PeriodManager:
    """
    Downsamples monthly processes into reporting periods.

    Parameters:
    -----------
    frequency : int or str
        Months per reporting period, or one of 'monthly', 'quarterly',
        'semi-annual', 'annual'
    """

    def __init__(self, frequency=12):
        if isinstance(frequency, str):
            if frequency not in FREQUENCY_MONTHS:
                raise ValueError(f"Unknown frequency: '{frequency}'. Available: {list(FREQUENCY_MONTHS)}")
            frequency = FREQUENCY_MONTHS[frequency]
        if frequency <= 0:
            raise ValueError(f"need positive frequency to sample, got {frequency}")
        self.frequency = frequency

        logging.info(f"PeriodManager initialized: {self.frequency} months per period")

    def num_periods(self, horizon_months: int) -> int:
        """Number of complete reporting periods within ``horizon_months``."""
        return horizon_months // self.frequency

    def investment_process(self,
                           investments: Process[InvestmentOutcome],
                           sentiment: Process[MarketSentiment],
                           market: MarketParams) -> DisplayProcesses:
        """
        Resample monthly processes of one trajectory.

        Parameters:
        -----------
        investments : Process[InvestmentOutcome]
            Monthly outcomes
        sentiment : Process[MarketSentiment]
            Monthly sentiment aligned with ``investments``
        market : MarketParams
            Market parameters; inflation defines the monthly price level
            (1 + inflation / 12) ** month

        Returns:
        --------
        DisplayProcesses
        """
        monthly_cpi = fmap(lambda i: (1 + market.inflation / 12) ** i)(count(0))
        return DisplayProcesses(
            months_idx=sample(self.frequency)(count(0)),
            evolution=aggregate(self.frequency, aggregate_investment_outcomes)(investments),
            sentiment_over_time=sample(self.frequency)(sentiment),
            cpi=sample(self.frequency)(monthly_cpi)
        )

    def to_frame(self,
                 display: DisplayProcesses,
                 horizon: int,
                 adjust_for_inflation: bool = False) -> pd.DataFrame:
        """
        Tabulate the first ``horizon`` reporting periods.

        Parameters:
        -----------
        display : DisplayProcesses
            Output of investment_process
        horizon : int
            Number of reporting periods
        adjust_for_inflation : bool
            Deflate dollar columns by the price level at the end of each period

        Returns:
        --------
        pd.DataFrame indexed by period, with columns month, fv, dividends,
        trades, external cashflow, shortfall, realized_dividend_yield,
        discount_rate and cpi
        """
        months = take(horizon, display.months_idx)
        outcomes = take(horizon, display.evolution)
        sentiments = take(horizon, display.sentiment_over_time)
        cpi = take(horizon, display.cpi)

        stats = [o.statistics for o in outcomes]
        frame = pd.DataFrame({
            'month': months,
            'fv': [s.fv for s in stats],
            'total_dividends': [s.total_dividends for s in stats],
            'total_bought_dollar': [s.total_bought_dollar for s in stats],
            'total_sold_dollar': [s.total_sold_dollar for s in stats],
            'net_bought_dollar': [s.net_bought_dollar for s in stats],
            'external_cashflow': [s.external_cashflow for s in stats],
            'shortfall': [np.nan if s.shortfall is None else s.shortfall for s in stats],
            'discount_rate': [s.discount_rate for s in sentiments],
            'cpi': cpi,
        }, index=pd.RangeIndex(len(months), name='period'))

        # annualised over the period's months
        frame['realized_dividend_yield'] = frame['total_dividends'] * (12 / self.frequency) / frame['fv']

        if adjust_for_inflation:
            for column in DOLLAR_COLUMNS:
                frame[column] = deflate(frame[column].to_numpy(), cpi)

        return frame
