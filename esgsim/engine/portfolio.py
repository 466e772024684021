#!/usr/bin/env python3
"""
Portfolio bookkeeping: consolidation of trades, position valuation and
per-period statistics.

A portfolio is never modified; every function returns a new mapping.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Union

from .model import (
    Allocation,
    Bought,
    Dividend,
    InvestmentDecision,
    Portfolio,
    Pricing,
    SavingsParams,
    Sold,
    Statistics,
    Transaction,
)


@dataclass(frozen=True)
class TransactionTotals:
    total_dividends: float = 0.0
    total_bought_dollar: float = 0.0
    total_bought_num_shares: float = 0.0
    total_sold_dollar: float = 0.0
    total_sold_num_shares: float = 0.0


def _instrument_of(transaction: Transaction, portfolio: Portfolio) -> str:
    if transaction.id is not None:
        return transaction.id
    if len(portfolio) == 1:
        return next(iter(portfolio))
    raise ValueError(
        f"trade {transaction} has no instrument id and the portfolio holds {list(portfolio)}"
    )


def consolidate_investment(portfolio: Portfolio,
                           decision: Union[InvestmentDecision, Sequence[Transaction]]) -> Portfolio:
    """
    Apply the trades of a decision to a portfolio.

    Shares per instrument = prior shares + bought shares - sold shares.
    Dividends do not change holdings.

    Parameters:
    -----------
    portfolio : Portfolio
        Holdings before the decision
    decision : InvestmentDecision or sequence of Transaction
        Trades to apply; a trade without an id applies to the only instrument of
        a single-instrument portfolio

    Returns:
    --------
    Portfolio: new holdings
    """
    transactions = decision.transactions if isinstance(decision, InvestmentDecision) else decision
    shares = {key: allocation.number_of_shares for key, allocation in portfolio.items()}

    for transaction in transactions:
        if isinstance(transaction, Bought):
            key = _instrument_of(transaction, portfolio)
            shares[key] = shares.get(key, 0.0) + transaction.bought
        elif isinstance(transaction, Sold):
            key = _instrument_of(transaction, portfolio)
            shares[key] = shares.get(key, 0.0) - transaction.sold

    return {key: Allocation(number_of_shares=n) for key, n in shares.items()}


def diff(portfolio: Portfolio, target: Portfolio) -> Portfolio:
    """Share changes turning ``portfolio`` into ``target`` (missing holdings count as 0)."""
    ids = list(portfolio) + [key for key in target if key not in portfolio]
    return {
        key: Allocation(
            number_of_shares=(target[key].number_of_shares if key in target else 0.0)
            - (portfolio[key].number_of_shares if key in portfolio else 0.0)
        )
        for key in ids
    }


def price_positions(portfolio: Portfolio, pricing: Pricing) -> Dict[str, float]:
    """Dollar value of each position; an empty position is worth 0 at any price."""
    return {
        key: 0.0 if allocation.number_of_shares == 0 else allocation.number_of_shares * pricing[key].price
        for key, allocation in portfolio.items()
    }


def to_trades(change: Portfolio, pricing: Pricing) -> List[Transaction]:
    """
    Trades realising a change of holdings at ``pricing``.

    Negative changes become ``Sold`` with a positive share count; unchanged
    positions produce no trade.
    """
    trades: List[Transaction] = []
    for key, allocation in change.items():
        n = allocation.number_of_shares
        if n < 0:
            trades.append(Sold(sold=-n, proceeds=-n * pricing[key].price, id=key))
        elif n > 0:
            trades.append(Bought(bought=n, cost=n * pricing[key].price, id=key))
    return trades


def aggregated(transactions: Iterable[Transaction]) -> TransactionTotals:
    """Gross totals of dividends, purchases and sales."""
    dividends = bought_dollar = bought_shares = sold_dollar = sold_shares = 0.0
    for transaction in transactions:
        if isinstance(transaction, Dividend):
            dividends += transaction.dividend
        elif isinstance(transaction, Bought):
            bought_dollar += transaction.cost
            bought_shares += transaction.bought
        elif isinstance(transaction, Sold):
            sold_dollar += transaction.proceeds
            sold_shares += transaction.sold

    return TransactionTotals(
        total_dividends=dividends,
        total_bought_dollar=bought_dollar,
        total_bought_num_shares=bought_shares,
        total_sold_dollar=sold_dollar,
        total_sold_num_shares=sold_shares
    )


def calculate_statistics(future_pricing: Pricing,
                         portfolio: Portfolio,
                         decision: Union[InvestmentDecision, Sequence[Transaction]],
                         savings: SavingsParams) -> Statistics:
    """
    Statistics of a period.

    Parameters:
    -----------
    future_pricing : Pricing
        Prices at which the resulting portfolio is valued
    portfolio : Portfolio
        Holdings after the period's trades
    decision : InvestmentDecision or sequence of Transaction
        The period's trades; the shortfall is reported only for a decision that
        carries a target value
    savings : SavingsParams
        External cash of the period

    Returns:
    --------
    Statistics
    """
    if isinstance(decision, InvestmentDecision):
        transactions = decision.transactions
        target_value = decision.target_value
    else:
        transactions = decision
        target_value = None

    totals = aggregated(transactions)
    fv = sum(price_positions(portfolio, future_pricing).values())

    return Statistics(
        number_of_shares={key: allocation.number_of_shares for key, allocation in portfolio.items()},
        fv=fv,
        total_dividends=totals.total_dividends,
        total_bought_dollar=totals.total_bought_dollar,
        total_sold_dollar=totals.total_sold_dollar,
        total_bought_num_shares=totals.total_bought_num_shares,
        total_sold_num_shares=totals.total_sold_num_shares,
        external_cashflow=savings.monthly_investment,
        shortfall=None if target_value is None else target_value - fv
    )
