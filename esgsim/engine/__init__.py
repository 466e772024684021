# Engine package - valuation, portfolio bookkeeping and simulation
"""
Valuation and portfolio engine.

Modules:
- model: Immutable records (securities, transactions, outcomes, parameters)
- valuation: Gordon pricing, sentiment and dividend evolution
- portfolio: Consolidation of trades and per-period statistics
- simulation: invest_over_time and savings_trajectory
- period_manager: Resampling of monthly outcomes into reporting periods
"""

from .model import (
    Allocation,
    Bought,
    Dividend,
    DividendParams,
    InvestmentDecision,
    InvestmentOutcome,
    InvestmentParams,
    MarketParams,
    MarketSentiment,
    Outcome,
    SavingsParams,
    Security,
    SecurityAtTime,
    SentimentParams,
    Sold,
    Statistics,
)
from .valuation import (
    price_via_gordon_equation,
    nominal_dividend_growth,
    price_ddm,
    current_yield,
    implied_sentiment,
    evolve_security,
    evaluate_security,
    reverting_sentiment,
    realized_dividend_ratio,
    correlated_dividend_ratios,
    inflation_adjusted_savings,
)
from .portfolio import (
    consolidate_investment,
    diff,
    price_positions,
    to_trades,
    aggregated,
    calculate_statistics,
)
from .simulation import (
    pricing_process,
    invest_over_time,
    savings_trajectory,
    Trajectory,
    SavingsTrajectory,
)
from .period_manager import PeriodManager, DisplayProcesses, aggregate_investment_outcomes, deflate

__all__ = [
    # Model
    'Allocation', 'Bought', 'Dividend', 'DividendParams', 'InvestmentDecision',
    'InvestmentOutcome', 'InvestmentParams', 'MarketParams', 'MarketSentiment',
    'Outcome', 'SavingsParams', 'Security', 'SecurityAtTime', 'SentimentParams',
    'Sold', 'Statistics',
    # Valuation
    'price_via_gordon_equation', 'nominal_dividend_growth', 'price_ddm', 'current_yield',
    'implied_sentiment', 'evolve_security', 'evaluate_security', 'reverting_sentiment',
    'realized_dividend_ratio', 'correlated_dividend_ratios', 'inflation_adjusted_savings',
    # Portfolio
    'consolidate_investment', 'diff', 'price_positions', 'to_trades', 'aggregated',
    'calculate_statistics',
    # Simulation
    'pricing_process', 'invest_over_time', 'savings_trajectory', 'Trajectory', 'SavingsTrajectory',
    # Resampling
    'PeriodManager', 'DisplayProcesses', 'aggregate_investment_outcomes', 'deflate',
]
