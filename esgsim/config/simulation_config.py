#!/usr/bin/env python3
"""
Configuration of savings simulations.

Holds the economic environment, the instruments, the savings plan and the
Monte Carlo settings of a run. Rates are annual fractions (0.02 == 2%).
"""

import json
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Optional

from ..engine.model import (
    DividendParams,
    InvestmentParams,
    MarketParams,
    SavingsParams,
    SentimentParams,
)
from ..engine.period_manager import FREQUENCY_MONTHS
from ..strategies.registry import list_strategies


@dataclass
class SimulationConfig:
    """
    Settings of a savings simulation run.

    Instruments are keyed by id; each entry holds 'current_dividend_yield' and
    'real_dividend_growth'. Allocation weights default to equal weights.
    """

    # ============================================================================
    # Economic Environment
    # ============================================================================
    inflation: float = 0.02                         # Annual inflation
    realized_dividend_annual_std: float = 0.05      # Dividend realisation std as fraction of dividend level
    dividend_correlation: float = 0.5               # Correlation of dividend realisations between instruments

    # Sentiment (discount rate excess over the growth floor, in log space)
    sentiment_reversion_strength: float = 0.1
    sentiment_log_excess_std: float = 0.04
    long_run_discount_rate: Optional[float] = None  # None = initial implied discount rate

    # ============================================================================
    # Instruments & Savings Plan
    # ============================================================================
    instruments: Dict[str, Dict[str, float]] = field(default_factory=lambda: {
        'equity': {'current_dividend_yield': 0.04, 'real_dividend_growth': 0.003},
    })
    allocation: Optional[Dict[str, float]] = None   # Initial weights per instrument (None = equal)

    initial_portfolio_value: float = 250_000        # Starting value ($)
    monthly_investment: float = 1000                # Monthly savings in today's dollars
    strategy: str = 'full_rebalancing'              # See strategies.list_strategies()
    invest_savings: bool = True                     # Invest monthly savings on top of the strategy

    # ============================================================================
    # Monte Carlo & Reporting
    # ============================================================================
    num_mc_simulations: int = 100
    seed: int = 0                                   # Seed of the first trajectory; trajectory i uses seed + i
    simulation_horizon_years: int = 30
    display_frequency: str = 'annual'               # 'monthly', 'quarterly', 'semi-annual', 'annual'
    adjust_for_inflation: bool = False              # Report in dollars of month 0

    # ============================================================================
    # Validation
    # ============================================================================

    def __post_init__(self):
        """Validate configuration parameters."""
        if not (-0.5 <= self.inflation <= 0.5):
            raise ValueError(f"inflation must be between -0.5 and 0.5, got {self.inflation}")

        if self.realized_dividend_annual_std < 0:
            raise ValueError(f"realized_dividend_annual_std cannot be negative, got {self.realized_dividend_annual_std}")

        if not (-1 <= self.dividend_correlation <= 1):
            raise ValueError(f"dividend_correlation must be between -1 and 1, got {self.dividend_correlation}")

        if self.sentiment_reversion_strength < 0:
            raise ValueError(f"sentiment_reversion_strength cannot be negative, got {self.sentiment_reversion_strength}")

        if self.sentiment_log_excess_std < 0:
            raise ValueError(f"sentiment_log_excess_std cannot be negative, got {self.sentiment_log_excess_std}")

        if not self.instruments:
            raise ValueError("instruments must define at least one instrument")

        for name, params in self.instruments.items():
            missing = {'current_dividend_yield', 'real_dividend_growth'} - set(params)
            if missing:
                raise ValueError(f"instrument '{name}' is missing {sorted(missing)}")
            if params['current_dividend_yield'] <= 0:
                raise ValueError(f"instrument '{name}' needs a positive current_dividend_yield, "
                                 f"got {params['current_dividend_yield']}")

        if self.long_run_discount_rate is not None:
            floor_growth = max(p['real_dividend_growth'] for p in self.instruments.values()) + self.inflation
            if self.long_run_discount_rate <= floor_growth:
                raise ValueError(f"long_run_discount_rate must be above the largest nominal dividend growth "
                                 f"{floor_growth}, got {self.long_run_discount_rate}")

        if self.allocation is not None:
            if set(self.allocation) != set(self.instruments):
                raise ValueError(f"allocation keys {sorted(self.allocation)} must match instruments {sorted(self.instruments)}")
            total = sum(self.allocation.values())
            if abs(total - 1.0) > 1e-9:
                raise ValueError(f"allocation weights must sum to 1, got {total}")

        if self.initial_portfolio_value < 0:
            raise ValueError(f"initial_portfolio_value cannot be negative, got {self.initial_portfolio_value}")

        if self.monthly_investment < 0:
            raise ValueError(f"monthly_investment cannot be negative, got {self.monthly_investment}")

        valid_strategies = list_strategies()
        if self.strategy not in valid_strategies:
            raise ValueError(f"strategy must be one of {valid_strategies}, got '{self.strategy}'")

        if self.num_mc_simulations < 1:
            raise ValueError(f"num_mc_simulations must be at least 1, got {self.num_mc_simulations}")

        if self.simulation_horizon_years <= 0:
            raise ValueError(f"simulation_horizon_years must be positive, got {self.simulation_horizon_years}")

        if self.display_frequency not in FREQUENCY_MONTHS:
            raise ValueError(f"display_frequency must be one of {list(FREQUENCY_MONTHS)}, "
                             f"got '{self.display_frequency}'")

    # ============================================================================
    # Serialization
    # ============================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'SimulationConfig':
        """Create SimulationConfig from dictionary."""
        return cls(**config_dict)

    @classmethod
    def from_json(cls, filepath: str) -> 'SimulationConfig':
        """Load SimulationConfig from JSON file."""
        with open(filepath, 'r') as f:
            config_dict = json.load(f)
        # Remove comment keys (convention: keys starting with '_')
        config_dict = {k: v for k, v in config_dict.items() if not k.startswith('_')}
        return cls.from_dict(config_dict)

    def to_json(self, filepath: str, indent: int = 2) -> None:
        """Save SimulationConfig to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=indent)

    # ============================================================================
    # Utility Methods
    # ============================================================================

    def get_market_params(self) -> MarketParams:
        return MarketParams(inflation=self.inflation)

    def get_investment_params(self) -> Dict[str, InvestmentParams]:
        return {
            name: InvestmentParams(
                current_dividend_yield=params['current_dividend_yield'],
                real_dividend_growth=params['real_dividend_growth']
            )
            for name, params in self.instruments.items()
        }

    def get_dividend_params(self) -> DividendParams:
        return DividendParams(
            realized_dividend_annual_std=self.realized_dividend_annual_std,
            correlation=self.dividend_correlation
        )

    def get_savings_params(self) -> SavingsParams:
        return SavingsParams(monthly_investment=self.monthly_investment)

    def get_sentiment_params(self) -> SentimentParams:
        return SentimentParams(
            reversion_strength=self.sentiment_reversion_strength,
            log_excess_std=self.sentiment_log_excess_std,
            long_run_discount_rate=self.long_run_discount_rate
        )

    def get_display_months(self) -> int:
        """Months per reporting period of display_frequency."""
        return FREQUENCY_MONTHS[self.display_frequency]

    def get_num_periods(self) -> int:
        """Reporting periods within the simulation horizon."""
        return self.simulation_horizon_years * 12 // self.get_display_months()

    def get_seeds(self) -> range:
        return range(self.seed, self.seed + self.num_mc_simulations)


# Default configuration
DEFAULT_SIMULATION_CONFIG = SimulationConfig()


def load_simulation_config(filepath: str = None) -> SimulationConfig:
    """
    Load simulation configuration from file or return default.

    Parameters:
    -----------
    filepath : str, optional
        Path to JSON config file. If None, returns default config.

    Returns:
    --------
    SimulationConfig instance
    """
    if filepath is None:
        return DEFAULT_SIMULATION_CONFIG
    return SimulationConfig.from_json(filepath)
