#!/usr/bin/env python3
"""Shared fixtures for the esgsim test suite."""

import os
import sys

import pytest

# Add project root to path for imports
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from esgsim.engine.model import (  # noqa: E402
    Allocation,
    MarketParams,
    SavingsParams,
    Security,
    SecurityAtTime,
)


@pytest.fixture
def market():
    return MarketParams(inflation=0.02)


@pytest.fixture
def equity():
    """Security paying $20 a year per share with 0.3% real growth."""
    return Security(current_annual_dividends=20, real_dividend_growth=0.003)


@pytest.fixture
def holding():
    return {'equity': Allocation(number_of_shares=3)}


@pytest.fixture
def savings():
    return SavingsParams(monthly_investment=1000)


@pytest.fixture
def no_savings():
    return SavingsParams(monthly_investment=0)


def pricing_of(security, price, time=0, key='equity'):
    return {key: SecurityAtTime(time=time, security=security, price=price)}
