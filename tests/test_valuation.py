#!/usr/bin/env python3
"""
Tests for Gordon pricing, security evolution and sentiment.
"""

import math

import pytest

from esgsim.engine.model import (
    DividendParams,
    MarketParams,
    MarketSentiment,
    SavingsParams,
    Security,
    SentimentParams,
)
from esgsim.engine.valuation import (
    correlated_dividend_ratios,
    current_yield,
    evaluate_security,
    evolve_security,
    implied_sentiment,
    inflation_adjusted_savings,
    nominal_dividend_growth,
    price_ddm,
    price_via_gordon_equation,
    realized_dividend_ratio,
    reverting_sentiment,
)
from esgsim.metrics import correlation, sample_stats
from esgsim.processes import constant, take

SECURITY = Security(current_annual_dividends=1, real_dividend_growth=0.003)


def test_gordon_price():
    assert price_via_gordon_equation(1, 0.055, 0.003) == pytest.approx(19.2307692308, abs=1e-9)


def test_gordon_price_is_infinite_at_pole():
    assert price_via_gordon_equation(1.1, 0.04, 0.04) == math.inf


def test_gordon_price_is_infinite_below_growth():
    assert price_via_gordon_equation(1.1, 0.01, 0.04) == math.inf


def test_nominal_dividend_growth(market):
    security = Security(current_annual_dividends=1.1, real_dividend_growth=0.003)
    assert nominal_dividend_growth(security, market) == pytest.approx(0.023, abs=1e-10)


def test_current_yield():
    security = Security(current_annual_dividends=1.1, real_dividend_growth=0.003)
    assert current_yield(security, 100) == pytest.approx(0.011, abs=1e-10)


def test_implied_sentiment(market):
    assert implied_sentiment(SECURITY, 10, market).discount_rate == pytest.approx(0.123, abs=1e-12)


def test_implied_sentiment_reprices_security(market, equity):
    sentiment = implied_sentiment(equity, 200, market)
    assert price_ddm(equity, market, sentiment) == pytest.approx(200)


def test_price_ddm_uses_nominal_growth(market):
    price = price_ddm(SECURITY, market, MarketSentiment(discount_rate=0.055))
    assert price == pytest.approx(31.25, abs=1e-10)


def test_evolve_security_compounds_monthly(market):
    evolved = evolve_security(market, SECURITY)
    assert evolved.current_annual_dividends == pytest.approx(1.0019166666666666, abs=1e-12)
    assert evolved.real_dividend_growth == 0.003

    price = price_ddm(SECURITY, market, MarketSentiment(discount_rate=0.055))
    assert current_yield(evolved, price) == pytest.approx(0.0320613333333, abs=1e-10)


def test_evolve_security_applies_realized_ratio(market):
    evolved = evolve_security(market, SECURITY, 0.5)
    assert evolved.current_annual_dividends == pytest.approx(0.5 * 1.0019166666666666)


def test_evaluate_security(market, equity):
    sentiment = implied_sentiment(equity, 200, market)
    prices = take(3, evaluate_security(market, equity, constant(sentiment), start_time=5))

    assert [p.time for p in prices] == [5, 6, 7]
    assert prices[0].price == pytest.approx(200)
    assert prices[1].security.current_annual_dividends == pytest.approx(20 * (1 + 0.023 / 12))
    assert prices[2].price == pytest.approx(200 * (1 + 0.023 / 12) ** 2)


def test_inflation_adjusted_savings(market):
    savings = take(3, inflation_adjusted_savings(market, SavingsParams(1000)))
    assert [s.monthly_investment for s in savings] == pytest.approx(
        [1000, 1000 * (1 + 0.02 / 12), 1000 * (1 + 0.02 / 12) ** 2]
    )


def test_reverting_sentiment_starts_at_initial_and_stays_above_floor(market):
    initial = MarketSentiment(discount_rate=0.063)
    params = SentimentParams(reversion_strength=0.1, log_excess_std=0.3)
    sentiment = take(500, reverting_sentiment(market, 0.023, initial, params).pick(17))

    assert sentiment[0] == initial
    assert all(s.discount_rate > 0.023 for s in sentiment)


def test_reverting_sentiment_reverts_to_long_run(market):
    initial = MarketSentiment(discount_rate=0.2)
    params = SentimentParams(reversion_strength=0.3, log_excess_std=0.0, long_run_discount_rate=0.05)
    sentiment = take(100, reverting_sentiment(market, 0.02, initial, params).pick(1))
    assert sentiment[-1].discount_rate == pytest.approx(0.05, abs=1e-6)


def test_reverting_sentiment_is_reproducible(market):
    generator = reverting_sentiment(market, 0.023, MarketSentiment(0.06))
    assert take(50, generator.pick(3)) == take(50, generator.pick(3))


@pytest.mark.parametrize("rate", [0.023, 0.01])
def test_reverting_sentiment_rejects_rate_at_or_below_floor(market, rate):
    with pytest.raises(ValueError, match="must be above the dividend growth floor"):
        reverting_sentiment(market, 0.023, MarketSentiment(rate))


def test_realized_dividend_ratio_is_lognormal_around_one():
    ratios = take(2000, realized_dividend_ratio(DividendParams(0.12)).pick(8))
    log_mean, log_std = sample_stats([math.log(r) for r in ratios])
    assert all(r > 0 for r in ratios)
    assert log_mean == pytest.approx(0, abs=0.01)
    assert log_std == pytest.approx(0.12 / math.sqrt(12), rel=0.1)


def test_correlated_dividend_ratios():
    ratios = correlated_dividend_ratios(['a', 'b'], DividendParams(0.2, correlation=0.6)).pick(31)
    a = [math.log(r) for r in take(20000, ratios['a'])]
    b = [math.log(r) for r in take(20000, ratios['b'])]
    assert correlation(a, b) == pytest.approx(0.6, abs=0.03)
    assert sample_stats(a)[1] == pytest.approx(0.2 / math.sqrt(12), rel=0.05)
