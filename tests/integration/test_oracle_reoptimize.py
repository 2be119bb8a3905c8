"""Re-optimization against committed history."""

from __future__ import annotations

from conftest import DAY, FEED_PRICES, PRINCIPAL, START
from interval_oracle.core.volatility import next_volatility

E8 = 10**8

# Fifteen-day history; the last fourteen days form the window.
WINDOW_PRICES = [
    p * E8
    for p in (1300, 1400, 1320, 1300, 1310, 1340, 1300, 1400, 1320, 1300, 1310, 1300, 1310, 1300)
]
WINDOW_VOLS = [90 * 10**6] * 14


def _fifteen_days(make_scenario):
    s = make_scenario(FEED_PRICES * 6, now=START + 15 * DAY + 3600)
    committed = s.oracle.catch_up(PRINCIPAL)
    assert len(committed) == 15
    return s


def test_reoptimize_regression_vector(make_scenario) -> None:
    o = _fifteen_days(make_scenario).oracle
    o.insert_historical_window(PRINCIPAL, WINDOW_PRICES, WINDOW_VOLS)
    o.set_optimized_parameters(PRINCIPAL, 9100)
    assert o.get_current_parameters() == (9100, 14)
    assert o.get_volatility_at(START + 15 * DAY) == 74_483_675
    assert o.get_current_volatility() == 74_483_675


def test_reoptimize_rewrites_only_window_volatilities(make_scenario) -> None:
    o = _fifteen_days(make_scenario).oracle
    before = list(o.history.points())
    o.insert_historical_window(PRINCIPAL, WINDOW_PRICES, WINDOW_VOLS)
    plan = o.set_optimized_parameters(PRINCIPAL, 9100)
    after = list(o.history.points())

    assert [p.bucket for p in after] == [p.bucket for p in before]
    assert [p.price for p in after] == [p.price for p in before]
    # The two oldest buckets precede the window.
    assert after[:2] == before[:2]
    assert plan.buckets[0] == START + 2 * DAY
    assert [p.volatility for p in after[2:]] == list(plan.volatilities)


def test_reoptimize_with_same_lambda_still_recomputes(make_scenario) -> None:
    o = _fifteen_days(make_scenario).oracle
    o.insert_historical_window(PRINCIPAL, WINDOW_PRICES, WINDOW_VOLS)
    o.set_optimized_parameters(PRINCIPAL, 9500)
    first = [p.volatility for p in o.history.points()]
    o.set_optimized_parameters(PRINCIPAL, 9500)
    assert [p.volatility for p in o.history.points()] == first
    assert o.get_current_parameters()[0] == 9500
    assert o.get_volatility_at(START + 2 * DAY) == 90 * 10**6


def test_advance_after_reoptimize_uses_new_lambda(make_scenario) -> None:
    s = _fifteen_days(make_scenario)
    o = s.oracle
    o.insert_historical_window(PRINCIPAL, WINDOW_PRICES, WINDOW_VOLS)
    o.set_optimized_parameters(PRINCIPAL, 9100)
    s.clock.advance(DAY)
    point = o.advance_one(PRINCIPAL, 0)

    prior_price = o.get_price_at(START + 15 * DAY)
    assert point.volatility == next_volatility(74_483_675, 9100, prior_price, point.price)
