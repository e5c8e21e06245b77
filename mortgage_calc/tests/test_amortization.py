import logging
import math

import pytest

from mortgage_calc.core.amortization import (
    MAX_PERIODS,
    LoanTerms,
    ScheduleResult,
    aggregate_yearly,
    compute_periodic_payment,
    generate_schedule,
    generate_schedule_for,
)


def test_fixed_payment_known_case():
    # 300k @6% over 30y ~ 1798.65
    payment = compute_periodic_payment(300_000, 6, 30)
    assert math.isclose(payment, 1798.65, abs_tol=0.01)


def test_fixed_payment_twenty_years():
    # Known approximate monthly payment for 100k @5% over 20y ~ 659.96
    payment = compute_periodic_payment(100_000, 5, 20)
    assert math.isclose(payment, 659.96, rel_tol=1e-3, abs_tol=1e-1)


def test_zero_interest_is_straight_line():
    assert compute_periodic_payment(120_000, 0, 10) == 1000.0
    assert math.isclose(compute_periodic_payment(100_000, 0, 10), 100_000 / 120)


@pytest.mark.parametrize(
    "principal, rate, years",
    [(-100, 5, 30), (100_000, 5, 0), (0, 0, 0), (100_000, 5, -1), (100_000, 5, 0.01)],
)
def test_payment_is_zero_for_unusable_inputs(principal, rate, years):
    assert compute_periodic_payment(principal, rate, years) == 0.0


def test_payment_non_finite_inputs():
    assert compute_periodic_payment(math.nan, 5, 30) == 0.0
    assert compute_periodic_payment(100_000, math.inf, 30) == 0.0
    assert compute_periodic_payment(100_000, 5, math.inf) == 0.0


def test_growth_factor_overflow_falls_back_to_straight_line():
    assert compute_periodic_payment(1_000, 1_000_000, 50) == 1_000 / 600


def test_schedule_thirty_year_loan():
    result = generate_schedule(300_000, 6, 30, 0)
    assert result.periods_used == 360
    assert len(result.periods) == 360
    assert result.periods[-1].remaining_balance == 0.0

    first = result.periods[0]
    assert first.period == 1
    assert first.payment == 1798.65
    assert first.interest_portion == 1500.0
    assert first.principal_portion == 298.65
    assert first.remaining_balance == 299_701.35


def test_principal_portions_sum_to_principal():
    result = generate_schedule(300_000, 6, 30, 0)
    paid = sum(p.principal_portion for p in result.periods)
    assert paid == pytest.approx(300_000, abs=0.05)
    assert result.total_payment == pytest.approx(300_000 + result.total_interest, abs=0.05)


def test_zero_interest_schedule():
    result = generate_schedule(100_000, 0, 10, 0)
    assert result.periods_used == 120
    assert result.total_interest == 0.0
    assert all(p.interest_portion == 0.0 for p in result.periods)
    assert result.periods[-1].remaining_balance == 0.0
    assert result.total_payment == pytest.approx(100_000, abs=0.01)


def test_extra_payment_shortens_term():
    base = generate_schedule(300_000, 6, 30, 0)
    extra = generate_schedule(300_000, 6, 30, 200)
    assert extra.periods_used < 360
    assert extra.total_interest < base.total_interest
    assert extra.periods[0].payment == 1998.65
    assert extra.periods[-1].remaining_balance == 0.0


def test_final_payment_clamped_to_payoff():
    result = generate_schedule(100_000, 6, 30, 1_000_000)
    assert result.periods_used == 1
    only = result.periods[0]
    assert only.payment == 100_500.0
    assert only.interest_portion == 500.0
    assert only.remaining_balance == 0.0


def test_negative_or_missing_extra_payment_is_ignored():
    base = generate_schedule(250_000, 4.5, 15, 0)
    assert generate_schedule(250_000, 4.5, 15, -50) == base
    assert generate_schedule(250_000, 4.5, 15, None) == base
    assert generate_schedule(250_000, 4.5, 15) == base


@pytest.mark.parametrize(
    "principal, rate, years",
    [(-100, 5, 30), (100_000, 5, 0), (0, 0, 0), (math.nan, 5, 30), (100_000, math.nan, 30)],
)
def test_invalid_inputs_yield_empty_schedule(principal, rate, years):
    result = generate_schedule(principal, rate, years, 0)
    assert result.periods == ()
    assert result.total_interest == 0
    assert result.total_payment == 0
    assert result.periods_used == 0
    assert result.is_empty
    assert result == ScheduleResult.empty()


@pytest.mark.parametrize(
    "principal, rate, years, extra",
    [
        (300_000, 6, 30, 0),
        (300_000, 6, 30, 200),
        (1_000, 25, 1, 0),
        (10_000_000, 25, 50, 0),
        (123_456.78, 3.875, 17, 55.55),
        (5_000, 0, 3, 1_000),
    ],
)
def test_schedule_invariants(principal, rate, years, extra):
    result = generate_schedule(principal, rate, years, extra)
    n_months = round(years * 12)
    assert 0 < result.periods_used <= min(n_months, MAX_PERIODS)
    assert [p.period for p in result.periods] == list(range(1, result.periods_used + 1))

    balances = [p.remaining_balance for p in result.periods]
    assert all(b >= 0 for b in balances)
    assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))
    assert balances[-1] == 0.0

    for p in result.periods:
        assert abs(p.payment - (p.principal_portion + p.interest_portion)) < 1e-9

    assert sum(p.principal_portion for p in result.periods) == pytest.approx(principal, abs=0.05)


def test_schedule_is_deterministic():
    assert generate_schedule(321_000, 5.25, 25, 75) == generate_schedule(321_000, 5.25, 25, 75)


def test_hard_cap_truncates_long_terms(caplog):
    with caplog.at_level(logging.WARNING, logger="mortgage_calc"):
        result = generate_schedule(100_000, 6, 100, 0)
    assert result.periods_used == MAX_PERIODS
    assert result.periods[-1].remaining_balance > 0
    assert "truncated" in caplog.text


def test_generate_schedule_for_terms():
    terms = LoanTerms(principal=200_000, annual_rate_percent=4, term_years=25, extra_payment=100)
    assert terms.period_count == 300
    assert generate_schedule_for(terms) == generate_schedule(200_000, 4, 25, 100)


def test_to_frame_and_yearly_aggregation():
    result = generate_schedule(200_000, 4, 25, 0)
    df = result.to_frame()
    assert list(df.columns) == ["period", "payment", "principal", "interest", "balance"]
    assert len(df) == 300
    assert df.iloc[-1]["balance"] == 0.0

    yearly = aggregate_yearly(df)
    assert list(yearly.columns) == ["year", "months", "payment", "interest", "principal", "end_balance"]
    assert len(yearly) == 25
    assert (yearly["months"] == 12).all()
    assert yearly.iloc[-1]["end_balance"] == 0.0
    assert yearly["principal"].sum() == pytest.approx(200_000, abs=0.05)


def test_yearly_aggregation_partial_final_year():
    result = generate_schedule(300_000, 6, 30, 200)
    yearly = aggregate_yearly(result.to_frame())
    assert yearly["months"].sum() == result.periods_used
    assert yearly.iloc[-1]["months"] == result.periods_used - 12 * (len(yearly) - 1)
    assert yearly.iloc[-1]["end_balance"] == 0.0
    assert yearly["interest"].sum() == pytest.approx(result.total_interest)


def test_huge_extra_payment_settles_in_one_period():
    for extra in (1e307, math.inf):
        result = generate_schedule(100_000, 6, 30, extra)
        assert result.periods_used == 1
        assert result.periods[0].payment == 100_500.0
        assert result.periods[0].remaining_balance == 0.0


def test_huge_principal_does_not_raise():
    result = generate_schedule(1e307, 5, 30, 0)
    assert 0 < result.periods_used <= 361
    balances = [p.remaining_balance for p in result.periods]
    assert all(b >= 0 for b in balances)
    assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))


def test_payment_below_interest_is_interest_only_until_cap():
    # Growth factor overflows, so the straight-line payment never covers interest
    result = generate_schedule(100_000, 1_000_000, 50, 0)
    assert result.periods_used == MAX_PERIODS

    interest_only = result.periods[:-1]
    assert all(p.principal_portion == 0.0 for p in interest_only)
    assert all(p.payment == p.interest_portion for p in interest_only)
    assert all(p.remaining_balance == 100_000 for p in interest_only)

    balloon = result.periods[-1]
    assert balloon.principal_portion == 100_000
    assert balloon.remaining_balance == 0.0
    for p in result.periods:
        assert abs(p.payment - (p.principal_portion + p.interest_portion)) < 1e-9


def test_empty_schedule_frames():
    df = ScheduleResult.empty().to_frame()
    assert df.empty
    assert list(df.columns) == ["period", "payment", "principal", "interest", "balance"]
    assert aggregate_yearly(df).empty
