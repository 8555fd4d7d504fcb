"""
Tests for plan summaries, benefit attribution, goal analysis and table export.
"""

from dataclasses import replace

import pytest

from fire_core import (
    DEFAULT_TAX_CONFIG,
    OVERSEAS_DEFERRAL_SHARE,
    SURPLUS_OPPORTUNITY_SHARE,
    UserInput,
    Allocation,
    run_simulation,
    summarize,
    build_report,
    analyze_goal,
    compute_required_monthly_savings,
    results_to_dataframe,
    compute_summary_table,
    format_amount,
)


USER_INPUT = UserInput(
    current_age=30,
    target_age=55,
    target_assets=0,
    current_assets=0,
    monthly_savings=300,
    expected_return_rate=7.0,
)
USER_ALLOCATION = Allocation(pension=20, domestic=100, overseas=80)


@pytest.fixture(scope="module")
def result():
    return run_simulation(USER_INPUT, USER_ALLOCATION)


@pytest.fixture(scope="module")
def report(result):
    return build_report(result, USER_ALLOCATION.unallocated(USER_INPUT.monthly_savings))


# =============================================================================
# Summary
# =============================================================================

def test_summary_final_difference(result):
    expected = result.optimized_plan[-1].total_assets - result.user_plan[-1].total_assets
    assert result.summary.final_asset_difference == expected


def test_summary_cumulative_differences(result):
    """Cumulative deltas are sums over every year of each plan's records."""
    credit_opt = sum(r.tax_benefits.tax_credit for r in result.optimized_plan)
    credit_user = sum(r.tax_benefits.tax_credit for r in result.user_plan)
    deferred_opt = sum(r.tax_benefits.tax_deferred for r in result.optimized_plan)
    deferred_user = sum(r.tax_benefits.tax_deferred for r in result.user_plan)

    summary = summarize(result.user_plan, result.optimized_plan)
    assert summary.total_tax_credit_difference == credit_opt - credit_user
    assert summary.total_tax_deferred_difference == deferred_opt - deferred_user
    assert summary == result.summary


# =============================================================================
# Benefit Report
# =============================================================================

def test_report_fixed_attribution_shares(result, report):
    """Overseas deferral and opportunity cost are fixed shares of the deltas."""
    summary = result.summary
    assert report.overseas_stock_benefit == pytest.approx(
        OVERSEAS_DEFERRAL_SHARE * summary.total_tax_deferred_difference)
    assert report.surplus_opportunity_cost == pytest.approx(
        SURPLUS_OPPORTUNITY_SHARE * summary.final_asset_difference)
    assert report.total_benefit == summary.final_asset_difference
    assert report.tax_credit_benefit == summary.total_tax_credit_difference
    assert report.tax_deferred_benefit == summary.total_tax_deferred_difference


def test_report_isa_benefit_counts_maturity_years_only(result, report):
    """ISA benefit sums credit deltas at years 3, 6, 9, ... (never year 0)."""
    period = DEFAULT_TAX_CONFIG.isa_maturity_years
    expected = sum(
        o.tax_benefits.tax_credit - u.tax_benefits.tax_credit
        for o, u in zip(result.optimized_plan, result.user_plan)
        if o.year > 0 and o.year % period == 0
    )
    assert report.isa_optimization_benefit == expected
    assert report.isa_optimization_benefit > 0


def test_report_echoes_unallocated_cash(report):
    assert report.unallocated_monthly == 100


def test_optimized_allocation_is_full_budget(result):
    """300/month: pension to the combined cap, ISA seeded then topped up."""
    assert result.optimized_allocation == Allocation(pension=125, irp=25, isa=150)


# =============================================================================
# Goal Analysis
# =============================================================================

def test_required_monthly_savings_zero_rate():
    assert compute_required_monthly_savings(1200, 0, 12) == 100


def test_required_monthly_savings_single_period():
    """With one period the annuity factor is 1."""
    assert compute_required_monthly_savings(1000, 0.01, 1) == pytest.approx(1000)


def test_required_monthly_savings_compounding_reduces_payment():
    assert compute_required_monthly_savings(1200, 0.005, 12) < 100


def test_required_monthly_savings_rejects_empty_horizon():
    with pytest.raises(ValueError):
        compute_required_monthly_savings(1000, 0.01, 0)


def test_goal_without_target(result):
    goal = analyze_goal(result, USER_INPUT)
    assert goal.achievement_rate == 0
    assert goal.required_monthly_savings is None
    assert goal.return_rate_advice is None


def test_goal_reached(result):
    goal = analyze_goal(result, replace(USER_INPUT, target_assets=100))
    assert goal.status == 'success'
    assert goal.achievement_rate > 100
    assert goal.required_monthly_savings is None


def test_goal_close_with_suggested_rate():
    """Between 8% and 10% the advice names a concrete return rate."""
    user_input = replace(USER_INPUT, expected_return_rate=9.0)
    result = run_simulation(user_input, USER_ALLOCATION)
    final = result.optimized_plan[-1].total_assets

    goal = analyze_goal(result, replace(user_input, target_assets=final * 1.1))
    assert goal.status == 'close'
    assert goal.achievement_rate == pytest.approx(100 / 1.1)
    assert goal.required_monthly_savings > 0
    assert goal.suggested_return_rate is not None
    assert goal.suggested_return_rate >= 1


def test_goal_gap_advice_by_rate_band(result):
    final = result.optimized_plan[-1].total_assets

    goal = analyze_goal(result, replace(USER_INPUT, target_assets=final * 3,
                                        expected_return_rate=5.0))
    assert goal.status == 'gap'
    assert 'conservative' in goal.return_rate_advice
    assert goal.suggested_return_rate is None

    goal = analyze_goal(result, replace(USER_INPUT, target_assets=final * 3,
                                        expected_return_rate=12.0))
    assert 'aggressive' in goal.return_rate_advice


# =============================================================================
# Tabular Export
# =============================================================================

def test_dataframe_matches_trajectories(result):
    df = results_to_dataframe(result)
    assert df.index.name == 'age'
    assert len(df) == USER_INPUT.horizon + 1
    assert list(df.index) == list(range(30, 56))
    assert (df['difference'] == df['optimized_total'] - df['user_total']).all()
    assert df['optimized_isa'].iloc[3] == 0
    assert df['user_unallocated_cash'].iloc[-1] > 0
    assert (df['optimized_unallocated_cash'] == 0).all()


def test_summary_table(result, report):
    table = compute_summary_table(result, report)
    assert table.loc['Total Benefit', 'Value'] == result.summary.final_asset_difference
    assert table.loc['Optimized Plan Final Assets', 'Value'] == result.optimized_plan[-1].total_assets


@pytest.mark.parametrize("value, expected", [
    (5000, '5,000만원'),
    (10000, '1억원'),
    (12345, '1억 2,345만원'),
    (250000, '25억원'),
])
def test_format_amount(value, expected):
    assert format_amount(value) == expected
