"""
Summary, benefit attribution and goal analysis for plan comparisons.

All functions here are pure aggregations over already-computed trajectories.
"""

import math
from typing import Optional, Sequence, TYPE_CHECKING

import numpy as np
import pandas as pd

from .params import (
    TaxConfig,
    DEFAULT_TAX_CONFIG,
    OVERSEAS_DEFERRAL_SHARE,
    SURPLUS_OPPORTUNITY_SHARE,
    UserInput,
    YearlyResult,
    PlanSummary,
    ReportData,
    GoalAnalysis,
)

if TYPE_CHECKING:
    from .params import SimulationResult


ACCOUNT_FIELDS = ['pension', 'irp', 'isa', 'domestic', 'overseas', 'unallocated_cash']

# Achievement thresholds (percent of target)
GOAL_SUCCESS = 100
GOAL_CLOSE = 80

# Return-rate advice bands (percent)
CONSERVATIVE_RATE = 8
AGGRESSIVE_RATE = 10


# =============================================================================
# Plan Deltas
# =============================================================================

def summarize(
    user_plan: Sequence[YearlyResult],
    optimized_plan: Sequence[YearlyResult],
) -> PlanSummary:
    """Final-year and cumulative differences, optimized minus user."""
    final_difference = optimized_plan[-1].total_assets - user_plan[-1].total_assets

    credit_difference = (
        sum(r.tax_benefits.tax_credit for r in optimized_plan) -
        sum(r.tax_benefits.tax_credit for r in user_plan)
    )
    deferred_difference = (
        sum(r.tax_benefits.tax_deferred for r in optimized_plan) -
        sum(r.tax_benefits.tax_deferred for r in user_plan)
    )

    return PlanSummary(
        final_asset_difference=final_difference,
        total_tax_credit_difference=credit_difference,
        total_tax_deferred_difference=deferred_difference,
    )


def build_report(
    result: 'SimulationResult',
    unallocated_cash: float = 0,
    config: TaxConfig = DEFAULT_TAX_CONFIG,
) -> ReportData:
    """
    Attribute the optimized plan's advantage to its sources.

    The ISA benefit is the extra credit (including the conversion incentive)
    in maturity years. Overseas deferral and surplus opportunity cost are
    fixed shares of the aggregate deltas.

    Args:
        result: Completed plan comparison
        unallocated_cash: Monthly budget the user left unallocated
        config: Supplies the ISA maturity period

    Returns:
        ReportData with five benefit figures and the total
    """
    summary = result.summary
    n_years = config.isa_maturity_years

    isa_benefit = 0
    for i, (user_year, optimized_year) in enumerate(zip(result.user_plan, result.optimized_plan)):
        if i > 0 and i % n_years == 0:
            isa_benefit += optimized_year.tax_benefits.tax_credit - user_year.tax_benefits.tax_credit

    return ReportData(
        tax_credit_benefit=summary.total_tax_credit_difference,
        tax_deferred_benefit=summary.total_tax_deferred_difference,
        isa_optimization_benefit=isa_benefit,
        overseas_stock_benefit=summary.total_tax_deferred_difference * OVERSEAS_DEFERRAL_SHARE,
        surplus_opportunity_cost=summary.final_asset_difference * SURPLUS_OPPORTUNITY_SHARE,
        total_benefit=summary.final_asset_difference,
        unallocated_monthly=unallocated_cash,
    )


# =============================================================================
# Goal Analysis
# =============================================================================

def compute_required_monthly_savings(gap: float, monthly_rate: float, months: int) -> float:
    """
    Extra monthly saving that closes a gap by the horizon (PMT formula).

    PMT = gap * r / ((1 + r)^n - 1), falling back to gap / n at a zero rate.
    """
    if months <= 0:
        raise ValueError("months must be positive")

    if monthly_rate == 0:
        return gap / months

    denominator = (1 + monthly_rate) ** months - 1
    if denominator == 0:
        return gap / months
    return gap * monthly_rate / denominator


def analyze_goal(result: 'SimulationResult', user_input: UserInput) -> GoalAnalysis:
    """
    Compare the optimized plan's final assets against the target.

    Returns:
        GoalAnalysis; the savings and return-rate advice are only filled in
        when a target is set and not yet reached.
    """
    target = user_input.target_assets
    final_assets = result.optimized_plan[-1].total_assets
    achievement = final_assets / target * 100 if target > 0 else 0.0

    if achievement >= GOAL_SUCCESS:
        status = 'success'
    elif achievement >= GOAL_CLOSE:
        status = 'close'
    else:
        status = 'gap'

    if status == 'success' or target <= 0:
        return GoalAnalysis(achievement_rate=achievement, status=status)

    horizon = user_input.horizon
    required = compute_required_monthly_savings(
        gap=target - final_assets,
        monthly_rate=user_input.expected_return_rate / 12 / 100,
        months=horizon * 12,
    )

    rate = user_input.expected_return_rate
    suggested: Optional[int] = None
    if rate < CONSERVATIVE_RATE:
        advice = (f"An expected return of {rate:g}% is conservative; broader equity "
                  f"exposure (S&P 500 ~10%, Nasdaq ~14% historically) would help reach the goal.")
    elif rate >= AGGRESSIVE_RATE:
        advice = (f"An expected return of {rate:g}% is already aggressive; consider saving "
                  f"more or retiring later.")
    elif final_assets > 0:
        suggested = math.ceil((target / final_assets) ** (1 / horizon) * 100 - 100)
        advice = f"Raising the expected return to {suggested}% would help reach the goal."
    else:
        advice = "Raise monthly savings; the plan accumulates no assets at this return."

    return GoalAnalysis(
        achievement_rate=achievement,
        status=status,
        required_monthly_savings=required,
        return_rate_advice=advice,
        suggested_return_rate=suggested,
    )


# =============================================================================
# Tabular Export
# =============================================================================

def results_to_dataframe(result: 'SimulationResult') -> pd.DataFrame:
    """
    Year-by-year comparison table indexed by age.

    Columns: year, user_total, optimized_total, difference, then per-account
    balances prefixed with user_ / optimized_.
    """
    data = {
        'age': result.ages,
        'year': np.array([r.year for r in result.user_plan]),
        'user_total': result.user_total_assets,
        'optimized_total': result.optimized_total_assets,
        'difference': result.asset_difference,
    }
    for account in ACCOUNT_FIELDS:
        data[f'user_{account}'] = result.balances(account, 'user')
    for account in ACCOUNT_FIELDS:
        data[f'optimized_{account}'] = result.balances(account, 'optimized')

    return pd.DataFrame(data).set_index('age')


def compute_summary_table(result: 'SimulationResult', report: ReportData) -> pd.DataFrame:
    """One-row-per-metric table of the headline figures (만원)."""
    rows = [
        ('User Plan Final Assets', result.user_plan[-1].total_assets),
        ('Optimized Plan Final Assets', result.optimized_plan[-1].total_assets),
        ('Final Asset Difference', result.summary.final_asset_difference),
        ('Tax Credit Reinvestment', report.tax_credit_benefit),
        ('Tax Deferral', report.tax_deferred_benefit),
        ('ISA Maturity Conversion', report.isa_optimization_benefit),
        ('Overseas Equity Deferral', report.overseas_stock_benefit),
        ('Unallocated Cash Opportunity Cost', report.surplus_opportunity_cost),
        ('Total Benefit', report.total_benefit),
    ]
    return pd.DataFrame(rows, columns=['Metric', 'Value']).set_index('Metric')


def format_amount(value: float) -> str:
    """Render a 만원 figure as 억/만원 text, e.g. 12345 -> '1억 2,345만원'."""
    value = int(value)
    if value >= 10000:
        eok, man = divmod(value, 10000)
        return f"{eok}억 {man:,}만원" if man > 0 else f"{eok}억원"
    return f"{value:,}만원"
