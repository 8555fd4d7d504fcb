"""
Simulation engine for the tax-advantaged savings plan comparison.

This module contains the year-by-year stepping logic that forms the core
computational engine: growth, contribution, tax-credit reinvestment, dividend
taxation and the ISA maturity rollover, applied identically to the user plan
and the optimized plan.
"""

import math
from dataclasses import replace
from typing import List, Tuple

from .params import (
    TaxConfig,
    DEFAULT_TAX_CONFIG,
    UserInput,
    Allocation,
    AccountState,
    AccountBreakdown,
    TaxBenefits,
    YearlyResult,
    SimulationResult,
)
from .optimizer import optimize_allocation
from .report import summarize


# =============================================================================
# Yearly Steps (order matters: each step sees balances mutated by the last)
# =============================================================================

def apply_growth(state: AccountState, rate: float, config: TaxConfig) -> float:
    """
    Compound every balance for one year.

    Pension, IRP, ISA and overseas equity grow at the full rate. Domestic
    equity and unallocated cash grow at the after-tax rate
    rate * (1 - cash_account_tax_rate).

    Returns:
        Tax paid on taxable-account growth this year (not reinvested)
    """
    tax_rate = config.cash_account_tax_rate

    state.pension *= 1 + rate
    state.irp *= 1 + rate
    state.isa *= 1 + rate
    state.overseas *= 1 + rate

    cash_tax = (state.domestic + state.unallocated_cash) * rate * tax_rate
    state.domestic *= 1 + rate * (1 - tax_rate)
    state.unallocated_cash *= 1 + rate * (1 - tax_rate)
    return cash_tax


def apply_contribution(
    state: AccountState,
    allocation: Allocation,
    unallocated_monthly: float,
) -> None:
    """Add twelve months of contributions to each balance."""
    state.pension += allocation.pension * 12
    state.irp += allocation.irp * 12
    state.isa += allocation.isa * 12
    state.domestic += allocation.domestic * 12
    state.overseas += allocation.overseas * 12
    state.unallocated_cash += unallocated_monthly * 12


def apply_tax_credit(state: AccountState, allocation: Allocation, config: TaxConfig) -> float:
    """
    Reinvest the pension + IRP tax credit into the pension account.

    Returns:
        Credit amount for the year
    """
    credit = (allocation.pension + allocation.irp) * 12 * config.tax_credit_rate
    state.pension += credit
    return credit


def apply_dividends(state: AccountState, config: TaxConfig) -> float:
    """
    Reinvest overseas dividends net of dividend tax.

    Returns:
        Dividend tax paid for the year
    """
    dividend = state.overseas * config.dividend_yield
    tax = dividend * config.dividend_tax_rate
    state.overseas += dividend - tax
    return tax


def apply_isa_maturity(state: AccountState, allocation: Allocation, config: TaxConfig) -> float:
    """
    Advance the ISA maturity cycle by one year.

    When the counter reaches isa_maturity_years the ISA is closed: profit above
    the tax-free amount is taxed, the remainder plus the conversion incentive
    moves into the pension account, and the cycle restarts at 1.

    Returns:
        Conversion incentive earned this year (0 outside maturity years)
    """
    n_years = config.isa_maturity_years
    if state.maturity_counter != n_years:
        state.maturity_counter += 1
        return 0.0

    principal = allocation.isa * 12 * n_years
    profit = state.isa - principal
    tax = max(0, profit - config.isa_maturity_tax_free) * config.isa_maturity_tax_rate
    transfer = state.isa - tax
    incentive = min(transfer * config.isa_transfer_incentive_rate,
                    config.isa_transfer_incentive_cap)

    state.pension += transfer + incentive
    state.isa = 0.0
    state.maturity_counter = 1
    return incentive


def record_year(
    state: AccountState,
    age: int,
    year: int,
    tax_credit: float,
    tax_deferred: float,
    dividend_tax: float,
    cash_account_tax: float,
) -> YearlyResult:
    """Snapshot the state, flooring every figure to whole 만원."""
    breakdown = AccountBreakdown(
        pension=math.floor(state.pension),
        irp=math.floor(state.irp),
        isa=math.floor(state.isa),
        domestic=math.floor(state.domestic),
        overseas=math.floor(state.overseas),
        unallocated_cash=math.floor(state.unallocated_cash),
    )
    tax_benefits = TaxBenefits(
        tax_credit=math.floor(tax_credit),
        tax_deferred=math.floor(tax_deferred),
        dividend_tax=math.floor(dividend_tax),
        cash_account_tax=math.floor(cash_account_tax),
    )
    return YearlyResult(
        age=age,
        year=year,
        total_assets=math.floor(state.total),
        breakdown=breakdown,
        tax_benefits=tax_benefits,
    )


# =============================================================================
# Per-Plan Simulation
# =============================================================================

def initial_state(
    user_input: UserInput,
    allocation: Allocation,
    unallocated_monthly: float,
    track_maturity: bool,
) -> AccountState:
    """Year-0 balances: current assets plus the first year of contributions."""
    state = AccountState(
        domestic=user_input.current_assets,
        maturity_counter=1 if track_maturity else None,
    )
    apply_contribution(state, allocation, unallocated_monthly)
    return state


def simulate_plan(
    user_input: UserInput,
    allocation: Allocation,
    unallocated_monthly: float = 0.0,
    config: TaxConfig = DEFAULT_TAX_CONFIG,
    track_maturity: bool = False,
) -> List[YearlyResult]:
    """
    Run one plan from year 0 through the target age.

    This is the single source of truth for plan stepping; the user plan and
    the optimized plan differ only in their inputs.

    Args:
        user_input: Ages, current assets and expected return
        allocation: Monthly contributions per account
        unallocated_monthly: Monthly budget left in the taxable cash account
        config: Tax limits and rates
        track_maturity: If True, roll the ISA into the pension account every
            isa_maturity_years

    Returns:
        List of YearlyResult for years 0..horizon
    """
    horizon = user_input.horizon
    assert horizon > 0, f"Target age {user_input.target_age} must exceed current age {user_input.current_age}"

    rate = user_input.rate
    state = initial_state(user_input, allocation, unallocated_monthly, track_maturity)

    # Year 0: no growth and no maturity check
    credit = apply_tax_credit(state, allocation, config)
    dividend_tax = apply_dividends(state, config)
    results = [record_year(state, user_input.current_age, 0, credit, 0.0, dividend_tax, 0.0)]

    for year in range(1, horizon + 1):
        cash_tax = apply_growth(state, rate, config)
        apply_contribution(state, allocation, unallocated_monthly)
        credit = apply_tax_credit(state, allocation, config)
        dividend_tax = apply_dividends(state, config)

        incentive = 0.0
        if state.maturity_counter is not None:
            incentive = apply_isa_maturity(state, allocation, config)

        tax_deferred = state.overseas * rate * config.capital_gains_tax_rate
        results.append(record_year(
            state,
            age=user_input.current_age + year,
            year=year,
            tax_credit=credit + incentive,
            tax_deferred=tax_deferred,
            dividend_tax=dividend_tax,
            cash_account_tax=cash_tax,
        ))

    return results


# =============================================================================
# Plan Comparison
# =============================================================================

def run_simulation(
    user_input: UserInput,
    user_allocation: Allocation,
    config: TaxConfig = DEFAULT_TAX_CONFIG,
) -> SimulationResult:
    """
    Compare the user's allocation against the waterfall-optimized allocation.

    The optimized plan allocates the whole monthly budget and rolls its ISA
    over at each maturity; the user plan keeps any unallocated budget in a
    taxable cash account and never rolls its ISA over.

    Args:
        user_input: Validated user facts
        user_allocation: Validated monthly allocation chosen by the user
        config: Tax limits and rates

    Returns:
        SimulationResult with both trajectories and their summary deltas
    """
    optimized_allocation = optimize_allocation(user_input.monthly_savings, config)
    unallocated = user_allocation.unallocated(user_input.monthly_savings)

    user_plan = simulate_plan(
        user_input, user_allocation, unallocated, config, track_maturity=False
    )
    optimized_plan = simulate_plan(
        user_input, optimized_allocation, 0.0, config, track_maturity=True
    )

    return SimulationResult(
        user_plan=tuple(user_plan),
        optimized_plan=tuple(optimized_plan),
        summary=summarize(user_plan, optimized_plan),
        user_allocation=user_allocation,
        optimized_allocation=optimized_allocation,
    )


def run_return_rate_sweep(
    user_input: UserInput,
    user_allocation: Allocation,
    rates: List[float],
    config: TaxConfig = DEFAULT_TAX_CONFIG,
) -> List[Tuple[float, SimulationResult]]:
    """Run the comparison once per expected return rate (percent)."""
    return [
        (r, run_simulation(replace(user_input, expected_return_rate=r), user_allocation, config))
        for r in rates
    ]
