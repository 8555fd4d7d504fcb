"""
Core parameter dataclasses for the tax-advantaged savings plan simulator.

This module contains all parameter and result dataclasses used throughout the
simulator, consolidated into a single source of truth. Every monetary figure
is expressed in 만원 (10,000 KRW).
"""

import numpy as np
from dataclasses import dataclass, field, fields
from typing import Optional, Tuple


# =============================================================================
# Tax Environment Parameters
# =============================================================================

@dataclass(frozen=True)
class TaxConfig:
    """Statutory limits and rates for Korean tax-advantaged accounts."""
    # Contribution caps (만원)
    pension_irp_monthly_cap: float = 150     # Pension + IRP combined monthly cap
    pension_irp_yearly_cap: float = 1800     # Pension + IRP combined yearly cap
    isa_monthly_cap: float = 166             # ISA monthly cap (2,000/yr basis)
    isa_yearly_cap: float = 2000             # ISA yearly cap

    # Pension / IRP
    tax_credit_rate: float = 0.132           # Tax credit on pension + IRP contributions

    # ISA maturity
    isa_maturity_years: int = 3              # Maturity period (years)
    isa_maturity_tax_free: float = 200       # Tax-free profit at maturity
    isa_maturity_tax_rate: float = 0.099     # Tax on profit above the tax-free amount
    isa_transfer_incentive_rate: float = 0.10  # Incentive for rolling ISA into pension
    isa_transfer_incentive_cap: float = 300    # Incentive ceiling

    # Brokerage accounts
    dividend_yield: float = 0.015            # Overseas equity dividend yield
    dividend_tax_rate: float = 0.154         # Dividend income tax
    cash_account_tax_rate: float = 0.154     # Tax on growth in taxable accounts
    capital_gains_tax_rate: float = 0.22     # Overseas capital gains (deferred until sale)

    # Waterfall fill thresholds used by the optimizer (만원/month)
    pension_first_fill: float = 50           # 600/yr, full tax-credit base
    irp_first_fill: float = 25               # 300/yr, completes 900/yr credit base
    isa_first_fill: float = 83               # ~1,000/yr seed for the maturity cycle


DEFAULT_TAX_CONFIG = TaxConfig()

# Fixed attribution fractions used by the benefit report
OVERSEAS_DEFERRAL_SHARE = 0.7
SURPLUS_OPPORTUNITY_SHARE = 0.3


# =============================================================================
# Inputs
# =============================================================================

@dataclass(frozen=True)
class UserInput:
    """Facts that define the projection horizon."""
    current_age: int = 30
    target_age: int = 55
    target_assets: float = 0          # Goal in 만원 (0 = no goal)
    current_assets: float = 0         # Liquid assets today
    monthly_savings: float = 100      # Monthly contribution budget
    expected_return_rate: float = 7.0  # Annual return in percent

    @property
    def horizon(self) -> int:
        """Number of simulated years after year 0."""
        return self.target_age - self.current_age

    @property
    def rate(self) -> float:
        """Annual return as a fraction."""
        return self.expected_return_rate / 100


@dataclass(frozen=True)
class Allocation:
    """Monthly contribution directed to each account (만원/month)."""
    pension: float = 0      # Pension savings (tax-deferred, tax credit)
    irp: float = 0          # IRP (tax-deferred, tax credit)
    isa: float = 0          # ISA (tax-exempt wrapper, 3-year maturity)
    domestic: float = 0     # Domestic brokerage (taxed yearly)
    overseas: float = 0     # Overseas brokerage (buy & hold, deferred)

    @property
    def total(self) -> float:
        return self.pension + self.irp + self.isa + self.domestic + self.overseas

    def unallocated(self, monthly_savings: float) -> float:
        """Monthly budget left in the ordinary cash account."""
        return max(0, monthly_savings - self.total)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# =============================================================================
# Simulation State
# =============================================================================

@dataclass
class AccountState:
    """
    Running balances for one plan.

    maturity_counter is None for plans that never roll the ISA over; otherwise
    it cycles through 1..isa_maturity_years.
    """
    pension: float = 0.0
    irp: float = 0.0
    isa: float = 0.0
    domestic: float = 0.0
    overseas: float = 0.0
    unallocated_cash: float = 0.0
    maturity_counter: Optional[int] = None

    @property
    def total(self) -> float:
        return (self.pension + self.irp + self.isa +
                self.domestic + self.overseas + self.unallocated_cash)


# =============================================================================
# Result Dataclasses
# =============================================================================

@dataclass(frozen=True)
class AccountBreakdown:
    """Per-account balances, floored to whole 만원."""
    pension: int
    irp: int
    isa: int
    domestic: int
    overseas: int
    unallocated_cash: int

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class TaxBenefits:
    """Tax figures for one simulated year, floored to whole 만원."""
    tax_credit: int          # Reinvested credit (+ ISA conversion incentive)
    tax_deferred: int        # Capital gains tax deferred on overseas equity
    dividend_tax: int        # Dividend tax paid on overseas equity
    cash_account_tax: int    # Tax paid on domestic + unallocated cash growth


@dataclass(frozen=True)
class YearlyResult:
    """Snapshot of one plan at the end of one year."""
    age: int
    year: int
    total_assets: int
    breakdown: AccountBreakdown
    tax_benefits: TaxBenefits


@dataclass(frozen=True)
class PlanSummary:
    """Final-year and cumulative deltas (optimized minus user)."""
    final_asset_difference: int
    total_tax_credit_difference: int
    total_tax_deferred_difference: int


@dataclass
class SimulationResult:
    """
    Year-by-year trajectories for the user plan and the optimized plan.

    Both sequences are indexed 0..horizon and aligned by year.
    """
    user_plan: Tuple[YearlyResult, ...]
    optimized_plan: Tuple[YearlyResult, ...]
    summary: PlanSummary
    user_allocation: Allocation = field(default_factory=Allocation)
    optimized_allocation: Allocation = field(default_factory=Allocation)

    @property
    def ages(self) -> np.ndarray:
        return np.array([r.age for r in self.user_plan])

    @property
    def user_total_assets(self) -> np.ndarray:
        return np.array([r.total_assets for r in self.user_plan])

    @property
    def optimized_total_assets(self) -> np.ndarray:
        return np.array([r.total_assets for r in self.optimized_plan])

    @property
    def asset_difference(self) -> np.ndarray:
        """Optimized minus user total assets, per year."""
        return self.optimized_total_assets - self.user_total_assets

    def balances(self, account: str, which: str = 'optimized') -> np.ndarray:
        """Floored balance path of one account for 'user' or 'optimized'."""
        plan = self.optimized_plan if which == 'optimized' else self.user_plan
        return np.array([getattr(r.breakdown, account) for r in plan])


@dataclass(frozen=True)
class ReportData:
    """Benefit figures shown in the plan comparison report."""
    tax_credit_benefit: float
    tax_deferred_benefit: float
    isa_optimization_benefit: float
    overseas_stock_benefit: float
    surplus_opportunity_cost: float
    total_benefit: float
    unallocated_monthly: float = 0


@dataclass(frozen=True)
class GoalAnalysis:
    """How the optimized plan measures against the target asset goal."""
    achievement_rate: float                  # Percent of target reached
    status: str                              # 'success', 'close' or 'gap'
    required_monthly_savings: Optional[float] = None
    return_rate_advice: Optional[str] = None
    suggested_return_rate: Optional[int] = None
