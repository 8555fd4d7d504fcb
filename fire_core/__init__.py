"""
Core module for the tax-advantaged savings plan simulator.

This module provides the foundational components for comparing a user's
monthly allocation against the waterfall-optimized allocation:
- Parameter and result dataclasses (params.py)
- Waterfall allocation optimizer (optimizer.py)
- Year-by-year simulation engine (simulation.py)
- Summary, benefit report and goal analysis (report.py)
- Input validation (validation.py)
"""

# Constants and configuration
from .params import (
    TaxConfig,
    DEFAULT_TAX_CONFIG,
    OVERSEAS_DEFERRAL_SHARE,
    SURPLUS_OPPORTUNITY_SHARE,
)

# Parameter dataclasses
from .params import (
    UserInput,
    Allocation,
    AccountState,
    # Result dataclasses
    AccountBreakdown,
    TaxBenefits,
    YearlyResult,
    PlanSummary,
    SimulationResult,
    ReportData,
    GoalAnalysis,
)

# Optimizer
from .optimizer import optimize_allocation

# Simulation engine
from .simulation import (
    apply_growth,
    apply_contribution,
    apply_tax_credit,
    apply_dividends,
    apply_isa_maturity,
    record_year,
    simulate_plan,
    run_simulation,
    run_return_rate_sweep,
)

# Reporting
from .report import (
    summarize,
    build_report,
    compute_required_monthly_savings,
    analyze_goal,
    results_to_dataframe,
    compute_summary_table,
    format_amount,
)

# Validation
from .validation import (
    validate_user_input,
    validate_allocation,
)

__all__ = [
    # Configuration
    'TaxConfig',
    'DEFAULT_TAX_CONFIG',
    'OVERSEAS_DEFERRAL_SHARE',
    'SURPLUS_OPPORTUNITY_SHARE',
    # Params
    'UserInput',
    'Allocation',
    'AccountState',
    # Results
    'AccountBreakdown',
    'TaxBenefits',
    'YearlyResult',
    'PlanSummary',
    'SimulationResult',
    'ReportData',
    'GoalAnalysis',
    # Optimizer
    'optimize_allocation',
    # Simulation
    'apply_growth',
    'apply_contribution',
    'apply_tax_credit',
    'apply_dividends',
    'apply_isa_maturity',
    'record_year',
    'simulate_plan',
    'run_simulation',
    'run_return_rate_sweep',
    # Reporting
    'summarize',
    'build_report',
    'compute_required_monthly_savings',
    'analyze_goal',
    'results_to_dataframe',
    'compute_summary_table',
    'format_amount',
    # Validation
    'validate_user_input',
    'validate_allocation',
]
