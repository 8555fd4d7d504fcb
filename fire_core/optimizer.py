"""
Waterfall allocation of a monthly savings budget across account types.

The optimizer fills tax-credit capacity first (pension, IRP), seeds the ISA so
its 3-year maturity can be rolled into the pension account, tops up the
remaining pension and ISA capacity, and routes whatever is left to overseas
equity (buy & hold, tax deferred until sale).
"""

from .params import Allocation, TaxConfig, DEFAULT_TAX_CONFIG


def _take(remaining: float, capacity: float) -> float:
    """Amount a waterfall step draws from the remaining budget."""
    return min(remaining, max(0, capacity))


def optimize_allocation(
    monthly_budget: float,
    config: TaxConfig = DEFAULT_TAX_CONFIG,
) -> Allocation:
    """
    Allocate the full monthly budget with a fixed six-step waterfall.

    Steps (each consumes min(remaining budget, remaining capacity)):
        1. Pension up to pension_first_fill
        2. IRP up to irp_first_fill
        3. ISA up to isa_first_fill
        4. Pension up to the combined pension + IRP monthly cap
        5. ISA up to its monthly cap
        6. Everything left into overseas equity

    Args:
        monthly_budget: Monthly savings in 만원 (assumed >= 0)
        config: Tax limits and fill thresholds

    Returns:
        Allocation whose slots sum to monthly_budget
    """
    remaining = monthly_budget

    pension = _take(remaining, config.pension_first_fill)
    remaining -= pension

    irp = _take(remaining, config.irp_first_fill)
    remaining -= irp

    isa = _take(remaining, config.isa_first_fill)
    remaining -= isa

    # IRP already counts against the combined cap
    pension_top_up = _take(remaining, config.pension_irp_monthly_cap - irp - pension)
    pension += pension_top_up
    remaining -= pension_top_up

    isa_top_up = _take(remaining, config.isa_monthly_cap - isa)
    isa += isa_top_up
    remaining -= isa_top_up

    return Allocation(
        pension=pension,
        irp=irp,
        isa=isa,
        domestic=0,
        overseas=remaining,
    )
