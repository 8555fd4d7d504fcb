"""
Tests for the waterfall allocation optimizer.

The waterfall must allocate exactly the whole budget, respect the pension + IRP
and ISA monthly caps, and fill the accounts in its fixed priority order.
"""

import pytest

from fire_core import Allocation, TaxConfig, DEFAULT_TAX_CONFIG, optimize_allocation


BUDGETS = [0, 10, 30, 50, 75, 100, 158, 200, 233, 300, 316, 500, 1000, 12345.5]


@pytest.mark.parametrize("budget", BUDGETS)
def test_waterfall_allocates_whole_budget(budget):
    """The slots always sum to the budget: never under- or over-allocated."""
    alloc = optimize_allocation(budget)
    assert alloc.total == pytest.approx(budget), (
        f"Allocation total {alloc.total} != budget {budget}"
    )


@pytest.mark.parametrize("budget", BUDGETS)
def test_waterfall_respects_caps(budget):
    """Pension + IRP and ISA stay within their monthly caps."""
    alloc = optimize_allocation(budget)
    assert alloc.pension + alloc.irp <= DEFAULT_TAX_CONFIG.pension_irp_monthly_cap
    assert alloc.isa <= DEFAULT_TAX_CONFIG.isa_monthly_cap
    assert all(v >= 0 for v in alloc.as_dict().values())


def test_budget_below_first_fill_goes_to_pension():
    """A budget of 30 fits entirely in the first pension step."""
    assert optimize_allocation(30) == Allocation(pension=30, irp=0, isa=0, domestic=0, overseas=0)


def test_zero_budget():
    assert optimize_allocation(0) == Allocation()


def test_isa_seeded_before_pension_top_up():
    """Step 3 seeds the ISA before step 4 tops up the pension account."""
    alloc = optimize_allocation(158)
    assert alloc == Allocation(pension=50, irp=25, isa=83, domestic=0, overseas=0)


def test_pension_top_up_fills_combined_cap():
    """Step 4 tops up pension only, to the combined cap net of IRP."""
    alloc = optimize_allocation(233)
    assert alloc.pension == 125
    assert alloc.irp == 25
    assert alloc.isa == 83
    assert alloc.overseas == 0


def test_isa_top_up_then_overseas_catch_all():
    """Past both caps, everything left goes to overseas equity, never domestic."""
    alloc = optimize_allocation(300)
    assert alloc == Allocation(pension=125, irp=25, isa=150, domestic=0, overseas=0)

    alloc = optimize_allocation(1000)
    assert alloc.isa == 166
    assert alloc.overseas == 1000 - 125 - 25 - 166
    assert alloc.domestic == 0


def test_custom_config_thresholds():
    """Fill thresholds come from the config passed in."""
    config = TaxConfig(pension_first_fill=10, irp_first_fill=10, isa_first_fill=10)
    alloc = optimize_allocation(100, config)
    # 10 + 10 + 10, then the remaining 70 tops up pension
    assert alloc.pension == 80
    assert alloc.irp == 10
    assert alloc.isa == 10
    assert alloc.overseas == 0
