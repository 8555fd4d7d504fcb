"""
Tests for user input and allocation validation.
"""

import pytest

from fire_core import UserInput, Allocation, TaxConfig, validate_user_input, validate_allocation


def test_valid_input_has_no_errors():
    assert validate_user_input(UserInput()) == {}


@pytest.mark.parametrize("kwargs, field", [
    ({'current_age': -1}, 'current_age'),
    ({'current_age': 101, 'target_age': 110}, 'current_age'),
    ({'current_age': 40, 'target_age': 40}, 'target_age'),
    ({'target_assets': -1}, 'target_assets'),
    ({'current_assets': -5}, 'current_assets'),
    ({'monthly_savings': 0}, 'monthly_savings'),
    ({'expected_return_rate': -0.5}, 'expected_return_rate'),
    ({'expected_return_rate': 51}, 'expected_return_rate'),
])
def test_invalid_input_field(kwargs, field):
    errors = validate_user_input(UserInput(**kwargs))
    assert field in errors, f"Expected an error for {field}, got {errors}"


def test_boundary_values_are_valid():
    user_input = UserInput(current_age=0, target_age=100, target_assets=0,
                           current_assets=0, monthly_savings=0.1, expected_return_rate=50)
    assert validate_user_input(user_input) == {}


def test_valid_allocation_has_no_errors():
    assert validate_allocation(Allocation(pension=100, irp=50, isa=166), 400) == {}


def test_pension_irp_combined_cap():
    errors = validate_allocation(Allocation(pension=100, irp=51), 500)
    assert 'pension_irp' in errors


def test_isa_cap():
    errors = validate_allocation(Allocation(isa=167), 500)
    assert 'isa' in errors


def test_allocation_cannot_exceed_savings():
    errors = validate_allocation(Allocation(domestic=60, overseas=50), 100)
    assert 'allocation_total' in errors


def test_negative_slot():
    errors = validate_allocation(Allocation(overseas=-1), 100)
    assert 'overseas' in errors


def test_caps_come_from_config():
    config = TaxConfig(isa_monthly_cap=50)
    assert 'isa' in validate_allocation(Allocation(isa=60), 100, config)
    assert validate_allocation(Allocation(isa=60), 100) == {}


def test_yearly_caps_come_from_config():
    """Twelve monthly contributions are checked against the annual limits."""
    config = TaxConfig(isa_yearly_cap=600, pension_irp_yearly_cap=1200)

    errors = validate_allocation(Allocation(isa=60), 100, config)
    assert errors.keys() == {'isa_yearly'}, f"Expected only the ISA yearly error, got {errors}"

    errors = validate_allocation(Allocation(pension=80, irp=30), 200, config)
    assert errors.keys() == {'pension_irp_yearly'}, f"Expected only the pension yearly error, got {errors}"


def test_default_yearly_caps_allow_full_monthly_caps():
    """150/month fills exactly 1,800/year; 166/month stays under 2,000/year."""
    errors = validate_allocation(Allocation(pension=100, irp=50, isa=166), 400)
    assert 'pension_irp_yearly' not in errors
    assert 'isa_yearly' not in errors
