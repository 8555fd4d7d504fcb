"""
Input validation for user facts and allocations.

The simulation engine trusts its inputs; callers check them here first. Each
validator returns a dict mapping field name to an error message (empty when
the input is valid).
"""

from typing import Dict

from .params import Allocation, UserInput, TaxConfig, DEFAULT_TAX_CONFIG


MAX_AGE = 100
MAX_RETURN_RATE = 50


def validate_user_input(user_input: UserInput) -> Dict[str, str]:
    """Check ages, amounts and the expected return rate."""
    errors = {}

    if user_input.current_age < 0 or user_input.current_age > MAX_AGE:
        errors['current_age'] = f"Current age must be between 0 and {MAX_AGE}."
    if user_input.target_age <= user_input.current_age:
        errors['target_age'] = "Target age must be greater than current age."
    if user_input.target_assets < 0:
        errors['target_assets'] = "Target assets must be 0 or more."
    if user_input.current_assets < 0:
        errors['current_assets'] = "Current assets must be 0 or more."
    if user_input.monthly_savings <= 0:
        errors['monthly_savings'] = "Monthly savings must be greater than 0."
    if user_input.expected_return_rate < 0 or user_input.expected_return_rate > MAX_RETURN_RATE:
        errors['expected_return_rate'] = f"Expected return rate must be between 0 and {MAX_RETURN_RATE}%."

    return errors


def validate_allocation(
    allocation: Allocation,
    monthly_savings: float,
    config: TaxConfig = DEFAULT_TAX_CONFIG,
) -> Dict[str, str]:
    """Check legal caps, the budget and slot signs of a monthly allocation."""
    errors = {}

    if allocation.pension + allocation.irp > config.pension_irp_monthly_cap:
        errors['pension_irp'] = (f"Pension + IRP cannot exceed "
                                 f"{config.pension_irp_monthly_cap:g}만원 per month.")
    if allocation.isa > config.isa_monthly_cap:
        errors['isa'] = f"ISA cannot exceed {config.isa_monthly_cap:g}만원 per month."

    # Twelve monthly contributions must also fit the annual limits
    if (allocation.pension + allocation.irp) * 12 > config.pension_irp_yearly_cap:
        errors['pension_irp_yearly'] = (f"Pension + IRP cannot exceed "
                                        f"{config.pension_irp_yearly_cap:g}만원 per year.")
    if allocation.isa * 12 > config.isa_yearly_cap:
        errors['isa_yearly'] = f"ISA cannot exceed {config.isa_yearly_cap:g}만원 per year."

    if allocation.total > monthly_savings:
        errors['allocation_total'] = (f"Allocation total ({allocation.total:,g}만원) cannot exceed "
                                      f"monthly savings ({monthly_savings:,g}만원).")

    for name, value in allocation.as_dict().items():
        if value < 0:
            errors[name] = "Enter a value of 0 or more."

    return errors
