"""
Savings Plan Comparison Report

Compares a user-chosen monthly allocation across pension savings, IRP, ISA,
domestic and overseas brokerage accounts against the waterfall-optimized
allocation, and writes a multi-page PDF plus console statistics.

All amounts are in 만원 (10,000 KRW).
"""

import sys
from dataclasses import replace
from typing import Optional

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from fire_core import (
    # Dataclasses
    TaxConfig,
    DEFAULT_TAX_CONFIG,
    UserInput,
    Allocation,
    SimulationResult,
    ReportData,
    # Engine
    run_simulation,
    run_return_rate_sweep,
    # Reporting
    build_report,
    analyze_goal,
    results_to_dataframe,
    compute_summary_table,
    format_amount,
    # Validation
    validate_user_input,
    validate_allocation,
)

from fire_plots import (
    apply_standard_style,
    create_plan_comparison_figure,
    create_breakdown_figure,
    create_return_rate_sensitivity_figure,
)


def generate_comparison_pdf(
    output_path: str,
    user_input: UserInput,
    result: SimulationResult,
    report: ReportData,
    config: TaxConfig = DEFAULT_TAX_CONFIG,
    sweep_rates: Optional[list] = None,
    use_years: bool = False,
) -> str:
    """
    Write the comparison report.

    Pages:
        1. Total assets, advantage, optimized breakdown, benefit bars
        2. Account breakdown of both plans
        3. Return-rate sensitivity (when sweep_rates is given)
    """
    apply_standard_style()

    with PdfPages(output_path) as pdf:
        fig = create_plan_comparison_figure(result, report, user_input, config, use_years=use_years)
        pdf.savefig(fig, bbox_inches='tight')
        plt.close(fig)

        fig = create_breakdown_figure(result, use_years=use_years)
        pdf.savefig(fig, bbox_inches='tight')
        plt.close(fig)

        if sweep_rates:
            sweep = run_return_rate_sweep(user_input, result.user_allocation, sweep_rates, config)
            fig = create_return_rate_sensitivity_figure(sweep, use_years=use_years)
            pdf.savefig(fig, bbox_inches='tight')
            plt.close(fig)

    return output_path


def print_statistics(
    user_input: UserInput,
    result: SimulationResult,
    report: ReportData,
) -> None:
    """Print allocations, selected years and the benefit table."""
    user_alloc = result.user_allocation
    opt_alloc = result.optimized_allocation

    print("\nMonthly Allocation (만원):")
    print("-" * 50)
    print(f"{'Account':<18} {'User':>14} {'Optimized':>14}")
    print("-" * 50)
    for name in ['pension', 'irp', 'isa', 'domestic', 'overseas']:
        print(f"{name:<18} {getattr(user_alloc, name):>14,.0f} {getattr(opt_alloc, name):>14,.0f}")
    print(f"{'unallocated':<18} {report.unallocated_monthly:>14,.0f} {0:>14,.0f}")

    df = results_to_dataframe(result)
    print("\nTotal Assets at Selected Ages:")
    print("-" * 50)
    print(f"{'Age':>5} {'User':>14} {'Optimized':>14} {'Difference':>14}")
    print("-" * 50)
    step = max(1, user_input.horizon // 5)
    for age in list(df.index[::step]) + ([df.index[-1]] if (len(df) - 1) % step else []):
        row = df.loc[age]
        print(f"{age:>5} {row['user_total']:>14,.0f} {row['optimized_total']:>14,.0f} "
              f"{row['difference']:>14,.0f}")

    print("\nBenefit Breakdown:")
    print("-" * 50)
    table = compute_summary_table(result, report)
    for metric, value in table['Value'].items():
        print(f"{metric:<36} {value:>13,.0f}")

    goal = analyze_goal(result, user_input)
    if user_input.target_assets > 0:
        print(f"\nGoal: {format_amount(user_input.target_assets)} "
              f"({goal.achievement_rate:.1f}% achieved, {goal.status})")
        if goal.required_monthly_savings is not None:
            print(f"  Save an extra {goal.required_monthly_savings:,.0f}만원/month to close the gap.")
        if goal.return_rate_advice:
            print(f"  {goal.return_rate_advice}")


def main(
    output_path: str = 'savings_plan_comparison.pdf',
    current_age: int = 30,
    target_age: int = 55,
    target_assets: float = 0,
    current_assets: float = 0,
    monthly_savings: float = 100,
    expected_return_rate: float = 7.0,
    pension: float = 0,
    irp: float = 0,
    isa: float = 0,
    domestic: float = 0,
    overseas: float = 0,
    csv_path: Optional[str] = None,
    sweep_rates: Optional[list] = None,
    use_years: bool = False,
    verbose: bool = True,
    config: TaxConfig = DEFAULT_TAX_CONFIG,
) -> Optional[str]:
    """
    Run the plan comparison and write the PDF report.

    Args:
        output_path: Path for output PDF file
        current_age: Age today
        target_age: Age at which the projection ends
        target_assets: Goal in 만원 (0 = no goal)
        current_assets: Liquid assets today in 만원
        monthly_savings: Monthly savings budget in 만원
        expected_return_rate: Annual return in percent
        pension, irp, isa, domestic, overseas: User's monthly allocation in 만원
        csv_path: If given, also write the year-by-year table as CSV
        sweep_rates: Return rates (percent) for the sensitivity page
        use_years: If True, x-axis shows years from start; if False, shows age
        verbose: If True, print progress and statistics
        config: Tax limits and rates

    Returns:
        Path of the PDF, or None when the inputs are invalid
    """
    user_input = UserInput(
        current_age=current_age,
        target_age=target_age,
        target_assets=target_assets,
        current_assets=current_assets,
        monthly_savings=monthly_savings,
        expected_return_rate=expected_return_rate,
    )
    allocation = Allocation(pension=pension, irp=irp, isa=isa, domestic=domestic, overseas=overseas)

    errors = {**validate_user_input(user_input),
              **validate_allocation(allocation, monthly_savings, config)}
    if errors:
        for field_name, message in errors.items():
            print(f"Invalid {field_name}: {message}", file=sys.stderr)
        return None

    if verbose:
        print("Simulating user plan and optimized plan...")

    result = run_simulation(user_input, allocation, config)
    report = build_report(result, allocation.unallocated(monthly_savings), config)

    output = generate_comparison_pdf(
        output_path, user_input, result, report, config,
        sweep_rates=sweep_rates, use_years=use_years,
    )

    if csv_path:
        results_to_dataframe(result).to_csv(csv_path)

    if verbose:
        print(f"PDF generated: {output}")
        if csv_path:
            print(f"CSV written: {csv_path}")
        print_statistics(user_input, result, report)

    return output


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(
        description='Compare a savings allocation against the optimized allocation'
    )
    parser.add_argument('-o', '--output', default='savings_plan_comparison.pdf',
                        help='Output PDF file path')
    parser.add_argument('--csv', default=None,
                        help='Also write the year-by-year table to this CSV file')
    parser.add_argument('--current-age', type=int, default=30,
                        help='Current age (default: 30)')
    parser.add_argument('--target-age', type=int, default=55,
                        help='Target age (default: 55)')
    parser.add_argument('--target-assets', type=float, default=0,
                        help='Target assets in 만원 (default: 0 = no goal)')
    parser.add_argument('--current-assets', type=float, default=0,
                        help='Current assets in 만원 (default: 0)')
    parser.add_argument('--monthly-savings', type=float, default=100,
                        help='Monthly savings in 만원 (default: 100)')
    parser.add_argument('--return-rate', type=float, default=7.0,
                        help='Expected annual return in percent (default: 7.0)')

    # User allocation (만원/month)
    parser.add_argument('--pension', type=float, default=0,
                        help='Monthly pension savings contribution (default: 0)')
    parser.add_argument('--irp', type=float, default=0,
                        help='Monthly IRP contribution (default: 0)')
    parser.add_argument('--isa', type=float, default=0,
                        help='Monthly ISA contribution (default: 0)')
    parser.add_argument('--domestic', type=float, default=0,
                        help='Monthly domestic equity contribution (default: 0)')
    parser.add_argument('--overseas', type=float, default=0,
                        help='Monthly overseas equity contribution (default: 0)')

    parser.add_argument('--sweep', type=float, nargs='*', default=None,
                        help='Return rates (%%) for a sensitivity page, e.g. --sweep 4 7 10')
    parser.add_argument('--use-years', action='store_true',
                        help='Use years from start instead of age on x-axis')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Suppress output messages')

    # Tax table overrides
    parser.add_argument('--tax-credit-rate', type=float, default=DEFAULT_TAX_CONFIG.tax_credit_rate,
                        help='Pension + IRP tax credit rate (default: 0.132)')
    parser.add_argument('--dividend-yield', type=float, default=DEFAULT_TAX_CONFIG.dividend_yield,
                        help='Overseas dividend yield (default: 0.015)')

    args = parser.parse_args()

    output = main(
        output_path=args.output,
        current_age=args.current_age,
        target_age=args.target_age,
        target_assets=args.target_assets,
        current_assets=args.current_assets,
        monthly_savings=args.monthly_savings,
        expected_return_rate=args.return_rate,
        pension=args.pension,
        irp=args.irp,
        isa=args.isa,
        domestic=args.domestic,
        overseas=args.overseas,
        csv_path=args.csv,
        sweep_rates=args.sweep,
        use_years=args.use_years,
        verbose=not args.quiet,
        config=replace(DEFAULT_TAX_CONFIG,
                       tax_credit_rate=args.tax_credit_rate,
                       dividend_yield=args.dividend_yield),
    )
    sys.exit(0 if output else 1)
