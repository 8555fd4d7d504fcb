"""
Plan comparison visualization plots.

This module provides plotting functions for comparing the user's allocation
against the waterfall-optimized allocation: total asset trajectories, the
year-by-year gap, per-account breakdowns, benefit attribution and return-rate
sensitivity.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import List, Tuple, Optional, TYPE_CHECKING

from .styles import COLORS, ACCOUNT_LABELS, SWEEP_COLORS
from .helpers import (
    get_x_axis,
    add_zero_line,
    add_maturity_lines,
    format_currency_axis,
    plot_account_stack,
    add_standard_chart_elements,
)

if TYPE_CHECKING:
    from fire_core import SimulationResult, ReportData, UserInput, TaxConfig


def plot_total_assets(
    ax: plt.Axes,
    result: 'SimulationResult',
    target_assets: float = 0,
    use_years: bool = False,
) -> None:
    """Total assets of both plans, with the target as a dashed line when set."""
    x, xlabel = get_x_axis(result.ages, use_years)

    ax.plot(x, result.user_total_assets, color=COLORS['user'],
            linewidth=2, linestyle='--', label='User Plan')
    ax.plot(x, result.optimized_total_assets, color=COLORS['optimized'],
            linewidth=2, label='Optimized Plan')
    if target_assets > 0:
        ax.axhline(y=target_assets, color=COLORS['target'], linestyle=':',
                   linewidth=1.5, label='Target')

    format_currency_axis(ax)
    add_standard_chart_elements(ax, xlabel, 'Total Assets (10k KRW)', 'Total Assets: User vs Optimized',
                                add_zero=False)


def plot_asset_difference(
    ax: plt.Axes,
    result: 'SimulationResult',
    maturity_period: int = 3,
    use_years: bool = False,
) -> None:
    """Optimized minus user total assets, with ISA maturity years marked."""
    x, xlabel = get_x_axis(result.ages, use_years)
    diff = result.asset_difference

    ax.fill_between(x, 0, diff, color=COLORS['difference'], alpha=0.3)
    ax.plot(x, diff, color=COLORS['difference'], linewidth=2, label='Optimized - User')
    add_maturity_lines(ax, x, maturity_period)

    ax.annotate(f'Final: {diff[-1]:,.0f}',
                xy=(0.02, 0.85), xycoords='axes fraction', fontsize=10,
                color=COLORS['difference'])

    format_currency_axis(ax)
    add_standard_chart_elements(ax, xlabel, 'Difference (10k KRW)', 'Year-by-Year Advantage')


def plot_account_breakdown(
    ax: plt.Axes,
    result: 'SimulationResult',
    which: str = 'optimized',
    use_years: bool = False,
) -> None:
    """Stacked account balances for 'user' or 'optimized'."""
    x, xlabel = get_x_axis(result.ages, use_years)
    balances = {name: result.balances(name, which) for name in ACCOUNT_LABELS}

    plot_account_stack(ax, x, balances)
    format_currency_axis(ax)
    ax.set_xlabel(xlabel)
    ax.set_ylabel('Balance (10k KRW)')
    ax.set_title(f"{'Optimized' if which == 'optimized' else 'User'} Plan by Account")


def plot_benefit_bars(ax: plt.Axes, report: 'ReportData') -> None:
    """Horizontal bars for each benefit figure in the report."""
    labels = [
        'Tax Credit Reinvestment',
        'Tax Deferral',
        'ISA Maturity Conversion',
        'Overseas Equity Deferral',
        'Unallocated Cash Opportunity Cost',
        'Total Benefit',
    ]
    values = np.array([
        report.tax_credit_benefit,
        report.tax_deferred_benefit,
        report.isa_optimization_benefit,
        report.overseas_stock_benefit,
        report.surplus_opportunity_cost,
        report.total_benefit,
    ], dtype=float)
    colors = [COLORS['benefit'] if v >= 0 else COLORS['cost'] for v in values]

    y = np.arange(len(labels))
    ax.barh(y, values, color=colors, alpha=0.85)
    ax.set_yticks(y)
    ax.set_yticklabels(labels, fontsize=9)
    ax.invert_yaxis()

    for yi, v in zip(y, values):
        ax.annotate(f'{v:,.0f}', xy=(v, yi), xytext=(4, 0), textcoords='offset points',
                    va='center', fontsize=8)

    ax.axvline(x=0, color='gray', linestyle='-', alpha=0.3)
    format_currency_axis(ax, axis='x')
    ax.set_xlabel('Amount (10k KRW)')
    ax.set_title('Where the Advantage Comes From')


def create_plan_comparison_figure(
    result: 'SimulationResult',
    report: 'ReportData',
    user_input: Optional['UserInput'] = None,
    config: Optional['TaxConfig'] = None,
    figsize: Tuple[int, int] = (16, 11),
    use_years: bool = False,
) -> plt.Figure:
    """
    Create the main comparison page.

    Shows:
    - Total assets for both plans (and the target, if any)
    - Year-by-year advantage of the optimized plan
    - Optimized plan balances by account
    - Benefit attribution
    """
    target = user_input.target_assets if user_input is not None else 0
    period = config.isa_maturity_years if config is not None else 3

    fig, axes = plt.subplots(2, 2, figsize=figsize)
    plot_total_assets(axes[0, 0], result, target, use_years)
    plot_asset_difference(axes[0, 1], result, period, use_years)
    plot_account_breakdown(axes[1, 0], result, 'optimized', use_years)
    plot_benefit_bars(axes[1, 1], report)

    fig.suptitle('User Plan vs Optimized Plan', fontweight='bold')
    fig.tight_layout()
    return fig


def create_breakdown_figure(
    result: 'SimulationResult',
    figsize: Tuple[int, int] = (16, 6),
    use_years: bool = False,
) -> plt.Figure:
    """Side-by-side account breakdowns sharing a y-axis."""
    fig, axes = plt.subplots(1, 2, figsize=figsize, sharey=True)
    plot_account_breakdown(axes[0], result, 'user', use_years)
    plot_account_breakdown(axes[1], result, 'optimized', use_years)
    fig.tight_layout()
    return fig


def create_return_rate_sensitivity_figure(
    sweep: List[Tuple[float, 'SimulationResult']],
    figsize: Tuple[int, int] = (16, 6),
    use_years: bool = False,
) -> plt.Figure:
    """
    Final assets and advantage across expected return rates.

    Args:
        sweep: (rate in percent, result) pairs from run_return_rate_sweep
    """
    fig, axes = plt.subplots(1, 2, figsize=figsize)

    ax = axes[0]
    for i, (rate, result) in enumerate(sweep):
        x, xlabel = get_x_axis(result.ages, use_years)
        color = SWEEP_COLORS[i % len(SWEEP_COLORS)]
        ax.plot(x, result.optimized_total_assets, color=color, linewidth=2,
                label=f'Optimized {rate:g}%')
        ax.plot(x, result.user_total_assets, color=color, linewidth=1.5,
                linestyle='--', label=f'User {rate:g}%')
    format_currency_axis(ax)
    add_standard_chart_elements(ax, xlabel, 'Total Assets (10k KRW)', 'Total Assets by Return Rate',
                                add_zero=False)

    ax = axes[1]
    rates = np.array([rate for rate, _ in sweep])
    gaps = np.array([result.summary.final_asset_difference for _, result in sweep])
    ax.bar(rates, gaps, width=0.6, color=COLORS['difference'], alpha=0.85,
           label='Final Advantage')
    add_zero_line(ax)
    format_currency_axis(ax)
    ax.set_xlabel('Expected Return (%)')
    ax.set_ylabel('Final Asset Difference (10k KRW)')
    ax.set_title('Optimized Advantage vs Return Rate')
    ax.legend(loc='upper left', fontsize=9)

    fig.tight_layout()
    return fig
