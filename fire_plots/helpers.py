"""
Plot utility functions and helpers for plan comparison charts.

This module provides common plotting utilities used across visualization modules.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, List, Tuple

from .styles import COLORS, ACCOUNT_LABELS


def get_x_axis(ages: np.ndarray, use_years: bool = False) -> Tuple[np.ndarray, str]:
    """
    Get x-axis values and label.

    Args:
        ages: Array of ages
        use_years: If True, use years from the start of the plan

    Returns:
        Tuple of (x_values, xlabel)
    """
    if use_years:
        return np.arange(len(ages)), 'Years from Start'
    return ages, 'Age'


def add_zero_line(ax: plt.Axes, alpha: float = 0.3) -> None:
    """Add a horizontal line at y=0."""
    ax.axhline(y=0, color='gray', linestyle='-', alpha=alpha)


def add_maturity_lines(ax: plt.Axes, x: np.ndarray, period: int) -> None:
    """Mark ISA maturity years (every `period` years after the start)."""
    for i in range(period, len(x), period):
        ax.axvline(x=x[i], color=COLORS['isa'], linestyle=':', alpha=0.4, linewidth=1)


def format_currency_axis(ax: plt.Axes, axis: str = 'y') -> None:
    """Format axis labels as comma-grouped whole amounts (10k KRW units)."""
    def currency_formatter(x, pos):
        return f'{x:,.0f}'

    if axis == 'y':
        ax.yaxis.set_major_formatter(plt.FuncFormatter(currency_formatter))
    else:
        ax.xaxis.set_major_formatter(plt.FuncFormatter(currency_formatter))


def plot_account_stack(
    ax: plt.Axes,
    x: np.ndarray,
    balances: Dict[str, np.ndarray],
    show_legend: bool = True,
) -> None:
    """
    Plot a stacked area chart of account balances.

    Args:
        ax: Matplotlib axes to plot on
        x: X-axis values
        balances: Account name -> balance path; all-zero accounts are skipped
        show_legend: Whether to show legend
    """
    names: List[str] = [name for name, path in balances.items() if np.any(path)]
    if not names:
        return

    ax.stackplot(x,
                 *[balances[name] for name in names],
                 labels=[ACCOUNT_LABELS.get(name, name) for name in names],
                 colors=[COLORS.get(name, 'gray') for name in names],
                 alpha=0.85)

    if show_legend:
        ax.legend(loc='upper left', fontsize=8)


def add_standard_chart_elements(
    ax: plt.Axes,
    xlabel: str,
    ylabel: str,
    title: str,
    add_zero: bool = True,
    legend_loc: str = 'upper left',
) -> None:
    """
    Add standard chart elements (zero line, labels, title, legend).

    Args:
        ax: Matplotlib axes
        xlabel: X-axis label
        ylabel: Y-axis label
        title: Chart title
        add_zero: Whether to add horizontal line at y=0
        legend_loc: Legend location
    """
    if add_zero:
        add_zero_line(ax)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    ax.legend(loc=legend_loc, fontsize=9)
