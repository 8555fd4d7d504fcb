"""
Visualization module for plan comparison analysis.

This module consolidates all matplotlib visualization code for the savings
plan simulator, providing a clean separation from business logic.

Submodules:
- styles: Color schemes, account labels, and style constants
- helpers: Common plotting utilities
- comparison_plots: User vs optimized plan visualizations
"""

# Import styles and helpers
from .styles import (
    COLORS,
    ACCOUNT_LABELS,
    SWEEP_COLORS,
    apply_standard_style,
)

from .helpers import (
    get_x_axis,
    add_zero_line,
    add_maturity_lines,
    format_currency_axis,
    plot_account_stack,
    add_standard_chart_elements,
)

# Import comparison plots
from .comparison_plots import (
    plot_total_assets,
    plot_asset_difference,
    plot_account_breakdown,
    plot_benefit_bars,
    create_plan_comparison_figure,
    create_breakdown_figure,
    create_return_rate_sensitivity_figure,
)

__all__ = [
    # Styles
    'COLORS',
    'ACCOUNT_LABELS',
    'SWEEP_COLORS',
    'apply_standard_style',

    # Helpers
    'get_x_axis',
    'add_zero_line',
    'add_maturity_lines',
    'format_currency_axis',
    'plot_account_stack',
    'add_standard_chart_elements',

    # Comparison plots
    'plot_total_assets',
    'plot_asset_difference',
    'plot_account_breakdown',
    'plot_benefit_bars',
    'create_plan_comparison_figure',
    'create_breakdown_figure',
    'create_return_rate_sensitivity_figure',
]
