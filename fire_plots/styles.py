"""
Centralized style definitions for plan comparison charts.

This module provides consistent colors, fonts, and styles across all plots.
"""

import matplotlib.pyplot as plt

# Set consistent style for all figures
plt.style.use('seaborn-v0_8-whitegrid')

# Main color scheme (colorblind-friendly: blue-orange palette)
COLORS = {
    # Plans
    'user': '#E9C46A',        # Amber
    'optimized': '#1A759F',   # Deep blue
    'difference': '#2A9D8F',  # Teal
    'target': '#BC6C25',      # Rust

    # Accounts
    'pension': '#1D3557',     # Dark blue
    'irp': '#457B9D',         # Blue
    'isa': '#9b59b6',         # Purple
    'domestic': '#F4A261',    # Coral
    'overseas': '#0077B6',    # Teal-blue
    'unallocated_cash': '#95a5a6',  # Gray

    # Benefits
    'benefit': '#2A9D8F',
    'cost': '#E07A5F',        # Burnt orange
}

ACCOUNT_LABELS = {
    'pension': 'Pension Savings',
    'irp': 'IRP',
    'isa': 'ISA',
    'domestic': 'Domestic Equity',
    'overseas': 'Overseas Equity',
    'unallocated_cash': 'Unallocated Cash',
}

# Colors for rate sweep lines (colorblind-safe)
SWEEP_COLORS = ['#1A759F', '#E9C46A', '#2A9D8F', '#BC6C25', '#9b59b6']


def apply_standard_style():
    """Apply standard matplotlib style settings."""
    plt.rcParams.update({
        'font.size': 12,
        'axes.titlesize': 14,
        'axes.labelsize': 12,
        'legend.fontsize': 10,
        'figure.titlesize': 16,
    })
