"""Visualization module for the feature selection methods."""

from .visualizers import (
    create_all_visualizations,
    plot_correlation_heatmap,
    plot_rfe_profile,
    plot_lasso_path,
    plot_forest_importance,
    plot_stepwise_trace
)

__all__ = [
    'create_all_visualizations',
    'plot_correlation_heatmap',
    'plot_rfe_profile',
    'plot_lasso_path',
    'plot_forest_importance',
    'plot_stepwise_trace'
]
