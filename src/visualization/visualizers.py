"""
Visualization Module

Creates the figures for each feature selection method: correlation heatmap,
RFE performance profile, Lasso CV curve and coefficient path, random forest
importance dot chart and the stepwise criterion trace.
"""

import numpy as np
from pathlib import Path
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns


def _save(fig, output_dir, filename):
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / filename
    fig.tight_layout()
    fig.savefig(output_file, dpi=300, bbox_inches='tight')
    print(f"    [Saved] {output_file}")
    plt.close(fig)
    return output_file


def plot_correlation_heatmap(correlation_result, dataset_name, output_dir='results/figures'):
    """
    Heatmap of the correlation matrix with the removal threshold in the title.

    Args:
        correlation_result: CorrelationFilterResult
        dataset_name: Dataset name
        output_dir: Output directory
    """
    print(f"\n[Visualization] Creating correlation heatmap for {dataset_name}...")
    corr = correlation_result.correlation_matrix
    size = max(6, 0.7 * len(corr))

    mask = np.triu(np.ones(corr.shape, dtype=bool), k=1)
    fig, ax = plt.subplots(figsize=(size, size * 0.85))
    sns.heatmap(corr, mask=mask, annot=True, fmt='.2f', cmap='RdBu_r',
                vmin=-1, vmax=1, square=True, ax=ax,
                cbar_kws={'label': 'Correlation'})
    dropped = ', '.join(correlation_result.features_to_drop) or 'none'
    ax.set_title(f'{dataset_name}: Correlation (|r| > {correlation_result.threshold:.2f} '
                 f'drops: {dropped})')

    return _save(fig, output_dir, f"{dataset_name.lower()}_correlation_heatmap.png")


def plot_rfe_profile(rfe_result, dataset_name, output_dir='results/figures'):
    """
    Cross-validated score vs. number of features.

    Args:
        rfe_result: RFEResult
        dataset_name: Dataset name
        output_dir: Output directory
    """
    print(f"\n[Visualization] Creating RFE profile for {dataset_name}...")
    perf = rfe_result.performance

    fig, ax = plt.subplots(figsize=(8, 5))
    ax.errorbar(perf['n_features'], perf['score_mean'], yerr=perf['score_sd'],
                marker='o', capsize=3, color='steelblue')
    best = perf[perf['selected']]
    ax.scatter(best['n_features'], best['score_mean'], s=120, color='crimson',
               zorder=3, label=f'Best size = {rfe_result.best_size}')
    ax.set_xlabel('Variables')
    ax.set_ylabel(f'{rfe_result.scoring.replace("_", " ").title()} (Cross-Validation)')
    ax.set_title(f'{dataset_name}: Recursive Feature Elimination')
    ax.set_xticks(perf['n_features'])
    ax.legend()
    ax.grid(alpha=0.3)

    return _save(fig, output_dir, f"{dataset_name.lower()}_rfe_profile.png")


def plot_lasso_path(lasso_result, dataset_name, output_dir='results/figures'):
    """
    Two panels: CV error vs. log(lambda) and the coefficient path.

    Args:
        lasso_result: LassoResult
        dataset_name: Dataset name
        output_dir: Output directory
    """
    print(f"\n[Visualization] Creating Lasso path for {dataset_name}...")
    cv = lasso_result.cv_results
    path = lasso_result.path
    log_min = np.log(lasso_result.lambda_min)
    log_1se = np.log(lasso_result.lambda_1se)

    fig, axes = plt.subplots(1, 2, figsize=(16, 6))

    axes[0].errorbar(np.log(cv['lambda']), cv['cv_error'], yerr=cv['cv_se'],
                     fmt='o', color='crimson', ecolor='gray', markersize=4, capsize=2)
    axes[0].axvline(log_min, linestyle='--', color='black', label='lambda.min')
    axes[0].axvline(log_1se, linestyle=':', color='black', label='lambda.1se')
    axes[0].set_xlabel('log(Lambda)')
    axes[0].set_ylabel(f'CV error ({lasso_result.scoring})')
    axes[0].set_title(f'{dataset_name}: Cross-Validated Error')
    axes[0].legend()

    log_lambda = np.log(path.index.values.astype(float))
    for feature in path.columns:
        axes[1].plot(log_lambda, path[feature], label=feature)
    axes[1].axvline(log_min, linestyle='--', color='black')
    axes[1].axvline(log_1se, linestyle=':', color='black')
    axes[1].axhline(0, color='gray', linewidth=0.5)
    axes[1].set_xlabel('log(Lambda)')
    axes[1].set_ylabel('Coefficients')
    axes[1].set_title(f'{dataset_name}: Lasso Regularization Path')
    axes[1].legend(fontsize=8, loc='best')

    return _save(fig, output_dir, f"{dataset_name.lower()}_lasso_path.png")


def plot_forest_importance(forest_result, dataset_name, output_dir='results/figures'):
    """
    Dot charts of MeanDecreaseAccuracy and MeanDecreaseGini side by side.

    Args:
        forest_result: ForestImportanceResult
        dataset_name: Dataset name
        output_dir: Output directory
    """
    print(f"\n[Visualization] Creating variable importance plot for {dataset_name}...")
    importance = forest_result.importance

    fig, axes = plt.subplots(1, 2, figsize=(14, max(4, 0.45 * len(importance))))
    for ax, column in zip(axes, ['MeanDecreaseAccuracy', 'MeanDecreaseGini']):
        ordered = importance[column].sort_values()
        ax.scatter(ordered.values, range(len(ordered)), color='black')
        ax.hlines(range(len(ordered)), ordered.values.min(), ordered.values,
                  linestyles='dotted', color='gray')
        ax.set_yticks(range(len(ordered)))
        ax.set_yticklabels(ordered.index)
        ax.set_xlabel(column)
    fig.suptitle(f'{dataset_name}: Random Forest Variable Importance')

    return _save(fig, output_dir, f"{dataset_name.lower()}_forest_importance.png")


def plot_stepwise_trace(stepwise_result, dataset_name, output_dir='results/figures'):
    """
    Criterion value after each elimination step.

    Args:
        stepwise_result: StepwiseResult
        dataset_name: Dataset name
        output_dir: Output directory
    """
    print(f"\n[Visualization] Creating stepwise trace for {dataset_name}...")
    steps = stepwise_result.steps
    label = stepwise_result.criterion.upper()
    ticks = ['full'] + [f'-{f}' for f in steps['removed'].iloc[1:]]

    fig, ax = plt.subplots(figsize=(max(6, 1.2 * len(steps)), 5))
    ax.plot(range(len(steps)), steps[label], marker='o', color='darkgreen')
    ax.set_xticks(range(len(steps)))
    ax.set_xticklabels(ticks, rotation=30, ha='right')
    ax.set_ylabel(label)
    ax.set_title(f'{dataset_name}: Backward Elimination ({stepwise_result.family})')
    ax.grid(alpha=0.3)

    return _save(fig, output_dir, f"{dataset_name.lower()}_stepwise_trace.png")


def create_all_visualizations(results, dataset_name, output_dir='results/figures'):
    """
    Create every figure for which a result is available.

    Args:
        results: Dict mapping method key ('correlation', 'rfe', 'lasso',
                 'forest', 'stepwise') to its result object
        dataset_name: Dataset name
        output_dir: Output directory

    Returns:
        list: Paths of the saved figures
    """
    plotters = {
        'correlation': plot_correlation_heatmap,
        'rfe': plot_rfe_profile,
        'lasso': plot_lasso_path,
        'forest': plot_forest_importance,
        'stepwise': plot_stepwise_trace,
    }
    saved = []
    for key, plotter in plotters.items():
        if results.get(key) is not None:
            saved.append(plotter(results[key], dataset_name, output_dir))
    return saved
