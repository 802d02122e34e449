"""
Results Synthesis Module

Writes the tables produced by every method for one dataset to CSV and a
JSON summary of the selected features.
"""

import json
from pathlib import Path
from typing import Dict

import pandas as pd


def _selected_summary(results: Dict) -> Dict:
    summary = {}
    if results.get('correlation') is not None:
        summary['correlation_drop'] = results['correlation'].features_to_drop
    if results.get('rfe') is not None:
        summary['rfe_best_size'] = results['rfe'].best_size
        summary['rfe_selected'] = results['rfe'].selected_features
    if results.get('lasso') is not None:
        lasso = results['lasso']
        summary['lasso_lambda_min'] = lasso.lambda_min
        summary['lasso_lambda_1se'] = lasso.lambda_1se
        summary['lasso_selected_min'] = lasso.selected_min
        summary['lasso_selected_1se'] = lasso.selected_1se
    if results.get('forest') is not None:
        summary['forest_oob_score'] = results['forest'].oob_score
        summary['forest_ranking'] = list(results['forest'].importance.index)
    if results.get('stepwise') is not None:
        stepwise = results['stepwise']
        summary['stepwise_removed'] = stepwise.removed_features
        summary['stepwise_selected'] = stepwise.selected_features
        summary[f'stepwise_full_{stepwise.criterion}'] = stepwise.full_criterion
        summary[f'stepwise_final_{stepwise.criterion}'] = stepwise.final_criterion
    return summary


def save_results(results: Dict, dataset_name: str, output_dir: str = 'results',
                 comparison: pd.DataFrame = None) -> Path:
    """
    Save result tables for one dataset.

    Args:
        results: Dict mapping method key to its result object
        dataset_name: Dataset name (used as sub-directory)
        output_dir: Root output directory
        comparison: Optional table from ``compare_selections``

    Returns:
        Path: Directory the files were written to
    """
    out_dir = Path(output_dir) / dataset_name
    out_dir.mkdir(parents=True, exist_ok=True)

    tables = {}
    if results.get('correlation') is not None:
        tables['correlation_matrix.csv'] = results['correlation'].correlation_matrix
        tables['correlation_pairs.csv'] = results['correlation'].high_correlation_pairs
    if results.get('rfe') is not None:
        tables['rfe_performance.csv'] = results['rfe'].performance
        tables['rfe_ranking.csv'] = results['rfe'].ranking
    if results.get('lasso') is not None:
        tables['lasso_cv.csv'] = results['lasso'].cv_results
        tables['lasso_coefficients.csv'] = results['lasso'].coefficients
        tables['lasso_path.csv'] = results['lasso'].path
    if results.get('forest') is not None:
        tables['forest_importance.csv'] = results['forest'].importance
    if results.get('stepwise') is not None:
        tables['stepwise_steps.csv'] = results['stepwise'].steps
    if comparison is not None:
        tables['selection_summary.csv'] = comparison

    # Index carries feature/lambda names only for these tables
    indexed = {'correlation_matrix.csv', 'lasso_coefficients.csv', 'lasso_path.csv',
               'forest_importance.csv', 'selection_summary.csv'}
    for filename, table in tables.items():
        table.to_csv(out_dir / filename, index=filename in indexed)

    summary_file = out_dir / 'summary.json'
    with open(summary_file, 'w') as f:
        json.dump(_selected_summary(results), f, indent=2, default=str)

    print(f"\n[Saved] {len(tables)} tables and summary.json to {out_dir}")
    return out_dir
