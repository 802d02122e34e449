"""
Main Orchestration Script

Runs every feature selection method on each configured dataset:
1. Data loading and preprocessing (type coercion, zero-fill)
2. Correlation filter
3. Recursive feature elimination
4. Lasso logistic regression
5. Random forest importance
6. Stepwise backward elimination
7. Method comparison and export

A failing step is reported with its traceback and stops the run.

Besides the configured reference datasets, any CSV file with a header row
can be analysed with ``--csv PATH --label COLUMN``.
"""

import argparse
import sys
import traceback
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from src.utils import load_config
from src.preprocessing import load_dataset, load_csv, prepare_dataset, split_data, describe_dataset
from src.feature_selection import (
    run_correlation_filter,
    run_recursive_elimination,
    run_lasso_selection,
    run_forest_importance,
    run_backward_elimination,
)
from src.analysis import compare_selections, save_results

ALL_STEPS = ['correlation', 'rfe', 'lasso', 'forest', 'stepwise', 'compare']


def banner(title):
    print("\n" + "=" * 80)
    print(title)
    print("=" * 80)


def prepare(dataset_name, config, raw=None, ds_cfg=None):
    """
    Load and clean one dataset.

    Reference datasets are loaded through their config section; a table
    already read from a CSV file is passed as ``raw`` with its own ``ds_cfg``
    (label, drop_columns, positive_class).
    """
    if ds_cfg is None:
        ds_cfg = config['datasets'][dataset_name]
    prep_cfg = config.get('preprocessing', {})

    if raw is None:
        raw = load_dataset(dataset_name, config)
    dataset = prepare_dataset(
        raw,
        label=ds_cfg['label'],
        drop_columns=ds_cfg.get('drop_columns'),
        missing_strategy=prep_cfg.get('missing_strategy', 'zero'),
        positive_class=ds_cfg.get('positive_class'),
    )
    describe_dataset(dataset)
    return dataset


def run_step(step, dataset, config):
    """Run one method on a prepared dataset and return its result."""
    seed = config.get('random_state', 42)
    X, y = dataset.X, dataset.y

    if step == 'correlation':
        cfg = config.get('correlation', {})
        return run_correlation_filter(X, threshold=cfg.get('threshold', 0.7),
                                      method=cfg.get('method', 'pearson'))

    if step == 'rfe':
        from sklearn.ensemble import RandomForestClassifier
        cfg = config.get('rfe', {})
        estimator = RandomForestClassifier(n_estimators=cfg.get('n_estimators', 100),
                                           random_state=seed)
        return run_recursive_elimination(X, y, sizes=cfg.get('sizes'), estimator=estimator,
                                         n_folds=cfg.get('n_folds', 10),
                                         scoring=cfg.get('scoring', 'accuracy'),
                                         random_state=seed)

    if step == 'lasso':
        cfg = config.get('lasso', {})
        return run_lasso_selection(X, y, n_cs=cfg.get('n_cs', 50),
                                   n_folds=cfg.get('n_folds', 10),
                                   scoring=cfg.get('scoring', 'neg_log_loss'),
                                   max_iter=cfg.get('max_iter', 1000),
                                   random_state=seed)

    if step == 'forest':
        cfg = config.get('random_forest', {})
        prep_cfg = config.get('preprocessing', {})
        X_train, X_test, y_train, y_test = split_data(
            X, y, test_size=prep_cfg.get('test_size', 0.3),
            stratify=prep_cfg.get('stratify', True), random_state=seed)
        print(f"\n[Split] train={len(X_train)}, test={len(X_test)}")
        return run_forest_importance(X_train, y_train,
                                     n_estimators=cfg.get('n_estimators', 500),
                                     oob_score=cfg.get('oob_score', True),
                                     max_features=cfg.get('max_features', 'sqrt'),
                                     n_repeats=cfg.get('n_repeats', 10),
                                     X_eval=X_test, y_eval=y_test,
                                     random_state=seed)

    if step == 'stepwise':
        cfg = config.get('stepwise', {})
        return run_backward_elimination(X, y, criterion=cfg.get('criterion', 'aic'),
                                        family=cfg.get('family', 'gaussian'))

    raise ValueError(f"Unknown step: {step}")


def run_dataset(dataset_name, config, steps, output_dir, make_plots=True, raw=None, ds_cfg=None):
    """Run the selected steps on one dataset; returns the results dict."""
    banner(f"DATASET: {dataset_name}")
    dataset = prepare(dataset_name, config, raw=raw, ds_cfg=ds_cfg)

    results = {}
    for number, step in enumerate([s for s in steps if s != 'compare'], start=1):
        banner(f"STEP {number}: {step.upper()} ({dataset_name})")
        try:
            results[step] = run_step(step, dataset, config)
        except Exception as e:
            print(f"[ERROR] {step} failed on {dataset_name}: {e}")
            traceback.print_exc()
            raise

    comparison = None
    if 'compare' in steps:
        comparison = compare_selections(results, dataset.feature_names)

    save_results(results, dataset_name, output_dir, comparison=comparison)

    if make_plots:
        from src.visualization import create_all_visualizations
        create_all_visualizations(results, dataset_name,
                                  output_dir=Path(output_dir) / dataset_name / 'figures')

    return results


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Filter, wrapper and embedded feature selection on biomedical datasets'
    )
    parser.add_argument('--config', type=str, default='config/config.yml', help='Config file')
    parser.add_argument('--datasets', nargs='+', help='Datasets to analyse (default: all configured)')
    parser.add_argument('--steps', nargs='+', choices=ALL_STEPS, help='Run specific steps only')
    parser.add_argument('--output_dir', type=str, default=None, help='Output directory')
    parser.add_argument('--no_plots', action='store_true', help='Skip figure generation')
    parser.add_argument('--csv', type=str, default=None,
                        help='Analyse this CSV file (header row) instead of the configured datasets')
    parser.add_argument('--label', type=str, default=None, help='Label column of --csv')
    parser.add_argument('--drop_columns', nargs='+', default=None,
                        help='Columns of --csv excluded from the features')
    parser.add_argument('--positive_class', type=str, default=None,
                        help='Label value of --csv encoded as 1')

    args = parser.parse_args(argv)
    if args.csv and not args.label:
        parser.error("--csv requires --label")
    config = load_config(args.config)

    banner("FEATURE SELECTION - COMPLETE PIPELINE")

    steps = args.steps or ALL_STEPS
    output_dir = args.output_dir or config.get('output_dir', 'results')

    all_results = {}
    if args.csv:
        dataset_name = Path(args.csv).stem
        ds_cfg = {'label': args.label, 'drop_columns': args.drop_columns,
                  'positive_class': args.positive_class}
        raw = load_csv(args.csv, args.label)
        all_results[dataset_name] = run_dataset(dataset_name, config, steps, output_dir,
                                                make_plots=not args.no_plots,
                                                raw=raw, ds_cfg=ds_cfg)
        banner("PIPELINE COMPLETE!")
        print(f"\nResults saved to: {output_dir}/")
        return all_results

    datasets = args.datasets or list(config.get('datasets', {}))
    unknown = [d for d in datasets if d not in config.get('datasets', {})]
    if unknown:
        parser.error(f"Unknown datasets: {unknown}")

    for dataset_name in datasets:
        all_results[dataset_name] = run_dataset(dataset_name, config, steps, output_dir,
                                                make_plots=not args.no_plots)

    banner("PIPELINE COMPLETE!")
    print(f"\nResults saved to: {output_dir}/")
    return all_results


if __name__ == "__main__":
    main()
