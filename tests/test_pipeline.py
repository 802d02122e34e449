"""Tests for configuration, method comparison, export, plotting and the pipeline script."""

import json
from pathlib import Path

import pandas as pd
import pytest
import yaml

from src.utils import load_config, DEFAULT_CONFIG
from src.preprocessing import prepare_dataset
from src.feature_selection import (
    run_correlation_filter,
    run_lasso_selection,
    run_forest_importance,
    run_backward_elimination,
)
from src.analysis import compare_selections, save_results
from src.visualization import create_all_visualizations


class TestConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / 'absent.yml')

        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_partial_file_is_merged(self, tmp_path):
        path = tmp_path / 'config.yml'
        path.write_text(yaml.safe_dump({'correlation': {'threshold': 0.8}, 'random_state': 1}))
        config = load_config(path)

        assert config['correlation'] == {'threshold': 0.8, 'method': 'pearson'}
        assert config['random_state'] == 1
        assert config['lasso'] == DEFAULT_CONFIG['lasso']

    def test_shipped_config_matches_defaults(self):
        config = load_config(Path(__file__).resolve().parent.parent / 'config' / 'config.yml')

        assert config['datasets']['breast_cancer']['label_map'] == {2: 'benign', 4: 'malignant'}
        assert config['correlation']['threshold'] == 0.7


@pytest.fixture
def pima_results(pima_like):
    dataset = prepare_dataset(pima_like, label='diabetes', positive_class='pos', verbose=False)
    results = {
        'correlation': run_correlation_filter(dataset.X, verbose=False),
        'lasso': run_lasso_selection(dataset.X, dataset.y, n_cs=6, n_folds=3, verbose=False),
        'forest': run_forest_importance(dataset.X, dataset.y, n_estimators=20, n_repeats=2,
                                        verbose=False),
        'stepwise': run_backward_elimination(dataset.X, dataset.y, verbose=False),
        'rfe': None,
    }
    return dataset, results


class TestCompareSelections:

    def test_table_layout(self, pima_results):
        dataset, results = pima_results
        table = compare_selections(results, dataset.feature_names, forest_top_k=3, verbose=False)

        assert set(table.index) == set(dataset.feature_names)
        assert list(table.columns) == ['correlation', 'lasso_min', 'lasso_1se',
                                       'forest_top', 'stepwise', 'votes']
        assert table['correlation'].all()
        assert table['forest_top'].sum() == 3
        assert (table['votes'] == table.drop(columns='votes').sum(axis=1)).all()
        assert table['votes'].is_monotonic_decreasing

    def test_default_top_k_is_half(self, pima_results):
        dataset, results = pima_results
        table = compare_selections(results, dataset.feature_names, verbose=False)

        assert table['forest_top'].sum() == 4


class TestExport:

    def test_save_results_writes_tables(self, tmp_path, pima_results):
        dataset, results = pima_results
        comparison = compare_selections(results, dataset.feature_names, verbose=False)
        out_dir = save_results(results, 'pima', tmp_path, comparison=comparison)

        assert (out_dir / 'correlation_matrix.csv').exists()
        assert (out_dir / 'lasso_path.csv').exists()
        assert (out_dir / 'selection_summary.csv').exists()
        assert not (out_dir / 'rfe_performance.csv').exists()

        summary = json.loads((out_dir / 'summary.json').read_text())
        assert summary['correlation_drop'] == []
        assert summary['stepwise_selected'] == results['stepwise'].selected_features

        importance = pd.read_csv(out_dir / 'forest_importance.csv', index_col=0)
        assert set(importance.index) == set(dataset.feature_names)

    def test_figures(self, tmp_path, pima_results):
        _, results = pima_results
        saved = create_all_visualizations(results, 'Pima', output_dir=tmp_path)

        assert len(saved) == 4
        assert all(path.exists() for path in saved)
        assert (tmp_path / 'pima_correlation_heatmap.png').exists()


def test_run_all_end_to_end(tmp_path, breast_cancer_like, pima_like):
    from run_all import main

    cache = tmp_path / 'cache'
    cache.mkdir()
    breast_cancer_like.to_csv(cache / 'breast_cancer.csv', index=False)
    pima_like.to_csv(cache / 'pima_diabetes.csv', index=False)

    config = {
        'data_dir': str(cache),
        'output_dir': str(tmp_path / 'results'),
        'rfe': {'sizes': [2, 4], 'n_folds': 3, 'n_estimators': 10},
        'lasso': {'n_cs': 5, 'n_folds': 3},
        'random_forest': {'n_estimators': 20, 'n_repeats': 2},
    }
    config_path = tmp_path / 'config.yml'
    config_path.write_text(yaml.safe_dump(config))

    results = main(['--config', str(config_path), '--no_plots',
                    '--datasets', 'breast_cancer', 'pima_diabetes'])

    bc, pima = results['breast_cancer'], results['pima_diabetes']
    assert bc['correlation'].features_to_drop
    assert pima['correlation'].features_to_drop == []
    assert all(bc[step] is not None for step in ['rfe', 'lasso', 'forest', 'stepwise'])
    assert (tmp_path / 'results' / 'breast_cancer' / 'selection_summary.csv').exists()
    assert (tmp_path / 'results' / 'pima_diabetes' / 'summary.json').exists()


def test_run_all_stops_on_failing_step(tmp_path, pima_like):
    from run_all import main

    cache = tmp_path / 'cache'
    cache.mkdir()
    pima_like.to_csv(cache / 'pima_diabetes.csv', index=False)
    config_path = tmp_path / 'config.yml'
    config_path.write_text(yaml.safe_dump({
        'data_dir': str(cache),
        'output_dir': str(tmp_path / 'results'),
        'correlation': {'threshold': 2.0},
    }))

    with pytest.raises(ValueError):
        main(['--config', str(config_path), '--no_plots', '--datasets', 'pima_diabetes',
              '--steps', 'correlation', 'compare'])
    assert not (tmp_path / 'results' / 'pima_diabetes').exists()


def test_run_all_on_csv_file(tmp_path, pima_like):
    from run_all import main

    source = tmp_path / 'clinic.csv'
    pima_like.assign(record=range(len(pima_like))).to_csv(source, index=False)
    config_path = tmp_path / 'config.yml'
    config_path.write_text(yaml.safe_dump({
        'output_dir': str(tmp_path / 'results'),
        'lasso': {'n_cs': 5, 'n_folds': 3},
    }))

    results = main(['--config', str(config_path), '--no_plots', '--csv', str(source),
                    '--label', 'diabetes', '--positive_class', 'pos',
                    '--drop_columns', 'record', '--steps', 'correlation', 'lasso', 'compare'])

    clinic = results['clinic']
    assert clinic['correlation'].features_to_drop == []
    assert 'record' not in clinic['correlation'].correlation_matrix.columns
    assert (tmp_path / 'results' / 'clinic' / 'selection_summary.csv').exists()


def test_run_all_csv_needs_label(tmp_path):
    from run_all import main

    with pytest.raises(SystemExit):
        main(['--csv', str(tmp_path / 'clinic.csv')])
