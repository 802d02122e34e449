"""
Checks against the real reference datasets.

The files are downloaded on first use; without network access these tests
are skipped.
"""

import pytest

from src.utils import DEFAULT_CONFIG
from src.preprocessing import load_dataset, prepare_dataset
from src.feature_selection import run_correlation_filter


def _load(name, data_dir):
    try:
        return load_dataset(name, DEFAULT_CONFIG, data_dir=data_dir, verbose=False)
    except OSError as e:
        pytest.skip(f"{name} not reachable: {e}")


@pytest.fixture(scope='module')
def data_dir(tmp_path_factory):
    return tmp_path_factory.mktemp('raw')


def _prepared(name, data_dir):
    ds_cfg = DEFAULT_CONFIG['datasets'][name]
    raw = _load(name, data_dir)
    return raw, prepare_dataset(raw, label=ds_cfg['label'], drop_columns=ds_cfg['drop_columns'],
                                positive_class=ds_cfg['positive_class'], verbose=False)


def test_breast_cancer_schema_and_removal_list(data_dir):
    raw, dataset = _prepared('breast_cancer', data_dir)

    assert raw.shape == (699, 11)
    assert set(raw['Class']) == {'benign', 'malignant'}
    assert dataset.n_missing == 16

    result = run_correlation_filter(dataset.X, threshold=0.7, verbose=False)
    assert result.features_to_drop
    assert {'Cell.size', 'Cell.shape'} & set(result.features_to_drop)


def test_pima_has_no_highly_correlated_pairs(data_dir):
    raw, dataset = _prepared('pima_diabetes', data_dir)

    assert raw.shape == (768, 9)
    result = run_correlation_filter(dataset.X, threshold=0.7, verbose=False)
    assert result.features_to_drop == []
