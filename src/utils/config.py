"""
Configuration Loading

Reads the YAML pipeline configuration and fills any missing keys from
DEFAULT_CONFIG so every step can rely on its section being present.
"""

import copy
from pathlib import Path

import yaml


BREAST_CANCER_COLUMNS = [
    'Id', 'Cl.thickness', 'Cell.size', 'Cell.shape', 'Marg.adhesion',
    'Epith.c.size', 'Bare.nuclei', 'Bl.cromatin', 'Normal.nucleoli',
    'Mitoses', 'Class'
]

PIMA_COLUMNS = [
    'pregnant', 'glucose', 'pressure', 'triceps', 'insulin',
    'mass', 'pedigree', 'age', 'diabetes'
]

DEFAULT_CONFIG = {
    'random_state': 42,
    'output_dir': 'results',
    'data_dir': 'data/raw',
    'datasets': {
        'breast_cancer': {
            'url': ('https://archive.ics.uci.edu/ml/machine-learning-databases/'
                    'breast-cancer-wisconsin/breast-cancer-wisconsin.data'),
            'path': None,
            'columns': BREAST_CANCER_COLUMNS,
            'label': 'Class',
            'drop_columns': ['Id'],
            'label_map': {2: 'benign', 4: 'malignant'},
            'na_values': ['?'],
            'positive_class': 'malignant',
        },
        'pima_diabetes': {
            'url': ('https://raw.githubusercontent.com/jbrownlee/Datasets/'
                    'master/pima-indians-diabetes.data.csv'),
            'path': None,
            'columns': PIMA_COLUMNS,
            'label': 'diabetes',
            'drop_columns': [],
            'label_map': {0: 'neg', 1: 'pos'},
            'na_values': [],
            'positive_class': 'pos',
        },
    },
    'preprocessing': {
        'missing_strategy': 'zero',
        'test_size': 0.3,
        'stratify': True,
    },
    'correlation': {
        'threshold': 0.7,
        'method': 'pearson',
    },
    'rfe': {
        'sizes': [1, 2, 3, 4, 5, 6, 7, 8],
        'n_folds': 10,
        'n_estimators': 100,
        'scoring': 'accuracy',
    },
    'lasso': {
        'n_cs': 50,
        'n_folds': 10,
        'scoring': 'neg_log_loss',
        'max_iter': 1000,
    },
    'random_forest': {
        'n_estimators': 500,
        'oob_score': True,
        'max_features': 'sqrt',
        'n_repeats': 10,
    },
    'stepwise': {
        'criterion': 'aic',
        'family': 'gaussian',
    },
}


def _merge(defaults, overrides):
    """Recursively overlay ``overrides`` on a copy of ``defaults``."""
    merged = copy.deepcopy(defaults)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path='config/config.yml'):
    """
    Load configuration from YAML file.

    Keys absent from the file keep their DEFAULT_CONFIG values. A missing
    file yields the defaults unchanged.

    Args:
        config_path: Path to the YAML config file

    Returns:
        dict: Merged configuration
    """
    config_path = Path(config_path)
    if not config_path.exists():
        print(f"[WARNING] Config file not found: {config_path}. Using defaults.")
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, 'r') as f:
        user_config = yaml.safe_load(f) or {}

    return _merge(DEFAULT_CONFIG, user_config)
