"""Shared fixtures: synthetic tables shaped like the reference datasets."""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def breast_cancer_like():
    """699 x 11 table mimicking the Wisconsin breast cancer data (with '?' gaps as NaN)."""
    rng = np.random.RandomState(0)
    n = 699
    malignant = rng.rand(n) < 0.345
    severity = np.where(malignant, rng.uniform(5, 10, n), rng.uniform(1, 4, n))

    def scored(noise):
        return np.clip(np.round(severity + rng.normal(0, noise, n)), 1, 10)

    cell_size = scored(1.0)
    df = pd.DataFrame({
        'Id': rng.randint(100000, 1400000, n),
        'Cl.thickness': scored(2.0),
        'Cell.size': cell_size,
        'Cell.shape': np.clip(cell_size + rng.choice([-1, 0, 0, 1], n), 1, 10),
        'Marg.adhesion': scored(2.5),
        'Epith.c.size': scored(2.5),
        'Bare.nuclei': scored(2.0),
        'Bl.cromatin': scored(2.0),
        'Normal.nucleoli': scored(2.5),
        'Mitoses': np.clip(np.round(rng.exponential(1.0, n)) + 1, 1, 10),
        'Class': np.where(malignant, 'malignant', 'benign'),
    })
    missing = rng.choice(n, 16, replace=False)
    df.loc[missing, 'Bare.nuclei'] = np.nan
    return df


@pytest.fixture
def pima_like():
    """768 x 9 table mimicking the Pima diabetes data (weakly correlated features)."""
    rng = np.random.RandomState(1)
    n = 768
    df = pd.DataFrame({
        'pregnant': rng.poisson(3.8, n).astype(float),
        'glucose': rng.normal(121, 32, n).round(),
        'pressure': rng.normal(69, 19, n).round(),
        'triceps': rng.normal(20, 16, n).clip(0).round(),
        'insulin': rng.exponential(80, n).round(),
        'mass': rng.normal(32, 7.9, n).round(1),
        'pedigree': rng.gamma(2.0, 0.24, n).round(3),
        'age': rng.randint(21, 81, n).astype(float),
    })
    logit = 0.035 * (df['glucose'] - 121) + 0.08 * (df['mass'] - 32) - 0.6
    positive = rng.rand(n) < 1.0 / (1.0 + np.exp(-logit))
    df['diabetes'] = np.where(positive, 'pos', 'neg')
    return df


@pytest.fixture
def small_classification():
    """200 x 6 frame: two informative features, one redundant copy, three noise columns."""
    rng = np.random.RandomState(7)
    n = 200
    signal_a = rng.normal(size=n)
    signal_b = rng.normal(size=n)
    X = pd.DataFrame({
        'signal_a': signal_a,
        'signal_b': signal_b,
        'signal_a_copy': signal_a + rng.normal(0, 0.05, n),
        'noise_1': rng.normal(size=n),
        'noise_2': rng.normal(size=n),
        'noise_3': rng.normal(size=n),
    })
    y = (2.0 * signal_a - 1.5 * signal_b + rng.normal(0, 0.5, n) > 0).astype(int)
    return X, y
