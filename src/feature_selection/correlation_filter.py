"""
Correlation filter.

Pipeline:
    1. Pairwise correlation matrix over the numeric feature columns.
    2. Pairs whose absolute correlation exceeds the threshold.
    3. Greedy removal: columns are visited in order of decreasing mean
       absolute correlation; for each offending pair the member with the
       higher mean absolute correlation with the remaining set is dropped.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, asdict
from typing import Dict, List

import numpy as np
import pandas as pd


CORRELATION_METHODS = ('pearson', 'spearman', 'kendall')


@dataclass
class CorrelationFilterResult:
    """Container for correlation filter outputs."""

    correlation_matrix: pd.DataFrame
    threshold: float
    high_correlation_pairs: pd.DataFrame
    features_to_drop: List[str]
    retained_features: List[str]

    def to_dict(self) -> Dict:
        """Convert dataclass to plain dictionary."""
        out = asdict(self)
        out['correlation_matrix'] = self.correlation_matrix.to_dict()
        out['high_correlation_pairs'] = self.high_correlation_pairs.to_dict(orient='records')
        return out


def _validate_threshold(threshold) -> float:
    threshold = float(threshold)
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"Correlation threshold must lie in [0, 1], got {threshold}")
    return threshold


def compute_correlation_matrix(X: pd.DataFrame, method: str = 'pearson') -> pd.DataFrame:
    """
    Pairwise correlation among the numeric columns of ``X``.

    Constant columns have undefined correlation; those entries are set to 0
    and the diagonal to 1.
    """
    if method not in CORRELATION_METHODS:
        raise ValueError(f"Unsupported correlation method: {method}")

    numeric = X.select_dtypes(include=[np.number])
    if numeric.shape[1] == 0:
        raise ValueError("No numeric feature columns to correlate")

    corr = numeric.corr(method=method)
    values = np.nan_to_num(corr.to_numpy(dtype=float), nan=0.0)
    values = np.clip((values + values.T) / 2.0, -1.0, 1.0)
    np.fill_diagonal(values, 1.0)
    return pd.DataFrame(values, index=corr.index, columns=corr.columns)


def find_high_correlation_pairs(corr: pd.DataFrame, threshold: float = 0.7) -> pd.DataFrame:
    """List feature pairs whose absolute correlation exceeds ``threshold``."""
    threshold = _validate_threshold(threshold)
    names = list(corr.columns)
    rows = []
    for i in range(len(names)):
        for j in range(i + 1, len(names)):
            value = corr.iat[i, j]
            if abs(value) > threshold:
                rows.append({'feature_1': names[i], 'feature_2': names[j],
                             'correlation': float(value)})

    pairs = pd.DataFrame(rows, columns=['feature_1', 'feature_2', 'correlation'])
    if not pairs.empty:
        order = pairs['correlation'].abs().sort_values(ascending=False).index
        pairs = pairs.loc[order].reset_index(drop=True)
    return pairs


def find_correlated_features(corr: pd.DataFrame, threshold: float = 0.7) -> List[str]:
    """
    Features to remove so that no remaining pair exceeds ``threshold``.

    Args:
        corr: Square correlation matrix
        threshold: Absolute correlation cutoff

    Returns:
        list: Names of features flagged for removal
    """
    threshold = _validate_threshold(threshold)
    names = np.asarray(corr.columns)
    n_vars = len(names)
    if n_vars < 2:
        return []

    abs_corr = np.abs(corr.to_numpy(dtype=float))
    off_diag = abs_corr.copy()
    np.fill_diagonal(off_diag, np.nan)
    order = np.argsort(-np.nanmean(off_diag, axis=0), kind='stable')

    x = abs_corr[np.ix_(order, order)]
    x2 = x.copy()
    np.fill_diagonal(x2, np.nan)
    delete = np.zeros(n_vars, dtype=bool)

    with warnings.catch_warnings():
        # nanmean over a fully masked row
        warnings.simplefilter('ignore', category=RuntimeWarning)
        for i in range(n_vars - 1):
            remaining = x2[~np.isnan(x2)]
            if not np.any(remaining > threshold):
                break
            if delete[i]:
                continue
            for j in range(i + 1, n_vars):
                if delete[i] or delete[j] or x[i, j] <= threshold:
                    continue
                mean_i = np.nanmean(x2[i, :])
                mean_j = np.nanmean(x2[j, :])
                drop = i if mean_i > mean_j else j
                delete[drop] = True
                x2[drop, :] = np.nan
                x2[:, drop] = np.nan

    return [str(name) for name in names[order[delete]]]


def run_correlation_filter(
    X: pd.DataFrame,
    threshold: float = 0.7,
    method: str = 'pearson',
    verbose: bool = True,
) -> CorrelationFilterResult:
    """
    Execute the correlation filter.

    Args:
        X: Feature table (label excluded).
        threshold: Absolute correlation cutoff.
        method: Correlation method passed to ``DataFrame.corr``.
        verbose: If True, prints progress information.
    """
    corr = compute_correlation_matrix(X, method=method)
    pairs = find_high_correlation_pairs(corr, threshold)
    to_drop = find_correlated_features(corr, threshold)
    retained = [c for c in corr.columns if c not in to_drop]

    if verbose:
        print(f"\n[Correlation] {method} correlation over {corr.shape[0]} features, "
              f"threshold={threshold:.2f}")
        print(corr.round(2).to_string())
        if pairs.empty:
            print(f"[Correlation] No pairs with |r| > {threshold:.2f}; nothing to remove.")
        else:
            print(f"[Correlation] {len(pairs)} pairs with |r| > {threshold:.2f}:")
            for row in pairs.itertuples(index=False):
                print(f"    {row.feature_1} ~ {row.feature_2}: {row.correlation:.3f}")
            print(f"[Correlation] Flagged for removal: {', '.join(to_drop)}")

    return CorrelationFilterResult(
        correlation_matrix=corr,
        threshold=float(threshold),
        high_correlation_pairs=pairs,
        features_to_drop=to_drop,
        retained_features=retained,
    )
