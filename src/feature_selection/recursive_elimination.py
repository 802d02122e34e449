"""
Recursive feature elimination with cross-validated subset sizes.

Within every fold the base classifier is refitted recursively on the training
part, dropping the least important feature each round. The resulting ranking
is used to score each candidate subset size on the held-out part.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
from sklearn.base import clone
from sklearn.ensemble import RandomForestClassifier
from sklearn.feature_selection import RFE
from sklearn.metrics import get_scorer
from sklearn.model_selection import StratifiedKFold


@dataclass
class RFEResult:
    """Container for recursive feature elimination outputs."""

    performance: pd.DataFrame
    best_size: int
    ranking: pd.DataFrame
    selected_features: List[str]
    scoring: str

    def to_dict(self) -> Dict:
        """Convert dataclass to plain dictionary."""
        out = asdict(self)
        out['performance'] = self.performance.to_dict(orient='records')
        out['ranking'] = self.ranking.to_dict(orient='records')
        return out


def _resolve_sizes(sizes: Optional[Iterable[int]], n_features: int) -> List[int]:
    """Candidate sizes clipped to [1, n_features]; the full set is always included."""
    if sizes is None:
        sizes = range(1, n_features + 1)
    resolved = sorted({int(s) for s in sizes if 1 <= int(s) <= n_features})
    if n_features not in resolved:
        resolved.append(n_features)
    return resolved


def _rank_features(estimator, X: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Feature indices ordered from most to least important."""
    rfe = RFE(clone(estimator), n_features_to_select=1, step=1)
    rfe.fit(X, y)
    return np.argsort(rfe.ranking_, kind='stable')


def run_recursive_elimination(
    X: pd.DataFrame,
    y: np.ndarray,
    sizes: Optional[Iterable[int]] = None,
    estimator=None,
    n_folds: int = 10,
    scoring: str = 'accuracy',
    random_state: int = 42,
    verbose: bool = True,
) -> RFEResult:
    """
    Execute cross-validated recursive feature elimination.

    Args:
        X: Feature table.
        y: Encoded labels.
        sizes: Candidate subset sizes. Defaults to every size.
        estimator: Base classifier exposing ``feature_importances_`` or
            ``coef_``. Defaults to a random forest.
        n_folds: Number of stratified CV folds.
        scoring: scikit-learn scorer name.
        random_state: Seed for the folds and the default estimator.
        verbose: If True, prints progress information.
    """
    if X.shape[1] == 0:
        raise ValueError("X has no feature columns")

    feature_names = np.asarray(X.columns)
    X_values = X.to_numpy(dtype=float)
    y = np.asarray(y)
    sizes = _resolve_sizes(sizes, X_values.shape[1])

    if estimator is None:
        estimator = RandomForestClassifier(n_estimators=100, random_state=random_state)

    scorer = get_scorer(scoring)
    cv = StratifiedKFold(n_splits=n_folds, shuffle=True, random_state=random_state)
    fold_scores = {size: [] for size in sizes}

    if verbose:
        print(f"\n[RFE] {type(estimator).__name__}, {n_folds}-fold CV, sizes={sizes}")

    for fold, (train_idx, test_idx) in enumerate(cv.split(X_values, y)):
        X_train, X_test = X_values[train_idx], X_values[test_idx]
        y_train, y_test = y[train_idx], y[test_idx]

        order = _rank_features(estimator, X_train, y_train)
        for size in sizes:
            keep = order[:size]
            model = clone(estimator).fit(X_train[:, keep], y_train)
            fold_scores[size].append(scorer(model, X_test[:, keep], y_test))

        if verbose:
            print(f"    Fold {fold + 1}/{n_folds} done")

    performance = pd.DataFrame({
        'n_features': sizes,
        'score_mean': [float(np.mean(fold_scores[s])) for s in sizes],
        'score_sd': [float(np.std(fold_scores[s], ddof=1)) if n_folds > 1 else 0.0
                     for s in sizes],
    })
    # idxmax returns the first maximum, i.e. the smallest size on ties
    best_size = int(performance.loc[performance['score_mean'].idxmax(), 'n_features'])
    performance['selected'] = performance['n_features'] == best_size

    order = _rank_features(estimator, X_values, y)
    ranking = pd.DataFrame({
        'feature': feature_names[order],
        'rank': np.arange(1, len(order) + 1),
    })
    selected = [str(f) for f in feature_names[order[:best_size]]]

    if verbose:
        print(f"\n[RFE] Resampling performance ({scoring}):")
        print(performance.round(4).to_string(index=False))
        print(f"[RFE] Best subset size: {best_size}")
        print(f"[RFE] Selected features: {', '.join(selected)}")

    return RFEResult(
        performance=performance,
        best_size=best_size,
        ranking=ranking,
        selected_features=selected,
        scoring=scoring,
    )
