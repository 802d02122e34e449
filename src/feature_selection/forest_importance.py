"""Random forest variable importance (mean decrease in accuracy and in Gini)."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.ensemble import RandomForestClassifier
from sklearn.inspection import permutation_importance


@dataclass
class ForestImportanceResult:
    """Container for random forest importance outputs."""

    importance: pd.DataFrame
    oob_score: Optional[float]
    test_accuracy: Optional[float]
    n_estimators: int

    def to_dict(self) -> Dict:
        """Convert dataclass to plain dictionary."""
        out = asdict(self)
        out['importance'] = self.importance.to_dict()
        return out

    def top_features(self, k: int, by: str = 'MeanDecreaseAccuracy') -> List[str]:
        """Names of the k most important features by the given importance column."""
        return list(self.importance[by].sort_values(ascending=False).index[:k])


def run_forest_importance(
    X: pd.DataFrame,
    y: np.ndarray,
    n_estimators: int = 500,
    oob_score: bool = True,
    max_features='sqrt',
    n_repeats: int = 10,
    X_eval: Optional[pd.DataFrame] = None,
    y_eval: Optional[np.ndarray] = None,
    random_state: int = 42,
    verbose: bool = True,
) -> ForestImportanceResult:
    """
    Fit a random forest and report two importance scores per feature.

    MeanDecreaseAccuracy is the permutation importance (accuracy drop) on
    ``X_eval``/``y_eval`` when given, otherwise on the training data.
    MeanDecreaseGini is the normalized impurity decrease.

    Args:
        X: Training feature table.
        y: Encoded training labels.
        n_estimators: Number of trees.
        oob_score: Compute the out-of-bag accuracy.
        max_features: Features tried per split.
        n_repeats: Permutation repeats per feature.
        X_eval: Optional held-out features for the permutation score.
        y_eval: Labels for ``X_eval``.
        random_state: Seed for the forest and the permutations.
        verbose: If True, prints progress information.
    """
    if X.shape[1] == 0:
        raise ValueError("X has no feature columns")
    if (X_eval is None) != (y_eval is None):
        raise ValueError("X_eval and y_eval must be given together")

    if verbose:
        print(f"\n[Random Forest] Fitting {n_estimators} trees on "
              f"{X.shape[0]} samples x {X.shape[1]} features...")

    forest = RandomForestClassifier(
        n_estimators=n_estimators,
        max_features=max_features,
        oob_score=oob_score,
        random_state=random_state,
    )
    forest.fit(X, y)

    if X_eval is None:
        X_eval, y_eval = X, y
        test_accuracy = None
    else:
        test_accuracy = float(forest.score(X_eval, y_eval))

    perm = permutation_importance(
        forest, X_eval, y_eval,
        scoring='accuracy', n_repeats=n_repeats, random_state=random_state
    )

    importance = pd.DataFrame({
        'MeanDecreaseAccuracy': perm.importances_mean,
        'MeanDecreaseAccuracySD': perm.importances_std,
        'MeanDecreaseGini': forest.feature_importances_,
    }, index=pd.Index(X.columns, name='feature'))
    importance = importance.sort_values('MeanDecreaseAccuracy', ascending=False)

    oob = float(forest.oob_score_) if oob_score else None

    if verbose:
        if oob is not None:
            print(f"[Random Forest] OOB accuracy: {oob:.4f} (error rate {1 - oob:.2%})")
        if test_accuracy is not None:
            print(f"[Random Forest] Held-out accuracy: {test_accuracy:.4f}")
        print("[Random Forest] Variable importance:")
        print(importance.round(4).to_string())

    return ForestImportanceResult(
        importance=importance,
        oob_score=oob,
        test_accuracy=test_accuracy,
        n_estimators=n_estimators,
    )
