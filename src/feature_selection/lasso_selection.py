"""
Lasso (L1) logistic regression with cross-validated regularization strength.

The grid of inverse strengths ``C`` starts at ``l1_min_c`` (every coefficient
zero) and grows log-uniformly. For each C the CV error is averaged over
stratified folds; two strengths are reported:

    lambda.min  - minimum mean CV error
    lambda.1se  - strongest regularization whose mean error is within one
                  standard error of the minimum

Strengths are also expressed glmnet-style as ``lambda = 1 / (n * C)``.
Coefficients are returned on the original feature scale.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.linear_model import LogisticRegression
from sklearn.model_selection import StratifiedKFold, cross_val_score
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.svm import l1_min_c


@dataclass
class LassoResult:
    """Container for Lasso selection outputs."""

    cv_results: pd.DataFrame
    coefficients: pd.DataFrame
    path: pd.DataFrame
    c_min: float
    c_1se: float
    lambda_min: float
    lambda_1se: float
    selected_min: List[str]
    selected_1se: List[str]
    scoring: str

    def to_dict(self) -> Dict:
        """Convert dataclass to plain dictionary."""
        out = asdict(self)
        out['cv_results'] = self.cv_results.to_dict(orient='records')
        out['coefficients'] = self.coefficients.to_dict()
        out['path'] = self.path.to_dict()
        return out


def _make_model(C: float, max_iter: int, random_state: int):
    return make_pipeline(
        StandardScaler(),
        LogisticRegression(penalty='l1', solver='liblinear', C=C,
                           max_iter=max_iter, random_state=random_state),
    )


def _original_scale_coefficients(model, feature_names) -> pd.Series:
    """Undo the standardization: beta / scale, intercept shifted by the means."""
    scaler = model.named_steps['standardscaler']
    logreg = model.named_steps['logisticregression']
    beta = logreg.coef_[0] / scaler.scale_
    intercept = float(logreg.intercept_[0] - np.sum(beta * scaler.mean_))
    return pd.Series(np.concatenate([[intercept], beta]),
                     index=['(Intercept)'] + list(feature_names))


def build_c_grid(X: np.ndarray, y: np.ndarray, n_cs: int = 50, span: float = 4.0) -> np.ndarray:
    """Log-spaced C values from the all-zero point ``l1_min_c`` over ``span`` decades."""
    X_scaled = StandardScaler().fit_transform(X)
    c_start = l1_min_c(X_scaled, y, loss='log')
    return c_start * np.logspace(0, span, n_cs)


def _error_from_scores(scores: np.ndarray, scoring: str) -> np.ndarray:
    """Turn scikit-learn scores (greater is better) into errors (lower is better)."""
    if scoring.startswith('neg_'):
        return -scores
    return 1.0 - scores


def run_lasso_selection(
    X: pd.DataFrame,
    y: np.ndarray,
    n_cs: int = 50,
    Cs: Optional[np.ndarray] = None,
    n_folds: int = 10,
    scoring: str = 'neg_log_loss',
    max_iter: int = 1000,
    random_state: int = 42,
    verbose: bool = True,
) -> LassoResult:
    """
    Execute cross-validated L1 logistic regression.

    Args:
        X: Feature table.
        y: Binary encoded labels.
        n_cs: Grid size when ``Cs`` is not given.
        Cs: Explicit grid of inverse regularization strengths.
        n_folds: Number of stratified CV folds.
        scoring: scikit-learn scorer; errors are ``-score`` for ``neg_*``
            scorers and ``1 - score`` otherwise.
        max_iter: Solver iteration limit.
        random_state: Seed for the folds and the solver.
        verbose: If True, prints progress information.
    """
    y = np.asarray(y)
    if len(np.unique(y)) != 2:
        raise ValueError(f"Lasso logistic regression needs a binary label, "
                         f"got {len(np.unique(y))} classes")
    if X.shape[1] == 0:
        raise ValueError("X has no feature columns")

    feature_names = list(X.columns)
    X_values = X.to_numpy(dtype=float)
    n_samples = X_values.shape[0]

    if Cs is None:
        Cs = build_c_grid(X_values, y, n_cs=n_cs)
    Cs = np.unique(np.asarray(Cs, dtype=float))

    cv = StratifiedKFold(n_splits=n_folds, shuffle=True, random_state=random_state)

    if verbose:
        print(f"\n[Lasso] L1 logistic regression, {len(Cs)} strengths, "
              f"{n_folds}-fold CV ({scoring})")

    means, ses = [], []
    for C in Cs:
        scores = cross_val_score(_make_model(C, max_iter, random_state),
                                 X_values, y, cv=cv, scoring=scoring)
        errors = _error_from_scores(scores, scoring)
        means.append(errors.mean())
        ses.append(errors.std(ddof=1) / np.sqrt(len(errors)))

    means = np.asarray(means)
    ses = np.asarray(ses)
    lambdas = 1.0 / (n_samples * Cs)

    idx_min = int(np.argmin(means))
    within = np.where(means <= means[idx_min] + ses[idx_min])[0]
    # Smallest C is the strongest regularization
    idx_1se = int(within.min())

    path = {}
    for C, lam in zip(Cs, lambdas):
        model = _make_model(C, max_iter, random_state).fit(X_values, y)
        path[lam] = _original_scale_coefficients(model, feature_names).iloc[1:]
    path = pd.DataFrame(path).T
    path.index.name = 'lambda'

    coef_min = _original_scale_coefficients(
        _make_model(Cs[idx_min], max_iter, random_state).fit(X_values, y), feature_names)
    coef_1se = _original_scale_coefficients(
        _make_model(Cs[idx_1se], max_iter, random_state).fit(X_values, y), feature_names)
    coefficients = pd.DataFrame({'lambda.min': coef_min, 'lambda.1se': coef_1se})

    selected_min = [f for f in feature_names if coef_min[f] != 0]
    selected_1se = [f for f in feature_names if coef_1se[f] != 0]

    cv_results = pd.DataFrame({
        'C': Cs,
        'lambda': lambdas,
        'cv_error': means,
        'cv_se': ses,
        'n_nonzero': (path.to_numpy() != 0).sum(axis=1),
    })

    if verbose:
        print(f"[Lasso] lambda.min = {lambdas[idx_min]:.6f} (C={Cs[idx_min]:.4f}), "
              f"CV error {means[idx_min]:.4f}")
        print(f"[Lasso] lambda.1se = {lambdas[idx_1se]:.6f} (C={Cs[idx_1se]:.4f}), "
              f"CV error {means[idx_1se]:.4f}")
        print("[Lasso] Coefficients:")
        print(coefficients.round(4).to_string())
        eliminated = [f for f in feature_names if f not in selected_min]
        print(f"[Lasso] Eliminated at lambda.min: {', '.join(eliminated) or 'none'}")

    return LassoResult(
        cv_results=cv_results,
        coefficients=coefficients,
        path=path,
        c_min=float(Cs[idx_min]),
        c_1se=float(Cs[idx_1se]),
        lambda_min=float(lambdas[idx_min]),
        lambda_1se=float(lambdas[idx_1se]),
        selected_min=selected_min,
        selected_1se=selected_1se,
        scoring=scoring,
    )
