"""
Stepwise backward elimination on an information criterion.

Starting from the model with every predictor, each step refits the model
once per remaining predictor with that predictor left out and removes the
one whose absence gives the lowest criterion. Elimination stops when no
removal lowers the criterion of the current model.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import numpy as np
import pandas as pd
import statsmodels.api as sm


CRITERIA = ('aic', 'bic')
FAMILIES = ('gaussian', 'binomial')


@dataclass
class StepwiseResult:
    """Container for backward elimination outputs."""

    steps: pd.DataFrame
    candidate_tables: List[pd.DataFrame]
    selected_features: List[str]
    removed_features: List[str]
    full_criterion: float
    final_criterion: float
    criterion: str
    family: str
    final_model: object = None

    def to_dict(self) -> Dict:
        """Convert dataclass to plain dictionary (the fitted model is omitted)."""
        return {
            'steps': self.steps.to_dict(orient='records'),
            'selected_features': list(self.selected_features),
            'removed_features': list(self.removed_features),
            'full_criterion': self.full_criterion,
            'final_criterion': self.final_criterion,
            'criterion': self.criterion,
            'family': self.family,
        }


def fit_linear_model(X: pd.DataFrame, y: np.ndarray, features: List[str],
                     family: str = 'gaussian'):
    """Fit an intercept plus ``features`` model with statsmodels."""
    exog = pd.DataFrame({'const': np.ones(len(X))}, index=X.index)
    if features:
        exog = exog.join(X[features])
    endog = np.asarray(y, dtype=float)

    if family == 'gaussian':
        return sm.OLS(endog, exog).fit()
    if family == 'binomial':
        return sm.Logit(endog, exog).fit(disp=0)
    raise ValueError(f"Unsupported family: {family}. Use one of {FAMILIES}")


def _criterion(model, criterion: str) -> float:
    return float(model.aic if criterion == 'aic' else model.bic)


def run_backward_elimination(
    X: pd.DataFrame,
    y: np.ndarray,
    criterion: str = 'aic',
    family: str = 'gaussian',
    verbose: bool = True,
) -> StepwiseResult:
    """
    Execute stepwise backward elimination.

    Args:
        X: Candidate predictors.
        y: Response (encoded labels for a binary outcome).
        criterion: 'aic' or 'bic'.
        family: 'gaussian' (least squares) or 'binomial' (logistic).
        verbose: If True, prints every step's candidate table.
    """
    if criterion not in CRITERIA:
        raise ValueError(f"Unsupported criterion: {criterion}. Use one of {CRITERIA}")
    if family not in FAMILIES:
        raise ValueError(f"Unsupported family: {family}. Use one of {FAMILIES}")
    if X.shape[1] == 0:
        raise ValueError("X has no feature columns")

    current = list(X.columns)
    model = fit_linear_model(X, y, current, family)
    current_value = _criterion(model, criterion)
    full_value = current_value

    label = criterion.upper()
    steps = [{'step': 0, 'removed': None, 'n_features': len(current), label: current_value}]
    candidate_tables = []
    removed = []

    if verbose:
        print(f"\n[Stepwise] Backward elimination ({family}, {label})")
        print(f"    Start: {label}={current_value:.2f} with {len(current)} predictors")

    while current:
        rows = [{'removed': '<none>', label: current_value}]
        fits = {}
        for feature in current:
            remaining = [f for f in current if f != feature]
            fits[feature] = fit_linear_model(X, y, remaining, family)
            rows.append({'removed': feature, label: _criterion(fits[feature], criterion)})

        table = pd.DataFrame(rows).sort_values(label, kind='stable').reset_index(drop=True)
        candidate_tables.append(table)

        if verbose:
            print(f"\n    Step {len(candidate_tables)}:")
            print(table.round(2).to_string(index=False))

        best = table.iloc[0]
        if best['removed'] == '<none>' or best[label] >= current_value:
            break

        feature = best['removed']
        current.remove(feature)
        removed.append(feature)
        model = fits[feature]
        current_value = float(best[label])
        steps.append({'step': len(removed), 'removed': feature,
                      'n_features': len(current), label: current_value})

        if verbose:
            print(f"    - {feature}: {label}={current_value:.2f}")

    steps = pd.DataFrame(steps)

    if verbose:
        print(f"\n[Stepwise] Final model: {label}={current_value:.2f} "
              f"(full model {full_value:.2f})")
        print(f"[Stepwise] Retained: {', '.join(current) or 'intercept only'}")
        print(f"[Stepwise] Removed: {', '.join(removed) or 'none'}")

    return StepwiseResult(
        steps=steps,
        candidate_tables=candidate_tables,
        selected_features=current,
        removed_features=removed,
        full_criterion=full_value,
        final_criterion=current_value,
        criterion=criterion,
        family=family,
        final_model=model,
    )
