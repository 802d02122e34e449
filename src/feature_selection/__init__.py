"""
Feature selection package.

Filter (correlation), wrapper (recursive feature elimination), embedded
(Lasso logistic regression, random forest importance) and stepwise
(backward elimination on AIC/BIC) selection methods. Each method is a
stateless function returning a result dataclass.
"""

from .correlation_filter import (  # noqa: F401
    CorrelationFilterResult,
    compute_correlation_matrix,
    find_high_correlation_pairs,
    find_correlated_features,
    run_correlation_filter,
)
from .recursive_elimination import RFEResult, run_recursive_elimination  # noqa: F401
from .lasso_selection import LassoResult, build_c_grid, run_lasso_selection  # noqa: F401
from .forest_importance import ForestImportanceResult, run_forest_importance  # noqa: F401
from .stepwise_elimination import (  # noqa: F401
    StepwiseResult,
    fit_linear_model,
    run_backward_elimination,
)

__all__ = [
    "CorrelationFilterResult",
    "compute_correlation_matrix",
    "find_high_correlation_pairs",
    "find_correlated_features",
    "run_correlation_filter",
    "RFEResult",
    "run_recursive_elimination",
    "LassoResult",
    "build_c_grid",
    "run_lasso_selection",
    "ForestImportanceResult",
    "run_forest_importance",
    "StepwiseResult",
    "fit_linear_model",
    "run_backward_elimination",
]
