"""Tests for cross-validated Lasso logistic regression."""

import numpy as np
import pytest

from src.feature_selection import run_lasso_selection, build_c_grid


@pytest.fixture
def lasso_result(small_classification):
    X, y = small_classification
    return run_lasso_selection(X, y, n_cs=15, n_folds=3, verbose=False)


class TestLassoSelection:

    def test_grid_starts_at_all_zero_point(self, small_classification):
        X, y = small_classification
        Cs = build_c_grid(X.to_numpy(), y, n_cs=10)

        assert len(Cs) == 10
        assert np.all(np.diff(Cs) > 0)
        assert np.isclose(Cs[-1] / Cs[0], 1e4)

    def test_cv_table(self, lasso_result):
        cv = lasso_result.cv_results

        assert len(cv) == 15
        assert np.allclose(cv['lambda'], 1.0 / (200 * cv['C']))
        assert (cv['cv_se'] >= 0).all()
        assert cv['n_nonzero'].iloc[0] <= cv['n_nonzero'].iloc[-1]

    def test_one_se_rule(self, lasso_result):
        cv = lasso_result.cv_results
        idx_min = cv['cv_error'].idxmin()
        limit = cv.loc[idx_min, 'cv_error'] + cv.loc[idx_min, 'cv_se']
        chosen = cv.loc[np.isclose(cv['lambda'], lasso_result.lambda_1se)].iloc[0]

        assert lasso_result.lambda_1se >= lasso_result.lambda_min
        assert chosen['cv_error'] <= limit
        assert np.isclose(lasso_result.lambda_min, cv.loc[idx_min, 'lambda'])
        # no stronger penalty also satisfies the rule
        stronger = cv[cv['lambda'] > lasso_result.lambda_1se]
        assert (stronger['cv_error'] > limit).all()

    def test_signal_survives_at_lambda_min(self, lasso_result):
        assert 'signal_b' in lasso_result.selected_min
        assert {'signal_a', 'signal_a_copy'} & set(lasso_result.selected_min)

    def test_coefficient_table(self, lasso_result):
        coefs = lasso_result.coefficients

        assert list(coefs.columns) == ['lambda.min', 'lambda.1se']
        assert coefs.index[0] == '(Intercept)'
        nonzero = coefs.index[1:][(coefs['lambda.min'].iloc[1:] != 0).to_numpy()]
        assert list(nonzero) == lasso_result.selected_min
        assert coefs.loc['signal_b', 'lambda.min'] < 0

    def test_path_shape(self, lasso_result, small_classification):
        X, _ = small_classification

        assert lasso_result.path.shape == (15, X.shape[1])
        assert list(lasso_result.path.columns) == list(X.columns)

    def test_zero_pattern_reproducible(self, small_classification, lasso_result):
        X, y = small_classification
        again = run_lasso_selection(X, y, n_cs=15, n_folds=3, verbose=False)

        assert again.selected_min == lasso_result.selected_min
        assert again.lambda_min == lasso_result.lambda_min

    def test_explicit_grid(self, small_classification):
        X, y = small_classification
        result = run_lasso_selection(X, y, Cs=[1.0, 0.01, 0.1], n_folds=3,
                                     scoring='accuracy', verbose=False)

        assert result.cv_results['C'].tolist() == [0.01, 0.1, 1.0]
        assert result.cv_results['cv_error'].between(0, 1).all()

    def test_repeated_grid_values_are_fitted_once(self, small_classification):
        X, y = small_classification
        result = run_lasso_selection(X, y, Cs=[0.1, 0.1, 1.0], n_folds=3, verbose=False)

        assert result.cv_results['C'].tolist() == [0.1, 1.0]
        assert result.path.shape[0] == 2
        assert result.path.index.is_unique

    def test_requires_binary_label(self, small_classification):
        X, y = small_classification
        y3 = y.copy()
        y3[:20] = 2
        with pytest.raises(ValueError):
            run_lasso_selection(X, y3, n_cs=5, n_folds=3, verbose=False)
