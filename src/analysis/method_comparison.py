"""
Method Comparison Module

Lines up the features kept by each selection method:
- Correlation filter (retained features)
- Recursive feature elimination (selected at the best size)
- Lasso (non-zero at lambda.min and lambda.1se)
- Random forest (top-k by mean decrease in accuracy)
- Stepwise backward elimination (retained predictors)
"""

import pandas as pd


def compare_selections(results, feature_names, forest_top_k=None, verbose=True):
    """
    Build a feature x method table of selection flags.

    Args:
        results: Dict mapping method key to its result object; missing or
                 None entries are skipped
        feature_names: All candidate features
        forest_top_k: Number of top forest features counted as selected.
                      Defaults to the RFE best size, else half the features.
        verbose: If True, prints the table

    Returns:
        pd.DataFrame: Boolean column per method plus a 'votes' column
    """
    feature_names = list(feature_names)
    columns = {}

    correlation = results.get('correlation')
    if correlation is not None:
        columns['correlation'] = correlation.retained_features

    rfe = results.get('rfe')
    if rfe is not None:
        columns['rfe'] = rfe.selected_features

    lasso = results.get('lasso')
    if lasso is not None:
        columns['lasso_min'] = lasso.selected_min
        columns['lasso_1se'] = lasso.selected_1se

    forest = results.get('forest')
    if forest is not None:
        if forest_top_k is None:
            forest_top_k = rfe.best_size if rfe is not None else max(1, len(feature_names) // 2)
        columns['forest_top'] = forest.top_features(forest_top_k)

    stepwise = results.get('stepwise')
    if stepwise is not None:
        columns['stepwise'] = stepwise.selected_features

    table = pd.DataFrame(
        {method: [f in set(kept) for f in feature_names] for method, kept in columns.items()},
        index=pd.Index(feature_names, name='feature'),
    )
    table['votes'] = table.sum(axis=1).astype(int)
    table = table.sort_values('votes', ascending=False, kind='stable')

    if verbose:
        print("\n" + "-" * 80)
        print("SELECTION SUMMARY")
        print("-" * 80)
        display = table.copy()
        for method in columns:
            display[method] = display[method].map({True: 'x', False: '.'})
        print(display.to_string())

    return table
