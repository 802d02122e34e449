"""
Data Preprocessing Module

Handles:
1. Separating the label column from the features
2. Coercing mixed categorical/numeric feature columns to numeric
3. Filling missing values (zero by default)
4. Encoding class labels
5. Optional stratified train/test split
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split
from sklearn.preprocessing import LabelEncoder


MISSING_STRATEGIES = ('zero', 'median')


@dataclass
class PreparedDataset:
    """Cleaned feature table plus encoded label."""

    X: pd.DataFrame
    y: np.ndarray
    classes: List[str]
    label: str
    n_missing: int = 0
    dropped_columns: List[str] = field(default_factory=list)

    @property
    def feature_names(self) -> List[str]:
        return list(self.X.columns)

    def to_dict(self):
        return {
            'n_samples': int(self.X.shape[0]),
            'n_features': int(self.X.shape[1]),
            'features': self.feature_names,
            'classes': list(self.classes),
            'label': self.label,
            'n_missing': int(self.n_missing),
            'dropped_columns': list(self.dropped_columns),
        }


def coerce_numeric(df, exclude=()):
    """
    Convert every column (except ``exclude``) to numeric.

    Columns that parse as numbers keep their values; unparseable entries
    become NaN. Purely categorical columns are replaced by 1-based codes of
    their sorted levels.

    Args:
        df: Input DataFrame
        exclude: Column names left untouched

    Returns:
        pd.DataFrame: Copy with numeric columns
    """
    out = df.copy()
    for col in out.columns:
        if col in exclude:
            continue
        series = out[col]
        if pd.api.types.is_bool_dtype(series):
            out[col] = series.astype(float)
            continue
        if pd.api.types.is_numeric_dtype(series):
            out[col] = series.astype(float)
            continue

        numeric = pd.to_numeric(series, errors='coerce')
        if numeric.notna().any() or series.isna().all():
            out[col] = numeric
        else:
            levels = sorted(series.dropna().astype(str).unique())
            codes = {level: i + 1 for i, level in enumerate(levels)}
            out[col] = series.astype(str).map(codes).where(series.notna())
    return out


def fill_missing(df, strategy='zero', verbose=True):
    """
    Fill missing values in all columns of ``df``.

    Args:
        df: Numeric DataFrame
        strategy: 'zero' (replace with 0) or 'median' (column median)
        verbose: If True, prints a warning with the number of filled cells

    Returns:
        tuple: (filled_df, n_missing)
    """
    if strategy not in MISSING_STRATEGIES:
        raise ValueError(f"Unsupported missing value strategy: {strategy}. "
                         f"Use one of {MISSING_STRATEGIES}")

    n_missing = int(df.isna().sum().sum())
    if n_missing == 0:
        return df.copy(), 0

    if verbose:
        per_column = df.isna().sum()
        per_column = per_column[per_column > 0]
        print(f"    [WARNING] Found {n_missing} missing values "
              f"({', '.join(f'{c}={n}' for c, n in per_column.items())})")
        print(f"             Filling missing values with {strategy}...")

    if strategy == 'zero':
        filled = df.fillna(0.0)
    else:
        filled = df.fillna(df.median(numeric_only=True)).fillna(0.0)

    return filled, n_missing


def encode_labels(labels, positive_class=None):
    """
    Encode class labels to integers.

    For a binary label with ``positive_class`` given, the positive class is
    encoded as 1.

    Args:
        labels: Iterable of class labels
        positive_class: Optional name of the class encoded as 1

    Returns:
        tuple: (encoded_labels, classes)
    """
    labels = np.asarray([str(lbl) for lbl in labels])
    le = LabelEncoder()
    encoded = le.fit_transform(labels)
    classes = [str(c) for c in le.classes_]

    if positive_class is not None and len(classes) == 2:
        positive_class = str(positive_class)
        if positive_class not in classes:
            raise ValueError(f"Positive class '{positive_class}' not among labels {classes}")
        if classes[1] != positive_class:
            encoded = 1 - encoded
            classes = classes[::-1]

    return encoded.astype(int), classes


def prepare_dataset(df, label, drop_columns=None, missing_strategy='zero',
                    positive_class=None, verbose=True):
    """
    Clean a raw table for the feature selection methods.

    Rows without a label are dropped. Feature columns are coerced to numeric
    and missing values are filled with ``missing_strategy``.

    Args:
        df: Raw DataFrame including the label column
        label: Name of the label column
        drop_columns: Columns to discard (identifiers etc.)
        missing_strategy: 'zero' or 'median'
        positive_class: Optional label value encoded as 1
        verbose: If True, prints progress information

    Returns:
        PreparedDataset
    """
    if label not in df.columns:
        raise ValueError(f"Label column '{label}' not found. Columns: {list(df.columns)}")

    drop_columns = [c for c in (drop_columns or []) if c in df.columns and c != label]

    if verbose:
        print("\n[Preprocessing] Coercing features to numeric...")

    labelled = df[df[label].notna()]
    n_unlabelled = len(df) - len(labelled)
    if n_unlabelled and verbose:
        print(f"    [WARNING] Dropped {n_unlabelled} rows without a label")

    features = labelled.drop(columns=drop_columns + [label])
    if features.shape[1] == 0:
        raise ValueError("No feature columns remain after dropping label/identifier columns")

    features = coerce_numeric(features)
    features, n_missing = fill_missing(features, strategy=missing_strategy, verbose=verbose)
    features = features.reset_index(drop=True)

    y, classes = encode_labels(labelled[label].values, positive_class=positive_class)

    if verbose:
        print(f"    Features: {features.shape[1]} ({', '.join(features.columns)})")
        print(f"    Samples: {features.shape[0]}")
        print(f"    Classes: {classes}")

    return PreparedDataset(
        X=features,
        y=y,
        classes=classes,
        label=label,
        n_missing=n_missing,
        dropped_columns=drop_columns,
    )


def split_data(X, y, test_size=0.3, stratify=True, random_state=42):
    """
    Split data into train and test sets.

    Args:
        X: Features
        y: Labels
        test_size: Test set proportion
        stratify: Preserve class proportions in both parts
        random_state: Random seed

    Returns:
        tuple: (X_train, X_test, y_train, y_test)
    """
    return train_test_split(
        X, y, test_size=test_size, random_state=random_state,
        stratify=y if stratify else None
    )


def describe_dataset(dataset: PreparedDataset, verbose: bool = True) -> pd.DataFrame:
    """Summary statistics per feature, printed like an R ``summary()`` call."""
    summary = dataset.X.describe().T[['mean', 'std', 'min', '50%', 'max']]
    summary = summary.rename(columns={'50%': 'median'})
    if verbose:
        print("\n[Preprocessing] Feature summary:")
        print(summary.round(3).to_string())
    return summary
