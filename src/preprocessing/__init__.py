"""Data loading and preprocessing module."""

from .data_loader import load_dataset, load_csv
from .data_preprocessing import (
    PreparedDataset,
    coerce_numeric,
    fill_missing,
    encode_labels,
    prepare_dataset,
    split_data,
    describe_dataset
)

__all__ = [
    'load_dataset',
    'load_csv',
    'PreparedDataset',
    'coerce_numeric',
    'fill_missing',
    'encode_labels',
    'prepare_dataset',
    'split_data',
    'describe_dataset'
]
