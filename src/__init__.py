"""Feature selection methods for tabular biomedical datasets."""
