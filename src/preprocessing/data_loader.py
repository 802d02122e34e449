"""Dataset loading: reference datasets (fetched once and cached) and plain CSV files."""

from pathlib import Path

import pandas as pd


def _read_raw(source, columns=None, na_values=None):
    """Read a headerless data file (local path or URL) with the given column names."""
    return pd.read_csv(
        source,
        header=None if columns else 'infer',
        names=columns,
        na_values=na_values or None,
        skipinitialspace=True,
    )


def _map_labels(df, label, label_map=None):
    """Replace raw label codes with class names; unmatched values are kept."""
    if label_map and label in df.columns:
        mapped = df[label].map(label_map)
        df[label] = mapped.where(mapped.notna(), df[label])
    return df


def load_dataset(name, config, data_dir=None, verbose=True):
    """
    Load one of the configured reference datasets.

    Lookup order: the configured local ``path``, then the cached copy
    ``<data_dir>/<name>.csv``, then the configured ``url`` (the download is
    cached for later runs).

    Args:
        name: Dataset key under ``config['datasets']``
        config: Loaded pipeline configuration
        data_dir: Cache directory (defaults to ``config['data_dir']``)
        verbose: If True, prints progress information

    Returns:
        pd.DataFrame: Raw table with the label column mapped to class names
    """
    datasets = config.get('datasets', {})
    if name not in datasets:
        raise ValueError(f"Unknown dataset '{name}'. Available: {sorted(datasets)}")

    ds_cfg = datasets[name]
    data_dir = Path(data_dir or config.get('data_dir', 'data/raw'))
    cache_file = data_dir / f"{name}.csv"
    local_path = ds_cfg.get('path')
    label = ds_cfg.get('label')

    if local_path:
        if not Path(local_path).exists():
            raise ValueError(f"Configured path for dataset '{name}' does not exist: {local_path}")
        if verbose:
            print(f"\n[Loading] {local_path}...")
        df = _map_labels(_read_raw(local_path, ds_cfg.get('columns'), ds_cfg.get('na_values')),
                         label, ds_cfg.get('label_map'))
    elif cache_file.exists():
        if verbose:
            print(f"\n[Loading] {cache_file} (cached)...")
        # The cache is written after label mapping
        df = pd.read_csv(cache_file)
    else:
        url = ds_cfg.get('url')
        if not url:
            raise ValueError(f"Dataset '{name}' has neither a path nor a url")
        if verbose:
            print(f"\n[Loading] Downloading {name} from {url}...")
        df = _map_labels(_read_raw(url, ds_cfg.get('columns'), ds_cfg.get('na_values')),
                         label, ds_cfg.get('label_map'))
        data_dir.mkdir(parents=True, exist_ok=True)
        df.to_csv(cache_file, index=False)
        if verbose:
            print(f"    [Saved] {cache_file}")

    if verbose:
        print(f"    Loaded: {df.shape[0]} rows, {df.shape[1]} columns")
        if label in df.columns:
            counts = df[label].value_counts()
            for cls, count in counts.items():
                print(f"    {label}={cls}: {count}")

    return df


def load_csv(file_path, label, verbose=True):
    """
    Load an arbitrary CSV file with a header row and a named label column.

    Args:
        file_path: Path to CSV file
        label: Name of the label column
        verbose: If True, prints progress information

    Returns:
        pd.DataFrame: Loaded table
    """
    if verbose:
        print(f"\n[Loading] {file_path}...")
    df = pd.read_csv(file_path, low_memory=False)

    if label not in df.columns:
        raise ValueError(f"Label column '{label}' not found in {file_path}")

    if verbose:
        print(f"    Loaded: {df.shape[0]} rows, {df.shape[1]} columns")

    return df
