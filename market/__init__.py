"""Synthetic market data for the playground datasets."""

from market.generator import (
    DATASETS,
    DEFAULT_SERIES_LENGTH,
    available_datasets,
    generate,
    generate_dataset,
)

__all__ = [
    "DATASETS",
    "DEFAULT_SERIES_LENGTH",
    "available_datasets",
    "generate",
    "generate_dataset",
]
