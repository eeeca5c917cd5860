"""Synthetic price series: a multiplicative random walk per instrument kind.

Each kind fixes a start price and a volatility coefficient. At every step the
price moves by ``uniform(-1, 1) * volatility`` percent and is rounded to
cents. Timestamps are consecutive days ending at "now".

Named datasets (``BTC-USD``, ``S&P500``, ``EUR-USD``) map onto the three
kinds; the controller regenerates the series whenever the dataset changes.
"""

from __future__ import annotations

import logging
import random
import time
from typing import NamedTuple

from models.market import InstrumentKind, MarketPoint

logger = logging.getLogger(__name__)

DAY_MS = 24 * 60 * 60 * 1000
MAX_VOLUME = 1_000_000
MIN_PRICE = 0.01
DEFAULT_SERIES_LENGTH = 100


class _WalkParams(NamedTuple):
    start_price: float
    volatility: float


_KIND_PARAMS: dict[str, _WalkParams] = {
    "crypto": _WalkParams(start_price=45_000.0, volatility=0.05),
    "stock": _WalkParams(start_price=4_200.0, volatility=0.02),
    "forex": _WalkParams(start_price=1.1, volatility=0.003),
}

DATASETS: dict[str, InstrumentKind] = {
    "BTC-USD": "crypto",
    "S&P500": "stock",
    "EUR-USD": "forex",
}


def available_datasets() -> list[str]:
    """Dataset names in display order."""
    return list(DATASETS)


def generate(
    kind: InstrumentKind,
    length: int,
    *,
    rng: random.Random | None = None,
    now_ms: int | None = None,
) -> list[MarketPoint]:
    """Generate *length* daily points for *kind*, the last one stamped *now_ms*.

    Raises ``ValueError`` for an unknown kind or a non-positive length.
    """
    params = _KIND_PARAMS.get(kind)
    if params is None:
        raise ValueError(
            f"Unknown instrument kind '{kind}'. Expected one of: {', '.join(_KIND_PARAMS)}."
        )
    if length <= 0:
        raise ValueError(f"Series length must be positive, got {length}.")

    rng = rng or random.Random()
    if now_ms is None:
        now_ms = int(time.time() * 1000)

    series: list[MarketPoint] = []
    price = params.start_price
    for i in range(length):
        price *= 1 + rng.uniform(-1.0, 1.0) * params.volatility
        series.append(
            MarketPoint(
                timestamp=now_ms - (length - 1 - i) * DAY_MS,
                price=max(round(price, 2), MIN_PRICE),
                volume=rng.randrange(MAX_VOLUME),
            )
        )

    logger.debug(
        "Generated %d %s points: %.2f -> %.2f",
        length,
        kind,
        series[0].price,
        series[-1].price,
    )
    return series


def generate_dataset(
    name: str,
    length: int = DEFAULT_SERIES_LENGTH,
    *,
    rng: random.Random | None = None,
    now_ms: int | None = None,
) -> list[MarketPoint]:
    """Generate the series for dataset *name*.

    Raises ``KeyError`` if *name* is not a known dataset.
    """
    if name not in DATASETS:
        raise KeyError(
            f"Unknown dataset '{name}'. Available: {', '.join(available_datasets())}."
        )
    return generate(DATASETS[name], length, rng=rng, now_ms=now_ms)
