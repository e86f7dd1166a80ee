# generator.py
# One file with small, readable functions. Each stage is bite-sized and testable.

from datetime import date, datetime
from numbers import Integral, Real
from typing import Sequence
import numpy as np
import pandas as pd

from payment_data.config import Config

COLUMNS = ["id", "period", "outcome", "detail"]
ORDERS = ("entity", "period")


class InvalidArgument(ValueError):
    """Raised when generator inputs cannot produce a valid table."""


# ---------------------------
# Helpers
# ---------------------------

def rng_from_seed(seed: int) -> np.random.Generator:
    """Single RNG so runs are reproducible."""
    return np.random.default_rng(seed)

def as_dt(s: str) -> datetime:
    return datetime.fromisoformat(s)

def month_starts(start: str, end: str) -> list:
    """First day of every month in [start, end], in calendar order."""
    try:
        start_dt, end_dt = as_dt(start), as_dt(end)
    except ValueError as exc:
        raise InvalidArgument(f"bad date in time axis: {exc}") from exc
    if end_dt < start_dt:
        raise InvalidArgument(f"end {end!r} is before start {start!r}")
    # A mid-month start rolls forward to the next month start
    return [ts.date() for ts in pd.date_range(start_dt, end_dt, freq="MS")]

def _distinct(values, name) -> int:
    try:
        return len(set(values))
    except TypeError as exc:
        raise InvalidArgument(f"{name} must hold hashable labels: {exc}") from exc

def validate_inputs(seed, entity_count, time_buckets, outcome_probability,
                    detail_options, retained_entity_count, order) -> None:
    """Reject bad inputs up front, before any draw is made."""
    if isinstance(seed, bool) or not isinstance(seed, Integral) or seed < 0:
        raise InvalidArgument(f"seed must be a non-negative integer, got {seed!r}")
    if isinstance(entity_count, bool) or not isinstance(entity_count, Integral) or entity_count < 1:
        raise InvalidArgument(f"entity_count must be a positive integer, got {entity_count!r}")
    if (isinstance(retained_entity_count, bool)
            or not isinstance(retained_entity_count, Integral)
            or retained_entity_count < 0):
        raise InvalidArgument(
            f"retained_entity_count must be a non-negative integer, got {retained_entity_count!r}"
        )
    if retained_entity_count > entity_count:
        raise InvalidArgument(
            f"retained_entity_count ({retained_entity_count}) exceeds entity_count ({entity_count})"
        )
    if (isinstance(outcome_probability, bool) or not isinstance(outcome_probability, Real)
            or not 0.0 <= outcome_probability <= 1.0):
        raise InvalidArgument(f"outcome_probability must be in [0, 1], got {outcome_probability!r}")
    if len(time_buckets) == 0:
        raise InvalidArgument("time_buckets must not be empty")
    if _distinct(time_buckets, "time_buckets") != len(time_buckets):
        raise InvalidArgument("time_buckets must not contain duplicates")
    if len(detail_options) == 0:
        raise InvalidArgument("detail_options must not be empty")
    if _distinct(detail_options, "detail_options") != len(detail_options):
        raise InvalidArgument("detail_options must not contain duplicates")
    if order not in ORDERS:
        raise InvalidArgument(f"order must be one of {ORDERS}, got {order!r}")

# ---------------------------
# Stage 1: Entity x period grid
# ---------------------------

def generate_grid(entity_count: int, time_buckets: Sequence, order: str = "entity") -> pd.DataFrame:
    """Every (id, period) pair exactly once, in the requested row layout."""
    ids = np.arange(1, entity_count + 1)
    buckets = list(time_buckets)
    n_buckets = len(buckets)

    if order == "entity":
        # 1,1,1,...,2,2,2,...  against  p1,p2,p3,p1,p2,p3,...
        id_col = np.repeat(ids, n_buckets)
        bucket_idx = np.tile(np.arange(n_buckets), entity_count)
    else:
        # 1,2,3,...,1,2,3,...  against  p1,p1,p1,...,p2,p2,p2,...
        id_col = np.tile(ids, n_buckets)
        bucket_idx = np.repeat(np.arange(n_buckets), entity_count)

    period = pd.Series(buckets).iloc[bucket_idx].reset_index(drop=True)
    # Real dates become datetime64 so spreadsheets show them as dates
    if all(isinstance(b, (date, np.datetime64)) for b in buckets):
        period = pd.to_datetime(period)

    return pd.DataFrame({"id": id_col, "period": period})

# ---------------------------
# Stage 2: Outcome flag
# ---------------------------

def generate_outcome(df: pd.DataFrame, p_yes: float, rng: np.random.Generator) -> pd.DataFrame:
    """Independent yes/no draw per row, in row order."""
    made = rng.random(df.shape[0]) < p_yes

    df = df.copy()
    df["outcome"] = np.where(made, "yes", "no").astype(object)
    return df

# ---------------------------
# Stage 3: Detail (only where outcome is yes)
# ---------------------------

def generate_detail(df: pd.DataFrame, options: Sequence, rng: np.random.Generator) -> pd.DataFrame:
    """Uniform draw with replacement for every row; blanked where outcome is no."""
    # Draw for all rows so the stream position never depends on the outcomes
    picks = rng.integers(low=0, high=len(options), size=df.shape[0])
    candidates = np.array(list(options), dtype=object)[picks]

    df = df.copy()
    df["detail"] = np.where(df["outcome"].values == "yes", candidates, None)
    return df

# ---------------------------
# Stage 4: Entity dropout
# ---------------------------

def drop_entities(df: pd.DataFrame, entity_count: int, keep: int, rng: np.random.Generator) -> pd.DataFrame:
    """Keep every row of `keep` distinct ids sampled without replacement."""
    kept = rng.choice(np.arange(1, entity_count + 1), size=keep, replace=False)
    mask = np.isin(df["id"].values, kept)
    return df[mask].reset_index(drop=True)

# ---------------------------
# Orchestrators
# ---------------------------

def generate(seed: int, entity_count: int, time_buckets: Sequence, outcome_probability: float,
             detail_options: Sequence, retained_entity_count: int, order: str = "entity") -> pd.DataFrame:
    """
    Long-format payment table: one row per retained id per time bucket.

    Draws come from one generator seeded with `seed`, in a fixed order:
    outcomes (row order), then details (row order), then the retained ids.
    Raises InvalidArgument before drawing anything if an input is bad.
    """
    time_buckets = list(time_buckets)
    detail_options = list(detail_options)
    validate_inputs(seed, entity_count, time_buckets, outcome_probability,
                    detail_options, retained_entity_count, order)

    rng = rng_from_seed(seed)

    df = generate_grid(entity_count, time_buckets, order)
    df = generate_outcome(df, outcome_probability, rng)
    df = generate_detail(df, detail_options, rng)
    df = drop_entities(df, entity_count, retained_entity_count, rng)

    df["id"] = df["id"].astype("int64")
    return df[COLUMNS]

def assemble_dataset(cfg: Config) -> pd.DataFrame:
    """Build the month axis from the config and run all stages."""
    buckets = month_starts(cfg.start, cfg.end)
    return generate(
        seed=cfg.seed,
        entity_count=cfg.n_entities,
        time_buckets=buckets,
        outcome_probability=cfg.outcome_probability,
        detail_options=cfg.detail_options,
        retained_entity_count=cfg.n_retained,
        order=cfg.order,
    )
