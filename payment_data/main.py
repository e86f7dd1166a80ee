# main.py - Tiny runner. Generates the payment table and writes it to Excel or CSV.

import argparse
import sys
from pathlib import Path

import pandas as pd

from payment_data.config import Config
from payment_data.generator import InvalidArgument, assemble_dataset


def write_dataset(df: pd.DataFrame, path) -> Path:
    """Write to .xlsx (single sheet) or .csv based on the file suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".xlsx":
        df.to_excel(path, index=False, engine="openpyxl")
    elif suffix == ".csv":
        df.to_csv(path, index=False)
    else:
        raise InvalidArgument(f"unsupported output format {suffix!r} (use .xlsx or .csv)")
    return path


def parse_args(argv=None) -> argparse.Namespace:
    defaults = Config()
    parser = argparse.ArgumentParser(description="Generate the synthetic monthly payments table")
    parser.add_argument("--seed", type=int, default=defaults.seed)
    parser.add_argument("--entities", type=int, default=defaults.n_entities)
    parser.add_argument("--retained", type=int, default=defaults.n_retained)
    parser.add_argument("--start", default=defaults.start)
    parser.add_argument("--end", default=defaults.end)
    parser.add_argument("--p-yes", type=float, default=defaults.outcome_probability)
    parser.add_argument("--order", choices=["entity", "period"], default=defaults.order)
    parser.add_argument("--output", default="payments.xlsx")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    cfg = Config(
        seed=args.seed,
        n_entities=args.entities,
        start=args.start,
        end=args.end,
        outcome_probability=args.p_yes,
        n_retained=args.retained,
        order=args.order,
    )

    try:
        df = assemble_dataset(cfg)
        out_path = write_dataset(df, args.output)
    except InvalidArgument as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    # Quick sanity print
    paid = (df["outcome"] == "yes").mean() if len(df) else 0.0
    print(f"Rows: {len(df):,} | Customers: {df['id'].nunique():,} | Paid share: {paid:.3f}")
    print(f"Saved: {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
