"""
Quick look at a generated payments table: the group-by summaries and the
anti-join the sample data is meant to exercise.

Run:
    python -m payment_data.explore payments.xlsx
"""

import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

DATE_COLS = ["period"]

# -----------------------------
# Helpers
# -----------------------------
def parse_dates(df, cols):
    out = df.copy()
    for c in cols:
        if c in out.columns and _is_text(out[c]):
            parsed = pd.to_datetime(out[c], errors="coerce")
            # Leave label-style periods alone
            if parsed.notna().all():
                out[c] = parsed
    return out

def _is_text(col):
    # object on older pandas, the str dtype on pandas 3
    if pd.api.types.is_datetime64_any_dtype(col):
        return False
    return pd.api.types.is_object_dtype(col) or pd.api.types.is_string_dtype(col)

def load_dataset(path):
    """Read a payments table written by the runner (.xlsx or .csv)."""
    path = Path(path)
    if path.suffix.lower() == ".xlsx":
        df = pd.read_excel(path, engine="openpyxl")
    else:
        df = pd.read_csv(path)
    df = parse_dates(df, DATE_COLS)
    # Empty cells come back as NaN; keep them as proper nulls
    df["detail"] = df["detail"].astype(object).where(df["detail"].notna(), None)
    return df

def outcome_rate_by_period(df):
    """Paid share and row count per period, in period order."""
    out = (
        df.assign(paid=(df["outcome"] == "yes").astype(int))
          .groupby("period", sort=True)
          .agg(rows=("paid", "size"), paid_rate=("paid", "mean"))
          .reset_index()
    )
    return out

def detail_share(df):
    """Share of each payment source among paid rows."""
    paid = df[df["outcome"] == "yes"]
    return paid["detail"].value_counts(normalize=True).sort_index()

def missing_entities(df, entity_count):
    """Ids in 1..entity_count with no rows at all (left anti-join)."""
    everyone = pd.DataFrame({"id": np.arange(1, entity_count + 1)})
    present = df[["id"]].drop_duplicates()
    joined = everyone.merge(present, on="id", how="left", indicator=True)
    return joined.loc[joined["_merge"] == "left_only", "id"].sort_values().tolist()

def describe_dataset(df, name="payments"):
    print(f"\n=== {name.upper()} DATA ===")
    print(f"Rows: {len(df):,} | Customers: {df['id'].nunique():,} | Periods: {df['period'].nunique()}")
    if len(df):
        print(f"Period range: {df['period'].min()} → {df['period'].max()}")

    paid_rate = float((df["outcome"] == "yes").mean()) if len(df) else 0.0
    print(f"Paid share: {paid_rate*100:.2f}%")

    shares = detail_share(df)
    if len(shares):
        print("\nPayment source mix (paid rows):")
        for source, pct in shares.items():
            print(f"  {source}: {pct*100:.1f}%")

    return {
        "rows": len(df),
        "entities": int(df["id"].nunique()),
        "periods": int(df["period"].nunique()),
        "paid_rate": paid_rate,
        "detail_share": shares.to_dict(),
    }

def plot_outcome_rate(df, path=None):
    """Monthly paid share as a line; saved to `path` if given, else shown."""
    rates = outcome_rate_by_period(df)

    fig, ax = plt.subplots(figsize=(8, 4))
    sns.lineplot(x="period", y="paid_rate", data=rates, marker="o", ax=ax)
    ax.set_title("Share of customers paying, by period")
    ax.set_xlabel("Period")
    ax.set_ylabel("Paid share")
    ax.set_ylim(0, 1)
    ax.grid(True, linestyle='--', alpha=0.6)
    fig.tight_layout()

    if path is not None:
        fig.savefig(path)
        plt.close(fig)
    else:
        plt.show()
    return rates


if __name__ == "__main__":
    data_path = sys.argv[1] if len(sys.argv) > 1 else "payments.xlsx"
    payments = load_dataset(data_path)
    describe_dataset(payments)
    print("\n=== PAID SHARE BY PERIOD ===")
    print(outcome_rate_by_period(payments))
