from __future__ import annotations

import argparse
import glob
import os

import pandas as pd

GROUP_KEYS = ["curve", "msg_len", "op"]
SIZE_COLUMNS = ["point_len_bytes", "pk_len_bytes", "sk_len_bytes"]


def load_raw(paths: list[str], include_warmup: bool = False) -> pd.DataFrame:
    df = pd.concat((pd.read_csv(p) for p in paths), ignore_index=True)
    missing = set(GROUP_KEYS + SIZE_COLUMNS + ["warmup", "elapsed_ns"]) - set(df.columns)
    if missing:
        raise ValueError(f"missing columns {sorted(missing)}")
    if not include_warmup:
        df = df[df["warmup"] == 0]
    return df


def summarize(df: pd.DataFrame) -> pd.DataFrame:
    """One row per (curve, msg_len, op) with latency statistics in ns."""
    grouped = df.groupby(GROUP_KEYS)
    stats = grouped["elapsed_ns"].agg(
        n="count",
        mean_ns="mean",
        median_ns="median",
        p95_ns=lambda s: s.quantile(0.95, interpolation="higher"),
        p99_ns=lambda s: s.quantile(0.99, interpolation="higher"),
        min_ns="min",
        max_ns="max",
    )
    # sizes are fixed per curve
    sizes = grouped[SIZE_COLUMNS].first()
    out = stats.join(sizes).reset_index()
    ns_cols = ["mean_ns", "median_ns", "p95_ns", "p99_ns"]
    out[ns_cols] = out[ns_cols].round().astype("int64")
    return out


def main() -> None:
    ap = argparse.ArgumentParser(description="Aggregate raw VOPRF benchmark CSVs into a summary.")
    ap.add_argument("--in", dest="inputs", nargs="*", default=None, help="Input CSV files.")
    ap.add_argument("--glob", dest="globpat", default="bench/outputs/out*.csv")
    ap.add_argument("--out", dest="out", default="bench/outputs/summary.csv")
    ap.add_argument("--include-warmup", action="store_true")
    args = ap.parse_args()

    paths = args.inputs if args.inputs else sorted(glob.glob(args.globpat))
    if not paths:
        raise SystemExit(f"No input CSVs found (inputs={args.inputs}, glob={args.globpat}).")

    summary = summarize(load_raw(paths, include_warmup=args.include_warmup))

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    summary.to_csv(args.out, index=False)
    print(f"Wrote {len(summary)} groups from {len(paths)} file(s) to {args.out}")


if __name__ == "__main__":
    main()
