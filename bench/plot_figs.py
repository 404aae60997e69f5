from __future__ import annotations

import argparse
import os

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.patches import Patch

plt.rcParams.update({
    "font.size": 11,
    "axes.titlesize": 12,
    "axes.labelsize": 11,
    "legend.fontsize": 10,
    "xtick.labelsize": 10,
    "ytick.labelsize": 10,
})

OP_ORDER = ["KeyGen", "Blind", "Evaluate", "Unblind", "Verify"]
ROLE = {
    "KeyGen": "server",
    "Blind": "client",
    "Evaluate": "server",
    "Unblind": "client",
    "Verify": "verifier",
}
# hatch per role (BW-friendly)
HATCHES = {"client": "///", "server": "\\\\\\", "verifier": "xx"}


def ns_to_ms(ns: float) -> float:
    return ns / 1e6


def _load_summary(path: str) -> pd.DataFrame:
    df = pd.read_csv(path)
    df["op"] = pd.Categorical(df["op"], categories=OP_ORDER, ordered=True)
    return df.sort_values(["msg_len", "op"])


def _save(fig, out_dir: str, stem: str):
    os.makedirs(out_dir, exist_ok=True)
    pdf_path = os.path.join(out_dir, f"{stem}.pdf")
    png_path = os.path.join(out_dir, f"{stem}.png")
    fig.savefig(pdf_path)
    fig.savefig(png_path, dpi=300)
    plt.close(fig)
    print(f"[{stem}] Saved to {pdf_path} and {png_path}")


def plot_fig1_op_latency(df: pd.DataFrame, out_dir: str):
    """Median latency per protocol step, with p95 as the error bar."""
    sub = df[df["msg_len"] == df["msg_len"].min()]
    median_ms = sub["median_ns"].apply(ns_to_ms).to_numpy()
    p95_ms = sub["p95_ns"].apply(ns_to_ms).to_numpy()
    ops = [str(o) for o in sub["op"]]

    fig, ax = plt.subplots(figsize=(6.5, 3.8))
    x = np.arange(len(ops))
    bars = ax.bar(x, median_ms, width=0.6, yerr=np.maximum(p95_ms - median_ms, 0), capsize=4)
    for op, bar in zip(ops, bars):
        bar.set_hatch(HATCHES[ROLE[op]])
        bar.set_facecolor("white")
        bar.set_edgecolor("black")

    ax.set_xticks(x)
    ax.set_xticklabels(ops)
    ax.set_ylabel("Latency (ms)")
    ax.set_title("VOPRF Step Latency (median, p95 whisker)")
    ax.grid(axis="y", linestyle="--", linewidth=0.5, alpha=0.7)
    handles = [
        Patch(facecolor="white", edgecolor="black", hatch=h, label=role)
        for role, h in HATCHES.items()
    ]
    ax.legend(handles=handles, title="Role", frameon=False)

    fig.tight_layout()
    _save(fig, out_dir, "fig1_op_latency")


def plot_fig2_message_length(df: pd.DataFrame, out_dir: str):
    """Blind and Verify latency against input length (both hash the message)."""
    fig, ax = plt.subplots(figsize=(6.5, 3.8))
    for op, (ls, mk) in (("Blind", ("-", "o")), ("Verify", ("--", "s"))):
        sub = df[df["op"] == op]
        ax.plot(
            sub["msg_len"],
            sub["median_ns"].apply(ns_to_ms),
            linestyle=ls,
            marker=mk,
            markerfacecolor="none",
            markeredgecolor="black",
            color="black",
            label=op,
        )

    ax.set_xscale("log")
    ax.set_xlabel("Message length (bytes)")
    ax.set_ylabel("Median latency (ms)")
    ax.set_title("Effect of Input Length")
    ax.legend(frameon=False)
    ax.grid(True, which="both", linestyle="--", linewidth=0.5, alpha=0.7)
    fig.tight_layout()
    _save(fig, out_dir, "fig2_message_length")


def main():
    ap = argparse.ArgumentParser(description="Plot figures from an aggregated summary CSV.")
    ap.add_argument("--summary", default="bench/outputs/summary.csv")
    ap.add_argument("--out-dir", default="bench/figures")
    args = ap.parse_args()

    df = _load_summary(args.summary)
    plot_fig1_op_latency(df, args.out_dir)
    if df["msg_len"].nunique() > 1:
        plot_fig2_message_length(df, args.out_dir)


if __name__ == "__main__":
    main()
