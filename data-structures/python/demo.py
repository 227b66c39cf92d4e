"""
Lazy Search Tree Demo — Walkthrough, insertion-order skew, and soft/hard size tracking.

Generates:
- viz/*.png — Individual visualization files
- report.pdf — PDF report of all figures
"""

import argparse
import logging
import os
import sys

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from lazy_search_tree import LazySearchTree, NotFoundError
from traverser import print_object

SEED = 42
N_KEYS = 400
N_OPERATIONS = 3000
GC_EVERY = 500

VIZ_DIR = Path(__file__).parent / "viz"


def example_1_walkthrough():
    """Lazy removal, garbage collection, and hard removal on a small tree."""
    print("=" * 60)
    print("Example 1: Lazy Deletion Walkthrough")
    print("=" * 60)

    tree: LazySearchTree[int] = LazySearchTree()
    for key in (5, 3, 8, 1, 4, 7, 9):
        tree.insert(key)
    print(f"After inserts:        {tree}")

    tree.remove(3)
    print(f"After remove(3):      {tree}")
    print(f"contains(3):          {tree.contains(3)}")
    try:
        tree.find(3)
    except NotFoundError:
        print("find(3):              NotFoundError")

    print("Live traversal:")
    tree.traverse_live(print_object)
    print("Hard traversal:")
    tree.traverse_all(print_object)

    tree.collect_garbage()
    print(f"After collect_garbage: {tree}")

    tree.remove_hard(5)
    print(f"After remove_hard(5): {tree}")
    print(f"Min / max:            {tree.find_min()} / {tree.find_max()}")
    return tree


def example_2_insertion_order():
    """Height under sorted vs shuffled insertion order (no rebalancing)."""
    print("\n" + "=" * 60)
    print("Example 2: Height vs Insertion Order")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    sizes = np.arange(25, N_KEYS + 1, 25)
    sorted_heights = []
    shuffled_heights = []
    for n in sizes:
        sorted_tree: LazySearchTree[int] = LazySearchTree()
        for key in range(n):
            sorted_tree.insert(key)
        sorted_heights.append(sorted_tree.height())

        shuffled_tree: LazySearchTree[int] = LazySearchTree()
        for key in rng.permutation(n):
            shuffled_tree.insert(int(key))
        shuffled_heights.append(shuffled_tree.height())

    print(f"n = {sizes[-1]}: sorted height = {sorted_heights[-1]}, "
          f"shuffled height = {shuffled_heights[-1]}, "
          f"log2(n) = {np.log2(sizes[-1]):.2f}")

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.plot(sizes, sorted_heights, "r-", linewidth=2, label="Sorted insertion")
    ax.plot(sizes, shuffled_heights, "b-o", linewidth=2, label="Shuffled insertion")
    ax.plot(sizes, np.log2(sizes), "g--", linewidth=1.5, label="log2(n)")
    ax.set_xlabel("Number of keys")
    ax.set_ylabel("Height")
    ax.set_title("Unbalanced BST Height by Insertion Order")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_insertion_order.png", dpi=150)
    return fig


def example_3_soft_vs_hard_size():
    """Soft and hard sizes over a random workload with periodic garbage collection."""
    print("\n" + "=" * 60)
    print("Example 3: Soft vs Hard Size Under Churn")
    print("=" * 60)

    rng = np.random.default_rng(SEED)
    tree: LazySearchTree[int] = LazySearchTree()
    soft_sizes = []
    hard_sizes = []
    collections = []
    for step in range(N_OPERATIONS):
        key = int(rng.integers(0, N_KEYS))
        if rng.random() < 0.55:
            tree.insert(key)
        else:
            tree.remove(key)
        if step > 0 and step % GC_EVERY == 0:
            if tree.collect_garbage():
                collections.append(step)
        soft_sizes.append(tree.size())
        hard_sizes.append(tree.hard_size())

    print(f"Final: {tree}")
    print(f"Garbage collections that reclaimed nodes: {len(collections)}")

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(hard_sizes, color="firebrick", linewidth=1.5, label="hard_size (all nodes)")
    ax.plot(soft_sizes, color="steelblue", linewidth=1.5, label="size (live keys)")
    for step in collections:
        ax.axvline(step, color="gray", linestyle=":", alpha=0.7)
    ax.set_xlabel("Operation")
    ax.set_ylabel("Count")
    ax.set_title(f"Lazy Deletion with collect_garbage() every {GC_EVERY} operations")
    ax.legend()
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_soft_vs_hard_size.png", dpi=150)
    return fig


def generate_pdf_report(figures_data):
    pdf_path = Path(__file__).parent / "report.pdf"
    with PdfPages(pdf_path) as pdf:
        for title, fig in figures_data:
            fig.suptitle(title, fontsize=12, fontweight="bold")
            pdf.savefig(fig)
            plt.close(fig)

    print(f"PDF report saved to: {pdf_path}")
    return pdf_path


def main():
    parser = argparse.ArgumentParser(description="Lazy search tree demo")
    parser.add_argument("--verbose", action="store_true", help="log tree internals at DEBUG")
    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    VIZ_DIR.mkdir(exist_ok=True)

    print("\n" + "#" * 60)
    print("#" + " " * 19 + "LAZY SEARCH TREE DEMO" + " " * 18 + "#")
    print("#" * 60)
    print(f"\nRandom seed: {SEED}")
    print(f"Output directory: {VIZ_DIR}\n")

    example_1_walkthrough()

    figures = []
    figures.append(("Example 2: Insertion Order", example_2_insertion_order()))
    figures.append(("Example 3: Soft vs Hard Size", example_3_soft_vs_hard_size()))

    generate_pdf_report(figures)

    print("\n" + "=" * 60)
    print("DEMO COMPLETE")
    print("=" * 60)
    print("\nGenerated files:")
    for f in sorted(VIZ_DIR.glob("*.png")):
        print(f"  - {f.relative_to(VIZ_DIR.parent)}")
    print("  - report.pdf")


if __name__ == "__main__":
    main()
