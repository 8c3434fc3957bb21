"""Render a fairness report as a start × terminal heatmap."""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt

from ghost_leg.stats import FairnessReport


def make_fairness_chart(
    report: FairnessReport,
    output_path: str = "ladder_fairness.png",
    title: str | None = None,
) -> str:
    """Create a heatmap of P(terminal | start), one cell per column pair.

    Returns the path to the saved PNG.
    """
    probs = report.probabilities()
    n = report.column_count
    title = title or f"Ghost-leg outcome odds ({n} columns, {report.trials} ladders)"

    fig, ax = plt.subplots(figsize=(max(4, n * 1.1), max(3.5, n)))
    image = ax.imshow(probs, cmap="Blues", vmin=0.0, vmax=max(max(r) for r in probs))

    # Annotate cells with probabilities
    for start in range(n):
        for terminal in range(n):
            ax.text(
                terminal, start, f"{probs[start][terminal]:.2f}",
                ha="center", va="center", fontsize=10,
            )

    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_xlabel("Terminal column")
    ax.set_ylabel("Start column")
    ax.set_title(title, fontsize=13, fontweight="bold")
    fig.colorbar(image, ax=ax)

    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
