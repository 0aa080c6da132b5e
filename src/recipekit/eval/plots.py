import os
from typing import Optional, Sequence

import matplotlib
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from recipekit.configs import defaults
from recipekit.utils.logging import get_logger

# Ensure headless environments can save figures
matplotlib.use('Agg')

logger = get_logger(__name__)


def _save(fig, out_path: str) -> str:
    folder = os.path.dirname(out_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    fig.tight_layout()
    fig.savefig(out_path, dpi=defaults.DPI)
    plt.close(fig)
    logger.debug(f"[Plot] Saved {out_path}")
    return out_path


def plot_projection(df: pd.DataFrame, x: str, y: str, hue: Optional[str], out_path: str,
                    title: Optional[str] = None) -> str:
    """Scatter of two (projected) columns coloured by a class column."""
    fig, ax = plt.subplots(figsize=defaults.FIGSIZE)
    sns.scatterplot(data=df, x=x, y=y, hue=hue, alpha=0.6, s=18, ax=ax)
    ax.set_title(title or f"{y} vs {x}")
    return _save(fig, out_path)


def plot_density_comparison(before: pd.Series, after: pd.Series, feature: str, out_path: str,
                            labels: Sequence[str] = ("Before", "After")) -> str:
    """Side-by-side densities of one column before and after a transformation."""
    fig, axes = plt.subplots(1, 2, figsize=(defaults.FIGSIZE[0] * 1.6, defaults.FIGSIZE[1]))
    for ax, values, label, color in zip(axes, (before, after), labels, ("steelblue", "orange")):
        sns.histplot(values.dropna(), color=color, stat="density", kde=True, alpha=0.6, ax=ax)
        ax.set_title(f"{feature} – {label}")
        ax.set_xlabel(feature)
    return _save(fig, out_path)


def plot_step_lambdas(tidy_df: pd.DataFrame, out_path: str, title: str = "Estimated lambdas") -> str:
    """Bar chart of a power transformation's tidy() output (terms, value)."""
    fig, ax = plt.subplots(figsize=defaults.FIGSIZE)
    ordered = tidy_df.sort_values('value')
    sns.barplot(data=ordered, x='value', y='terms', color="steelblue", ax=ax)
    ax.axvline(0, color="grey", linewidth=0.8)
    ax.axvline(1, color="grey", linewidth=0.8, linestyle="--")
    ax.set_title(title)
    ax.set_xlabel("lambda")
    ax.set_ylabel("")
    return _save(fig, out_path)
