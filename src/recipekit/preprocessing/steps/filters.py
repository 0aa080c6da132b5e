import numpy as np
import pandas as pd

from recipekit.configs import defaults
from recipekit.preprocessing import roles
from recipekit.preprocessing.errors import RecipeError
from recipekit.preprocessing.steps.base import Step, register_step
from recipekit.utils.logging import get_logger

logger = get_logger(__name__)


class _FilterStep(Step):
    """Steps that only decide which of the selected columns to drop."""

    def __init__(self, *terms, **kwargs):
        super().__init__(*terms, **kwargs)
        self.removals: list[str] = []

    def required_columns(self):
        return []

    def _transform(self, data):
        drop = [c for c in self.removals if c in data.columns]
        return data.drop(columns=drop)

    def _tidy(self):
        return pd.DataFrame({'terms': self.removals})


@register_step('rm')
class StepRm(_FilterStep):
    def _fit(self, training, info):
        self.removals = list(self.columns)

    def label(self):
        return 'Variables removed'


@register_step('zv')
class StepZv(_FilterStep):
    """Drop columns with a single distinct value in training."""

    def _fit(self, training, info):
        self.removals = [c for c in self.columns if training[c].nunique(dropna=True) <= 1]
        if self.removals:
            logger.info(f"[+] Zero variance filter removed: {self.removals}")

    def label(self):
        return 'Zero variance filter'


def near_zero_var(df: pd.DataFrame, freq_cut: float, unique_cut: float) -> list[str]:
    """Columns whose most common value dominates and that have few distinct values."""
    flagged = []
    n = len(df)
    for col in df.columns:
        counts = df[col].dropna().value_counts()
        if len(counts) <= 1:
            flagged.append(col)
            continue
        freq_ratio = counts.iloc[0] / counts.iloc[1]
        percent_unique = 100 * len(counts) / n
        if freq_ratio > freq_cut and percent_unique <= unique_cut:
            flagged.append(col)
    return flagged


@register_step('nzv')
class StepNzv(_FilterStep):
    def __init__(self, *terms, freq_cut: float = defaults.NZV_FREQ_CUT,
                 unique_cut: float = defaults.NZV_UNIQUE_CUT, **kwargs):
        super().__init__(*terms, **kwargs)
        self.freq_cut = freq_cut
        self.unique_cut = unique_cut

    def _fit(self, training, info):
        self.removals = near_zero_var(training[self.columns], self.freq_cut, self.unique_cut)
        if self.removals:
            logger.info(f"[+] Near-zero variance filter removed: {self.removals}")

    def label(self):
        return 'Sparse, unbalanced variable filter'


def find_correlated(corr: pd.DataFrame, threshold: float) -> list[str]:
    """Pick columns to drop so no remaining pair exceeds threshold.

    For every pair above the threshold the member with the larger mean absolute
    correlation is dropped; ties drop the earlier column.
    """
    abs_corr = corr.abs()
    mean_corr = abs_corr.mean(axis=0)
    cols = list(corr.columns)
    drop: list[str] = []
    values = abs_corr.to_numpy()
    for i in range(len(cols)):
        for j in range(i + 1, len(cols)):
            if not values[i, j] > threshold:
                continue
            victim = cols[j] if mean_corr[cols[j]] > mean_corr[cols[i]] else cols[i]
            if victim not in drop:
                drop.append(victim)
    return [c for c in cols if c in drop]


@register_step('corr')
class StepCorr(_FilterStep):
    """Remove numeric columns with large absolute pairwise correlations."""

    accepts = (roles.NUMERIC,)

    def __init__(self, *terms, threshold: float = defaults.CORR_THRESHOLD, method: str = 'pearson', **kwargs):
        super().__init__(*terms, **kwargs)
        if not 0 < threshold <= 1:
            raise RecipeError(f"threshold must be in (0, 1], got {threshold}")
        self.threshold = threshold
        self.method = method

    def _fit(self, training, info):
        if len(self.columns) < 2:
            self.removals = []
            return
        corr = training[self.columns].corr(method=self.method)
        if corr.isna().to_numpy().any():
            logger.warning("[-] Correlation matrix has missing values; affected pairs are ignored")
        self.removals = find_correlated(corr.fillna(0.0).where(~np.eye(len(corr), dtype=bool), 1.0), self.threshold)
        if self.removals:
            logger.info(f"[+] Correlation filter removed: {self.removals}")

    def label(self):
        return 'Correlation filter'
