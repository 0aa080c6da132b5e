import re

import numpy as np
import pandas as pd

from recipekit.configs import defaults
from recipekit.preprocessing import roles, selectors
from recipekit.preprocessing.errors import RecipeError
from recipekit.preprocessing.steps.base import Step, register_step
from recipekit.utils.logging import get_logger

logger = get_logger(__name__)


def dummy_names(column: str, levels) -> list[str]:
    """`<column>_<level>` with the level reduced to [A-Za-z0-9_], made unique."""
    names = []
    seen: dict[str, int] = {}
    for level in levels:
        name = f"{column}_{re.sub(r'[^A-Za-z0-9_]', '_', str(level))}"
        if name in seen:
            seen[name] += 1
            name = f"{name}_{seen[name]}"
        else:
            seen[name] = 0
        names.append(name)
    return names


def _levels(series: pd.Series) -> list:
    return sorted(series.dropna().unique().tolist(), key=str)


@register_step('other')
class StepOther(Step):
    """Pool infrequent levels of nominal columns into a single `other` level."""

    accepts = (roles.NOMINAL,)

    def __init__(self, *terms, threshold: float = defaults.OTHER_THRESHOLD,
                 other: str = defaults.OTHER_LEVEL, **kwargs):
        super().__init__(*terms, **kwargs)
        if threshold <= 0:
            raise RecipeError(f"threshold must be positive, got {threshold}")
        self.threshold = threshold
        self.other = other
        # column -> (retained levels, collapse?)
        self.objects: dict[str, tuple[list, bool]] = {}

    def _fit(self, training, info):
        self.objects = {}
        for col in self.columns:
            counts = training[col].dropna().value_counts()
            if counts.empty:
                self.objects[col] = ([], False)
                continue
            if self.threshold < 1:
                freq = counts / counts.sum()
            else:
                freq = counts
            keep = [lvl for lvl in _levels(training[col]) if freq[lvl] >= self.threshold]
            if not keep:
                # never pool everything: the most frequent level survives
                keep = [counts.idxmax()]
            collapse = len(keep) < len(counts)
            if collapse and self.other in counts.index and self.other not in keep:
                raise RecipeError(
                    f"Level '{self.other}' already exists in '{col}'; choose another `other` label"
                )
            self.objects[col] = (keep, collapse)
            if collapse:
                pooled = [lvl for lvl in counts.index if lvl not in keep]
                logger.debug(f"[+] {col}: pooling {len(pooled)} levels into '{self.other}'")

    def _transform(self, data):
        for col, (keep, collapse) in self.objects.items():
            if not collapse:
                continue
            values = data[col].astype(object)
            pooled = values.notna() & ~values.isin(keep)
            data[col] = values.where(~pooled, self.other)
        return data

    def _tidy(self):
        rows = []
        for col, (keep, collapse) in self.objects.items():
            if not collapse:
                continue
            rows.extend({'terms': col, 'retained': lvl} for lvl in keep)
        return pd.DataFrame(rows, columns=['terms', 'retained'])

    def label(self):
        return 'Collapsing factor levels'


@register_step('dummy')
class StepDummy(Step):
    """Indicator columns for nominal variables.

    With one_hot=False (the default) the first level in sorted order is the
    reference and gets no column, matching treatment contrasts in a model
    formula. Levels not seen in training and missing values produce NA
    rows, with a warning.
    """

    accepts = (roles.NOMINAL, roles.LOGICAL)

    def __init__(self, *terms, one_hot: bool = False, **kwargs):
        super().__init__(*terms, **kwargs)
        self.one_hot = one_hot
        self.levels: dict[str, list] = {}

    def _fit(self, training, info):
        self.levels = {}
        for col in self.columns:
            levels = _levels(training[col])
            if len(levels) < 2 and not self.one_hot:
                logger.warning(f"[-] '{col}' has a single level; no dummy columns will be made")
            self.levels[col] = levels

    def _encoded_levels(self, col: str) -> list:
        levels = self.levels[col]
        return levels if self.one_hot else levels[1:]

    def _transform(self, data):
        for col, levels in self.levels.items():
            values = data[col]
            unseen = values.notna() & ~values.isin(levels)
            if unseen.any():
                new = sorted(values[unseen].astype(str).unique().tolist())
                logger.warning(f"[-] '{col}' has levels not present in training, NA rows created: {new}")
            if values.isna().any():
                logger.warning(f"[-] '{col}' has {int(values.isna().sum())} missing values, NA rows created")
            missing = values.isna() | unseen
            encoded = self._encoded_levels(col)
            new_cols = {}
            for name, level in zip(dummy_names(col, encoded), encoded):
                indicator = (values == level).astype(float)
                indicator[missing] = np.nan
                new_cols[name] = indicator
            data = data.drop(columns=[col])
            if new_cols:
                data = pd.concat([data, pd.DataFrame(new_cols, index=data.index)], axis=1)
        return data

    def new_columns(self):
        return [name for col in self.levels for name in dummy_names(col, self._encoded_levels(col))]

    def _tidy(self):
        rows = [{'terms': col, 'columns': name}
                for col in self.levels
                for name in dummy_names(col, self._encoded_levels(col))]
        return pd.DataFrame(rows, columns=['terms', 'columns'])

    def label(self):
        return 'One-hot encoding' if self.one_hot else 'Dummy variables'


@register_step('interact')
class StepInteract(Step):
    """Product columns for pairs of selections.

    Each term is a (left, right) pair of selectors; every resolved left column is
    multiplied with every resolved right column into `<left>_x_<right>`.
    """

    accepts = (roles.NUMERIC,)

    def __init__(self, *pairs, sep: str = '_x_', **kwargs):
        for pair in pairs:
            if not isinstance(pair, tuple) or len(pair) != 2:
                raise RecipeError(f"step_interact takes (left, right) pairs, got {pair!r}")
        super().__init__(*pairs, **kwargs)
        self.sep = sep
        self.products: list[tuple[str, str, str]] = []

    def prep(self, training, info):
        self.products = []
        used = []
        for left, right in self.terms:
            left_cols = selectors.resolve([left], info)
            right_cols = selectors.resolve([right], info)
            for a in left_cols:
                for b in right_cols:
                    if a == b:
                        continue
                    self.products.append((a, b, f"{a}{self.sep}{b}"))
                    used.extend(c for c in (a, b) if c not in used)
        if not self.products:
            logger.warning(f"[-] {self.id}: no interaction terms resolved")
        self.columns = [c for c in info['variable'] if c in used]
        self._check_types(info)
        self._check_new_names(info)
        self.trained = True
        return self

    def _fit(self, training, info):
        pass

    def new_columns(self):
        return [name for _, _, name in self.products]

    def _transform(self, data):
        if not self.products:
            return data
        new_cols = {name: data[a] * data[b] for a, b, name in self.products}
        return pd.concat([data, pd.DataFrame(new_cols, index=data.index)], axis=1)

    def _tidy(self):
        return pd.DataFrame({'terms': [name for _, _, name in self.products]})

    def label(self):
        return 'Interactions'
