from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd
from sklearn.decomposition import PCA, KernelPCA

from recipekit.configs import defaults
from recipekit.preprocessing import roles
from recipekit.preprocessing.errors import RecipeError
from recipekit.preprocessing.steps.base import Step, names0, register_step
from recipekit.utils.logging import get_logger

logger = get_logger(__name__)


class _ProjectionStep(Step):
    """Replace the selected columns with `num_comp` projected components."""

    accepts = (roles.NUMERIC,)
    default_prefix = 'PC'

    def __init__(self, *terms, num_comp: int = defaults.NUM_COMP, prefix: Optional[str] = None,
                 keep_original_cols: bool = False, **kwargs):
        super().__init__(*terms, **kwargs)
        if num_comp < 0:
            raise RecipeError(f"num_comp must be >= 0, got {num_comp}")
        self.num_comp = int(num_comp)
        self.prefix = prefix or self.default_prefix
        self.keep_original_cols = keep_original_cols
        self.model = None
        self.component_names: list[str] = []

    def _matrix(self, data: pd.DataFrame) -> np.ndarray:
        X = data[self.columns]
        if X.isna().to_numpy().any():
            bad = X.columns[X.isna().any()].tolist()
            raise RecipeError(f"{self.step_type} cannot handle missing values; impute first: {bad}")
        return X.to_numpy(dtype=float)

    def _cap(self, training: pd.DataFrame) -> int:
        cap = min(self.num_comp, len(self.columns), len(training))
        if cap < self.num_comp:
            logger.warning(f"[-] {self.id}: num_comp reduced from {self.num_comp} to {cap}")
        return cap

    def new_columns(self):
        return list(self.component_names)

    def dropped_columns(self):
        return [] if self.keep_original_cols else list(self.columns)

    def _transform(self, data):
        if self.model is None:
            return data
        scores = self.model.transform(self._matrix(data))
        comps = pd.DataFrame(scores[:, :len(self.component_names)], columns=self.component_names, index=data.index)
        if not self.keep_original_cols:
            data = data.drop(columns=self.columns)
        return pd.concat([data, comps], axis=1)


@register_step('pca')
class StepPca(_ProjectionStep):
    """Principal components of the selected columns (centred, not scaled).

    When `threshold` is set the number of components is the smallest count whose
    cumulative explained variance reaches it, overriding num_comp.
    """

    def __init__(self, *terms, threshold: Optional[float] = None, **kwargs):
        super().__init__(*terms, **kwargs)
        if threshold is not None and not 0 < threshold <= 1:
            raise RecipeError(f"threshold must be in (0, 1], got {threshold}")
        self.threshold = threshold

    def _fit(self, training, info):
        self.model = None
        self.component_names = []
        if not self.columns or (self.num_comp == 0 and self.threshold is None):
            return
        X = self._matrix(training)
        if self.threshold is not None:
            full = PCA().fit(X)
            cumulative = np.cumsum(full.explained_variance_ratio_)
            k = int(np.searchsorted(cumulative, self.threshold - 1e-12) + 1)
            k = min(k, len(cumulative))
            logger.debug(f"[+] {self.id}: {k} components reach {self.threshold:.0%} of the variance")
        else:
            k = self._cap(training)
        self.model = PCA(n_components=k).fit(X)
        self.component_names = names0(k, self.prefix)

    def tidy(self, type: str = 'coef') -> pd.DataFrame:
        if not self.trained or self.model is None:
            return super().tidy()
        if type == 'variance':
            ratio = self.model.explained_variance_ratio_
            k = len(ratio)
            out = pd.DataFrame({
                'terms': ['variance'] * k + ['percent variance'] * k + ['cumulative percent variance'] * k,
                'value': np.concatenate([
                    self.model.explained_variance_, 100 * ratio, 100 * np.cumsum(ratio),
                ]),
                'component': list(range(1, k + 1)) * 3,
            })
        elif type == 'coef':
            loadings = self.model.components_
            out = pd.DataFrame([
                {'terms': term, 'value': float(loadings[i, j]), 'component': name}
                for i, name in enumerate(self.component_names)
                for j, term in enumerate(self.columns)
            ])
        else:
            raise RecipeError(f"Unknown tidy type {type!r}; use 'coef' or 'variance'")
        out['id'] = self.id
        return out

    def label(self):
        return 'PCA extraction'


@register_step('kpca')
class StepKpca(_ProjectionStep):
    """Kernel PCA; the rbf kernel is exp(-gamma * ||x - x'||^2)."""

    default_prefix = 'kPC'

    def __init__(self, *terms, kernel: str = 'rbf', gamma: float = defaults.KPCA_GAMMA,
                 degree: int = 3, random_state: Optional[int] = defaults.RANDOM_SEED, **kwargs):
        super().__init__(*terms, **kwargs)
        self.kernel = kernel
        self.gamma = gamma
        self.degree = degree
        self.random_state = random_state

    def _fit(self, training, info):
        self.model = None
        self.component_names = []
        if not self.columns or self.num_comp == 0:
            return
        k = self._cap(training)
        self.model = KernelPCA(
            n_components=k,
            kernel=self.kernel,
            gamma=self.gamma,
            degree=self.degree,
            random_state=self.random_state,
        ).fit(self._matrix(training))
        self.component_names = names0(k, self.prefix)

    def _tidy(self):
        return pd.DataFrame({'terms': self.columns})

    def label(self):
        return f'Kernel PCA ({self.kernel}) extraction'
