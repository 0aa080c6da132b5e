from __future__ import annotations

import numpy as np
import pandas as pd

from recipekit.preprocessing import roles
from recipekit.preprocessing.errors import RecipeError
from recipekit.preprocessing.steps.base import Step, register_step
from recipekit.utils.logging import get_logger

logger = get_logger(__name__)


def mahalanobis_sq(X: np.ndarray, center: np.ndarray, cov: np.ndarray) -> np.ndarray:
    """Squared Mahalanobis distance of each row of X to center."""
    diff = X - center
    # pinv keeps singular covariances (collinear predictors) usable
    inv = np.linalg.pinv(cov)
    return np.einsum('ij,jk,ik->i', diff, inv, diff)


@register_step('classdist')
class StepClassdist(Step):
    """Distance of every row to each class centroid of a nominal column.

    Adds `<prefix><level>` columns holding the squared Mahalanobis distance
    (its natural log when log=True). The class column is only needed while
    preparing, so the step bakes on data without the outcome.
    """

    accepts = (roles.NUMERIC,)

    def __init__(self, *terms, class_col: str, pool: bool = False, log: bool = True,
                 prefix: str = 'classdist_', **kwargs):
        super().__init__(*terms, **kwargs)
        self.class_col = class_col
        self.pool = pool
        self.log = log
        self.prefix = prefix
        # level -> (center, covariance)
        self.objects: dict[str, tuple[np.ndarray, np.ndarray]] = {}

    def _fit(self, training, info):
        if self.class_col not in training.columns:
            raise RecipeError(f"Class column '{self.class_col}' not found in training data")
        self.columns = [c for c in self.columns if c != self.class_col]
        if not self.columns:
            self.objects = {}
            return
        X = training[self.columns]
        y = training[self.class_col]
        keep = X.notna().all(axis=1) & y.notna()
        if not keep.all():
            logger.warning(f"[-] {self.id}: {int((~keep).sum())} incomplete rows ignored while estimating centroids")
        X, y = X[keep], y[keep]

        pooled = np.atleast_2d(np.cov(X.to_numpy(dtype=float), rowvar=False)) if self.pool else None
        self.objects = {}
        for level in sorted(y.unique().tolist(), key=str):
            Xl = X[y == level].to_numpy(dtype=float)
            if len(Xl) < 2 and not self.pool:
                raise RecipeError(f"Class '{level}' has fewer than 2 rows; use pool=True")
            cov = pooled if self.pool else np.atleast_2d(np.cov(Xl, rowvar=False))
            self.objects[str(level)] = (Xl.mean(axis=0), cov)

    def new_columns(self):
        return [f"{self.prefix}{level}" for level in self.objects]

    def _transform(self, data):
        if not self.objects:
            return data
        X = data[self.columns].to_numpy(dtype=float)
        new_cols = {}
        for level, (center, cov) in self.objects.items():
            dist = mahalanobis_sq(X, center, cov)
            if self.log:
                with np.errstate(divide='ignore'):
                    dist = np.log(dist)
            new_cols[f"{self.prefix}{level}"] = dist
        return pd.concat([data, pd.DataFrame(new_cols, index=data.index)], axis=1)

    def _tidy(self):
        rows = [
            {'terms': term, 'value': float(center[j]), 'class': level}
            for level, (center, _) in self.objects.items()
            for j, term in enumerate(self.columns)
        ]
        return pd.DataFrame(rows, columns=['terms', 'value', 'class'])

    def label(self):
        return f'Distances to {self.class_col} centroids'
