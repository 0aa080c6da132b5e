import numpy as np
import pandas as pd

from recipekit.preprocessing import roles
from recipekit.preprocessing.errors import RecipeError
from recipekit.preprocessing.steps.base import Step, register_step
from recipekit.utils.logging import get_logger

logger = get_logger(__name__)


@register_step('center')
class StepCenter(Step):
    """Subtract the training mean of each selected column."""

    accepts = (roles.NUMERIC,)

    def __init__(self, *terms, **kwargs):
        super().__init__(*terms, **kwargs)
        self.means: dict[str, float] = {}

    def _fit(self, training, info):
        self.means = {c: float(training[c].mean()) for c in self.columns}

    def _transform(self, data):
        for col, mean in self.means.items():
            data[col] = data[col] - mean
        return data

    def _tidy(self):
        return pd.DataFrame({'terms': list(self.means), 'value': list(self.means.values())})

    def label(self):
        return 'Centering'


@register_step('scale')
class StepScale(Step):
    """Divide by the training standard deviation (or twice it when factor=2)."""

    accepts = (roles.NUMERIC,)

    def __init__(self, *terms, factor: float = 1, **kwargs):
        super().__init__(*terms, **kwargs)
        if factor not in (1, 2):
            logger.warning(f"[-] Scaling factor should be 1 or 2, got {factor}; using 1")
            factor = 1
        self.factor = factor
        self.sds: dict[str, float] = {}

    def _fit(self, training, info):
        sds = {c: float(training[c].std()) * self.factor for c in self.columns}
        zero = [c for c, sd in sds.items() if not np.isfinite(sd) or sd == 0]
        if zero:
            logger.warning(f"[-] Column(s) have zero variance so scaling cannot be used: {zero}")
        self.sds = {c: sd for c, sd in sds.items() if c not in zero}

    def _transform(self, data):
        for col, sd in self.sds.items():
            data[col] = data[col] / sd
        return data

    def _tidy(self):
        return pd.DataFrame({'terms': list(self.sds), 'value': list(self.sds.values())})

    def label(self):
        return 'Scaling'


@register_step('normalize')
class StepNormalize(Step):
    """Center and scale in one pass."""

    accepts = (roles.NUMERIC,)

    def __init__(self, *terms, **kwargs):
        super().__init__(*terms, **kwargs)
        self.means: dict[str, float] = {}
        self.sds: dict[str, float] = {}

    def _fit(self, training, info):
        self.means = {c: float(training[c].mean()) for c in self.columns}
        sds = {c: float(training[c].std()) for c in self.columns}
        zero = [c for c, sd in sds.items() if not np.isfinite(sd) or sd == 0]
        if zero:
            logger.warning(f"[-] Column(s) have zero variance and are only centered: {zero}")
        self.sds = {c: (1.0 if c in zero else sd) for c, sd in sds.items()}

    def _transform(self, data):
        for col in self.means:
            data[col] = (data[col] - self.means[col]) / self.sds[col]
        return data

    def _tidy(self):
        terms = list(self.means)
        return pd.DataFrame({
            'terms': terms + terms,
            'statistic': ['mean'] * len(terms) + ['sd'] * len(terms),
            'value': [self.means[t] for t in terms] + [self.sds[t] for t in terms],
        })

    def label(self):
        return 'Centering and scaling'


@register_step('range')
class StepRange(Step):
    """Rescale to [min_, max_] using the training range."""

    accepts = (roles.NUMERIC,)

    def __init__(self, *terms, min_: float = 0.0, max_: float = 1.0, clipping: bool = True, **kwargs):
        super().__init__(*terms, **kwargs)
        if min_ >= max_:
            raise RecipeError(f"step_range needs min_ < max_, got {min_} and {max_}")
        self.min_ = min_
        self.max_ = max_
        self.clipping = clipping
        self.ranges: dict[str, tuple[float, float]] = {}

    def _fit(self, training, info):
        self.ranges = {c: (float(training[c].min()), float(training[c].max())) for c in self.columns}

    def _transform(self, data):
        for col, (lo, hi) in self.ranges.items():
            span = hi - lo
            if span == 0:
                data[col] = data[col].where(data[col].isna(), self.min_)
                continue
            scaled = (data[col] - lo) / span * (self.max_ - self.min_) + self.min_
            if self.clipping:
                scaled = scaled.clip(lower=self.min_, upper=self.max_)
            data[col] = scaled
        return data

    def _tidy(self):
        return pd.DataFrame({
            'terms': list(self.ranges),
            'min': [lo for lo, _ in self.ranges.values()],
            'max': [hi for _, hi in self.ranges.values()],
        })

    def label(self):
        return 'Range scaling to [{}, {}]'.format(self.min_, self.max_)
