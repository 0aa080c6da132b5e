import numpy as np
import pandas as pd
from sklearn.preprocessing import PowerTransformer

from recipekit.configs import defaults
from recipekit.preprocessing import roles
from recipekit.preprocessing.steps.base import Step, register_step
from recipekit.utils.logging import get_logger

logger = get_logger(__name__)


@register_step('log')
class StepLog(Step):
    """Logarithm with an optional offset; signed=True keeps the sign of the input."""

    accepts = (roles.NUMERIC,)

    def __init__(self, *terms, base: float = np.e, offset: float = 0.0, signed: bool = False, **kwargs):
        super().__init__(*terms, **kwargs)
        self.base = base
        self.offset = offset
        self.signed = signed

    def _fit(self, training, info):
        if self.signed and self.offset:
            logger.warning("[-] When signed=True, any offset is ignored")

    def _transform(self, data):
        log_base = np.log(self.base)
        for col in self.columns:
            x = data[col].astype(float)
            if self.signed:
                # |x| < 1 maps to 0
                values = np.where(x.abs() < 1, 0.0, np.sign(x) * np.log(x.abs().clip(lower=1)) / log_base)
                data[col] = pd.Series(values, index=data.index).where(x.notna())
            else:
                data[col] = np.log(x + self.offset) / log_base
        return data

    def _tidy(self):
        return pd.DataFrame({'terms': self.columns, 'base': [self.base] * len(self.columns)})

    def label(self):
        return 'Signed log transformation' if self.signed else 'Log transformation'


def _estimate_lambda(values: np.ndarray, method: str, limits: tuple[float, float]) -> float:
    pt = PowerTransformer(method=method, standardize=False)
    pt.fit(values.reshape(-1, 1))
    lam = float(pt.lambdas_[0])
    return float(np.clip(lam, limits[0], limits[1]))


def boxcox_transform(x, lam: float, eps: float = defaults.POWER_EPS):
    x = np.asarray(x, dtype=float)
    if abs(lam) < eps:
        return np.log(x)
    return (np.power(x, lam) - 1) / lam


def yeojohnson_transform(x, lam: float, eps: float = defaults.POWER_EPS):
    x = np.asarray(x, dtype=float)
    out = np.full_like(x, np.nan)
    pos = x >= 0
    neg = x < 0
    if abs(lam) < eps:
        out[pos] = np.log1p(x[pos])
    else:
        out[pos] = (np.power(x[pos] + 1, lam) - 1) / lam
    if abs(lam - 2) < eps:
        out[neg] = -np.log1p(-x[neg])
    else:
        out[neg] = -(np.power(1 - x[neg], 2 - lam) - 1) / (2 - lam)
    return out


class _PowerStep(Step):
    """Shared lambda estimation for Box-Cox and Yeo-Johnson."""

    accepts = (roles.NUMERIC,)
    method = ''

    def __init__(self, *terms, limits: tuple[float, float] = defaults.POWER_LIMITS,
                 num_unique: int = defaults.POWER_NUM_UNIQUE, **kwargs):
        super().__init__(*terms, **kwargs)
        self.limits = (float(min(limits)), float(max(limits)))
        self.num_unique = num_unique
        self.lambdas: dict[str, float] = {}

    def _usable(self, col: str, values: pd.Series) -> bool:
        if values.nunique() < self.num_unique:
            logger.warning(f"[-] {self.method}: '{col}' has fewer than {self.num_unique} unique values, skipped")
            return False
        return True

    def _fit(self, training, info):
        self.lambdas = {}
        for col in self.columns:
            values = training[col].dropna().astype(float)
            if not self._usable(col, values):
                continue
            self.lambdas[col] = _estimate_lambda(values.to_numpy(), self.method, self.limits)
            logger.debug(f"[+] {self.method} lambda for {col}: {self.lambdas[col]:.4f}")

    def _tidy(self):
        return pd.DataFrame({'terms': list(self.lambdas), 'value': list(self.lambdas.values())})


@register_step('boxcox')
class StepBoxCox(_PowerStep):
    """Box-Cox transformation for strictly positive columns."""

    method = 'box-cox'

    def _usable(self, col, values):
        if (values <= 0).any():
            logger.warning(f"[-] box-cox: '{col}' has non-positive values, skipped")
            return False
        return super()._usable(col, values)

    def _transform(self, data):
        for col, lam in self.lambdas.items():
            x = data[col].astype(float)
            data[col] = pd.Series(boxcox_transform(x.to_numpy(), lam), index=data.index)
        return data

    def label(self):
        return 'Box-Cox transformation'


@register_step('yeojohnson')
class StepYeoJohnson(_PowerStep):
    """Yeo-Johnson transformation; handles zero and negative values."""

    method = 'yeo-johnson'

    def _transform(self, data):
        for col, lam in self.lambdas.items():
            x = data[col].astype(float)
            data[col] = pd.Series(yeojohnson_transform(x.to_numpy(), lam), index=data.index)
        return data

    def label(self):
        return 'Yeo-Johnson transformation'
