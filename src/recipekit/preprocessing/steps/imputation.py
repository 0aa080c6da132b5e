import pandas as pd

from recipekit.preprocessing import roles
from recipekit.preprocessing.errors import RecipeError
from recipekit.preprocessing.steps.base import Step, register_step


def _trimmed_mean(values: pd.Series, trim: float) -> float:
    values = values.dropna().sort_values()
    k = int(len(values) * trim)
    if k:
        values = values.iloc[k:len(values) - k]
    return float(values.mean())


class _ImputeStep(Step):
    def __init__(self, *terms, **kwargs):
        super().__init__(*terms, **kwargs)
        self.fill_values: dict = {}

    def _transform(self, data):
        for col, value in self.fill_values.items():
            data[col] = data[col].fillna(value)
        return data

    def _tidy(self):
        return pd.DataFrame({'terms': list(self.fill_values), 'value': list(self.fill_values.values())})


@register_step('impute_mean')
class StepImputeMean(_ImputeStep):
    accepts = (roles.NUMERIC,)

    def __init__(self, *terms, trim: float = 0.0, **kwargs):
        super().__init__(*terms, **kwargs)
        if not 0 <= trim < 0.5:
            raise RecipeError(f"trim must be in [0, 0.5), got {trim}")
        self.trim = trim

    def _fit(self, training, info):
        self.fill_values = {
            c: _trimmed_mean(training[c], self.trim) for c in self.columns
        }

    def label(self):
        return 'Mean imputation'


@register_step('impute_median')
class StepImputeMedian(_ImputeStep):
    accepts = (roles.NUMERIC,)

    def _fit(self, training, info):
        self.fill_values = {c: float(training[c].median()) for c in self.columns}

    def label(self):
        return 'Median imputation'


@register_step('impute_mode')
class StepImputeMode(_ImputeStep):
    accepts = (roles.NOMINAL, roles.LOGICAL)

    def _fit(self, training, info):
        self.fill_values = {}
        for col in self.columns:
            counts = training[col].dropna().value_counts()
            if counts.empty:
                raise RecipeError(f"Cannot impute mode for '{col}': no observed values")
            top = counts[counts == counts.max()].index
            self.fill_values[col] = sorted(top, key=str)[0]

    def label(self):
        return 'Mode imputation'
