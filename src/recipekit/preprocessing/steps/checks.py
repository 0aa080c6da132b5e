import pandas as pd

from recipekit.preprocessing.errors import CheckError
from recipekit.preprocessing.steps.base import Step, register_step


@register_step('check_missing')
class StepCheckMissing(Step):
    """Fail when the selected columns contain missing values, at prep and bake time."""

    operation = 'check'

    def _fit(self, training, info):
        self._verify(training)

    def _transform(self, data):
        self._verify(data)
        return data

    def _verify(self, data: pd.DataFrame) -> None:
        counts = data[self.columns].isna().sum()
        bad = counts[counts > 0]
        if not bad.empty:
            raise CheckError(f"Missing values found: {bad.to_dict()}")

    def label(self):
        return 'Check missing values'
