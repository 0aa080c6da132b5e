from .errors import (
    CheckError,
    FormulaError,
    MissingColumnsError,
    NotPreparedError,
    RecipeError,
    SelectorError,
)
from .formula import parse_formula
from .recipe import Recipe
from .selectors import (
    all_nominal,
    all_nominal_predictors,
    all_numeric,
    all_numeric_predictors,
    all_outcomes,
    all_predictors,
    contains,
    ends_with,
    everything,
    has_role,
    has_type,
    matches,
    one_of,
    starts_with,
)
from .steps import Step, register_step

__all__ = [
    'Recipe',
    'Step',
    'register_step',
    'parse_formula',
    'RecipeError',
    'SelectorError',
    'FormulaError',
    'MissingColumnsError',
    'CheckError',
    'NotPreparedError',
    'everything',
    'all_predictors',
    'all_outcomes',
    'all_numeric',
    'all_nominal',
    'all_numeric_predictors',
    'all_nominal_predictors',
    'has_role',
    'has_type',
    'starts_with',
    'ends_with',
    'contains',
    'matches',
    'one_of',
]
