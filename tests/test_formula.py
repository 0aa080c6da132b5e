import pytest

from recipekit.preprocessing.errors import FormulaError
from recipekit.preprocessing.formula import parse_formula

COLUMNS = ['y', 'a', 'b', 'id', 'z']


def test_plain_terms():
    assert parse_formula('y ~ a + b', COLUMNS) == (['y'], ['a', 'b'])


def test_predictors_follow_column_order():
    assert parse_formula('y ~ z + a', COLUMNS) == (['y'], ['a', 'z'])


def test_dot_expands_to_non_outcomes():
    assert parse_formula('y ~ .', COLUMNS) == (['y'], ['a', 'b', 'id', 'z'])


def test_dot_minus_column():
    assert parse_formula('y ~ . - id', COLUMNS) == (['y'], ['a', 'b', 'z'])


def test_multiple_outcomes_and_no_outcome():
    assert parse_formula('y + z ~ a', COLUMNS) == (['y', 'z'], ['a'])
    assert parse_formula('~ a + b', COLUMNS) == ([], ['a', 'b'])


@pytest.mark.parametrize('formula', [
    'y ~ log(a)',
    'y ~ a:b',
    'y ~ a * b',
    'y ~ missing',
    'y a',
    'y ~ a ~ b',
    'y ~ ',
    'y ~ a +',
    '- y ~ a',
])
def test_invalid_formulas(formula):
    with pytest.raises(FormulaError):
        parse_formula(formula, COLUMNS)
