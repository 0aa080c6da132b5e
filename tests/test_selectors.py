import pandas as pd
import pytest

from recipekit.preprocessing import roles
from recipekit.preprocessing.errors import SelectorError
from recipekit.preprocessing.selectors import (
    all_nominal,
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
    resolve,
    starts_with,
)


def _info():
    df = pd.DataFrame({
        'y': [1.0, 2.0],
        'a': [1, 2],
        'b_num': [0.5, 0.1],
        'cat': ['x', 'y'],
        'id': ['1', '2'],
    })
    return roles.build_var_info(df, {'y': 'outcome', 'a': 'predictor', 'b_num': 'predictor',
                                     'cat': 'predictor', 'id': 'id'})


def test_strings_follow_data_order():
    assert resolve(['cat', 'a'], _info()) == ['a', 'cat']


def test_unknown_name_raises():
    with pytest.raises(SelectorError):
        resolve(['nope'], _info())


def test_unsupported_term_raises():
    with pytest.raises(SelectorError):
        resolve([3], _info())


def test_role_and_type_filters():
    info = _info()
    assert resolve([all_predictors()], info) == ['a', 'b_num', 'cat']
    assert resolve([all_outcomes()], info) == ['y']
    assert resolve([all_numeric()], info) == ['y', 'a', 'b_num']
    assert resolve([all_nominal()], info) == ['cat', 'id']
    assert resolve([all_numeric_predictors()], info) == ['a', 'b_num']
    assert resolve([has_role('id')], info) == ['id']
    assert resolve([has_type('nominal')], info) == ['cat', 'id']


def test_leading_negation_starts_from_everything():
    assert resolve([-all_outcomes()], _info()) == ['a', 'b_num', 'cat', 'id']


def test_negation_removes_from_earlier_terms():
    assert resolve([all_numeric(), -one_of('y')], _info()) == ['a', 'b_num']


def test_double_negation_is_positive():
    assert resolve([-(-all_outcomes())], _info()) == ['y']


def test_patterns():
    info = _info()
    assert resolve([starts_with('b')], info) == ['b_num']
    assert resolve([ends_with('num')], info) == ['b_num']
    assert resolve([contains('_')], info) == ['b_num']
    assert resolve([matches(r'^[ab]')], info) == ['a', 'b_num']


def test_everything_and_empty_selection():
    info = _info()
    assert resolve([everything()], info) == ['y', 'a', 'b_num', 'cat', 'id']
    assert resolve([], info) == []
    assert resolve([starts_with('zzz')], info) == []


def test_one_of_unknown_raises():
    with pytest.raises(SelectorError):
        resolve([one_of('a', 'ghost')], _info())


def test_describe():
    assert (-all_outcomes()).describe() == '-all_outcomes()'
    assert starts_with('PC').describe() == "starts_with('PC')"
