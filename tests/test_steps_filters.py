import numpy as np
import pandas as pd
import pytest

from recipekit import CheckError, Recipe, RecipeError, all_nominal, all_numeric, all_predictors
from recipekit.preprocessing.steps import StepCheckMissing
from recipekit.preprocessing.steps.filters import find_correlated, near_zero_var


def test_rm(toy):
    juiced = Recipe(toy).step_rm('x2', 'grp').prep().juice()
    assert list(juiced.columns) == ['y', 'x1']


def test_zv_removes_constant_columns():
    df = pd.DataFrame({'a': [1, 2, 3], 'b': [5, 5, 5], 'c': ['k', 'k', None]})
    trained = Recipe(df).step_zv(all_numeric(), all_nominal()).prep()
    assert list(trained.juice().columns) == ['a']
    assert trained.tidy(number=1)['terms'].tolist() == ['b', 'c']
    # removed columns are dropped from new data as well
    assert list(trained.bake(df).columns) == ['a']


def test_near_zero_var():
    df = pd.DataFrame({
        'rare': [0] * 99 + [1],
        'varied': range(100),
        'const': [3] * 100,
        'balanced': [0, 1] * 50,
    })
    assert near_zero_var(df, freq_cut=95 / 5, unique_cut=10) == ['rare', 'const']


def test_nzv_step():
    df = pd.DataFrame({'rare': [0] * 99 + [1], 'varied': range(100)})
    assert list(Recipe(df).step_nzv(all_numeric()).prep().juice().columns) == ['varied']


def test_find_correlated_drops_member_with_larger_mean():
    corr = pd.DataFrame(
        [[1.0, 0.95, 0.5], [0.95, 1.0, 0.1], [0.5, 0.1, 1.0]],
        index=list('abc'), columns=list('abc'),
    )
    assert find_correlated(corr, 0.9) == ['a']
    assert find_correlated(corr, 0.99) == []


def test_corr_step():
    rng = np.random.default_rng(0)
    x = rng.normal(size=200)
    df = pd.DataFrame({
        'y': rng.normal(size=200),
        'x': x,
        'x_copy': 2 * x + rng.normal(scale=0.01, size=200),
        'z': rng.normal(size=200),
    })
    trained = Recipe(df, formula='y ~ .').step_corr(all_predictors(), threshold=0.9).prep()
    removed = trained.tidy(number=1)['terms'].tolist()
    assert len(removed) == 1
    assert removed[0] in ('x', 'x_copy')
    assert 'z' in trained.juice().columns


def test_corr_threshold_validation():
    with pytest.raises(RecipeError):
        Recipe(pd.DataFrame({'a': [1.0]})).step_corr('a', threshold=1.5)


def test_impute_mean_median_mode():
    df = pd.DataFrame({
        'a': [1.0, 2.0, np.nan, 9.0],
        'b': [1.0, np.nan, 3.0, 100.0],
        'c': ['x', 'y', 'y', None],
    })
    trained = (
        Recipe(df)
        .step_impute_mean('a')
        .step_impute_median('b')
        .step_impute_mode('c')
        .prep()
    )
    juiced = trained.juice()
    assert juiced['a'].iloc[2] == pytest.approx(4.0)
    assert juiced['b'].iloc[1] == pytest.approx(3.0)
    assert juiced['c'].iloc[3] == 'y'
    assert trained.tidy(number=3)['value'].tolist() == ['y']


def test_impute_trimmed_mean():
    df = pd.DataFrame({'a': [1.0, 2.0, 3.0, 4.0, 1000.0, np.nan]})
    trained = Recipe(df).step_impute_mean('a', trim=0.2).prep()
    assert trained.juice()['a'].iloc[5] == pytest.approx(3.0)


def test_impute_mode_tie_uses_sorted_level():
    df = pd.DataFrame({'c': ['b', 'a', 'b', 'a', None]})
    assert Recipe(df).step_impute_mode('c').prep().juice()['c'].iloc[4] == 'a'


def test_check_missing(toy):
    with pytest.raises(CheckError):
        Recipe(toy.assign(x1=[np.nan] + toy['x1'].tolist()[1:])).step_check_missing('x1').prep()

    trained = Recipe(toy).step_check_missing('x1').prep()
    with pytest.raises(CheckError):
        trained.bake(toy.assign(x1=[1.0, np.nan, 3.0, 4.0, 5.0, 6.0]))
    assert isinstance(trained.steps[0], StepCheckMissing)
