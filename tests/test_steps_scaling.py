import logging

import numpy as np
import pandas as pd
import pytest

from recipekit import Recipe, RecipeError, all_numeric_predictors


def _frame():
    return pd.DataFrame({
        'y': [0, 1, 0, 1],
        'a': [1.0, 2.0, 3.0, 4.0],
        'b': [10.0, 10.0, 10.0, 10.0],
        'c': [2.0, np.nan, 4.0, 6.0],
    })


def _prep(*steps):
    rec = Recipe(_frame(), formula='y ~ .')
    for name, args, kwargs in steps:
        rec = rec.step(name, *args, **kwargs)
    return rec.prep()


def test_center_ignores_missing_values():
    trained = _prep(('center', ['a', 'c'], {}))
    tidy = trained.tidy(number=1)
    assert dict(zip(tidy['terms'], tidy['value'])) == {'a': 2.5, 'c': 4.0}
    juiced = trained.juice()
    np.testing.assert_allclose(juiced['a'], [-1.5, -0.5, 0.5, 1.5])
    assert np.isnan(juiced['c'].iloc[1])


def test_scale_uses_sample_sd():
    trained = _prep(('scale', ['a'], {}))
    assert trained.juice()['a'].std() == pytest.approx(1.0)


def test_scale_factor_two():
    trained = _prep(('scale', ['a'], {'factor': 2}))
    assert trained.juice()['a'].std() == pytest.approx(0.5)


def test_scale_leaves_zero_variance_column(caplog):
    with caplog.at_level(logging.WARNING):
        trained = _prep(('scale', [all_numeric_predictors()], {}))
    np.testing.assert_allclose(trained.juice()['b'], 10.0)
    assert 'zero variance' in caplog.text
    assert 'b' not in trained.tidy(number=1)['terms'].tolist()


def test_normalize_applies_training_statistics_to_new_data():
    trained = _prep(('normalize', ['a'], {}))
    juiced = trained.juice()
    assert juiced['a'].mean() == pytest.approx(0.0)
    assert juiced['a'].std() == pytest.approx(1.0)

    new = _frame().assign(a=[2.5, 2.5, 2.5, 2.5])
    np.testing.assert_allclose(trained.bake(new)['a'], 0.0)

    tidy = trained.tidy(number=1)
    assert tidy['statistic'].tolist() == ['mean', 'sd']


def test_range_clips_new_data():
    trained = _prep(('range', ['a'], {}))
    np.testing.assert_allclose(trained.juice()['a'], [0, 1 / 3, 2 / 3, 1])
    new = _frame().assign(a=[0.0, 2.5, 4.0, 10.0])
    np.testing.assert_allclose(trained.bake(new)['a'], [0.0, 0.5, 1.0, 1.0])


def test_range_without_clipping():
    trained = _prep(('range', ['a'], {'min_': -1, 'max_': 1, 'clipping': False}))
    new = _frame().assign(a=[1.0, 2.5, 4.0, 7.0])
    np.testing.assert_allclose(trained.bake(new)['a'], [-1.0, 0.0, 1.0, 3.0])


def test_range_constant_column_maps_to_min():
    trained = _prep(('range', ['b'], {}))
    np.testing.assert_allclose(trained.juice()['b'], 0.0)


def test_range_rejects_bad_bounds():
    with pytest.raises(RecipeError):
        Recipe(_frame()).step_range('a', min_=1, max_=0)
