import logging

import numpy as np
import pandas as pd
import pytest

from recipekit import Recipe, RecipeError, starts_with
from recipekit.preprocessing.steps.encoding import dummy_names


def test_dummy_drops_reference_level(toy):
    trained = Recipe(toy, formula='y ~ .').step_dummy('grp').prep()
    juiced = trained.juice()
    assert list(juiced.columns) == ['y', 'x1', 'x2', 'grp_b', 'grp_c']
    np.testing.assert_allclose(juiced['grp_b'], [0, 1, 0, 0, 1, 0])
    np.testing.assert_allclose(juiced['grp_c'], [0, 0, 1, 0, 0, 0])
    assert trained.tidy(number=1)['columns'].tolist() == ['grp_b', 'grp_c']


def test_dummy_one_hot(toy):
    juiced = Recipe(toy, formula='y ~ .').step_dummy('grp', one_hot=True).prep().juice()
    assert [c for c in juiced.columns if c.startswith('grp_')] == ['grp_a', 'grp_b', 'grp_c']
    np.testing.assert_allclose(juiced[['grp_a', 'grp_b', 'grp_c']].sum(axis=1), 1.0)


def test_dummy_unseen_and_missing_levels(toy, caplog):
    trained = Recipe(toy, formula='y ~ .').step_dummy('grp').prep()
    new = toy.head(3).assign(grp=['b', 'zzz', None])
    with caplog.at_level(logging.WARNING):
        baked = trained.bake(new)
    assert 'zzz' in caplog.text
    assert '1 missing values' in caplog.text
    assert baked['grp_b'].iloc[0] == 1.0
    assert baked[['grp_b', 'grp_c']].iloc[1:].isna().all().all()


def test_dummy_names_are_sanitised_and_unique():
    assert dummy_names('Neighborhood', ['North Ames', 'Old-Town']) == [
        'Neighborhood_North_Ames', 'Neighborhood_Old_Town',
    ]
    assert dummy_names('x', ['a b', 'a-b']) == ['x_a_b', 'x_a_b_1']


def _levels_frame():
    return pd.DataFrame({
        'y': range(10),
        'city': ['a'] * 5 + ['b'] * 3 + ['c'] + [None],
    })


def test_other_pools_rare_levels():
    trained = Recipe(_levels_frame(), formula='y ~ city').step_other('city', threshold=0.2).prep()
    assert trained.juice()['city'].tolist()[:9] == ['a'] * 5 + ['b'] * 3 + ['other']
    assert trained.juice()['city'].isna().iloc[9]
    assert trained.tidy(number=1)['retained'].tolist() == ['a', 'b']

    new = pd.DataFrame({'y': [0, 1, 2], 'city': ['b', 'never_seen', 'c']})
    assert trained.bake(new)['city'].tolist() == ['b', 'other', 'other']


def test_other_threshold_as_count():
    trained = Recipe(_levels_frame(), formula='y ~ city').step_other('city', threshold=4, other='rest').prep()
    assert set(trained.juice()['city'].dropna()) == {'a', 'rest'}


def test_other_keeps_everything_when_nothing_is_rare():
    trained = Recipe(_levels_frame(), formula='y ~ city').step_other('city', threshold=0.01).prep()
    new = pd.DataFrame({'y': [0], 'city': ['never_seen']})
    assert trained.bake(new)['city'].tolist() == ['never_seen']
    assert trained.tidy(number=1).empty


def test_other_always_keeps_most_frequent_level():
    trained = Recipe(_levels_frame(), formula='y ~ city').step_other('city', threshold=0.9).prep()
    assert set(trained.juice()['city'].dropna()) == {'a', 'other'}


def test_other_label_clash():
    df = _levels_frame().assign(city=['a'] * 5 + ['other'] + ['b'] * 3 + ['c'])
    with pytest.raises(RecipeError):
        Recipe(df, formula='y ~ city').step_other('city', threshold=0.2).prep()


def test_interact_products(toy):
    trained = (
        Recipe(toy, formula='y ~ .')
        .step_dummy('grp')
        .step_interact(('x1', starts_with('grp_')))
        .prep()
    )
    juiced = trained.juice()
    assert ['x1_x_grp_b', 'x1_x_grp_c'] == [c for c in juiced.columns if '_x_' in c]
    np.testing.assert_allclose(juiced['x1_x_grp_b'], toy['x1'] * juiced['grp_b'])
    assert trained.tidy(number=2)['terms'].tolist() == ['x1_x_grp_b', 'x1_x_grp_c']


def test_interact_untrained_tidy(toy):
    rec = Recipe(toy).step_interact(('x1', 'x2'))
    assert rec.tidy(number=1)['terms'].tolist() == ['x1:x2']


def test_interact_rejects_non_pairs(toy):
    with pytest.raises(RecipeError):
        Recipe(toy).step_interact('x1')


def test_dummy_name_collision_with_existing_column(toy):
    df = toy.assign(grp_b=toy['x1'] * 2)
    with pytest.raises(RecipeError, match='grp_b'):
        Recipe(df, formula='y ~ .').step_dummy('grp').prep()


def test_interact_name_collision(toy):
    df = toy.assign(x1_x_x2=0.0)
    with pytest.raises(RecipeError, match='x1_x_x2'):
        Recipe(df, formula='y ~ .').step_interact(('x1', 'x2')).prep()
