import pandas as pd
import pytest

from recipekit.dataservice import make_housing, make_segmentation


@pytest.fixture()
def toy():
    return pd.DataFrame({
        'y': [1.0, 2.0, 3.0, 4.0, 5.0, 6.0],
        'x1': [1.0, 2.0, 3.0, 4.0, 5.0, 6.0],
        'x2': [10.0, 20.0, 10.0, 20.0, 10.0, 20.0],
        'grp': ['a', 'b', 'c', 'a', 'b', 'a'],
    })


@pytest.fixture(scope="session")
def housing_df():
    return make_housing(n_rows=300, random_state=7)


@pytest.fixture(scope="session")
def segmentation_df():
    return make_segmentation(n_rows=300, random_state=7)
