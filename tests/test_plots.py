import os

from recipekit import Recipe, all_numeric_predictors
from recipekit.eval import plot_density_comparison, plot_projection, plot_step_lambdas


def test_plot_projection(tmp_path, segmentation_df):
    out = plot_projection(segmentation_df, 'AvgIntenCh1', 'FiberWidthCh1', 'Class',
                          str(tmp_path / 'figs' / 'scatter.png'))
    assert os.path.getsize(out) > 0


def test_plot_density_and_lambdas(tmp_path, segmentation_df):
    trained = (
        Recipe(segmentation_df, formula='Class ~ .')
        .update_role('Case', new_role='split')
        .step_yeojohnson(all_numeric_predictors())
        .prep()
    )
    after = trained.juice()['AvgIntenCh1']
    density = plot_density_comparison(segmentation_df['AvgIntenCh1'], after, 'AvgIntenCh1',
                                      str(tmp_path / 'density.png'))
    bars = plot_step_lambdas(trained.tidy(number=1), str(tmp_path / 'lambdas.png'))
    assert os.path.exists(density)
    assert os.path.exists(bars)
