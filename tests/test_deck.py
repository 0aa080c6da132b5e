import importlib.util
import os
import sys

import pytest

from recipekit import Recipe
from recipekit.dataservice import make_segmentation

DECK_DIR = os.path.join(os.path.dirname(__file__), os.pardir, "cli", "deck")


def _load(name):
    spec = importlib.util.spec_from_file_location(f"deck_{name}", os.path.join(DECK_DIR, f"{name}.py"))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _run(monkeypatch, name, *args):
    monkeypatch.setattr(sys, "argv", [f"{name}.py", "--log-level", "WARNING", *args])
    _load(name).main()


def _segmentation_csv(tmp_path, **changes):
    df = make_segmentation(n_rows=240, random_state=3)
    if changes.get("drop_case"):
        df = df.drop(columns=["Case"])
    if "classes" in changes:
        df["Class"] = df["Class"].map(changes["classes"])
    path = tmp_path / "segmentation.csv"
    df.to_csv(path, index=False)
    return str(path)


def test_formula_vs_recipe_saves_prepared_recipe(monkeypatch, tmp_path):
    _run(monkeypatch, "formula_vs_recipe", "--out-dir", str(tmp_path))
    saved = tmp_path / "housing_recipe.joblib"
    assert saved.exists()
    assert Recipe.load(str(saved)).trained


def test_transforms_writes_figures(monkeypatch, tmp_path):
    _run(monkeypatch, "transforms", "--out-dir", str(tmp_path))
    for name in ("boxcox", "yeojohnson"):
        assert (tmp_path / f"{name}_AvgIntenCh1.png").exists()
        assert (tmp_path / f"{name}_lambdas.png").exists()


def test_transforms_accepts_data_without_case_column(monkeypatch, tmp_path):
    data = _segmentation_csv(tmp_path, drop_case=True)
    _run(monkeypatch, "transforms", "--data", data, "--out-dir", str(tmp_path / "out"))
    assert (tmp_path / "out" / "yeojohnson_lambdas.png").exists()


def test_projections_writes_figures(monkeypatch, tmp_path):
    _run(monkeypatch, "projections", "--out-dir", str(tmp_path))
    assert (tmp_path / "pca_test.png").exists()
    assert (tmp_path / "kpca_test.png").exists()


def test_projections_needs_case_column(monkeypatch, tmp_path):
    data = _segmentation_csv(tmp_path, drop_case=True)
    with pytest.raises(SystemExit):
        _run(monkeypatch, "projections", "--data", data, "--out-dir", str(tmp_path))


def test_class_distances_writes_figure(monkeypatch, tmp_path):
    _run(monkeypatch, "class_distances", "--out-dir", str(tmp_path))
    assert (tmp_path / "classdist_test.png").exists()


def test_class_distances_uses_labels_from_data(monkeypatch, tmp_path):
    data = _segmentation_csv(tmp_path, classes={"PS": "poor", "WS": "well"})
    _run(monkeypatch, "class_distances", "--data", data, "--out-dir", str(tmp_path / "out"))
    assert (tmp_path / "out" / "classdist_test.png").exists()
