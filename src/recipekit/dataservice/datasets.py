"""Synthetic stand-ins for the housing and cell-segmentation tables.

Both generators are deterministic for a given random_state and mimic the
shape of the real tables: skewed positive measurements, a handful of nominal
columns with rare levels, and one outcome column.
"""
import numpy as np
import pandas as pd

from recipekit.configs import defaults, housing, segmentation


def _choice(rng: np.random.Generator, weights: dict, size: int) -> np.ndarray:
    levels = list(weights)
    p = np.array([weights[lvl] for lvl in levels], dtype=float)
    return rng.choice(levels, size=size, p=p / p.sum())


def make_housing(n_rows: int = 800, random_state: int = defaults.RANDOM_SEED) -> pd.DataFrame:
    rng = np.random.default_rng(random_state)
    neighborhood = _choice(rng, housing.NEIGHBORHOODS, n_rows)
    bldg_type = _choice(rng, housing.BLDG_TYPES, n_rows)
    gr_liv_area = np.round(rng.lognormal(mean=7.25, sigma=0.3, size=n_rows)).astype(int)
    lot_area = np.round(rng.lognormal(mean=9.1, sigma=0.45, size=n_rows)).astype(int)
    year_built = np.clip(np.round(2010 - rng.gamma(shape=2.0, scale=18.0, size=n_rows)), 1872, 2010).astype(int)
    central_air = np.where(rng.random(n_rows) < 0.93, 'Y', 'N')

    # neighborhood premium on the log scale
    premium = {lvl: rng.normal(0, 0.15) for lvl in housing.NEIGHBORHOODS}
    bldg_effect = {'OneFam': 0.0, 'TwnhsE': -0.05, 'Duplex': -0.2, 'Twnhs': -0.15, 'TwoFmCon': -0.25}
    log_price = (
        12.0
        + 0.65 * np.log(gr_liv_area / 1500)
        + 0.05 * np.log(lot_area / 9000)
        + 0.004 * (year_built - 1970)
        + np.array([premium[n] for n in neighborhood])
        + np.array([bldg_effect[b] for b in bldg_type])
        + np.where(central_air == 'Y', 0.1, -0.1)
        + rng.normal(0, 0.12, size=n_rows)
    )
    return pd.DataFrame({
        'Gr_Liv_Area': gr_liv_area,
        'Lot_Area': lot_area,
        'Year_Built': year_built,
        'Neighborhood': neighborhood,
        'Bldg_Type': bldg_type,
        'Central_Air': central_air,
        housing.OUTCOME_COLUMN: np.round(np.exp(log_price)).astype(int),
    })


def make_segmentation(n_rows: int = 600, random_state: int = defaults.RANDOM_SEED) -> pd.DataFrame:
    rng = np.random.default_rng(random_state)
    is_ws = rng.random(n_rows) < 0.36
    shift = np.where(is_ws, 1.0, 0.0)

    def lognormal(mean, sigma, ws_shift):
        return rng.lognormal(mean=mean + ws_shift * shift, sigma=sigma)

    df = pd.DataFrame({
        segmentation.CASE_COLUMN: np.where(rng.random(n_rows) < 0.5, 'Train', 'Test'),
        segmentation.CLASS_COLUMN: np.where(is_ws, 'WS', 'PS'),
        'AvgIntenCh1': lognormal(4.5, 0.9, 0.6),
        'EntropyIntenCh1': lognormal(1.8, 0.12, 0.08),
        'FiberWidthCh1': lognormal(2.2, 0.4, 0.35),
        'ShapeP2ACh1': 1 + lognormal(-0.5, 0.8, -0.4),
        'TotalIntenCh2': lognormal(10.0, 1.1, 0.8),
        'VarIntenCh4': lognormal(4.0, 1.0, 0.5),
        'ConvexHullAreaRatioCh1': 1 + lognormal(-2.0, 0.7, -0.5),
        # the one measurement that goes negative: Box-Cox cannot handle it
        'SkewIntenCh1': rng.normal(loc=0.5 - 0.4 * shift, scale=0.7),
    })
    return df
