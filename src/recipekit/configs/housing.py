import os

from recipekit.configs import defaults

REPORT_FOLDER = os.path.join(defaults.REPORT_FOLDER, "housing")

OUTCOME_COLUMN = "Sale_Price"

NUMERIC_FEATURES = ["Gr_Liv_Area", "Lot_Area", "Year_Built"]
NOMINAL_FEATURES = ["Neighborhood", "Bldg_Type", "Central_Air"]

NEIGHBORHOODS = {
    # level: sampling weight, the tail levels are rare enough to be pooled by step_other
    "North_Ames": 0.22,
    "College_Creek": 0.14,
    "Old_Town": 0.12,
    "Edwards": 0.10,
    "Somerset": 0.10,
    "Northridge_Heights": 0.09,
    "Gilbert": 0.08,
    "Sawyer": 0.07,
    "Blueste": 0.03,
    "Green_Hills": 0.03,
    "Landmark": 0.02,
}

BLDG_TYPES = {
    "OneFam": 0.80,
    "TwnhsE": 0.08,
    "Duplex": 0.05,
    "Twnhs": 0.04,
    "TwoFmCon": 0.03,
}
