import os

from recipekit.configs import defaults

REPORT_FOLDER = os.path.join(defaults.REPORT_FOLDER, "segmentation")

CLASS_COLUMN = "Class"
CASE_COLUMN = "Case"
CLASSES = ["PS", "WS"]

PREDICTORS = [
    "AvgIntenCh1", "EntropyIntenCh1", "FiberWidthCh1", "ShapeP2ACh1",
    "TotalIntenCh2", "VarIntenCh4", "ConvexHullAreaRatioCh1", "SkewIntenCh1",
]

# Strictly positive, right-skewed measurements (Box-Cox candidates)
POSITIVE_PREDICTORS = [
    "AvgIntenCh1", "EntropyIntenCh1", "FiberWidthCh1", "ShapeP2ACh1",
    "TotalIntenCh2", "VarIntenCh4", "ConvexHullAreaRatioCh1",
]
