import os

REPORT_FOLDER = os.environ.get("RECIPEKIT_REPORT_FOLDER", "reports")

RANDOM_SEED = 42
TEST_SIZE = 0.25

# Plot settings shared by the deck figures
FIGSIZE = (6, 4)
DPI = 150

# Step defaults
OTHER_THRESHOLD = 0.05
OTHER_LEVEL = "other"
NZV_FREQ_CUT = 95 / 5
NZV_UNIQUE_CUT = 10
CORR_THRESHOLD = 0.9
POWER_LIMITS = (-5.0, 5.0)
POWER_NUM_UNIQUE = 5
# lambdas closer to zero than this use the log form
POWER_EPS = 0.001
NUM_COMP = 5
KPCA_GAMMA = 0.2
