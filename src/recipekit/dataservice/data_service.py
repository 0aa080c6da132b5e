import os

import pandas as pd
from sklearn.model_selection import train_test_split

from recipekit.configs import defaults
from recipekit.utils.logging import get_logger

logger = get_logger(__name__)


def load_csv(path: str, **kwargs) -> pd.DataFrame:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Dataset not found: {path}")
    df = pd.read_csv(path, low_memory=False, **kwargs)
    logger.info(f"[+] Loaded {df.shape[0]} rows x {df.shape[1]} columns from {path}")
    return df


class DataService:
    """Static utility class for data processing operations"""

    @staticmethod
    def info_dataset(df: pd.DataFrame, label_column: str = None):
        logger.info(f"[+] Dataset shape: {df.shape}")
        if label_column is not None and label_column in df.columns:
            logger.info(f"[+] Label distribution: {df[label_column].value_counts().to_dict()}")

    @staticmethod
    def export_data(df: pd.DataFrame, file_path: str):
        """Export dataframe to CSV file"""
        folder = os.path.dirname(file_path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        df.to_csv(file_path, index=False)

    @staticmethod
    def split_data(df: pd.DataFrame, test_size: float = defaults.TEST_SIZE, strata: str = None,
                   random_state: int = defaults.RANDOM_SEED):
        """Split dataframe into train and test sets, stratified on `strata` when given.

        Numeric strata are binned into quartiles first so the split keeps the
        outcome distribution rather than individual values.
        """
        stratify = None
        if strata is not None:
            column = df[strata]
            if pd.api.types.is_numeric_dtype(column) and column.nunique() > 10:
                stratify = pd.qcut(column, q=4, labels=False, duplicates='drop')
            else:
                stratify = column
        logger.debug(f"[+] Splitting data into train and test sets with test size {test_size} (strata={strata})")
        return train_test_split(df, test_size=test_size, random_state=random_state, stratify=stratify)
