import argparse

from recipekit.configs import defaults
from recipekit.utils.logging import get_logger

logger = get_logger(__name__)


class BaseParser:
    def __init__(self, description: str):
        self.parser = argparse.ArgumentParser(description=description)
        self.parser.add_argument("--log-level", "-L", type=str, choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                                 default="INFO", help="Set the logging level")

    def add_argument(self, *args, **kwargs):
        self.parser.add_argument(*args, **kwargs)

    def add_deck_arguments(self, default_out_dir: str):
        """Arguments shared by every deck script: input CSV, output folder and seed."""
        self.parser.add_argument("--data", type=str, default=None,
                                 help="CSV to load; synthetic data is generated when omitted")
        self.parser.add_argument("--out-dir", type=str, default=default_out_dir,
                                 help="Folder for figures and saved recipes")
        self.parser.add_argument("--seed", type=int, default=defaults.RANDOM_SEED, help="Random seed")

    def parse_args(self, args=None):
        return self.parser.parse_args(args)
