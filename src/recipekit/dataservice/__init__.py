from .data_service import DataService, load_csv
from .datasets import make_housing, make_segmentation

__all__ = ['DataService', 'load_csv', 'make_housing', 'make_segmentation']
