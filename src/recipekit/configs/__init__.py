from . import defaults, housing, segmentation

__all__ = ['defaults', 'housing', 'segmentation']
