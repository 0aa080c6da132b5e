from .baseparser import BaseParser

__all__ = ['BaseParser']
