"""foldeb - find error-handling branches in source code so editors can fold them."""

from foldeb.__version__ import __version__
from foldeb.engine import ErrorClassifier, FoldingRange, find_error_branches


__all__ = ['ErrorClassifier', 'FoldingRange', '__version__', 'find_error_branches']
