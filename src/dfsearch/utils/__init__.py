from .convert_utils import ConvertUtils
from .timing import Stopwatch

__all__ = ["ConvertUtils", "Stopwatch"]
