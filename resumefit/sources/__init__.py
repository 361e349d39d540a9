from .base import JobSource
from .jsearch import JSearchSource

__all__ = ["JobSource", "JSearchSource"]
