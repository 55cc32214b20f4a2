"""Schema package for external and internal contracts."""

from .requests import CheckInput, CheckOptions
from .responses import CheckResult, ChunkView, ConvertResult

__all__ = ["CheckInput", "CheckOptions", "CheckResult", "ChunkView", "ConvertResult"]
