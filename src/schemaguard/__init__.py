"""schemaguard: breaking and dangerous change detection for GraphQL schemas."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("schemaguard")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from schemaguard.api import compare, compare_files, ComparisonResult
from schemaguard.codes import BreakingChangeType, DangerousChangeType
from schemaguard.kernel.diff import Change

__all__ = [
    "__version__",
    "compare",
    "compare_files",
    "ComparisonResult",
    "Change",
    "BreakingChangeType",
    "DangerousChangeType",
]
