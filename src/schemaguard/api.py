"""Public API for schemaguard.

High-level functions that return complete, structured results.
Reporters and the CLI should use these instead of the kernel directly.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field

from schemaguard.kernel.diff import Change, detect_breaking_changes
from schemaguard.kernel.loader import parse_schema

logger = logging.getLogger(__name__)


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


class ComparisonResult(BaseModel):
    """Stable result model for a schema comparison."""
    breaking_changes: List[Change] = Field(default_factory=list)
    dangerous_changes: List[Change] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def has_breaking_changes(self) -> bool:
        return bool(self.breaking_changes)

    @property
    def is_empty(self) -> bool:
        return not self.breaking_changes and not self.dangerous_changes

    def change_summary(self) -> Dict[str, int]:
        """Counts by change type, breaking then dangerous."""
        summary: Dict[str, int] = {}
        for change in [*self.breaking_changes, *self.dangerous_changes]:
            summary[change.type.value] = summary.get(change.type.value, 0) + 1
        return summary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "breakingChanges": [change.to_dict() for change in self.breaking_changes],
            "dangerousChanges": [change.to_dict() for change in self.dangerous_changes],
        }


def compare(from_schema: str, to_schema: str) -> ComparisonResult:
    """Compare two SDL documents.

    Args:
        from_schema: SDL of the old (base) schema
        to_schema: SDL of the new schema

    Returns:
        ComparisonResult with breaking and dangerous changes in pass order.

    Raises:
        graphql.GraphQLError: either document is not valid SDL syntax. The
            parser's error is not wrapped, and no partial result is produced.
    """
    old_model = parse_schema(from_schema)
    new_model = parse_schema(to_schema)
    change_set = detect_breaking_changes(old_model, new_model)
    logger.debug(
        "Comparison found %d breaking and %d dangerous changes",
        len(change_set.breaking_changes),
        len(change_set.dangerous_changes),
    )
    return ComparisonResult(
        breaking_changes=change_set.breaking_changes,
        dangerous_changes=change_set.dangerous_changes,
    )


def compare_files(
    from_path: Union[str, os.PathLike, Path],
    to_path: Union[str, os.PathLike, Path],
) -> ComparisonResult:
    """Compare two SDL files read as UTF-8.

    Raises:
        FileNotFoundError / OSError: a file cannot be read
    """
    from_text = _normalize_path(from_path).read_text(encoding="utf-8")
    to_text = _normalize_path(to_path).read_text(encoding="utf-8")
    return compare(from_text, to_text)
