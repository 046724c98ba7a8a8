"""Diff command: wrapper around the comparison API with report generation."""

from pathlib import Path
from typing import Literal, Tuple

from schemaguard._internal.canonical_json import canonical_dumps
from schemaguard._internal.reporting.console import render_report
from schemaguard.api import ComparisonResult, compare


class SchemaReadError(OSError):
    """One of the two schema files could not be read."""


def _read_schema(path: Path, role: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaReadError(f"Error reading {role} schema file: {path} ({e})") from e


def exit_code_for(result: ComparisonResult) -> int:
    """0 unless there is at least one breaking change; dangerous changes never fail."""
    return 1 if result.has_breaking_changes else 0


def run_diff(
    from_path: Path,
    to_path: Path,
    output_format: Literal["text", "json"] = "text",
    color: bool = True,
) -> Tuple[int, str]:
    """
    Compare two schema files and render the report.

    Returns:
        (exit_code, report content)

    Raises:
        SchemaReadError: a file cannot be read
        graphql.GraphQLError / TypeError: a file is not valid SDL
    """
    from_text = _read_schema(from_path, "from")
    to_text = _read_schema(to_path, "to")
    result = compare(from_text, to_text)

    if output_format == "json":
        content = canonical_dumps(result.to_dict(), pretty=True)
    else:
        content = render_report(result, str(from_path), str(to_path), color=color)
    return exit_code_for(result), content
