"""CI annotations (GitHub workflow commands) and step outputs."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from schemaguard.api import ComparisonResult
from schemaguard.kernel.diff import Change

BREAKING_PREFIX = "[Breaking change]"
DANGEROUS_PREFIX = "[Dangerous change]"


def pluralize(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def split_loc(loc: Optional[str]) -> Optional[Tuple[int, int]]:
    """``"12:5"`` -> ``(12, 5)``; None or malformed -> None."""
    if not loc:
        return None
    line, sep, column = loc.partition(":")
    if not sep:
        return None
    try:
        return int(line), int(column)
    except ValueError:
        return None


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_command(command: str, message: str, properties: Optional[Dict[str, object]] = None) -> str:
    """Render ``::command key=value,...::message``."""
    rendered = ""
    if properties:
        rendered = " " + ",".join(
            f"{key}={_escape_property(str(value))}" for key, value in properties.items()
        )
    return f"::{command}{rendered}::{_escape_data(message)}"


def annotation_for(change: Change, file: str) -> str:
    """One ``::error`` (breaking) or ``::warning`` (dangerous) annotation.

    Position properties are attached only when the change has a location.
    """
    if change.is_breaking:
        command, prefix = "error", BREAKING_PREFIX
    else:
        command, prefix = "warning", DANGEROUS_PREFIX
    properties: Dict[str, object] = {"file": file}
    position = split_loc(change.loc)
    if position is not None:
        properties["line"], properties["col"] = position
    return format_command(command, f"{prefix} {change.message}", properties)


def annotations_for(result: ComparisonResult, file: str) -> List[str]:
    return [
        annotation_for(change, file)
        for change in [*result.breaking_changes, *result.dangerous_changes]
    ]


def write_outputs(path: Path, outputs: Dict[str, str]) -> None:
    """Append step outputs using the multiline ``name<<delimiter`` form."""
    with open(path, "a", encoding="utf-8") as f:
        for name, value in outputs.items():
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
