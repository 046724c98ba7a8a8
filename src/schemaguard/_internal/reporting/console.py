"""Human-readable console report for a ComparisonResult."""

from typing import Dict, List

from schemaguard.api import ComparisonResult
from schemaguard.kernel.diff import Change

ANSI: Dict[str, str] = {
    "red": "\x1b[31m",
    "orange": "\x1b[33m",
    "green": "\x1b[32m",
    "bold": "\x1b[1m",
    "reset": "\x1b[0m",
}


class _Palette:
    def __init__(self, color: bool):
        self.codes = ANSI if color else {name: "" for name in ANSI}

    def __getattr__(self, name: str) -> str:
        try:
            return self.codes[name]
        except KeyError:
            raise AttributeError(name) from None


def _render_section(title: str, changes: List[Change], color: str, palette: _Palette) -> List[str]:
    lines = [f"{color}{palette.bold}{title} ({len(changes)}):{palette.reset}"]
    for index, change in enumerate(changes, start=1):
        lines.append(f"{color}  {index}. {change.message}{palette.reset}")
        lines.append(f"     Resource: {change.resource_name}")
        lines.append(f"     Type: {change.type.value}")
        if change.loc is not None:
            lines.append(f"     Location: {change.loc}")
        if change.was_deprecated:
            lines.append("     Note: Resource was deprecated")
        if change.was_required_by_directive:
            lines.append("     Note: Argument was required by directive")
        lines.append("")
    return lines


def render_report(
    result: ComparisonResult,
    from_label: str,
    to_label: str,
    color: bool = True,
) -> str:
    """Render breaking then dangerous changes, each numbered from 1."""
    palette = _Palette(color)
    lines = [
        f"{palette.bold}GraphQL Schema Change Detection{palette.reset}",
        "",
        f"Comparing: {from_label} → {to_label}",
        "",
    ]

    if result.is_empty:
        lines.append(f"{palette.green}✓ No breaking or dangerous changes detected!{palette.reset}")
        return "\n".join(lines)

    if result.breaking_changes:
        lines.extend(_render_section("Breaking Changes", result.breaking_changes, palette.red, palette))
    if result.dangerous_changes:
        lines.extend(_render_section("Dangerous Changes", result.dangerous_changes, palette.orange, palette))
    return "\n".join(lines).rstrip("\n")
