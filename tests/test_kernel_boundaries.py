"""Tripwire test: the comparison kernel stays free of I/O and CLI concerns.

Walks the imported kernel package and fails if any module imports the HTTP
client, the CLI layer, or reporting internals, or touches sys.path.
"""

import re
from pathlib import Path

import pytest


FORBIDDEN_PATTERNS = [
    (r"^\s*(from|import)\s+requests\b", "requests (network I/O)"),
    (r"^\s*(from|import)\s+argparse\b", "argparse (CLI layer)"),
    (r"^\s*from\s+schemaguard\s+import\s+cli\b", "schemaguard.cli"),
    (r"^\s*(from|import)\s+schemaguard\.(cli|action|config|_internal)\b", "non-kernel schemaguard module"),
    (r"sys\.path\.(insert|append)", "sys.path manipulation"),
]


def scan_file_for_forbidden_imports(file_path: Path) -> list[str]:
    violations = []
    for line_num, line in enumerate(file_path.read_text(encoding="utf-8").splitlines(), 1):
        if line.strip().startswith("#"):
            continue
        for pattern, description in FORBIDDEN_PATTERNS:
            if re.search(pattern, line):
                violations.append(f"{file_path}:{line_num}: {description} - {line.strip()}")
    return violations


def test_kernel_has_no_io_imports():
    import schemaguard.kernel
    kernel_dir = Path(schemaguard.kernel.__file__).parent

    violations = []
    for py_file in sorted(kernel_dir.rglob("*.py")):
        if "__pycache__" in str(py_file):
            continue
        violations.extend(scan_file_for_forbidden_imports(py_file))

    if violations:
        pytest.fail("Forbidden imports in kernel:\n" + "\n".join(violations))


def test_no_module_shadowing():
    """Importing schemaguard.diff must not shadow the public compare function."""
    from schemaguard.api import compare as compare_func
    import schemaguard.diff as diff_module
    import types

    from schemaguard import compare as compare_after
    assert compare_func is compare_after
    assert isinstance(diff_module, types.ModuleType)
    assert callable(diff_module.run_diff)
