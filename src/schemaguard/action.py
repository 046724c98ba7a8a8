"""CI action runner: compare the working-tree schema against a base ref."""

import logging
import sys
from typing import Optional, TextIO

from schemaguard._internal.canonical_json import canonical_dumps
from schemaguard._internal.io.github import GitHubContentSource
from schemaguard._internal.reporting.annotations import (
    annotations_for,
    format_command,
    pluralize,
    write_outputs,
)
from schemaguard.api import ComparisonResult, compare
from schemaguard.config import ActionSettings

logger = logging.getLogger(__name__)


def _outputs_for(result: ComparisonResult) -> dict:
    data = result.to_dict()
    return {
        "breaking_changes": canonical_dumps(data["breakingChanges"]),
        "dangerous_changes": canonical_dumps(data["dangerousChanges"]),
    }


def run_action(
    settings: ActionSettings,
    source: Optional[GitHubContentSource] = None,
    stream: Optional[TextIO] = None,
) -> int:
    """
    Run one comparison and report it as workflow commands on ``stream``.

    Any failure (unreadable file, fetch error, invalid SDL) is reported as a
    single ``::error::`` line. Returns the process exit code: 1 on failure
    or breaking changes, otherwise 0.
    """
    out = stream if stream is not None else sys.stdout
    if source is None:
        source = GitHubContentSource(
            settings.repository, token=settings.token, api_url=settings.api_url
        )

    try:
        print(f"Comparing schema changes from {settings.base_ref} to HEAD", file=out)
        print(f"Schema file: {settings.schema_path}", file=out)
        current_schema = settings.local_schema_path.read_text(encoding="utf-8")
        base_schema = source.fetch(settings.schema_path, settings.base_ref)
        result = compare(base_schema, current_schema)
    except Exception as e:
        logger.debug("Action failed", exc_info=True)
        print(format_command("error", str(e)), file=out)
        return 1

    if settings.output_file is not None:
        write_outputs(settings.output_file, _outputs_for(result))

    print(f"Found {pluralize(len(result.breaking_changes), 'breaking change')}", file=out)
    print(f"Found {pluralize(len(result.dangerous_changes), 'dangerous change')}", file=out)
    for annotation in annotations_for(result, settings.schema_path):
        print(annotation, file=out)

    if result.has_breaking_changes:
        count = pluralize(len(result.breaking_changes), "breaking change")
        print(format_command("error", f"Found {count} in GraphQL schema"), file=out)
        return 1
    return 0
