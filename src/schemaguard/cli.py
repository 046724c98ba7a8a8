"""schemaguard CLI: compare GraphQL schema versions."""

import argparse
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path

from graphql import GraphQLError


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main():
    """Main CLI entry point for schemaguard commands."""
    try:
        schemaguard_version = get_version("schemaguard")
    except PackageNotFoundError:
        schemaguard_version = "dev"

    parser = argparse.ArgumentParser(
        prog="schemaguard",
        description="schemaguard: detect breaking and dangerous GraphQL schema changes"
    )
    parser.add_argument("--version", action="version", version=f"schemaguard {schemaguard_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging on stderr."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # diff command
    diff_parser = subparsers.add_parser(
        "diff",
        help="Compare two schema files",
        parents=[parent_parser]
    )
    diff_parser.add_argument(
        "from_schema",
        type=Path,
        help="Path to the original GraphQL schema file"
    )
    diff_parser.add_argument(
        "to_schema",
        type=Path,
        help="Path to the new GraphQL schema file"
    )
    diff_parser.add_argument(
        "--format",
        dest="output_format",
        choices=["text", "json"],
        default="text",
        help="Report format: text (grouped console report) or json (change lists)"
    )
    diff_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in the text report"
    )

    # action command
    action_parser = subparsers.add_parser(
        "action",
        help="Compare the working-tree schema against a base ref (CI annotations)",
        parents=[parent_parser]
    )
    action_parser.add_argument(
        "--base-ref",
        default=None,
        help="Base reference to compare against, e.g. main (default: $INPUT_BASE_REF)"
    )
    action_parser.add_argument(
        "--schema",
        dest="schema_path",
        default=None,
        help="Path to the GraphQL schema file in the repository (default: $INPUT_SCHEMA)"
    )
    action_parser.add_argument(
        "--token",
        default=None,
        help="API token (default: $INPUT_TOKEN or $GITHUB_TOKEN)"
    )
    action_parser.add_argument(
        "--repository",
        default=None,
        help="owner/repo (default: $GITHUB_REPOSITORY)"
    )

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    _configure_logging(getattr(args, "verbose", False))

    if args.command == "diff":
        try:
            from .diff import SchemaReadError, run_diff

            exit_code, content = run_diff(
                args.from_schema,
                args.to_schema,
                output_format=args.output_format,
                color=not args.no_color and sys.stdout.isatty(),
            )
            if not args.quiet:
                print(content)
            sys.exit(exit_code)
        except SchemaReadError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except (GraphQLError, TypeError) as e:
            print("Error analyzing schemas:", file=sys.stderr)
            print(str(e), file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)
    elif args.command == "action":
        try:
            from .action import run_action
            from .config import ActionSettings, ConfigurationError

            settings = ActionSettings.from_env(
                base_ref=args.base_ref,
                schema_path=args.schema_path,
                token=args.token,
                repository=args.repository,
            )
        except ConfigurationError as e:
            print(f"::error::{e}")
            sys.exit(1)
        sys.exit(run_action(settings))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
