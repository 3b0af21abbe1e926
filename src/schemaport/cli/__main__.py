"""
CLI entry point for schemaport.

Usage:
    python -m schemaport.cli <command> [options]

Available commands:
    platforms       - List registered platforms
    create-sql      - Print the DDL creating a schema document
    diff-sql        - Print the DDL migrating one schema document to another
    reserved-words  - Report names that collide with reserved keywords

Examples:
    python -m schemaport.cli create-sql schema.yml --platform oracle
    python -m schemaport.cli diff-sql old.yml new.yml --platform postgresql
    python -m schemaport.cli reserved-words schema.yml --list oracle mysql
"""

import argparse
import sys
from typing import List, Optional

from schemaport.exceptions import SchemaportError
from schemaport.schema.comparator import Comparator
from schemaport.schema.loader import load_schema
from schemaport.schema.validation import find_reserved_word_violations
from schemaport.sql.registry import get_platform, list_platforms
from schemaport.utils.logging import bind_context, get_logger

logger = get_logger(__name__)

NO_CHANGES = "-- no changes"


def _print_statements(statements: List[str]) -> None:
    for statement in statements:
        print(f"{statement};")


def _cmd_platforms(args: argparse.Namespace) -> int:
    for name in list_platforms():
        print(name)
    return 0


def _cmd_create_sql(args: argparse.Namespace) -> int:
    platform = get_platform(args.platform)
    schema = load_schema(args.schema)
    statements = platform.create_schema_sql(schema)
    logger.info("cli.create_sql", platform=platform.name, statements=len(statements))
    _print_statements(statements)
    return 0


def _cmd_diff_sql(args: argparse.Namespace) -> int:
    platform = get_platform(args.platform)
    old_schema = load_schema(args.old)
    new_schema = load_schema(args.new)
    diff = Comparator(platform).compare_schemas(old_schema, new_schema)
    if diff is None:
        logger.info("cli.diff_sql", platform=platform.name, statements=0)
        print(NO_CHANGES)
        return 0
    statements = platform.schema_diff_sql(diff)
    logger.info("cli.diff_sql", platform=platform.name, statements=len(statements))
    _print_statements(statements)
    return 0


def _cmd_reserved_words(args: argparse.Namespace) -> int:
    names = args.lists or list_platforms()
    keyword_lists = [get_platform(name).keywords for name in names]
    violations = find_reserved_word_violations(load_schema(args.schema), keyword_lists)
    for violation in violations:
        print(violation.message)
    logger.info("cli.reserved_words", lists=names, violations=len(violations))
    return 1 if violations else 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, 1 for reserved-word violations, 2 for errors)
    """
    parser = argparse.ArgumentParser(
        prog="schemaport.cli",
        description="schemaport CLI - render portable schema documents as DDL",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
        help="Command to execute",
    )

    platforms_parser = subparsers.add_parser("platforms", help="List registered platforms")
    platforms_parser.set_defaults(handler=_cmd_platforms)

    create_parser = subparsers.add_parser("create-sql", help="Print the DDL creating a schema")
    create_parser.add_argument("schema", help="Schema YAML file")
    create_parser.add_argument("--platform", help="Target platform (defaults to settings)")
    create_parser.set_defaults(handler=_cmd_create_sql)

    diff_parser = subparsers.add_parser("diff-sql", help="Print the DDL migrating OLD to NEW")
    diff_parser.add_argument("old", help="Current schema YAML file")
    diff_parser.add_argument("new", help="Desired schema YAML file")
    diff_parser.add_argument("--platform", help="Target platform (defaults to settings)")
    diff_parser.set_defaults(handler=_cmd_diff_sql)

    reserved_parser = subparsers.add_parser("reserved-words", help="Report reserved keyword collisions")
    reserved_parser.add_argument("schema", help="Schema YAML file")
    reserved_parser.add_argument(
        "--list",
        dest="lists",
        nargs="+",
        metavar="PLATFORM",
        help="Keyword lists to check (defaults to every platform)",
    )
    reserved_parser.set_defaults(handler=_cmd_reserved_words)

    args = parser.parse_args(argv)
    log = bind_context(command=args.command)

    try:
        return args.handler(args)
    except SchemaportError as e:
        log.error("cli.failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
