"""CLI entrypoint for wpdocs: every command prints JSON to stdout."""

import argparse
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, List, Optional

from wpdocs.api.content_api import ContentService
from wpdocs.api.export import export_json
from wpdocs.config.loader import DEFAULT_CONFIG_PATH, get_database_url, load_config
from wpdocs.database.db_client import session_context
from wpdocs.errors import WpDocsError
from wpdocs.filters.criteria import DateRange, ListFilters
from wpdocs.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


@contextmanager
def _service(args: argparse.Namespace) -> Generator[ContentService, None, None]:
    config = args.config_data
    with session_context(get_database_url(config), echo=config["database"].get("echo", False)) as session:
        yield ContentService(session, config=config)


def cmd_langs(args: argparse.Namespace) -> None:
    """List available languages."""
    with _service(args) as service:
        print(export_json(service.languages()))


def cmd_pages(args: argparse.Namespace) -> None:
    """Print the page tree of a language."""
    with _service(args) as service:
        print(export_json(service.pages(args.lang)))


def cmd_categories(args: argparse.Namespace) -> None:
    with _service(args) as service:
        print(export_json(service.categories(args.lang)))


def cmd_tags(args: argparse.Namespace) -> None:
    with _service(args) as service:
        print(export_json(service.tags(args.lang, offset=args.offset, limit=args.limit)))


def cmd_post(args: argparse.Namespace) -> None:
    """Print one document in full; prints null when it doesn't exist."""
    with _service(args) as service:
        print(export_json(service.document(args.id)))


def cmd_list(args: argparse.Namespace) -> None:
    """Print a filtered document list."""
    filters = ListFilters(
        types=args.types or [],
        themes=args.themes or [],
        regions=args.regions or [],
        tags=args.tags or [],
        pub_range=DateRange(min=args.pub_min, max=args.pub_max),
        period_range=DateRange(min=args.period_min, max=args.period_max),
    )
    with _service(args) as service:
        result = service.list_documents(args.lang, filters, offset=args.offset, limit=args.limit)
        print(export_json(result))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wpdocs",
        description="Query the documents database (read-only)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to the YAML config (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Override logging.level from the config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    langs_parser = subparsers.add_parser("langs", help="List available languages")
    langs_parser.set_defaults(func=cmd_langs)

    pages_parser = subparsers.add_parser("pages", help="Page tree from the menu")
    pages_parser.add_argument("lang", type=str, help="Language code")
    pages_parser.set_defaults(func=cmd_pages)

    categories_parser = subparsers.add_parser("categories", help="Category tree")
    categories_parser.add_argument("lang", type=str, help="Language code")
    categories_parser.set_defaults(func=cmd_categories)

    tags_parser = subparsers.add_parser("tags", help="Tag cloud with weights")
    tags_parser.add_argument("lang", type=str, help="Language code")
    tags_parser.add_argument("--offset", type=int, default=0, help="Offset (default: 0)")
    tags_parser.add_argument(
        "--limit",
        type=int,
        default=20,
        help="Number of tags, <= 0 means no limit (default: 20)",
    )
    tags_parser.set_defaults(func=cmd_tags)

    post_parser = subparsers.add_parser("post", help="Full content of one document")
    post_parser.add_argument("id", type=int, help="Document id")
    post_parser.set_defaults(func=cmd_post)

    list_parser = subparsers.add_parser("list", help="Filtered document list")
    list_parser.add_argument("lang", type=str, help="Language code")
    list_parser.add_argument("--types", type=int, action="append", help="Type id (repeatable)")
    list_parser.add_argument("--themes", type=int, action="append", help="Theme id (repeatable)")
    list_parser.add_argument("--regions", type=int, action="append", help="Region id (repeatable)")
    list_parser.add_argument("--tags", type=str, action="append", help="Tag label (repeatable)")
    list_parser.add_argument("--pub-min", type=int, default=None, help="Issued not before (Unix timestamp)")
    list_parser.add_argument("--pub-max", type=int, default=None, help="Issued not after (Unix timestamp)")
    list_parser.add_argument("--period-min", type=int, default=None, help="Data period not ending before (Unix timestamp)")
    list_parser.add_argument("--period-max", type=int, default=None, help="Data period not starting after (Unix timestamp)")
    list_parser.add_argument("--offset", type=int, default=0, help="Offset (default: 0)")
    list_parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Number of documents, <= 0 means no limit (default: 10)",
    )
    list_parser.set_defaults(func=cmd_list)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        args.config_data = load_config(args.config)
        configure_logging(args.log_level or args.config_data["logging"]["level"])
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        args.func(args)
    except WpDocsError as e:
        logger.error(f"Error running command '{args.command}': {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
