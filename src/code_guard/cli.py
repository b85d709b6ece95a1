"""code-guard command line.

Usage:
    code-guard review [PATH] [--max-pool N] [--output NAME] [--lang en|zh]
    code-guard config set api-server https://api.openai.com/v1
    code-guard config set key sk-...
"""

import argparse
import asyncio
import sys

import structlog

from code_guard.config import DEFAULT_CONFIG_PATH, SETTING_KEYS, load_settings, save_setting
from code_guard.errors import CodeGuardError
from code_guard.logging_config import configure_logging
from code_guard.review.engine import create_review_engine
from code_guard.review.models import DEFAULT_MAX_CONCURRENCY

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="code-guard",
        description="A code reviewer tool based on LLMs",
    )
    parser.add_argument("--conf", default=DEFAULT_CONFIG_PATH, help="Config file path")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    # --conf may also follow the subcommand; SUPPRESS keeps the root default
    conf_parent = argparse.ArgumentParser(add_help=False)
    conf_parent.add_argument("--conf", default=argparse.SUPPRESS, help="Config file path")

    subparsers = parser.add_subparsers(dest="command")

    review = subparsers.add_parser(
        "review", parents=[conf_parent], help="Review a file or directory"
    )
    review.add_argument("path", nargs="?", default=".", help="File or directory to review")
    review.add_argument(
        "--max-pool",
        type=int,
        default=DEFAULT_MAX_CONCURRENCY,
        help="Maximum concurrent reviews",
    )
    review.add_argument("--output", default=None, help="Report file name")
    review.add_argument(
        "--lang",
        choices=["en", "zh"],
        default=None,
        help="Report language (defaults to the configured Language)",
    )
    review.add_argument("--prompt-file", default=None, help="Custom prompt template file")

    config_cmd = subparsers.add_parser("config", help="Manage settings")
    config_sub = config_cmd.add_subparsers(dest="config_command")
    set_cmd = config_sub.add_parser("set", parents=[conf_parent], help="Persist one setting")
    set_cmd.add_argument("name", choices=sorted(SETTING_KEYS), help="Setting name")
    set_cmd.add_argument("value", help="Setting value")

    return parser


def run_review(args: argparse.Namespace) -> int:
    """Run the review subcommand."""
    settings = load_settings(args.conf)
    engine = create_review_engine(
        settings,
        review_root=args.path,
        max_concurrency=args.max_pool,
        output_file=args.output,
        report_language=args.lang,
        prompt_file=args.prompt_file,
    )
    result = asyncio.run(engine.run())

    if result.summary.failed_count:
        logger.warning(
            "Some files could not be reviewed",
            failed=result.summary.failed_count,
            reviewed=result.summary.succeeded,
        )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "review":
            return run_review(args)
        if args.command == "config" and args.config_command == "set":
            save_setting(args.name, args.value, args.conf)
            return 0
    except CodeGuardError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
