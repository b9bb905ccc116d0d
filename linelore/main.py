"""Command line entry point: print the history of a line range as JSON."""

import argparse
import logging
import sys
from typing import List, Optional

import dotenv
from pydantic import ValidationError

from linelore import analyze_selection
from linelore.config import EngineConfig
from linelore.errors import LineHistoryError
from linelore.repositories.version_control.repository_locator import check_git_available

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linelore",
        description="Show the commits, and the exact hunks, that produced a range of lines.",
    )
    parser.add_argument("file", help="Path of the file to inspect")
    parser.add_argument("start", type=int, help="First line of the selection (1-based)")
    parser.add_argument("end", type=int, help="Last line of the selection (inclusive)")
    parser.add_argument("--workers", type=int, default=None, help="Commits resolved in parallel")
    parser.add_argument("--timeout", type=float, default=None, help="Timeout in seconds for each git call")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    dotenv.load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        config = EngineConfig.from_env()
        overrides = {}
        if args.workers is not None:
            overrides["max_workers"] = args.workers
        if args.timeout is not None:
            overrides["command_timeout_seconds"] = args.timeout
        if overrides:
            config = EngineConfig(**{**config.model_dump(), **overrides})
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=config.log_level, stream=sys.stderr)

    try:
        check_git_available(config)
        result = analyze_selection(args.file, args.start, args.end, config=config)
    except ValidationError as e:
        print(f"Invalid line range: {e}", file=sys.stderr)
        return 2
    except LineHistoryError as e:
        logger.error(f"Git analysis failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result.model_dump_json(indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
