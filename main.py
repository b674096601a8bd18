"""Command-line entry point for chatting with the Serenity response matcher."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from serenity import CorpusLoadError, ResponsePipeline
from serenity.config import config

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from logging import Logger

EXIT_COMMANDS = {"exit", "quit"}
PROMPT = "You: "


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Build the CLI parser and read command-line arguments."""  # noqa: DOC201
    parser = argparse.ArgumentParser(
        description="Answer messages from a context/response QA corpus.",
    )
    parser.add_argument(
        "--corpus",
        type=Path,
        default=None,
        help=f"Path to the corpus CSV file (default: {config.CORPUS_PATH}).",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help=(
            "Minimum similarity a match must exceed "
            f"(default: {config.SIMILARITY_THRESHOLD})."
        ),
    )
    parser.add_argument(
        "--query",
        default=None,
        help="Answer a single message and exit instead of starting a prompt.",
    )
    return parser.parse_args(argv)


def run_prompt(
    pipeline: ResponsePipeline,
    logger: Logger,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> int:
    """Read messages until EOF or an exit command and print each reply."""  # noqa: DOC201
    while True:
        try:
            message = read(PROMPT)
        except (EOFError, KeyboardInterrupt):
            logger.info("Serenity stopped by user")
            return 0

        if message.strip().lower() in EXIT_COMMANDS:
            return 0
        if not message.strip():
            continue
        write(f"Serenity: {pipeline.respond(message)}")


def main(argv: Sequence[str] | None = None) -> int:
    """Validate configuration, load the corpus and answer messages."""  # noqa: DOC201
    args = parse_args(argv)

    config.setup_logging()
    logger = config.get_logger(__name__)

    try:
        config.validate()
    except ValueError:
        logger.exception("Configuration invalid")
        return 1

    if args.threshold is not None and not 0.0 <= args.threshold < 1.0:
        logger.error("Threshold must be in [0, 1), got %s", args.threshold)
        return 1

    pipeline = ResponsePipeline(corpus_path=args.corpus, threshold=args.threshold)
    try:
        count = pipeline.load_corpus_file()
    except CorpusLoadError:
        logger.exception("Unable to load corpus from %s", pipeline.corpus_path)
        return 1

    logger.info("Corpus ready with %d QA pairs", count)

    if args.query is not None:
        print(pipeline.respond(args.query))  # noqa: T201
        return 0

    return run_prompt(pipeline, logger)


if __name__ == "__main__":
    sys.exit(main())
