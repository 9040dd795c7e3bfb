#!/usr/bin/env python3
"""
Chunking CLI - chunk a text file or a LinkedIn CSV export, or serve the HTTP API.

Usage:
    text-chunking text article.md --strategy tokens --max-tokens 256 --validate
    text-chunking csv posts.csv --output data/chunking
    text-chunking serve --port 8000
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import uvicorn

from .app import create_app
from .config import ChunkingServiceConfig
from .exceptions import ChunkingError, format_error_chain
from .logging_config import get_logger, setup_logging
from .models import ChunkingResult
from .service import ChunkingService
from .storage import ChunkingStorage

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="text-chunking",
        description="Sentence-aware chunking for RAG ingestion.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    text_parser = subparsers.add_parser("text", help="Chunk a plain text or markdown file")
    text_parser.add_argument("path", type=Path, help="File to chunk")
    text_parser.add_argument("--source", help="Source key (defaults to the file name)")
    text_parser.add_argument("--strategy", choices=["chars", "tokens"], default="chars")
    text_parser.add_argument("--chunk-size", type=int, help="Character budget (chars strategy)")
    text_parser.add_argument("--max-tokens", type=int, help="Token budget (tokens strategy)")
    text_parser.add_argument("--overlap", type=int, help="Overlap in characters or tokens")
    text_parser.add_argument("--validate", action="store_true", help="Run the chunk validator")
    text_parser.add_argument("--output", type=Path, help="Directory to save the result JSON in")

    csv_parser = subparsers.add_parser("csv", help="Chunk posts from a LinkedIn CSV export")
    csv_parser.add_argument("path", type=Path, help="CSV export to read")
    csv_parser.add_argument("--output", type=Path, help="Directory to save result JSON files in")

    serve_parser = subparsers.add_parser("serve", help="Run the chunking HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def _save_or_print(results: list[ChunkingResult], output: Optional[Path]) -> None:
    if output is None:
        payload = [r.to_dict() for r in results]
        print(json.dumps(payload if len(payload) != 1 else payload[0], ensure_ascii=False, indent=2))
        return
    storage = ChunkingStorage(str(output))
    for result in results:
        paths = storage.save(result)
        logger.info(f"Saved {result.total_chunks} chunks to {paths.chunk_file}")


def run(args: argparse.Namespace) -> int:
    config = ChunkingServiceConfig.from_env()
    if args.command == "serve":
        uvicorn.run(create_app(config), host=args.host, port=args.port)
        return 0

    service = ChunkingService(config)

    if args.command == "text":
        text = args.path.read_text(encoding="utf-8")
        result = service.chunk_text(
            text,
            args.source or args.path.name,
            strategy=args.strategy,
            chunk_size=args.chunk_size,
            overlap=args.overlap,
            max_tokens=args.max_tokens,
        )
        logger.info(f"Created {result.total_chunks} chunks from {args.path.name}")
        if args.validate:
            report = service.validate(result.chunks, args.max_tokens)
            logger.info(f"Validation passed: {report.is_valid}")
            for issue in report.issues:
                logger.warning(issue)
        _save_or_print([result], args.output)
        return 0

    results = service.chunk_csv_file(str(args.path))
    if not results:
        logger.warning("No valid posts found in CSV export")
        return 1
    logger.info(f"Chunked {len(results)} posts, {sum(r.total_chunks for r in results)} chunks total")
    _save_or_print(results, args.output)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else None, log_file=args.log_file)

    try:
        return run(args)
    except (ChunkingError, OSError) as exc:
        logger.error(format_error_chain(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
