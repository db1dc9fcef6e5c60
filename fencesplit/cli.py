from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

from fencesplit.config import DEFAULT_CONFIG_PATH, SplitterConfig
from fencesplit.scanning import FENCE
from fencesplit.splitter import MessageSplitter

DEFAULT_SEPARATOR = "\n-----\n"

_log_handler_id: int | None = None


def _configure_logging(verbose: bool) -> None:
    global _log_handler_id
    if _log_handler_id is not None:
        logger.remove(_log_handler_id)
    _log_handler_id = logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")
    logger.enable("fencesplit")


def _read_input(source: str | None) -> str:
    if not source or source == "-":
        return sys.stdin.read()
    return Path(source).expanduser().read_text(encoding="utf-8")


def _split_from_args(args: argparse.Namespace) -> list[str]:
    cfg = SplitterConfig.load(args.config)
    content = _read_input(args.file)
    return MessageSplitter(cfg).split(content, args.max_len)


def cmd_split(args: argparse.Namespace) -> int:
    chunks = _split_from_args(args)
    if args.json:
        print(json.dumps(chunks, ensure_ascii=False, indent=2))
    else:
        print(args.separator.join(chunks))
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    chunks = _split_from_args(args)
    print(f"chunks: {len(chunks)}")
    for i, chunk in enumerate(chunks):
        print(f"  [{i}] length={len(chunk)} fences={chunk.count(FENCE)}")
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    config_path = Path(args.config).expanduser()
    cfg = SplitterConfig.load(config_path)

    if args.max_len is not None:
        cfg.max_len = args.max_len
    if args.code_block_buffer is not None:
        cfg.code_block_buffer = args.code_block_buffer
    if args.newline_window is not None:
        cfg.newline_window = args.newline_window
    if args.space_window is not None:
        cfg.space_window = args.space_window

    cfg.validate()
    path = cfg.save(config_path)
    print(f"Saved config to {path}")
    return 0


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", nargs="?", help="Input file (default: stdin)")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Path to config file")
    parser.add_argument("--max-len", type=int, help="Maximum chunk length (default: from config)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log split decisions to stderr")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fencesplit", description="Split long messages without breaking code fences")
    parser.set_defaults(func=lambda _: parser.print_help() or 0, verbose=False)

    commands = parser.add_subparsers(dest="command")

    p_split = commands.add_parser("split", help="Split a message and print the chunks")
    _add_input_args(p_split)
    p_split.add_argument("--json", action="store_true", help="Print chunks as a JSON array")
    p_split.add_argument("--separator", default=DEFAULT_SEPARATOR, help="Text printed between chunks")
    p_split.set_defaults(func=cmd_split)

    p_stats = commands.add_parser("stats", help="Show chunk lengths and fence counts")
    _add_input_args(p_stats)
    p_stats.set_defaults(func=cmd_stats)

    p_init = commands.add_parser("init", help="Create or update config")
    p_init.add_argument("--config", default=str(DEFAULT_CONFIG_PATH), help="Path to config file")
    p_init.add_argument("--max-len", type=int)
    p_init.add_argument("--code-block-buffer", type=int)
    p_init.add_argument("--newline-window", type=int)
    p_init.add_argument("--space-window", type=int)
    p_init.set_defaults(func=cmd_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    try:
        return int(args.func(args))
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
