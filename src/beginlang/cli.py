"""Command-line interface for beginlang."""

from __future__ import annotations

import argparse
import contextlib
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from beginlang.errors import CheckError

SUCCESS_MESSAGE = "Parsing completed successfully."

# Non-ASCII text only ever reaches comments or the end-of-input path
SOURCE_ENCODING = "utf-8"
SOURCE_ERRORS = "surrogateescape"


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    strict: bool
    trace: bool
    watch: bool


class CannotOpenError(Exception):
    """The input file could not be read."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"ERROR - cannot open {path}")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="beginlang",
        description="Check that a file is a valid begin … end . program",
    )
    # Optional so a missing argument is reported by main() with exit code 1
    p.add_argument("input", nargs="?", help="Source file to check")
    p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Treat unrecognized characters as lexical errors",
    )
    p.add_argument(
        "--trace",
        action="store_true",
        default=None,
        help="Trace tokens and grammar productions to stderr",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover beginlang.toml)",
    )
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-check")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "beginlang.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def check_setting(config: dict[str, Any], name: str) -> bool:
    """Return a boolean from the [check] table, False when absent or not a bool."""
    cfg_check = config.get("check")
    if isinstance(cfg_check, dict):
        value = cfg_check.get(name)
        if isinstance(value, bool):
            return value
    return False


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    strict = check_setting(config, "strict")
    trace = check_setting(config, "trace")

    if args.strict is not None:
        strict = args.strict
    if args.trace is not None:
        trace = args.trace

    return CliOptions(
        input_file=input_file,
        strict=strict,
        trace=trace,
        watch=args.watch,
    )


def read_source(path: Path) -> str:
    """Read a source file; undecodable bytes become lone surrogates, never errors."""
    return path.read_text(encoding=SOURCE_ENCODING, errors=SOURCE_ERRORS)


def check_file(options: CliOptions) -> None:
    """Stream a beginlang file through the checker. Raises CannotOpenError or CheckError."""
    from beginlang.debug import Tracer
    from beginlang.parser import parse_stream

    try:
        f = open(options.input_file, encoding=SOURCE_ENCODING, errors=SOURCE_ERRORS)
    except OSError as exc:
        raise CannotOpenError(options.input_file) from exc

    tracer = Tracer(file=sys.stderr) if options.trace else None
    with f:
        try:
            parse_stream(f, strict=options.strict, tracer=tracer)
        except CheckError as exc:
            # Re-read so the diagnostic can show the offending line
            with contextlib.suppress(OSError):
                exc.source = read_source(options.input_file)
            raise


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-check on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    check_file(options)
                    print(SUCCESS_MESSAGE)
                    sys.stdout.flush()
                except CannotOpenError as exc:
                    print(str(exc), file=sys.stderr)
                except CheckError as exc:
                    print(exc.format(str(options.input_file)), file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.input is None:
        print(parser.format_usage().rstrip(), file=sys.stderr)
        return 1

    try:
        options = resolve_options(args)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 2

    if options.watch:
        watch_loop(options)
        return 0

    try:
        check_file(options)
    except CannotOpenError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except CheckError as exc:
        print(exc.format(str(options.input_file)), file=sys.stderr)
        return 1

    print(SUCCESS_MESSAGE)
    return 0
