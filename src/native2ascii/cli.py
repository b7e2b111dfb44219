"""Command-line interface for native2ascii."""

from __future__ import annotations

import argparse
import sys
import time
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from native2ascii.errors import GrammarError, UnknownLanguageTag
from native2ascii.grammars import CommentGrammar, build_registry


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None
    output_file: Path | None
    reverse: bool
    comment_language: str | None
    encoding: str
    grammars: Mapping[str, CommentGrammar]
    list_languages: bool
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="native2ascii",
        description="Convert non-ASCII characters to and from \\uXXXX escapes",
    )
    p.add_argument("input", nargs="?", help="Input file (default: stdin)")
    p.add_argument("output", nargs="?", help="Output file (default: stdout)")
    p.add_argument(
        "-r",
        "--reverse",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Convert \\uXXXX escapes back to native characters",
    )
    p.add_argument(
        "--ignore-comments",
        action="store_const",
        const="default",
        dest="ignore_comments",
        help="Leave C-style comments unescaped (--ignore-comments=LANG for another language)",
    )
    p.add_argument(
        "-l",
        "--language",
        dest="ignore_comments",
        metavar="LANG",
        help="Leave comments unescaped, using LANG comment syntax",
    )
    p.add_argument(
        "--no-ignore-comments",
        action="store_const",
        const="",
        dest="ignore_comments",
        help="Escape comments too, overriding the config file",
    )
    p.add_argument(
        "--encoding",
        default=None,
        metavar="ENC",
        help="Text encoding of the input and output files (default: utf-8)",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover native2ascii.toml)",
    )
    p.add_argument(
        "--list-languages",
        action="store_true",
        help="List the comment languages and exit",
    )
    p.add_argument("--watch", action="store_true", help="Watch the input for changes and reconvert")
    p.add_argument("--debug", action="store_true", help="Dump comment regions to stderr")
    return p


def normalize_argv(argv: list[str]) -> list[str]:
    """Rewrite ``--ignore-comments=LANG`` as ``--language LANG``.

    A bare ``--ignore-comments`` never consumes the next argument.
    """
    result: list[str] = []
    for i, arg in enumerate(argv):
        if arg == "--":
            result.extend(argv[i:])
            break
        if arg.startswith("--ignore-comments="):
            result.extend(["--language", arg.partition("=")[2]])
        else:
            result.append(arg)
    return result


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "native2ascii.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _path_arg(value: str | None) -> Path | None:
    if value is None or value == "-":
        return None
    return Path(value)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = _path_arg(args.input)
    input_dir = input_file.parent if input_file is not None else Path(".")
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Comment grammars: built-ins < config [languages]
    cfg_languages = config.get("languages")
    grammars = build_registry(cfg_languages)

    # Comment language: config < CLI
    comment_language: str | None = None
    cfg_ignore = config.get("ignore_comments")
    if cfg_ignore is True:
        comment_language = "default"
    elif isinstance(cfg_ignore, str) and cfg_ignore:
        comment_language = cfg_ignore
    if args.ignore_comments is not None:
        comment_language = args.ignore_comments or None

    # Encoding: config < CLI
    encoding = "utf-8"
    cfg_encoding = config.get("encoding")
    if isinstance(cfg_encoding, str) and cfg_encoding:
        encoding = cfg_encoding
    if args.encoding:
        encoding = args.encoding

    # Reverse: config < CLI
    reverse = config.get("reverse") is True
    if args.reverse is not None:
        reverse = args.reverse

    return CliOptions(
        input_file=input_file,
        output_file=_path_arg(args.output),
        reverse=reverse,
        comment_language=comment_language,
        encoding=encoding,
        grammars=grammars,
        list_languages=args.list_languages,
        watch=args.watch,
        debug=args.debug,
    )


def read_input(options: CliOptions) -> str:
    """Read the whole input from the input file or stdin."""
    if options.input_file is not None:
        return options.input_file.read_text(encoding=options.encoding)
    return sys.stdin.read()


def write_output(options: CliOptions, text: str) -> None:
    """Write *text* to the output file or stdout; empty output writes nothing."""
    if not text:
        return
    if options.output_file is not None:
        options.output_file.write_text(text, encoding=options.encoding)
    else:
        sys.stdout.write(text)
        sys.stdout.flush()


def convert(options: CliOptions, text: str) -> str:
    """Run decode or encode over *text* according to *options*."""
    from native2ascii import decode, encode

    if options.reverse:
        return decode(text)

    if options.debug and options.comment_language:
        from native2ascii.debug import dump_regions
        from native2ascii.grammars import get_grammar
        from native2ascii.scanner import Scanner

        grammar = get_grammar(options.comment_language, options.grammars)
        dump_regions(text, Scanner(text, grammar).regions())

    return encode(text, options.comment_language, options.grammars)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, reconvert on each modification."""
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
                    write_output(options, convert(options, read_input(options)))
                    print(f"Converted {options.input_file}", file=sys.stderr)
                except UnknownLanguageTag as exc:
                    print(str(exc), file=sys.stderr)
                except (UnicodeError, OSError) as exc:
                    print(f"error: {exc}", file=sys.stderr)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(normalize_argv(sys.argv[1:] if argv is None else argv))

    try:
        options = resolve_options(args)
    except GrammarError as exc:
        print(str(exc), file=sys.stderr)
        return 2
    except (tomllib.TOMLDecodeError, OSError) as exc:
        print(f"error: cannot load config: {exc}", file=sys.stderr)
        return 2

    if options.list_languages:
        for tag in sorted(options.grammars):
            print(tag)
        return 0

    if options.watch:
        if options.input_file is None:
            print("error: --watch needs an input file", file=sys.stderr)
            return 2
        watch_loop(options)
        return 0

    try:
        text = read_input(options)
    except OSError as exc:
        print(f"error: cannot read input: {exc}", file=sys.stderr)
        return 2
    except (UnicodeError, LookupError) as exc:
        print(f"error: cannot decode input as {options.encoding}: {exc}", file=sys.stderr)
        return 1

    try:
        result = convert(options, text)
    except UnknownLanguageTag as exc:
        print(str(exc), file=sys.stderr)
        return 1

    try:
        write_output(options, result)
    except (UnicodeError, LookupError) as exc:
        print(f"error: cannot encode output as {options.encoding}: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"error: cannot write output: {exc}", file=sys.stderr)
        return 2

    return 0
