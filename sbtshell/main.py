"""CLI entry point: parse sbt shell lines and show what was recognized."""
from __future__ import annotations
import sys
import argparse
import logging
import traceback

from . import __version__
from .lexer import tokenize
from .parser import ShellSyntaxError, check_command, parse_command
from .printer import format_tree
from .visitor import collect_spans

log = logging.getLogger("sbtshell.main")


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="sbtshell",
        description="Parse sbt shell command lines into scoped keys",
    )
    parser.add_argument("line", nargs="?", help="Shell line to parse (omit for a REPL)")
    parser.add_argument("--tokens", action="store_true", help="Print the token stream instead of the tree")
    parser.add_argument("--spans", action="store_true", help="Print one line per node with its source span")
    parser.add_argument("--check", action="store_true", help="Exit with status 1 unless the line is a scoped key")
    parser.add_argument("--repl", action="store_true", help="Force REPL mode")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--version", action="version", version=f"sbtshell {__version__}")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    flags = {
        "tokens": args.tokens,
        "spans": args.spans,
        "check": args.check,
    }

    if args.line is not None and not args.repl:
        sys.exit(run_line(args.line, flags))
    else:
        run_repl(flags)


def render(line: str, flags: dict) -> str:
    """Text to show for one line, according to the output flags."""
    if flags.get("tokens"):
        return "\n".join(repr(t) for t in tokenize(line))
    command = check_command(line) if flags.get("check") else parse_command(line)
    if flags.get("spans"):
        return "\n".join(f"{s.kind:<10} {s.span.start:>3}..{s.span.end:<3} {s.text!r}" for s in collect_spans(command))
    return format_tree(command)


def run_line(line: str, flags: dict) -> int:
    """Parse and print a single line. Returns the process exit status."""
    try:
        print(render(line, flags))
    except ShellSyntaxError as e:
        print(e)
        return 1
    except Exception as e:
        print(f"\n[sbt-shell] Internal Error: {e}")
        traceback.print_exc()
        return 2
    return 0


def run_repl(flags: dict):
    """Interactive prompt: every entered line is parsed and dumped."""
    print(f"sbtshell {__version__}")
    print("Type 'exit' to quit.\n")

    while True:
        try:
            line = input("sbt:> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if line.strip() in ("exit", "quit"):
            break

        try:
            print(render(line, flags))
        except ShellSyntaxError as e:
            print(f"[Error] {e}")
        except Exception as e:
            log.exception("failed to render %r", line)
            print(f"[Internal Error] {e}")


if __name__ == "__main__":
    main()
