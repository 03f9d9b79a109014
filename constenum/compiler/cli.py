"""CLI entry point and argument parsing."""
from __future__ import annotations

import argparse
import os
from typing import Optional

from constenum.compiler.config import STDERR, STDOUT, GenerateConfig
from constenum.internals import errors as er
from constenum.internals.report import Reporter
from constenum.internals.version import print_banner
from constenum.semantics.naming import NamingStrategy

EPILOG = "example: constenum --input example.go --output kind_enum.go --pkg example --type Kind --receiver k"


def resolve_parameter(value: Optional[str], env: str = "") -> Optional[str]:
    """A flag given on the command line wins; otherwise read `env` if named."""
    if value is not None:
        return value
    if env:
        return os.environ.get(env)
    return None


def parse_line(text: Optional[str]) -> int:
    if text is None or text == "":
        return 0
    try:
        line = int(text.strip())
    except ValueError:
        raise er.ConfigError(er.ERR.CE5002, value=text) from None
    if line < 0:
        raise er.ConfigError(er.ERR.CE5002, value=text)
    return line


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="constenum",
        description="Generate enum-like methods for the constants of a Go type. "
                    "Designed to be called by go generate.",
        epilog=EPILOG,
    )
    ap.add_argument("-i", "--input", metavar="FILE",
                    help="input file to scan (default: $GOFILE, set by go generate)")
    ap.add_argument("-o", "--output", metavar="FILE",
                    help=f"output file to create (default: <type>_enum.go); "
                         f"{STDOUT} and {STDERR} write to the process streams")
    ap.add_argument("-p", "--pkg", metavar="NAME",
                    help="package name for the generated file (default: $GOPACKAGE, "
                         "else the input file's package clause)")
    ap.add_argument("-t", "--type", metavar="NAME", dest="type_name",
                    help="type to generate methods for (default: the declaration following "
                         "$GOLINE in the input file, else its first declaration)")
    ap.add_argument("-r", "--receiver", metavar="NAME",
                    help="receiver name of the generated methods (default: first letter of the type)")
    ap.add_argument("-n", "--naming-strategy", metavar="STRATEGY", default=None,
                    help="how to derive string values from identifiers: "
                         + ", ".join(s.value for s in NamingStrategy)
                         + " (default: none); ignored for values with a line comment override")
    ap.add_argument("-l", "--line", help=argparse.SUPPRESS)
    ap.add_argument("-v", "--verbose", action="store_true",
                    help="report progress on stderr")
    ap.add_argument("--version", action="store_true", help="show version and exit")
    return ap


def resolve_config(args: argparse.Namespace) -> GenerateConfig:
    """Turn parsed arguments and the go generate environment into a config.

    Raises:
        ConfigError: the input file is unknown or a value is invalid.
    """
    input_file = resolve_parameter(args.input, "GOFILE")
    if not input_file:
        raise er.ConfigError(er.ERR.CE5001)

    strategy = NamingStrategy.IDENTITY
    if args.naming_strategy is not None:
        strategy = NamingStrategy.parse(args.naming_strategy)

    return GenerateConfig(
        input=input_file,
        package=resolve_parameter(args.pkg, "GOPACKAGE") or None,
        type_name=args.type_name or None,
        line=parse_line(resolve_parameter(args.line, "GOLINE")),
        receiver=args.receiver or None,
        naming_strategy=strategy,
        output=args.output or None,
        verbose=args.verbose,
    )


def main(argv: list[str] | None = None) -> int:
    """Generator entry point.

    Returns:
        0 on success, 2 on errors.
    """
    args = build_parser().parse_args(argv)

    if args.version:
        print_banner()
        return 0

    from constenum.compiler.pipeline import run

    try:
        run(resolve_config(args))
    except er.EnumeratorError as exc:
        reporter = Reporter(filename="constenum")
        exc.report(reporter)
        reporter.print()
        return 2
    return 0
