"""Output Sink: deliver rendered Go source."""
from __future__ import annotations
import sys
from pathlib import Path

from constenum.compiler.config import STDERR, STDOUT
from constenum.internals import errors as er


def write_output(destination: str, source: str) -> None:
    """Write `source` to a file, or to a process stream for the special names.

    Callers hand over fully rendered text, so a failed generation never
    leaves a truncated file behind.

    Raises:
        ConfigError: the file cannot be written.
    """
    if destination == STDOUT:
        sys.stdout.write(source)
        sys.stdout.flush()
        return
    if destination == STDERR:
        sys.stderr.write(source)
        sys.stderr.flush()
        return

    try:
        Path(destination).write_text(source, encoding="utf-8", newline="\n")
    except OSError as e:
        raise er.ConfigError(er.ERR.CE5005, path=destination, reason=e.strerror or str(e)) from None
