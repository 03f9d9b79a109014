from __future__ import annotations
import platform
import sys

import lark

from constenum import __version__ as app_ver, __dev__ as is_dev


def _get_versions() -> dict[str, str]:
    return {
        "app": app_ver,
        "python": platform.python_version(),
        "lark": getattr(lark, "__version__", "unknown"),
    }


def version_banner(use_ansi: bool = False) -> str:
    v = _get_versions()
    if use_ansi:
        BOLD, DIM, RESET = "\x1b[1m", "\x1b[2m", "\x1b[0m"
    else:
        BOLD, DIM, RESET = "", "", ""

    dev_marker = " (dev)" if is_dev else ""
    return (
        f"{BOLD}constenum{RESET} {v['app']}{dev_marker}\n"
        f"{DIM}Python {v['python']} • lark {v['lark']}{RESET}"
    )


def print_banner() -> None:
    # Only style an interactive terminal
    print(version_banner(use_ansi=sys.stdout.isatty()))
