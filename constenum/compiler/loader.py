"""Source file loading and package assembly."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from constenum.internals import errors as er
from constenum.internals.parser import parse_source
from constenum.semantics.ast import SourceFile
from constenum.semantics.source_model import PackageModel

GO_SUFFIX = ".go"
TEST_SUFFIX = "_test.go"


def canonical_path(path: str) -> str:
    """The filename under which a file is known to the package model."""
    return str(Path(path).resolve())


def read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        raise er.SourceLoadError(er.ERR.CE1001, path=str(path), reason=reason) from None


def is_package_file(path: Path) -> bool:
    """True for the non-test Go files that make up a package."""
    return path.is_file() and path.name.endswith(GO_SUFFIX) and not path.name.endswith(TEST_SUFFIX)


def load_package(input_path: str, package: Optional[str] = None) -> PackageModel:
    """Parse the package `input_path` belongs to.

    The input file is parsed first and must declare `package` (or, when
    `package` is None, decides it). Every other non-test `.go` file in the
    same directory is then parsed, and those declaring the same package are
    included.

    Raises:
        SourceLoadError: a file cannot be read or parsed, or the input file
            declares a different package.
    """
    path = Path(canonical_path(input_path))
    main = parse_source(read_source(path), str(path))
    if package is None:
        package = main.package.name
    elif main.package.name != package:
        raise er.SourceLoadError(er.ERR.CE1003, main.package.loc, main.filename,
                                 found=main.package.name, expected=package)

    files: List[SourceFile] = [main]
    for sibling in sorted(path.parent.iterdir()):
        if sibling == path or not is_package_file(sibling):
            continue
        parsed = parse_source(read_source(sibling), str(sibling))
        if parsed.package.name == package:
            files.append(parsed)

    return PackageModel(package, files)


def load_sources(package: str, sources: Dict[str, str]) -> PackageModel:
    """Build a package from in-memory file texts keyed by filename.

    Files declaring a different package are left out.

    Raises:
        SourceLoadError: no file declares `package`, or a file fails to parse.
    """
    files = [parse_source(text, filename) for filename, text in sources.items()]
    files = [f for f in files if f.package.name == package]
    if not files:
        raise er.SourceLoadError(er.ERR.CE1013, package=package, directory="<memory>")
    return PackageModel(package, files)
