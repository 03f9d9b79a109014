"""Shared pytest fixtures and Go sources for constenum tests."""
from pathlib import Path
import textwrap

import pytest

from constenum.compiler.loader import load_sources
from constenum.semantics.source_model import PackageModel

TESTDATA = Path(__file__).parent / "testdata"
EXAMPLE_DIR = TESTDATA / "example"


def go(src: str) -> str:
    """Dedent a Go snippet written inline in a test."""
    return textwrap.dedent(src).lstrip("\n")


EXAMPLE_GO = (EXAMPLE_DIR / "example.go").read_text(encoding="utf-8")

IOTA_GROUPS_GO = go("""
    package sizes

    type ByteSize int64

    const (
    	_           = iota
    	KB ByteSize = 1 << (10 * iota)
    	MB
    	GB
    )

    const (
    	A, B = iota, iota * 10
    	C, D
    )
""")

COLOR_GO = go("""
    package color

    import "fmt"

    //go:generate constenum
    type Color uint8

    var palette = map[Color]string{}

    const (
    	Red Color = iota + 1 // red
    	Green                // green
    	Blue                 /* blue */
    	_
    	Alpha
    )

    func (c Color) Hex() string {
    	return fmt.Sprintf("#%02x", uint8(c))
    }
""")


def make_model(package: str, *sources: str, filename: str = "/src/{package}/file{index}.go") -> PackageModel:
    """Build a PackageModel from inline Go sources, one file per source."""
    files = {
        filename.format(package=package, index=i): src for i, src in enumerate(sources)
    }
    return load_sources(package, files)


@pytest.fixture
def example_model() -> PackageModel:
    return make_model("example", EXAMPLE_GO)


@pytest.fixture
def example_dir(tmp_path: Path) -> Path:
    """A scratch copy of the example Go package."""
    target = tmp_path / "example"
    target.mkdir()
    for name in ("example.go", "kind_enum_test.go", "go.mod"):
        (target / name).write_text((EXAMPLE_DIR / name).read_text(encoding="utf-8"), encoding="utf-8")
    return target
