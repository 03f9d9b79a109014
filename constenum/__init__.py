"""constenum - enum methods for Go constants, generated from Python."""
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("constenum")
    __dev__ = False
except PackageNotFoundError:
    # Running from a checkout - read from pyproject.toml
    import tomllib
    from pathlib import Path
    try:
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject, "rb") as f:
            __version__ = tomllib.load(f).get("project", {}).get("version", "unknown")
    except OSError:
        __version__ = "unknown"
    __dev__ = True
