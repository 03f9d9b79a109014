# internals/errors.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from constenum.internals.report import Span, Reporter


class Severity(str, Enum):
    ERROR = "error"


class Category(str, Enum):
    GENERAL    = "general"
    SOURCE     = "source"
    RESOLUTION = "resolution"
    DISCOVERY  = "discovery"
    VALIDATION = "validation"
    CONFIG     = "config"
    INTERNAL   = "internal"


@dataclass(frozen=True)
class ErrorMessage:
    code: str
    severity: Severity
    text: str
    category: Category = Category.GENERAL
    doc: str = ""


REGISTRY: Dict[str, ErrorMessage] = {}

class _ErrorCatalog:
    def __init__(self, backing: Dict[str, ErrorMessage]) -> None:
        self._registry = backing

    def __getattr__(self, name: str) -> ErrorMessage:
        try:
            return self._registry[name]
        except KeyError as e:
            raise AttributeError(name) from e

    def __getitem__(self, code: str) -> ErrorMessage:
        return self._registry[code]


ERR = _ErrorCatalog(REGISTRY)


class EnumeratorError(Exception):
    """Base class for every user-facing generator failure.

    Carries the catalog entry, the formatted message and, when known, the
    source location the failure refers to.
    """

    def __init__(self, em: ErrorMessage, span: Optional[Span] = None,
                 filename: Optional[str] = None, **kwargs) -> None:
        self.message = em
        self.text = _fmt(em.code, **kwargs)
        self.span = span
        self.filename = filename
        super().__init__(f"{em.code}: {self.text}")

    @property
    def code(self) -> str:
        return self.message.code

    def report(self, r: Reporter) -> None:
        """Add this error to a reporter as a diagnostic."""
        r.error(self.code, self.text, self.span, filename=self.filename)


class SourceLoadError(EnumeratorError):
    """The package could not be read, parsed or evaluated."""


class ResolutionError(EnumeratorError):
    """The target type could not be resolved."""


class ConsistencyError(EnumeratorError):
    """Constants of the target type disagree on their value kind."""


class EmitError(EnumeratorError):
    """Nothing can be generated for the resolved type."""


class ValidationError(EnumeratorError):
    """The discovered members violate a uniqueness rule."""


class ConfigError(EnumeratorError):
    """Invocation parameters are missing or invalid."""


def raise_internal_error(code: str, **kwargs) -> None:
    """Raise a RuntimeError for internal generator errors.

    Internal errors (CE0xxx codes) indicate generator bugs, not problems with
    the Go package being processed. They are never turned into diagnostics.

    Args:
        code: Error code (e.g., "CE0001")
        **kwargs: Format parameters for the error message

    Raises:
        RuntimeError: Always raises with formatted error message
    """
    text = _fmt(code, **kwargs)
    raise RuntimeError(f"{code}: {text}")


#
# --- Helpers
#

def _add(msg: ErrorMessage) -> None:
    if msg.code in REGISTRY:
        raise ValueError(f"duplicate error code {REGISTRY[msg.code]} in {msg}")
    REGISTRY[msg.code] = msg

def _get(code: str) -> ErrorMessage:
    try:
        return REGISTRY[code]
    except KeyError:
        raise KeyError(f"unknown error code: {code}")

def _fmt(code: str, **kwargs) -> str:
    msg = _get(code)
    try:
        return msg.text.format(**kwargs)
    except KeyError as key_error:
        missing = key_error.args[0]
        raise KeyError(f"missing text key '{missing}' for {code} "
                       f"(needed by: {msg.text!r})") from None

#
# --- Registry population
#

# Internal errors (generator bugs) - CE0xxx range
_add(ErrorMessage("CE0001", Severity.ERROR,
    "unknown AST node '{node}'",
    Category.INTERNAL, "The AST builder met a parse tree node it does not handle."))

_add(ErrorMessage("CE0002", Severity.ERROR,
    "unsupported value kind '{kind}' for type '{type}'",
    Category.INTERNAL, "Only text and integral kinds can be synthesized; validation should prevent this."))

_add(ErrorMessage("CE0003", Severity.ERROR,
    "unknown expression node '{node}'",
    Category.INTERNAL, "The constant evaluator met an expression node it does not handle."))

# Source loading - CE1xxx range
_add(ErrorMessage("CE1001", Severity.ERROR,
    "cannot read '{path}': {reason}",
    Category.SOURCE, "The file could not be opened or decoded as UTF-8."))

_add(ErrorMessage("CE1002", Severity.ERROR,
    "syntax error: {message}",
    Category.SOURCE, "The Go source could not be parsed."))

_add(ErrorMessage("CE1003", Severity.ERROR,
    "package clause is '{found}', expected '{expected}'",
    Category.SOURCE, "The input file belongs to a different package than requested."))

_add(ErrorMessage("CE1004", Severity.ERROR,
    "invalid literal {literal}: {reason}",
    Category.SOURCE, "A literal is malformed."))

_add(ErrorMessage("CE1005", Severity.ERROR,
    "undefined: {name}",
    Category.SOURCE, "A constant expression refers to an unknown name."))

_add(ErrorMessage("CE1006", Severity.ERROR,
    "initialization cycle: {cycle}",
    Category.SOURCE, "A constant depends on itself."))

_add(ErrorMessage("CE1007", Severity.ERROR,
    "invalid constant expression: {message}",
    Category.SOURCE, "The expression is not a valid constant expression."))

_add(ErrorMessage("CE1008", Severity.ERROR,
    "constant {value} overflows {type}",
    Category.SOURCE, "A typed constant is not representable by its type."))

_add(ErrorMessage("CE1009", Severity.ERROR,
    "division by zero",
    Category.SOURCE, "Constant division or remainder by zero."))

_add(ErrorMessage("CE1010", Severity.ERROR,
    "mismatched types {left} and {right} in {op}",
    Category.SOURCE, "Binary operands have different typed types."))

_add(ErrorMessage("CE1011", Severity.ERROR,
    "constant string is not valid UTF-8: {value}",
    Category.SOURCE, "Raw values of text enums must be valid UTF-8."))

_add(ErrorMessage("CE1012", Severity.ERROR,
    "missing init expr for const declaration '{name}'",
    Category.SOURCE, "The first spec of a const group has no values, or fewer values than names."))

_add(ErrorMessage("CE1014", Severity.ERROR,
    "extra init expr for const declaration '{name}'",
    Category.SOURCE, "A const spec has more values than names."))

_add(ErrorMessage("CE1013", Severity.ERROR,
    "no Go files for package '{package}' in '{directory}'",
    Category.SOURCE, "The package directory contains no matching files."))

# Type resolution - CE2xxx range
_add(ErrorMessage("CE2001", Severity.ERROR,
    "type '{name}' not found in package '{package}'",
    Category.RESOLUTION, "No named type with this name is declared in the package."))

_add(ErrorMessage("CE2002", Severity.ERROR,
    "no declaration found at or after {file}:{line}",
    Category.RESOLUTION, "Position lookup found nothing following the directive."))

_add(ErrorMessage("CE2003", Severity.ERROR,
    "declaration following {file}:{line} is '{name}', which is not a type",
    Category.RESOLUTION, "The closest following declaration must be a named type."))

_add(ErrorMessage("CE2004", Severity.ERROR,
    "alias '{name}' does not denote a type declared in this package",
    Category.RESOLUTION, "Aliases of foreign or builtin types cannot be enumerated."))

# Discovery and emission - CE3xxx range
_add(ErrorMessage("CE3001", Severity.ERROR,
    "constants of type '{type}' disagree on value kind: '{first}' is {first_kind}, '{name}' is {kind}",
    Category.DISCOVERY, "Every constant of an enum type must have the same underlying kind."))

_add(ErrorMessage("CE3002", Severity.ERROR,
    "no constants of type '{type}' found",
    Category.DISCOVERY, "There is nothing to generate for a type without constants."))

# Validation - CE40xx range
_add(ErrorMessage("CE4001", Severity.ERROR,
    "duplicate identifier '{name}'",
    Category.VALIDATION, "Two members share an identifier."))

_add(ErrorMessage("CE4002", Severity.ERROR,
    "duplicate string value '{display}' for '{name}' and '{other}'",
    Category.VALIDATION, "Two members resolve to the same display string."))

_add(ErrorMessage("CE4003", Severity.ERROR,
    "duplicate value {value} for '{name}' and '{other}'",
    Category.VALIDATION, "Two members have the same raw value."))

_add(ErrorMessage("CE4004", Severity.ERROR,
    "string value '{display}' of '{name}' collides with identifier '{other}'",
    Category.VALIDATION, "A display string equals another member's identifier."))

_add(ErrorMessage("CE4005", Severity.ERROR,
    "type '{type}' has {kind} underlying type; only string and integer enums are supported",
    Category.VALIDATION, "Float and bool enums cannot be generated."))

# Configuration - CE5xxx range
_add(ErrorMessage("CE5001", Severity.ERROR,
    "no input file: pass --input or run from go generate",
    Category.CONFIG, "Neither --input nor $GOFILE is set."))

_add(ErrorMessage("CE5002", Severity.ERROR,
    "invalid line '{value}'",
    Category.CONFIG, "--line and $GOLINE must be positive integers."))

_add(ErrorMessage("CE5003", Severity.ERROR,
    "unknown naming strategy '{value}' (choose from {choices})",
    Category.CONFIG, "The naming strategy name is not recognised."))

_add(ErrorMessage("CE5005", Severity.ERROR,
    "cannot write '{path}': {reason}",
    Category.CONFIG, "The output destination could not be written."))
