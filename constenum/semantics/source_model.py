# semantics/source_model.py
"""Package-wide view over the parsed files of one Go package.

This is the symbol table the rest of the generator works from:

- `bindings`: every top-level declaration (types, constants, variables,
  functions and methods) in (filename, offset) order
- `lookup_type`: named type resolution, following aliases
- `constant_type` / `constant_value`: type inference and exact evaluation
- `comments`: comment records per file, in file order
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from constenum.internals import errors as er
from constenum.internals.report import Position
from constenum.semantics.ast import Comment, ConstDecl, ConstSpec, Ident, SourceFile, TypeDecl, TypeRef
from constenum.semantics.const_eval import ConstantEvaluator, ConstantValue
from constenum.semantics.typesys import BASIC_TYPES, NamedType, Type


class BindingKind(str, Enum):
    TYPE = "type"
    CONST = "const"
    VAR = "var"
    FUNC = "func"
    METHOD = "method"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Binding:
    name: str
    kind: BindingKind
    position: Position


@dataclass(frozen=True)
class ConstSite:
    """Where a constant is declared: its spec, its index in the spec, its group."""
    name: Ident
    spec: ConstSpec
    index: int
    decl: ConstDecl
    filename: str

    @property
    def position(self) -> Position:
        return self.name.pos


@dataclass(frozen=True)
class _TypeSite:
    decl: TypeDecl
    filename: str


class PackageModel:
    def __init__(self, package: str, files: Sequence[SourceFile]):
        self.package = package
        self.files: List[SourceFile] = sorted(files, key=lambda f: f.filename)
        self.bindings: List[Binding] = []
        self.const_sites: List[ConstSite] = []
        self._consts: Dict[str, ConstSite] = {}
        self._types: Dict[str, _TypeSite] = {}
        self._declared: set = set()
        self._named: Dict[str, Optional[Type]] = {}
        self._resolving: List[str] = []
        self._comments: Dict[str, List[Comment]] = {}
        self._imports: Dict[str, set] = {}

        for f in self.files:
            self._index_file(f)
        self.bindings.sort(key=lambda b: b.position)
        self.const_sites.sort(key=lambda s: s.position)

        self.evaluator = ConstantEvaluator(self)

    def _bind(self, ident: Ident, kind: BindingKind) -> None:
        self.bindings.append(Binding(ident.name, kind, ident.pos))
        if ident.name != "_":
            self._declared.add(ident.name)

    def _index_file(self, f: SourceFile) -> None:
        self._comments[f.filename] = list(f.comments)
        self._imports[f.filename] = {
            imp.alias or imp.path.rsplit("/", 1)[-1] for imp in f.imports
        }

        for decl in f.types:
            self._bind(decl.name, BindingKind.TYPE)
            self._types.setdefault(decl.name.name, _TypeSite(decl, f.filename))

        for group in f.consts:
            for spec in group.specs:
                for index, ident in enumerate(spec.names):
                    self._bind(ident, BindingKind.CONST)
                    site = ConstSite(ident, spec, index, group, f.filename)
                    self.const_sites.append(site)
                    if ident.name != "_":
                        self._consts.setdefault(ident.name, site)

        for decl in f.vars:
            for ident in decl.names:
                self._bind(ident, BindingKind.VAR)

        for decl in f.funcs:
            self._bind(decl.name, BindingKind.METHOD if decl.is_method else BindingKind.FUNC)

    # ------------------------
    # Lookups
    # ------------------------

    def comments(self, filename: str) -> List[Comment]:
        return self._comments.get(filename, [])

    def const_site(self, name: str) -> Optional[ConstSite]:
        return self._consts.get(name)

    def type_decl(self, name: str) -> Optional[TypeDecl]:
        site = self._types.get(name)
        return site.decl if site else None

    def is_declared(self, name: str) -> bool:
        return name in self._declared

    def is_import(self, name: str, filename: str) -> bool:
        return name in self._imports.get(filename, ())

    def lookup_type(self, name: str) -> Optional[Type]:
        """Resolve a type name to the type it denotes.

        Local declarations shadow predeclared types. Aliases are followed.
        Returns None if `name` does not denote a type.
        """
        if name in self._named:
            return self._named[name]

        site = self._types.get(name)
        if site is None:
            if name in self._declared:
                return None
            return BASIC_TYPES.get(name)

        if name in self._resolving:
            return None
        self._resolving.append(name)
        try:
            result = self._resolve_decl(site)
        finally:
            self._resolving.pop()
        self._named[name] = result
        return result

    def _resolve_ref(self, ref: Optional[TypeRef]) -> Optional[Type]:
        if ref is None:
            return None
        if ref.package is not None:
            return NamedType(ref.name, None, package=ref.package)
        return self.lookup_type(ref.name)

    def _resolve_decl(self, site: _TypeSite) -> Optional[Type]:
        decl = site.decl
        target = self._resolve_ref(decl.underlying)
        if decl.is_alias:
            return target
        if isinstance(target, NamedType):
            base = target.underlying
        else:
            base = target
        return NamedType(decl.name.name, base, pos=decl.name.pos)

    def resolve_type_ref(self, ref: TypeRef, filename: str) -> Type:
        """Resolve the type named in a const spec.

        Raises:
            SourceLoadError: the name does not denote a type.
        """
        result = self._resolve_ref(ref)
        if result is None:
            raise er.SourceLoadError(er.ERR.CE1005, ref.loc, filename, name=str(ref))
        return result

    # ------------------------
    # Constants
    # ------------------------

    def constant_type(self, site: ConstSite) -> Optional[Type]:
        return self.evaluator.type_of(site)

    def constant_value(self, site: ConstSite) -> ConstantValue:
        return self.evaluator.value_of(site)
