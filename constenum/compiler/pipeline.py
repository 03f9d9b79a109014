"""Generation pipeline: load, locate, discover, name, validate, synthesize."""
from __future__ import annotations

import sys
from dataclasses import dataclass, replace
from typing import Optional

from constenum.backend.codegen_go import GoEnumCodegen
from constenum.backend.identifiers import unexported_name
from constenum.compiler.config import GenerateConfig
from constenum.compiler.loader import canonical_path, load_package
from constenum.compiler.output import write_output
from constenum.semantics.discovery import discover
from constenum.semantics.locate import locate
from constenum.semantics.model import EnumSpec
from constenum.semantics.naming import resolve_name
from constenum.semantics.source_model import PackageModel
from constenum.semantics.validate import validate


@dataclass(frozen=True)
class Generated:
    spec: EnumSpec
    source: str

    @property
    def default_output(self) -> str:
        return f"{unexported_name(self.spec.target.name)}_enum.go"


def _note(config: GenerateConfig, message: str) -> None:
    if config.verbose:
        print(message, file=sys.stderr)


def build_spec(model: PackageModel, config: GenerateConfig) -> EnumSpec:
    """Run the stages between the package model and code synthesis.

    Raises:
        ResolutionError, ConsistencyError, SourceLoadError: from the stages.
        EmitError: the type has no constants.
        ValidationError: the members are not unique.
    """
    target = locate(model, config.type_name, canonical_path(config.input), config.line)
    _note(config, f"type {target.name} declared at {target.position}")

    bindings, kind = discover(model, target)
    members = [
        resolve_name(b, model.comments(b.position.filename), config.naming_strategy)
        for b in bindings
    ]
    spec = validate(target, kind, members)
    _note(config, f"{len(spec.members)} {spec.kind.value} constants of type {target.name}")
    return spec


def generate(config: GenerateConfig, model: Optional[PackageModel] = None) -> Generated:
    """Produce the Go source for `config`, loading the package unless given."""
    if model is None:
        model = load_package(config.input, config.package)
        for f in model.files:
            _note(config, f"loaded {f.filename}")
    if not config.package:
        config = replace(config, package=model.package)

    spec = build_spec(model, config)
    codegen = GoEnumCodegen(spec, config.package, config.command_line(), config.receiver)
    return Generated(spec, codegen.build())


def run(config: GenerateConfig) -> str:
    """Generate and write the output; return where it was written."""
    result = generate(config)
    destination = config.output or result.default_output
    write_output(destination, result.source)
    _note(config, f"wrote {destination}")
    return destination
