"""Emitters for the generated method families."""
from constenum.backend.methods.guards import GuardEmitter
from constenum.backend.methods.iteration import IterationEmitter
from constenum.backend.methods.scanning import ScanningEmitter
from constenum.backend.methods.stringer import StringerEmitter

__all__ = [
    'GuardEmitter',
    'IterationEmitter',
    'ScanningEmitter',
    'StringerEmitter',
]
