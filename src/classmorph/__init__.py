"""
ClassMorph - converts factory-style ``$.Class`` definitions into ES class trees.

Operates on ESTree-shaped node trees: the input is the already-parsed argument
list of a class-definition call, the output is a ``Program`` node ready for a
code renderer.
"""

from classmorph.config.models import ConversionOptions, TargetDialect
from classmorph.generator.errors import (
    ConversionError,
    InvalidArityError,
    InvalidMemberTableError,
    InvalidNamespaceError,
    MissingParametersError,
)
from classmorph.generator.program import ConversionResult, ProgramOrchestrator, convert_class_call
from classmorph.locator import convert_program, find_class_calls

__version__ = "1.0.0"

__all__ = [
    "ConversionError",
    "ConversionOptions",
    "ConversionResult",
    "InvalidArityError",
    "InvalidMemberTableError",
    "InvalidNamespaceError",
    "MissingParametersError",
    "ProgramOrchestrator",
    "TargetDialect",
    "convert_class_call",
    "convert_program",
    "find_class_calls",
]
