"""
Core configuration models for ClassMorph.

Defines all configuration structures using Pydantic for validation.
"""

from enum import Enum

from pydantic import BaseModel, Field

from classmorph.generator.namespace import NamespacePath


class TargetDialect(str, Enum):
    """Layout of per-instance data initializers in the generated class."""

    ES2015 = "es2015"  # Assignments inside the constructor body
    ES2017 = "es2017"  # Field declarations beside the constructor


# ============================================================================
# Conversion Configuration
# ============================================================================


class ConversionOptions(BaseModel):
    """Options consumed by the class generator for a single conversion."""

    constructor_name: str = Field(
        default="init", description="Instance member key that becomes the constructor"
    )
    extended: bool = Field(default=False, description="Generate an 'extends' clause")
    extended_namespace: str | None = Field(
        default=None, description="Dotted namespace of the superclass (e.g. 'app.ui.Widget')"
    )
    target: TargetDialect = Field(
        default=TargetDialect.ES2015, description="Dialect for instance data members"
    )
    root_object: str = Field(
        default="window", description="Global object the namespace chain hangs off"
    )

    def extended_namespace_path(self) -> NamespacePath | None:
        """Parse the superclass namespace, or None when it is blank."""
        if self.extended_namespace is None or not self.extended_namespace.strip():
            return None
        return NamespacePath.parse(self.extended_namespace.strip())


# ============================================================================
# Output Configuration
# ============================================================================


class OutputConfig(BaseModel):
    """How generated trees are written out."""

    indent: bool = Field(default=True, description="Pretty-print JSON output")
    strip_locations: bool = Field(
        default=True, description="Drop start/end/range/loc keys copied from the input"
    )


# ============================================================================
# Main Configuration
# ============================================================================


class ClassMorphConfig(BaseModel):
    """Root configuration model for ClassMorph."""

    conversion: ConversionOptions = Field(default_factory=ConversionOptions)
    output: OutputConfig = Field(default_factory=OutputConfig)
    callee: str = Field(default="$.Class", description="Dotted callee of class-definition calls")

    def describe_target(self) -> str:
        """Get a human-readable description of the conversion target."""
        if self.conversion.target == TargetDialect.ES2015:
            return "es2015 (fields assigned in constructor)"
        return "es2017 (declared class fields)"
