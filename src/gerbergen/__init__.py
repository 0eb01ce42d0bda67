"""
gerbergen - Gerber X2 / RS-274X code generation

This package provides typed building blocks for Gerber commands and renders
them to syntactically valid Gerber text. It does not do any semantic
checking: using an aperture before defining it, for example, produces
syntactically valid code that this library will happily write.
"""

__version__ = "0.1.0"

# Import high-level API functions
from .api import render_commands, write_gerber_file, write_gerber_string
from .core.apertures import ApertureTemplate, Circle, MacroTemplate, Obround, Polygon, Rectangle
from .core.attributes import (
    ApertureAttribute,
    CopperType,
    DeleteAttribute,
    DrillRouteType,
    ExtendedPosition,
    FileAttribute,
    FileFunction,
    FilePolarity,
    NonPlatedDrill,
    ObjectAttribute,
    Part,
    PlatedDrill,
    Position,
)
from .core.codes import Command, ExtendedCode, FunctionCode, GerberCode
from .core.coordinates import (
    CoordinateMode,
    CoordinateOffset,
    Coordinates,
    FormatSpec,
    ZeroSuppression,
    format_coordinate,
    format_decimal,
)
from .core.document import GerberDocument
from .core.errors import (
    GerberError,
    InvalidApertureCode,
    InvalidAttributeValue,
    InvalidFormatSpec,
    InvalidTemplateParameter,
    NumberFormatError,
)
from .core.extended_codes import (
    ApertureDefinition,
    CoordinateFormat,
    LoadPolarity,
    Polarity,
    StepAndRepeat,
    StepAndRepeatClose,
    Unit,
    UnitMode,
)
from .core.function_codes import (
    Comment,
    EndOfFile,
    Flash,
    InterpolationMode,
    Interpolate,
    Move,
    Operation,
    OperationKind,
    QuadrantMode,
    RegionMode,
    SelectAperture,
    SetInterpolation,
    SetQuadrantMode,
)
from .core.macros import (
    ApertureMacro,
    CenterLinePrimitive,
    CirclePrimitive,
    MacroComment,
    MoirePrimitive,
    OutlinePrimitive,
    PolygonPrimitive,
    Primitive,
    ThermalPrimitive,
    VariableDefinition,
    VectorLinePrimitive,
)
from .writers.gerber_writer import GerberWriter

# Public API
__all__ = [
    # Version
    "__version__",
    # Rendering base classes
    "GerberCode",
    "FunctionCode",
    "ExtendedCode",
    "Command",
    # Coordinates
    "FormatSpec",
    "ZeroSuppression",
    "CoordinateMode",
    "Coordinates",
    "CoordinateOffset",
    "format_coordinate",
    "format_decimal",
    # Function codes
    "SetInterpolation",
    "InterpolationMode",
    "SetQuadrantMode",
    "QuadrantMode",
    "RegionMode",
    "Comment",
    "SelectAperture",
    "Operation",
    "OperationKind",
    "Interpolate",
    "Move",
    "Flash",
    "EndOfFile",
    # Extended codes
    "CoordinateFormat",
    "UnitMode",
    "Unit",
    "ApertureDefinition",
    "LoadPolarity",
    "Polarity",
    "StepAndRepeat",
    "StepAndRepeatClose",
    # Aperture templates
    "ApertureTemplate",
    "Circle",
    "Rectangle",
    "Obround",
    "Polygon",
    "MacroTemplate",
    # Aperture macros
    "ApertureMacro",
    "Primitive",
    "MacroComment",
    "CirclePrimitive",
    "VectorLinePrimitive",
    "CenterLinePrimitive",
    "OutlinePrimitive",
    "PolygonPrimitive",
    "MoirePrimitive",
    "ThermalPrimitive",
    "VariableDefinition",
    # Attributes
    "FileAttribute",
    "ApertureAttribute",
    "ObjectAttribute",
    "DeleteAttribute",
    "FileFunction",
    "Part",
    "Position",
    "ExtendedPosition",
    "CopperType",
    "PlatedDrill",
    "NonPlatedDrill",
    "DrillRouteType",
    "FilePolarity",
    # Document and writer
    "GerberDocument",
    "GerberWriter",
    # Errors
    "GerberError",
    "NumberFormatError",
    "InvalidFormatSpec",
    "InvalidApertureCode",
    "InvalidTemplateParameter",
    "InvalidAttributeValue",
    # High-level API functions
    "render_commands",
    "write_gerber_string",
    "write_gerber_file",
    "render",
]


def render(command: Command) -> str:
    """Serialize a single command to its framed Gerber line

    Args:
        command: Any function or extended code

    Returns:
        The line without newline, e.g. "%MOMM*%" or "D10*"
    """
    return GerberWriter(warn_on_order=False).serialize(command)
