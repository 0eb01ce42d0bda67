"""
Aperture templates for gerbergen

The standard templates (C, R, O, P) and references to macro templates, as used
by the AD code. Each template owns its parameter encoding: parameters are
separated by 'X', and optional trailing parameters are left out when unset.

Only local constraints are checked. Whether a hole actually fits inside its
shape, or whether a macro is defined before use, is up to the caller.
"""

import math
import re
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import ClassVar, List, Optional, Tuple

from .codes import GerberCode
from .coordinates import Number, format_decimal
from .errors import InvalidTemplateParameter

NAME_PATTERN = re.compile(r"^[._a-zA-Z$][._a-zA-Z0-9]*$")

STANDARD_TEMPLATE_NAMES = {"C", "R", "O", "P"}


def _is_number(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float, Decimal))


def _is_finite(value) -> bool:
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def check_decimal(name: str, value, entity, minimum: Optional[Number] = None) -> None:
    """Raise InvalidTemplateParameter unless value is a finite number >= minimum"""
    if not _is_number(value) or not _is_finite(value):
        raise InvalidTemplateParameter(f"{name} must be a finite number, got {value!r}", entity)
    if minimum is not None and value < minimum:
        raise InvalidTemplateParameter(f"{name} must be >= {minimum}, got {value}", entity)


def check_vertices(value, entity) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or not 3 <= value <= 12:
        raise InvalidTemplateParameter(
            f"Polygon vertex count must be an integer from 3 to 12, got {value!r}", entity
        )


def join_parameters(parameters: List[Number]) -> str:
    return "X".join(format_decimal(p) for p in parameters)


class ApertureTemplate(GerberCode):
    """Base for everything that can follow the aperture code in AD"""

    TEMPLATE_NAME: ClassVar[str] = ""

    def parameters(self) -> List[Number]:
        raise NotImplementedError

    def to_code(self) -> str:
        return f"{self.TEMPLATE_NAME},{join_parameters(self.parameters())}"


@dataclass(frozen=True)
class Circle(ApertureTemplate):
    diameter: Number
    hole_diameter: Optional[Number] = None

    TEMPLATE_NAME: ClassVar[str] = "C"

    def __post_init__(self):
        check_decimal("diameter", self.diameter, self, minimum=0)
        if self.hole_diameter is not None:
            check_decimal("hole_diameter", self.hole_diameter, self, minimum=0)

    def with_hole(self, hole_diameter: Number) -> "Circle":
        return replace(self, hole_diameter=hole_diameter)

    def parameters(self) -> List[Number]:
        if self.hole_diameter is None:
            return [self.diameter]
        return [self.diameter, self.hole_diameter]


@dataclass(frozen=True)
class Rectangle(ApertureTemplate):
    x: Number
    y: Number
    hole_diameter: Optional[Number] = None

    TEMPLATE_NAME: ClassVar[str] = "R"

    def __post_init__(self):
        check_decimal("x", self.x, self, minimum=0)
        check_decimal("y", self.y, self, minimum=0)
        if self.hole_diameter is not None:
            check_decimal("hole_diameter", self.hole_diameter, self, minimum=0)

    def with_hole(self, hole_diameter: Number):
        return replace(self, hole_diameter=hole_diameter)

    def parameters(self) -> List[Number]:
        parameters = [self.x, self.y]
        if self.hole_diameter is not None:
            parameters.append(self.hole_diameter)
        return parameters


@dataclass(frozen=True)
class Obround(Rectangle):
    """Rectangle with fully rounded short ends"""

    TEMPLATE_NAME: ClassVar[str] = "O"


@dataclass(frozen=True)
class Polygon(ApertureTemplate):
    """Regular polygon given by its circumscribed diameter

    The rotation is in degrees. When only a hole is set, a zero rotation is
    written so the hole lands in the fourth parameter slot.
    """

    diameter: Number
    vertices: int
    rotation: Optional[Number] = None
    hole_diameter: Optional[Number] = None

    TEMPLATE_NAME: ClassVar[str] = "P"

    def __post_init__(self):
        check_decimal("diameter", self.diameter, self, minimum=0)
        check_vertices(self.vertices, self)
        if self.rotation is not None:
            check_decimal("rotation", self.rotation, self)
        if self.hole_diameter is not None:
            check_decimal("hole_diameter", self.hole_diameter, self, minimum=0)

    def with_rotation(self, rotation: Number) -> "Polygon":
        return replace(self, rotation=rotation)

    def with_hole(self, hole_diameter: Number) -> "Polygon":
        return replace(self, hole_diameter=hole_diameter)

    def with_diameter(self, diameter: Number) -> "Polygon":
        return replace(self, diameter=diameter)

    def parameters(self) -> List[Number]:
        parameters = [self.diameter, self.vertices]
        if self.rotation is not None or self.hole_diameter is not None:
            parameters.append(self.rotation if self.rotation is not None else 0)
        if self.hole_diameter is not None:
            parameters.append(self.hole_diameter)
        return parameters


@dataclass(frozen=True)
class MacroTemplate(ApertureTemplate):
    """Reference to an aperture macro defined with AM"""

    name: str
    macro_parameters: Tuple[Number, ...] = ()

    def __post_init__(self):
        if not isinstance(self.name, str) or not NAME_PATTERN.match(self.name):
            raise InvalidTemplateParameter(f"Invalid macro name: {self.name!r}", self)
        if self.name in STANDARD_TEMPLATE_NAMES:
            raise InvalidTemplateParameter(
                f"Macro name {self.name!r} is reserved for a standard template", self
            )
        object.__setattr__(self, "macro_parameters", tuple(self.macro_parameters))
        for index, value in enumerate(self.macro_parameters, start=1):
            check_decimal(f"macro parameter ${index}", value, self)

    def with_parameters(self, *parameters: Number) -> "MacroTemplate":
        return replace(self, macro_parameters=parameters)

    def parameters(self) -> List[Number]:
        return list(self.macro_parameters)

    def to_code(self) -> str:
        if not self.macro_parameters:
            return self.name
        return f"{self.name},{join_parameters(self.parameters())}"
