"""
Aperture macros for gerbergen

An aperture macro (AM) is a named list of primitives. Primitive parameters
are MacroDecimals: either a number, rendered as a plain decimal, or a string
holding a variable or an arithmetic expression such as "$1" or "$1x0.75",
written verbatim. Range checks only apply to numeric parameters because
expressions are evaluated by the reader, not here.
"""

import math
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import ClassVar, Optional, Tuple, Union

from .apertures import NAME_PATTERN, STANDARD_TEMPLATE_NAMES, check_decimal, check_vertices
from .codes import ExtendedCode, GerberCode
from .coordinates import format_decimal
from .errors import InvalidTemplateParameter

MacroDecimal = Union[int, float, Decimal, str]

# Characters that would end the primitive or the whole code early
RESERVED_CHARS = set("*%,")

MAX_OUTLINE_POINTS = 5001


def is_expression(value) -> bool:
    return isinstance(value, str)


def check_macro_decimal(name: str, value, entity, minimum=None) -> None:
    if is_expression(value):
        if not value.strip() or RESERVED_CHARS & set(value):
            raise InvalidTemplateParameter(f"Invalid macro expression for {name}: {value!r}", entity)
        return
    check_decimal(name, value, entity, minimum=minimum)


def check_pair(name: str, value, entity, minimum=None) -> None:
    """Raise InvalidTemplateParameter unless value is an (x, y) pair of MacroDecimals"""
    if isinstance(value, str) or not isinstance(value, (tuple, list)) or len(value) != 2:
        raise InvalidTemplateParameter(f"{name} must be an (x, y) pair, got {value!r}", entity)
    for item in value:
        check_macro_decimal(name, item, entity, minimum=minimum)


def check_exposure(exposure, entity) -> None:
    if is_expression(exposure):
        check_macro_decimal("exposure", exposure, entity)
    elif not isinstance(exposure, bool):
        raise InvalidTemplateParameter(
            f"Exposure must be a bool or an expression, got {exposure!r}", entity
        )


def render_macro_decimal(value: MacroDecimal) -> str:
    if is_expression(value):
        return value
    return format_decimal(value)


def render_exposure(exposure: Union[bool, str]) -> str:
    if is_expression(exposure):
        return exposure
    return "1" if exposure else "0"


def _join(*values) -> str:
    return ",".join(values)


class Primitive(GerberCode):
    """Base for the statements inside an aperture macro"""

    CODE: ClassVar[int]


@dataclass(frozen=True)
class MacroComment(Primitive):
    text: str

    CODE: ClassVar[int] = 0

    def __post_init__(self):
        if "*" in self.text or "%" in self.text:
            raise InvalidTemplateParameter("Macro comment may not contain '*' or '%'", self)

    def to_code(self) -> str:
        return f"0 {self.text}"


@dataclass(frozen=True)
class CirclePrimitive(Primitive):
    exposure: Union[bool, str]
    diameter: MacroDecimal
    center: Tuple[MacroDecimal, MacroDecimal]
    angle: Optional[MacroDecimal] = None

    CODE: ClassVar[int] = 1

    def __post_init__(self):
        check_exposure(self.exposure, self)
        check_macro_decimal("diameter", self.diameter, self, minimum=0)
        check_pair("center", self.center, self)
        if self.angle is not None:
            check_macro_decimal("angle", self.angle, self)

    def to_code(self) -> str:
        values = [
            "1",
            render_exposure(self.exposure),
            render_macro_decimal(self.diameter),
            render_macro_decimal(self.center[0]),
            render_macro_decimal(self.center[1]),
        ]
        if self.angle is not None:
            values.append(render_macro_decimal(self.angle))
        return _join(*values)


@dataclass(frozen=True)
class VectorLinePrimitive(Primitive):
    exposure: Union[bool, str]
    width: MacroDecimal
    start: Tuple[MacroDecimal, MacroDecimal]
    end: Tuple[MacroDecimal, MacroDecimal]
    angle: MacroDecimal = 0

    CODE: ClassVar[int] = 20

    def __post_init__(self):
        check_exposure(self.exposure, self)
        check_macro_decimal("width", self.width, self, minimum=0)
        check_pair("start", self.start, self)
        check_pair("end", self.end, self)
        check_macro_decimal("angle", self.angle, self)

    def to_code(self) -> str:
        return _join(
            "20",
            render_exposure(self.exposure),
            render_macro_decimal(self.width),
            render_macro_decimal(self.start[0]),
            render_macro_decimal(self.start[1]),
            render_macro_decimal(self.end[0]),
            render_macro_decimal(self.end[1]),
            render_macro_decimal(self.angle),
        )


@dataclass(frozen=True)
class CenterLinePrimitive(Primitive):
    """Rectangle given by its width/height and center point"""

    exposure: Union[bool, str]
    dimensions: Tuple[MacroDecimal, MacroDecimal]
    center: Tuple[MacroDecimal, MacroDecimal]
    angle: MacroDecimal = 0

    CODE: ClassVar[int] = 21

    def __post_init__(self):
        check_exposure(self.exposure, self)
        check_pair("dimensions", self.dimensions, self, minimum=0)
        check_pair("center", self.center, self)
        check_macro_decimal("angle", self.angle, self)

    def to_code(self) -> str:
        return _join(
            "21",
            render_exposure(self.exposure),
            render_macro_decimal(self.dimensions[0]),
            render_macro_decimal(self.dimensions[1]),
            render_macro_decimal(self.center[0]),
            render_macro_decimal(self.center[1]),
            render_macro_decimal(self.angle),
        )


@dataclass(frozen=True)
class OutlinePrimitive(Primitive):
    """Closed polygon; the last point must repeat the first one

    Each point goes on its own line.
    """

    exposure: Union[bool, str]
    points: Tuple[Tuple[MacroDecimal, MacroDecimal], ...]
    angle: MacroDecimal = 0

    CODE: ClassVar[int] = 4

    def __post_init__(self):
        check_exposure(self.exposure, self)
        for point in self.points:
            check_pair("outline point", point, self)
        object.__setattr__(self, "points", tuple(tuple(point) for point in self.points))
        if len(self.points) < 2:
            raise InvalidTemplateParameter(
                "There must be at least 1 subsequent point in an outline", self
            )
        if len(self.points) > MAX_OUTLINE_POINTS:
            raise InvalidTemplateParameter(
                f"The maximum number of subsequent points in an outline is {MAX_OUTLINE_POINTS - 1}",
                self,
            )
        if self.points[0] != self.points[-1]:
            raise InvalidTemplateParameter(
                "The last point of an outline must be equal to the first point", self
            )
        check_macro_decimal("angle", self.angle, self)

    def to_code(self) -> str:
        lines = [f"4,{render_exposure(self.exposure)},{len(self.points) - 1},"]
        for x, y in self.points:
            lines.append(f"{render_macro_decimal(x)},{render_macro_decimal(y)},")
        lines.append(render_macro_decimal(self.angle))
        return "\n".join(lines)


@dataclass(frozen=True)
class PolygonPrimitive(Primitive):
    """Regular polygon given by vertex count, center and circumscribed diameter"""

    exposure: Union[bool, str]
    vertices: Union[int, str]
    center: Tuple[MacroDecimal, MacroDecimal]
    diameter: MacroDecimal
    angle: MacroDecimal = 0

    CODE: ClassVar[int] = 5

    def __post_init__(self):
        if is_expression(self.vertices):
            check_macro_decimal("vertices", self.vertices, self)
        else:
            check_vertices(self.vertices, self)
        check_exposure(self.exposure, self)
        check_macro_decimal("diameter", self.diameter, self, minimum=0)
        check_pair("center", self.center, self)
        check_macro_decimal("angle", self.angle, self)

    def to_code(self) -> str:
        return _join(
            "5",
            render_exposure(self.exposure),
            str(self.vertices),
            render_macro_decimal(self.center[0]),
            render_macro_decimal(self.center[1]),
            render_macro_decimal(self.diameter),
            render_macro_decimal(self.angle),
        )


@dataclass(frozen=True)
class MoirePrimitive(Primitive):
    """Cross hair centered on concentric rings; exposure is always on"""

    center: Tuple[MacroDecimal, MacroDecimal]
    diameter: MacroDecimal
    ring_thickness: MacroDecimal
    gap: MacroDecimal
    max_rings: Union[int, str]
    cross_hair_thickness: MacroDecimal
    cross_hair_length: MacroDecimal
    angle: MacroDecimal = 0

    CODE: ClassVar[int] = 6

    def __post_init__(self):
        check_macro_decimal("diameter", self.diameter, self, minimum=0)
        check_macro_decimal("ring_thickness", self.ring_thickness, self, minimum=0)
        check_macro_decimal("gap", self.gap, self, minimum=0)
        check_macro_decimal("max_rings", self.max_rings, self, minimum=0)
        check_macro_decimal("cross_hair_thickness", self.cross_hair_thickness, self, minimum=0)
        check_macro_decimal("cross_hair_length", self.cross_hair_length, self, minimum=0)
        check_pair("center", self.center, self)
        check_macro_decimal("angle", self.angle, self)

    def to_code(self) -> str:
        return _join(
            "6",
            render_macro_decimal(self.center[0]),
            render_macro_decimal(self.center[1]),
            render_macro_decimal(self.diameter),
            render_macro_decimal(self.ring_thickness),
            render_macro_decimal(self.gap),
            render_macro_decimal(self.max_rings),
            render_macro_decimal(self.cross_hair_thickness),
            render_macro_decimal(self.cross_hair_length),
            render_macro_decimal(self.angle),
        )


@dataclass(frozen=True)
class ThermalPrimitive(Primitive):
    """Ring interrupted by four gaps; exposure is always on"""

    center: Tuple[MacroDecimal, MacroDecimal]
    outer_diameter: MacroDecimal
    inner_diameter: MacroDecimal
    gap: MacroDecimal
    angle: MacroDecimal = 0

    CODE: ClassVar[int] = 7

    def __post_init__(self):
        check_macro_decimal("inner_diameter", self.inner_diameter, self, minimum=0)
        check_macro_decimal("outer_diameter", self.outer_diameter, self, minimum=0)
        check_macro_decimal("gap", self.gap, self, minimum=0)
        check_pair("center", self.center, self)
        check_macro_decimal("angle", self.angle, self)

        numeric = not any(
            is_expression(v) for v in (self.outer_diameter, self.inner_diameter, self.gap)
        )
        if numeric:
            if float(self.outer_diameter) <= float(self.inner_diameter):
                raise InvalidTemplateParameter(
                    "Outer diameter of a thermal must be larger than inner diameter", self
                )
            if float(self.gap) >= float(self.outer_diameter) / math.sqrt(2):
                raise InvalidTemplateParameter(
                    "Gap of a thermal must be smaller than outer_diameter/sqrt(2)", self
                )

    def to_code(self) -> str:
        return _join(
            "7",
            render_macro_decimal(self.center[0]),
            render_macro_decimal(self.center[1]),
            render_macro_decimal(self.outer_diameter),
            render_macro_decimal(self.inner_diameter),
            render_macro_decimal(self.gap),
            render_macro_decimal(self.angle),
        )


@dataclass(frozen=True)
class VariableDefinition(Primitive):
    """$n=expression"""

    number: int
    expression: MacroDecimal

    def __post_init__(self):
        if isinstance(self.number, bool) or not isinstance(self.number, int) or self.number < 1:
            raise InvalidTemplateParameter(
                f"Macro variable number must be a positive integer, got {self.number!r}", self
            )
        check_macro_decimal("expression", self.expression, self)

    def to_code(self) -> str:
        return f"${self.number}={render_macro_decimal(self.expression)}"


@dataclass(frozen=True)
class ApertureMacro(ExtendedCode):
    """AM: the macro name, then one primitive per line"""

    name: str
    primitives: Tuple[Primitive, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.name, str) or not NAME_PATTERN.match(self.name):
            raise InvalidTemplateParameter(f"Invalid macro name: {self.name!r}", self)
        if self.name in STANDARD_TEMPLATE_NAMES:
            raise InvalidTemplateParameter(
                f"Macro name {self.name!r} is reserved for a standard template", self
            )
        object.__setattr__(self, "primitives", tuple(self.primitives))
        for primitive in self.primitives:
            if not isinstance(primitive, Primitive):
                raise InvalidTemplateParameter(f"Not a macro primitive: {primitive!r}", self)

    def add_primitive(self, primitive: Primitive) -> "ApertureMacro":
        return replace(self, primitives=self.primitives + (primitive,))

    def to_code(self) -> str:
        statements = [f"AM{self.name}"]
        statements.extend(primitive.to_code() for primitive in self.primitives)
        return "*\n".join(statements)
