"""
Extended codes for gerbergen

Parameter codes that configure the image: coordinate format (FS), unit (MO),
aperture definitions (AD), load polarity (LP) and step and repeat (SR).
Aperture macros live in macros.py and attributes in attributes.py.
serialize() frames every one of them as '%...*%'.
"""

from dataclasses import dataclass
from enum import Enum

from .apertures import ApertureTemplate, check_decimal
from .codes import ExtendedCode
from .coordinates import CoordinateMode, FormatSpec, Number, ZeroSuppression, format_decimal
from .errors import InvalidTemplateParameter
from .function_codes import validate_aperture_code

# FS cannot express "no suppression"; a fully padded number reads the same
# under leading-zero omission, so NONE is declared as L.
SUPPRESSION_CHARS = {
    ZeroSuppression.NONE: "L",
    ZeroSuppression.LEADING: "L",
    ZeroSuppression.TRAILING: "T",
}

MODE_CHARS = {
    CoordinateMode.ABSOLUTE: "A",
    CoordinateMode.INCREMENTAL: "I",
}


class Unit(Enum):
    INCHES = "IN"
    MILLIMETERS = "MM"


class Polarity(Enum):
    DARK = "D"
    CLEAR = "C"


@dataclass(frozen=True)
class CoordinateFormat(ExtendedCode):
    """FS: the same digit layout is declared for both axes"""

    format_spec: FormatSpec

    def to_code(self) -> str:
        spec = self.format_spec
        layout = f"{spec.integer_digits}{spec.decimal_digits}"
        suppression = SUPPRESSION_CHARS[spec.zero_suppression]
        mode = MODE_CHARS[spec.coordinate_mode]
        return f"FS{suppression}{mode}X{layout}Y{layout}"


@dataclass(frozen=True)
class UnitMode(ExtendedCode):
    unit: Unit

    def to_code(self) -> str:
        return f"MO{self.unit.value}"


@dataclass(frozen=True)
class ApertureDefinition(ExtendedCode):
    code: int
    template: ApertureTemplate

    def __post_init__(self):
        validate_aperture_code(self.code, self)
        if not isinstance(self.template, ApertureTemplate):
            raise InvalidTemplateParameter(
                f"Not an aperture template: {self.template!r}", self
            )

    def to_code(self) -> str:
        return f"ADD{self.code}{self.template.to_code()}"


@dataclass(frozen=True)
class LoadPolarity(ExtendedCode):
    polarity: Polarity

    def to_code(self) -> str:
        return f"LP{self.polarity.value}"


@dataclass(frozen=True)
class StepAndRepeat(ExtendedCode):
    """SR opening a block repeated repeat_x by repeat_y times"""

    repeat_x: int
    repeat_y: int
    distance_x: Number
    distance_y: Number

    def __post_init__(self):
        for name in ("repeat_x", "repeat_y"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidTemplateParameter(
                    f"{name} must be a positive integer, got {value!r}", self
                )
        check_decimal("distance_x", self.distance_x, self, minimum=0)
        check_decimal("distance_y", self.distance_y, self, minimum=0)

    def to_code(self) -> str:
        return (
            f"SRX{self.repeat_x}Y{self.repeat_y}"
            f"I{format_decimal(self.distance_x)}J{format_decimal(self.distance_y)}"
        )


@dataclass(frozen=True)
class StepAndRepeatClose(ExtendedCode):
    """SR without parameters closes the current step and repeat block"""

    def to_code(self) -> str:
        return "SR"
