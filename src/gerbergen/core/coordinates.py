"""
Coordinate format and number formatting for gerbergen

This module contains the FormatSpec declared by the FS code, the fixed-point
formatter used for every coordinate number, and the decimal formatter used for
aperture and macro parameters.

Coordinate numbers are integers with an implied decimal point: with a 2.4
format, 1.5 is scaled to 15000 and written as "15000" (leading zeros omitted).
Explicit decimal points are never written.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

from .codes import GerberCode
from .errors import InvalidFormatSpec, NumberFormatError

Number = Union[int, float, Decimal]

# Each FS field is written as a single digit
MAX_FORMAT_DIGITS = 6


class ZeroSuppression(Enum):
    NONE = "none"
    LEADING = "leading"
    TRAILING = "trailing"


class CoordinateMode(Enum):
    ABSOLUTE = "absolute"
    INCREMENTAL = "incremental"


def _to_decimal(value) -> Decimal:
    """Convert a finite int/float/Decimal to Decimal via its shortest repr"""
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise NumberFormatError(f"Not a number: {value!r}", value)
    if isinstance(value, float):
        if math.isnan(value):
            raise NumberFormatError("Value is NaN", value)
        if math.isinf(value):
            raise NumberFormatError("Value is infinite", value)
        return Decimal(repr(value))
    if isinstance(value, Decimal):
        if value.is_nan():
            raise NumberFormatError("Value is NaN", value)
        if value.is_infinite():
            raise NumberFormatError("Value is infinite", value)
        return value
    return Decimal(value)


@dataclass(frozen=True)
class FormatSpec:
    """Coordinate format declared once per document by the FS code

    The 24 format, for example, has 2 integer and 4 decimal digits. Every
    coordinate of the document is rendered with exactly that digit layout
    before zero suppression.
    """

    integer_digits: int
    decimal_digits: int
    zero_suppression: ZeroSuppression = ZeroSuppression.LEADING
    coordinate_mode: CoordinateMode = CoordinateMode.ABSOLUTE

    def __post_init__(self):
        for name in ("integer_digits", "decimal_digits"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidFormatSpec(f"{name} must be an integer, got {value!r}", self)
            if not 0 <= value <= MAX_FORMAT_DIGITS:
                raise InvalidFormatSpec(
                    f"{name} must be between 0 and {MAX_FORMAT_DIGITS}, got {value}", self
                )
        # Trailing suppression always keeps an integer digit
        if self.integer_digits < 1:
            raise InvalidFormatSpec("A coordinate format needs at least one integer digit", self)
        if not isinstance(self.zero_suppression, ZeroSuppression):
            raise InvalidFormatSpec(
                f"Unknown zero suppression: {self.zero_suppression!r}", self
            )
        if not isinstance(self.coordinate_mode, CoordinateMode):
            raise InvalidFormatSpec(f"Unknown coordinate mode: {self.coordinate_mode!r}", self)

    @property
    def total_digits(self) -> int:
        return self.integer_digits + self.decimal_digits

    def format(self, value: Number) -> str:
        """Render a coordinate number in this format"""
        return format_coordinate(value, self)

    @classmethod
    def from_dict(cls, data: dict) -> "FormatSpec":
        """Build a FormatSpec from configuration data (enum members by value)"""
        try:
            return cls(
                integer_digits=data["integer_digits"],
                decimal_digits=data["decimal_digits"],
                zero_suppression=ZeroSuppression(data.get("zero_suppression", "leading")),
                coordinate_mode=CoordinateMode(data.get("coordinate_mode", "absolute")),
            )
        except KeyError as e:
            raise InvalidFormatSpec(f"Missing format field: {e.args[0]}", data) from e
        except ValueError as e:
            if isinstance(e, InvalidFormatSpec):
                raise
            raise InvalidFormatSpec(str(e), data) from e


def format_coordinate(value: Number, spec: FormatSpec) -> str:
    """Render value as a fixed-point coordinate number

    Raises:
        NumberFormatError: value is not finite or needs more digits than
            spec.total_digits
    """
    number = _to_decimal(value)
    magnitude = abs(number)

    # Anything >= 10^integer_digits overflows before rounding is considered
    if magnitude and magnitude.adjusted() >= spec.integer_digits:
        raise NumberFormatError(
            f"{value!r} does not fit in {spec.integer_digits}.{spec.decimal_digits} format", value
        )

    with localcontext() as ctx:
        # Wide enough that scaling is exact and only quantize() rounds
        ctx.prec = max(len(magnitude.as_tuple().digits), MAX_FORMAT_DIGITS) + 2 * MAX_FORMAT_DIGITS
        scaled = (magnitude.scaleb(spec.decimal_digits)).quantize(
            Decimal(1), rounding=ROUND_HALF_UP
        )
    scaled = int(scaled)

    digits = str(scaled)
    if len(digits) > spec.total_digits:
        raise NumberFormatError(
            f"{value!r} does not fit in {spec.integer_digits}.{spec.decimal_digits} format", value
        )
    padded = digits.zfill(spec.total_digits)

    if spec.zero_suppression is ZeroSuppression.NONE:
        text = padded
    elif scaled == 0:
        text = "0"
    elif spec.zero_suppression is ZeroSuppression.LEADING:
        text = padded.lstrip("0")
    else:
        integer_part = padded[:spec.integer_digits]
        decimal_part = padded[spec.integer_digits:].rstrip("0")
        text = integer_part + decimal_part

    if number < 0 and scaled != 0:
        return f"-{text}"
    return text


def format_decimal(value: Number) -> str:
    """Render a plain decimal (aperture sizes, macro parameters, SR distances)

    The shortest round-trip digits are kept, without exponent and without a
    trailing '.0': 4.0 -> "4", 0.01 -> "0.01", 1e-07 -> "0.0000001".
    """
    text = format(_to_decimal(value), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        return "0"
    return text


@dataclass(frozen=True)
class _CoordinatePair(GerberCode):
    """Two optional axis values rendered with a shared FormatSpec"""

    AXES: ClassVar[Tuple[str, str]] = ("", "")

    def _values(self) -> Tuple[Optional[Number], Optional[Number]]:
        raise NotImplementedError

    def to_code(self) -> str:
        parts = []
        for letter, value in zip(self.AXES, self._values()):
            if value is not None:
                parts.append(f"{letter}{format_coordinate(value, self.format_spec)}")
        return "".join(parts)


@dataclass(frozen=True)
class Coordinates(_CoordinatePair):
    """X/Y position of an operation; an unset axis is omitted"""

    x: Optional[Number]
    y: Optional[Number]
    format_spec: FormatSpec

    AXES: ClassVar[Tuple[str, str]] = ("X", "Y")

    def _values(self):
        return self.x, self.y

    @classmethod
    def at_x(cls, x: Number, format_spec: FormatSpec) -> "Coordinates":
        return cls(x, None, format_spec)

    @classmethod
    def at_y(cls, y: Number, format_spec: FormatSpec) -> "Coordinates":
        return cls(None, y, format_spec)


@dataclass(frozen=True)
class CoordinateOffset(_CoordinatePair):
    """I/J center offset of a circular interpolation"""

    i: Optional[Number]
    j: Optional[Number]
    format_spec: FormatSpec

    AXES: ClassVar[Tuple[str, str]] = ("I", "J")

    def _values(self):
        return self.i, self.j

    @classmethod
    def at_i(cls, i: Number, format_spec: FormatSpec) -> "CoordinateOffset":
        return cls(i, None, format_spec)

    @classmethod
    def at_j(cls, j: Number, format_spec: FormatSpec) -> "CoordinateOffset":
        return cls(None, j, format_spec)
