"""
Function codes for gerbergen

G codes set plotting modes, D codes select apertures and run operations, and
M02 ends the program. Each code is an immutable value that renders itself
through to_code(); serialize() adds the '*' terminator.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional

from .codes import FunctionCode
from .coordinates import CoordinateOffset, Coordinates
from .errors import InvalidApertureCode

# D00-D09 are reserved for operations
MIN_APERTURE_CODE = 10


def validate_aperture_code(code, entity=None) -> int:
    if isinstance(code, bool) or not isinstance(code, int):
        raise InvalidApertureCode(f"Aperture code must be an integer, got {code!r}", entity)
    if code < MIN_APERTURE_CODE:
        raise InvalidApertureCode(
            f"Aperture code must be at least {MIN_APERTURE_CODE}, got {code}", entity
        )
    return code


class InterpolationMode(Enum):
    LINEAR = "G01"
    CLOCKWISE = "G02"
    COUNTERCLOCKWISE = "G03"


class QuadrantMode(Enum):
    SINGLE = "G74"
    MULTI = "G75"


class OperationKind(Enum):
    INTERPOLATE = "D01"
    MOVE = "D02"
    FLASH = "D03"


@dataclass(frozen=True)
class SetInterpolation(FunctionCode):
    mode: InterpolationMode

    def to_code(self) -> str:
        return self.mode.value


@dataclass(frozen=True)
class SetQuadrantMode(FunctionCode):
    mode: QuadrantMode

    def to_code(self) -> str:
        return self.mode.value


@dataclass(frozen=True)
class RegionMode(FunctionCode):
    """G36 opens a region statement, G37 closes it"""

    enabled: bool

    @classmethod
    def begin(cls) -> "RegionMode":
        return cls(True)

    @classmethod
    def end(cls) -> "RegionMode":
        return cls(False)

    def to_code(self) -> str:
        return "G36" if self.enabled else "G37"


@dataclass(frozen=True)
class Comment(FunctionCode):
    """G04 comment; the text is written exactly as given"""

    text: str

    def to_code(self) -> str:
        return f"G04{self.text}"


@dataclass(frozen=True)
class SelectAperture(FunctionCode):
    code: int

    def __post_init__(self):
        validate_aperture_code(self.code, self)

    def to_code(self) -> str:
        return f"D{self.code}"


@dataclass(frozen=True)
class Operation(FunctionCode):
    """Base for the D01/D02/D03 operations"""

    coordinates: Optional[Coordinates] = None

    KIND: ClassVar[OperationKind]

    @property
    def kind(self) -> OperationKind:
        return self.KIND

    def _operands(self) -> str:
        if self.coordinates is None:
            return ""
        return self.coordinates.to_code()

    def to_code(self) -> str:
        return f"{self._operands()}{self.KIND.value}"


@dataclass(frozen=True)
class Interpolate(Operation):
    """D01: draw (or arc, with an I/J offset) to the coordinates"""

    offset: Optional[CoordinateOffset] = None

    KIND: ClassVar[OperationKind] = OperationKind.INTERPOLATE

    def _operands(self) -> str:
        operands = super()._operands()
        if self.offset is not None:
            operands += self.offset.to_code()
        return operands


@dataclass(frozen=True)
class Move(Operation):
    KIND: ClassVar[OperationKind] = OperationKind.MOVE


@dataclass(frozen=True)
class Flash(Operation):
    KIND: ClassVar[OperationKind] = OperationKind.FLASH


@dataclass(frozen=True)
class EndOfFile(FunctionCode):
    def to_code(self) -> str:
        return "M02"
